"""
Terminal rendering of today's projection.

Exactly one of two regions is produced:
- a table with one row per course (name + period range)
- a single placeholder panel when there is nothing to show
"""

from __future__ import annotations

from typing import Optional, Union

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from todayschedule.model import Projection

PLACEHOLDER_TEXT = "今日無課程"


def build_view(projection: Projection, title: str = "Today") -> Union[Table, Panel]:
    if projection.show_placeholder:
        return Panel(Text(PLACEHOLDER_TEXT, justify="center"), title=title, box=box.ROUNDED)

    table = Table(title=title, box=box.SIMPLE_HEAVY)
    table.add_column("Course", style="bold")
    table.add_column("Periods", no_wrap=True)
    for name, label in projection.rows():
        # Text() so names like "[Lab]" are not read as markup
        table.add_row(Text(name), Text(label))
    return table


def print_projection(projection: Projection, console: Optional[Console] = None, title: str = "Today") -> None:
    (console or Console()).print(build_view(projection, title=title))
