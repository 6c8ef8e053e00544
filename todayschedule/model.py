"""
Central data model definitions used across the project.

This module defines the canonical structure of a course record and of the
"today" projection so that:
- the projector, the renderer and the CLI share the same field names
- the display layer never has to guess why a list is empty
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(frozen=True)
class CourseRecord:
    """
    Represents one scheduled class occurrence as stored by the app.

    start_slot / end_slot are school period indexes, not clock times.
    day_of_week uses 1=Monday ... 7=Sunday.
    """

    name: str
    location: str
    start_slot: int
    end_slot: int
    day_of_week: int

    @property
    def time_label(self) -> str:
        return f"第 {self.start_slot}-{self.end_slot} 節"


class ProjectionStatus(enum.Enum):
    NO_DATA = "no_data"
    MALFORMED = "malformed"
    EMPTY = "empty"
    COURSES = "courses"


@dataclass(frozen=True)
class Projection:
    """
    Result of projecting the stored course list onto one weekday.

    Only COURSES carries records; every other status renders the placeholder.
    """

    status: ProjectionStatus
    courses: Tuple[CourseRecord, ...] = field(default=())

    def __post_init__(self) -> None:
        if self.status is not ProjectionStatus.COURSES and self.courses:
            raise ValueError(f"{self.status.name} projection cannot carry courses")
        if self.status is ProjectionStatus.COURSES and not self.courses:
            raise ValueError("COURSES projection needs at least one course")

    @property
    def show_placeholder(self) -> bool:
        return self.status is not ProjectionStatus.COURSES

    def rows(self) -> List[Tuple[str, str]]:
        return [(c.name, c.time_label) for c in self.courses]
