"""
CLI (Command Line Interface).

This module provides quick terminal commands for checking what the widget
would show and for poking the exact-alarm bridge, e.g.:

    todayschedule today
    todayschedule today --weekday 2 --prefs prefs.json
    todayschedule alarm allowed
    todayschedule alarm settings
    todayschedule bridge isExactAlarmAllowed

Note:
- today always exits with 0: missing or broken data shows the placeholder
- bridge exits with 1 for method names the bridge does not know
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional

from rich.console import Console

from todayschedule.alarm_bridge import CapabilityBridge, SimulatedPlatform
from todayschedule.config import Config, load_config, setup_logging
from todayschedule.projector import Projector, domain_weekday, platform_to_domain_weekday
from todayschedule.render import print_projection
from todayschedule.storage import JsonPrefsStore

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = {1: "Mon", 2: "Tue", 3: "Wed", 4: "Thu", 5: "Fri", 6: "Sat", 7: "Sun"}


def _bridge(cfg: Config) -> CapabilityBridge:
    platform = SimulatedPlatform(
        api_level=cfg.api_level,
        package_name=cfg.package_name,
        exact_alarms_permitted=cfg.exact_alarms_permitted,
    )
    return CapabilityBridge(platform)


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _cmd_today(args: argparse.Namespace, cfg: Config, console: Console) -> int:
    """
    Print today's courses (or the placeholder) for the selected weekday.
    """
    if args.weekday is not None:
        today = args.weekday
    elif args.platform_weekday is not None:
        today = platform_to_domain_weekday(args.platform_weekday)
    else:
        today = domain_weekday()

    store = JsonPrefsStore(args.prefs if args.prefs else cfg.prefs_path)
    projector = Projector(store, key=args.key or cfg.prefs_key)
    projection = projector.project(today)
    logger.info("Projection for weekday %s: %s", today, projection.status.value)

    print_projection(projection, console, title=f"Today ({WEEKDAY_NAMES[today]})")
    return 0


def _cmd_alarm(args: argparse.Namespace, cfg: Config, console: Console) -> int:
    bridge = _bridge(cfg)
    if args.action == "allowed":
        console.print(_format_value(bridge.is_exact_alarm_allowed()))
    else:
        console.print(_format_value(bridge.open_exact_alarm_settings()))
    return 0


def _cmd_bridge(args: argparse.Namespace, cfg: Config, console: Console) -> int:
    """
    Dispatch a raw method name the way the app shell does.
    """
    response = _bridge(cfg).handle(args.method)
    if not response.implemented:
        console.print("not implemented")
        return 1
    console.print(_format_value(response.value))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="todayschedule", description="Today's class schedule CLI")
    parser.add_argument("--api-level", type=int, default=None, help="Platform API level (31+ gates exact alarms)")
    parser.add_argument("--deny-exact-alarms", action="store_true", help="Simulate a revoked exact-alarm permission")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (e.g. INFO, DEBUG)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_today = sub.add_parser("today", help="Show today's courses")
    day = p_today.add_mutually_exclusive_group()
    day.add_argument("--weekday", type=int, choices=range(1, 8), help="Weekday, 1=Monday ... 7=Sunday")
    day.add_argument(
        "--platform-weekday", type=int, choices=range(1, 8), help="Weekday, 1=Sunday ... 7=Saturday"
    )
    p_today.add_argument("--prefs", type=str, default=None, help="Path to the widget preferences JSON file")
    p_today.add_argument("--key", type=str, default=None, help="Preferences key holding the course list")

    p_alarm = sub.add_parser("alarm", help="Exact-alarm permission helpers")
    p_alarm.add_argument("action", choices=["allowed", "settings"], help="Query or open the settings page")

    p_bridge = sub.add_parser("bridge", help="Call a bridge method by name")
    p_bridge.add_argument("method", type=str, help="Method name (e.g. isExactAlarmAllowed)")

    return parser


def main(argv: list[str] | None = None, console: Optional[Console] = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = load_config()
    except ValueError as exc:
        parser.error(str(exc))

    if args.api_level is not None:
        cfg.api_level = args.api_level
    if args.deny_exact_alarms:
        cfg.exact_alarms_permitted = False
    if args.log_level:
        cfg.log_level = args.log_level.upper()
    setup_logging(cfg.log_level)

    console = console or Console()

    if args.command == "today":
        raise SystemExit(_cmd_today(args, cfg, console))
    if args.command == "alarm":
        raise SystemExit(_cmd_alarm(args, cfg, console))
    if args.command == "bridge":
        raise SystemExit(_cmd_bridge(args, cfg, console))

    raise SystemExit(2)
