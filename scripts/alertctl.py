#!/usr/bin/env python3
"""Alert control CLI — inspect and change the school emergency alert state.

Usage::

    # Show the current alert
    python scripts/alertctl.py status

    # Raise a lockdown as a regular staff member
    python scripts/alertctl.py --user-id u1 --user-name "Ana" initiate lockdown

    # Escalate, resolve (admin), list history, show statistics
    python scripts/alertctl.py --user-id u1 --user-name Ana change-type evacuate
    python scripts/alertctl.py --user-id a1 --user-name Cara --role admin resolve
    python scripts/alertctl.py history --json
    python scripts/alertctl.py stats

    # Custom config file / log level
    python scripts/alertctl.py --config config/settings.yaml --log-level DEBUG status
"""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys

# Ensure project root is on sys.path so `src` is importable.
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from src.alerts.controller import AlertLifecycleController
from src.alerts.exceptions import GuardRejectedError, raise_for_rejection
from src.alerts.factory import create_alert_engine
from src.alerts.protocol import get_protocol_message
from src.alerts.statistics import summarize
from src.core.config import Settings, load_settings
from src.core.logging import setup_logging
from src.core.types import Alert, AlertType, Role, TransitionStatus, User
from src.storage.exceptions import StorageError


def _render_alert(alert: Alert) -> str:
    state = "ACTIVE" if alert.active else "resolved"
    line = (
        f"{alert.timestamp.isoformat(timespec='seconds')}  {alert.type.value.upper():<9}  "
        f"{state:<8}  by {alert.initiated_by.name}"
    )
    if alert.resolved_by is not None and alert.resolved_at is not None:
        line += (
            f"  -> {alert.resolved_by.name}"
            f" @ {alert.resolved_at.isoformat(timespec='seconds')}"
        )
    if alert.note:
        line += f"  ({alert.note})"
    return line


def _user(args: argparse.Namespace) -> User | None:
    if not args.user_id:
        return None
    return User(id=args.user_id, name=args.user_name or args.user_id, role=Role(args.role))


async def _execute(
    args: argparse.Namespace,
    engine: AlertLifecycleController,
    settings: Settings,
) -> int:
    if args.command == "status":
        current = engine.current_alert()
        if current is None:
            print("No active alert.")
            return 0
        print(_render_alert(current))
        announcement = get_protocol_message(current.type, settings.protocol)
        if announcement:
            print(f"Announcement: {announcement}")
        return 0

    if args.command == "history":
        entries = engine.history(newest_first=True)
        if args.json:
            print(json.dumps([a.model_dump(mode="json") for a in entries], indent=2))
        elif not entries:
            print("No alerts recorded.")
        else:
            for alert in entries:
                print(_render_alert(alert))
        return 0

    if args.command == "stats":
        stats = summarize(engine.history())
        print(json.dumps(stats.model_dump(mode="json"), indent=2))
        return 0

    user = _user(args)
    if args.command == "initiate":
        outcome = await engine.initiate(args.type, user, note=args.note)
    elif args.command == "resolve":
        outcome = await engine.resolve(user)
    else:
        outcome = await engine.change_type(args.type, user)

    if outcome.status == TransitionStatus.IGNORED:
        print("No active alert; nothing to do.", file=sys.stderr)
        return 0

    try:
        raise_for_rejection(outcome)
    except GuardRejectedError as exc:
        print(f"Rejected ({exc.reason.value}): {exc}", file=sys.stderr)
        return 2

    if outcome.alert is not None:
        print(_render_alert(outcome.alert))
    return 0


async def run(args: argparse.Namespace) -> int:
    """Load state, apply one command, and report the result."""
    settings = load_settings(args.config)
    setup_logging(level=args.log_level)

    engine = await create_alert_engine(settings)
    try:
        return await _execute(args, engine, settings)
    except StorageError as exc:
        print(f"Could not save alert state: {exc}", file=sys.stderr)
        return 1
    finally:
        await engine.close()


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Inspect and change the school emergency alert state.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level override (default: from config)",
    )
    parser.add_argument("--user-id", default=None, help="Acting user id")
    parser.add_argument("--user-name", default=None, help="Acting user display name")
    parser.add_argument(
        "--role",
        default=Role.USER.value,
        choices=[r.value for r in Role],
        help="Acting user role (default: user)",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("status", help="Show the current alert")
    history = sub.add_parser("history", help="List every alert, newest first")
    history.add_argument("--json", action="store_true", help="Output raw JSON")
    sub.add_parser("stats", help="Summarise the alert history")

    initiate = sub.add_parser("initiate", help="Raise a new alert")
    initiate.add_argument("type", help=f"One of: {', '.join(t.value for t in AlertType)}")
    initiate.add_argument("--note", default=None, help="Optional free-text note")

    sub.add_parser("resolve", help="Resolve the current alert")

    change = sub.add_parser("change-type", help="Switch the current alert to another type")
    change.add_argument("type", help=f"One of: {', '.join(t.value for t in AlertType)}")

    args = parser.parse_args()

    code = asyncio.run(run(args))
    sys.exit(code)


if __name__ == "__main__":
    main()
