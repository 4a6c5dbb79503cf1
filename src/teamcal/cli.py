from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

import orjson

from .bootstrap import configure_logging
from .domain import ExportOptions
from .export import ExportFailed, Exported, NeedsConfirmation, NoEventsToExport
from .services import AuthService, ExportService, ServiceContext

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NEEDS_CONFIRMATION = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Team calendar command line interface.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    api_parser = subparsers.add_parser("api", help="Start the FastAPI server.")
    api_parser.add_argument("--host", default="127.0.0.1")
    api_parser.add_argument("--port", type=int, default=8000)

    export_parser = subparsers.add_parser("export", help="Export this year's events to an .ics file.")
    export_parser.add_argument("--email", default=os.getenv("TEAMCAL_EMAIL"))
    export_parser.add_argument("--password", default=os.getenv("TEAMCAL_PASSWORD"))
    export_parser.add_argument("--team", dest="team_id")
    export_parser.add_argument("--event-type", dest="event_type_id")
    export_parser.add_argument("--new-only", action="store_true", help="Only events created since the last export.")
    export_parser.add_argument("--force", action="store_true", help="Export again even if a full export is on record.")
    export_parser.add_argument("--output-dir", type=Path, default=None)

    return parser


def _emit(payload: dict) -> None:
    sys.stdout.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8") + "\n")


def run_export(args: argparse.Namespace, context: Optional[ServiceContext] = None) -> int:
    if not args.email or not args.password:
        _emit({"status": "failed", "reason": "--email and --password (or TEAMCAL_EMAIL/TEAMCAL_PASSWORD) are required"})
        return EXIT_FAILED

    context = context or ServiceContext()
    auth = AuthService(context)
    try:
        auth.sign_in_with_password(args.email, args.password)
        actor_id = auth.current_actor_id()
    except Exception as exc:  # noqa: BLE001
        logger.exception("Sign-in failed for %s", args.email)
        context.gateway.clear_session()
        _emit({"status": "failed", "reason": f"Sign-in failed: {exc}"})
        return EXIT_FAILED

    try:
        options = ExportOptions(
            team_id=args.team_id,
            event_type_id=args.event_type_id,
            new_events_only=args.new_only,
            force=args.force,
        )
        result = ExportService(context).request_export(actor_id, options)
    finally:
        auth.sign_out()

    if isinstance(result, Exported):
        target = result.artifact.write_to(args.output_dir or context.settings.export.output_dir)
        _emit({"status": "exported", "path": str(target), "event_count": result.event_count})
        return EXIT_OK
    if isinstance(result, NeedsConfirmation):
        _emit({"status": "needs_confirmation", "hint": "re-run with --force to export again"})
        return EXIT_NEEDS_CONFIRMATION
    if isinstance(result, NoEventsToExport):
        _emit({"status": "no_events", "reason": "No events to export"})
        return EXIT_OK
    if isinstance(result, ExportFailed):
        _emit({"status": "failed", "reason": result.reason})
    return EXIT_FAILED


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_logging()
    logger.info("Team calendar CLI starting")
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "api":
        from .services.http import run_local_server

        run_local_server(host=args.host, port=args.port)
        return EXIT_OK
    if args.command == "export":
        return run_export(args)
    parser.print_help()  # pragma: no cover - argparse enforces choices
    return EXIT_FAILED


if __name__ == "__main__":
    raise SystemExit(main())
