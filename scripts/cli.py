"""CLI entry point: sync Gmail filters from config files, or export them."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
from pathlib import Path
from types import FrameType

from gmailfilters.config.settings import GmailFiltersSettings
from gmailfilters.core.auth import authenticate, build_gmail_service
from gmailfilters.core.exceptions import ConfigurationError
from gmailfilters.core.gmail_client import GmailClient
from gmailfilters.pipeline.sync import FilterSync

logger = logging.getLogger("gmailfilters.cli")


def setup_logging(level: str) -> None:
    """Configure logging with timestamp and module info."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _on_signal(signum: int, frame: FrameType | None) -> None:
    logger.info("Received %s, exiting.", signal.Signals(signum).name)
    sys.exit(0)


def install_signal_handlers() -> None:
    """Exit cleanly on ^C or SIGTERM."""
    signal.signal(signal.SIGINT, _on_signal)
    signal.signal(signal.SIGTERM, _on_signal)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gmailfilters",
        description="A tool to sync Gmail filters from a config file to your account",
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", help="enable debug logging"
    )
    parser.add_argument(
        "-e", "--export", action="store_true", help="export existing filters"
    )
    parser.add_argument(
        "--filters-file",
        type=Path,
        default=None,
        help="Filters file (or env GMAIL_FILTERS_FILE)",
    )
    parser.add_argument(
        "--labels-file",
        type=Path,
        default=None,
        help="Labels file (or env GMAIL_LABELS_FILE)",
    )
    parser.add_argument(
        "--creds-file",
        type=Path,
        default=None,
        dest="credential_file",
        help="Gmail credential file (or env GMAIL_CREDENTIAL_FILE)",
    )
    parser.add_argument(
        "--token-file",
        type=Path,
        default=None,
        help="Gmail oauth token file (or env GMAIL_TOKEN_FILE)",
    )
    return parser


def resolve_settings(args: argparse.Namespace) -> GmailFiltersSettings:
    """Layer explicit flags over environment/.env settings."""
    overrides: dict[str, object] = {}
    for name in ("filters_file", "labels_file", "credential_file", "token_file"):
        value = getattr(args, name, None)
        if value is not None:
            overrides[name] = value
    if args.debug:
        overrides["log_level"] = "DEBUG"
    return GmailFiltersSettings(**overrides)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    settings = resolve_settings(args)
    setup_logging(settings.log_level)

    try:
        settings.require_paths()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    install_signal_handlers()

    try:
        creds = authenticate(settings.credential_file, settings.token_file)
        client = GmailClient(build_gmail_service(creds), user_id=settings.user_id)
        sync = FilterSync(client)

        if args.export:
            report = sync.export(settings.filters_file, settings.labels_file)
            print(f"Exported {report.filters_exported} filters")
            print(f"Exported {report.labels_exported} labels")
        else:
            report = sync.run(settings.filters_file, settings.labels_file)
            print(f"Successfully updated {report.filters_created} filters")
            if report.labels_created:
                print(f"Created {report.labels_created} labels")
            if report.labels_updated:
                print(f"Updated {report.labels_updated} labels")

    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
