"""CLI entry point for Toaster."""

import argparse
import sys
from pathlib import Path
from threading import Event
from typing import List, Optional

from dotenv import load_dotenv

from .config import DEFAULT_CONFIG_PATH, get_default_config_toml, load_config
from .core.engine import PresentationPolicy
from .core.monitor import ToastMonitor, build_toaster
from .core.toast import ToastKind
from .presenters import LogPresenter
from .store.archive import ArchivePolicy
from .store.scanner import ToastStore
from .utils.logging import setup_logging
from .utils.signals import install_signal_handlers


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toaster",
        description="Watch a directory for JSON toast files and show them as notifications",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Path to configuration file",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    parser.add_argument(
        "--store",
        type=Path,
        help="Toast directory to watch (overrides config)",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log toasts instead of showing them (they are still archived)",
    )

    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single scan and exit",
    )

    parser.add_argument(
        "--concurrent",
        action="store_true",
        help="Present all ready toasts at once instead of oldest first",
    )

    parser.add_argument(
        "--delete",
        action="store_true",
        help="Delete presented toasts instead of archiving them",
    )

    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show default configuration and exit",
    )

    parser.add_argument(
        "--send",
        metavar="MESSAGE",
        help="Drop a toast with this message into the store and exit",
    )

    parser.add_argument(
        "--type",
        choices=[kind.value for kind in ToastKind],
        default=ToastKind.INFORMATION.value,
        help="Toast type for --send",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    load_dotenv()

    args = build_parser().parse_args(argv)

    if args.show_config:
        print(get_default_config_toml())
        return 0

    try:
        config = load_config(args.config)
    except ValueError as e:
        print(f"Invalid configuration in {args.config}: {e}", file=sys.stderr)
        return 2

    if args.store:
        config.store.path = args.store.expanduser()
    if args.concurrent:
        config.engine.presentation = PresentationPolicy.CONCURRENT
    if args.delete:
        config.engine.archive_policy = ArchivePolicy.DELETE

    setup_logging(verbose=args.verbose, log_file=config.log_file)

    if args.send:
        store = ToastStore(config.store.path, config.store.temp_marker, config.store.archived_suffix)
        filename = store.drop({"type": args.type, "message": args.send})
        print(f"Dropped {store.pending_path(filename)}")
        return 0

    toaster = build_toaster(config, presenter=LogPresenter() if args.dry_run else None)

    if args.once:
        ToastMonitor(toaster, shutdown_event=Event()).run_once()
        return 0

    monitor = ToastMonitor(
        toaster,
        shutdown_event=install_signal_handlers(config.store.path),
        poll_interval=config.engine.poll_interval,
    )

    try:
        monitor.run()
    except KeyboardInterrupt:
        pass

    return 0


if __name__ == "__main__":
    sys.exit(main())
