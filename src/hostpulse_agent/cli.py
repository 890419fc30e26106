"""Command-line interface for Hostpulse agent."""

import argparse
import json
import logging
import signal
import sys
import threading
from typing import Optional

from . import __version__
from .collectors import sample_throughput
from .config import DEFAULT_CONFIG_PATH, AgentConfig, ConfigManager
from .formatting import format_bytes
from .models import Snapshot
from .snapshot import collect_snapshot
from .transport import Reporter

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("hostpulse-agent")


def _load_config(args: argparse.Namespace) -> Optional[AgentConfig]:
    """Load the explicit --config file, or the default one if present."""
    try:
        if args.config:
            return ConfigManager(args.config).load()
        return ConfigManager().load_or_default()
    except (OSError, ValueError, TypeError) as e:
        logger.error(f"Invalid configuration: {e}")
        return None


def _print_snapshot(snapshot: Snapshot) -> bool:
    try:
        text = json.dumps(snapshot.to_dict(), indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.error(f"JSON encode error: {e}")
        return False

    print(text, flush=True)
    return True


def _install_stop_handlers(stop_event: threading.Event) -> dict:
    """Set ``stop_event`` on SIGINT/SIGTERM. Returns the previous handlers."""

    def _handle(signum, _frame):
        logger.info(f"Received signal {signum}, stopping...")
        stop_event.set()

    previous = {}
    for sig in (signal.SIGINT, signal.SIGTERM):
        previous[sig] = signal.signal(sig, _handle)
    return previous


def _restore_handlers(previous: dict) -> None:
    for sig, handler in previous.items():
        signal.signal(sig, handler)


def run_loop(
    config: AgentConfig,
    reporter: Reporter,
    stop_event: threading.Event,
    count: int = 0,
) -> int:
    """
    Print throughput samples until stopped.

    When reporting is enabled, a heartbeat goes out every cycle and a fresh
    snapshot every ``config.report_every`` cycles.

    Returns:
        Number of samples taken
    """
    cycles = 0

    while not stop_event.is_set():
        throughput = sample_throughput(config.sample_interval, stop_event)
        if throughput is None:
            break

        print(
            f"Upload: {format_bytes(throughput.upload)}, "
            f"Download: {format_bytes(throughput.download)}",
            flush=True,
        )
        cycles += 1

        if config.reporting:
            if config.heartbeat_url:
                reporter.heartbeat(config.heartbeat_url)
            if config.report_url and cycles % config.report_every == 0:
                snapshot = collect_snapshot(config.sample_interval, stop_event)
                reporter.report(snapshot, config.report_url)

        if count and cycles >= count:
            break

        stop_event.wait(config.interval)

    return cycles


def cmd_run(args: argparse.Namespace) -> int:
    """Print a snapshot, then sample throughput until stopped."""
    config = _load_config(args)
    if config is None:
        return 1

    stop_event = threading.Event()
    previous = _install_stop_handlers(stop_event)
    reporter = Reporter(timeout=config.timeout)

    try:
        logger.info("Collecting snapshot...")
        snapshot = collect_snapshot(config.sample_interval, stop_event)
        _print_snapshot(snapshot)

        if config.reporting and config.report_url:
            reporter.report(snapshot, config.report_url)

        cycles = run_loop(config, reporter, stop_event, count=args.count)
        logger.info(f"Stopped after {cycles} samples")
        return 0
    finally:
        _restore_handlers(previous)


def cmd_snapshot(args: argparse.Namespace) -> int:
    """Collect and print one snapshot, optionally sending it."""
    config = _load_config(args)
    if config is None:
        return 1

    snapshot = collect_snapshot(config.sample_interval)
    if not _print_snapshot(snapshot):
        return 1

    if args.send:
        url = args.url or config.report_url
        if not url:
            logger.error("No report URL configured. Pass --url or set report_url.")
            return 1
        return 0 if Reporter(timeout=config.timeout).report(snapshot, url) else 1

    return 0


def cmd_heartbeat(args: argparse.Namespace) -> int:
    """Send a single heartbeat."""
    config = _load_config(args)
    if config is None:
        return 1

    url = args.url or config.heartbeat_url
    if not url:
        logger.error("No heartbeat URL configured. Pass --url or set heartbeat_url.")
        return 1

    return 0 if Reporter(timeout=config.timeout).heartbeat(url) else 1


def cmd_init_config(args: argparse.Namespace) -> int:
    """Write a configuration file."""
    config_mgr = ConfigManager(args.config or DEFAULT_CONFIG_PATH)
    if config_mgr.exists() and not args.force:
        logger.error(f"Config already exists: {config_mgr.config_path} (use --force)")
        return 1

    config = AgentConfig(
        report_url=args.report_url,
        heartbeat_url=args.heartbeat_url,
        enabled=args.enable,
    )

    try:
        config_mgr.save(config)
    except OSError as e:
        logger.error(f"Could not write config: {e}")
        return 1

    print(f"Configuration written to {config_mgr.config_path}")
    return 0


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Hostpulse Agent - host metrics snapshot collector",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--version", action="version", version=f"hostpulse-agent {__version__}")
    parser.add_argument(
        "--config",
        help=f"Path to config file (default: {DEFAULT_CONFIG_PATH} if present)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Run command
    run_parser = subparsers.add_parser("run", help="Print a snapshot, then sample throughput")
    run_parser.add_argument(
        "--count",
        type=int,
        default=0,
        help="Stop after N throughput samples (default: run until interrupted)",
    )

    # Snapshot command
    snapshot_parser = subparsers.add_parser("snapshot", help="Print one snapshot")
    snapshot_parser.add_argument("--send", action="store_true", help="Also send it to the report URL")
    snapshot_parser.add_argument("--url", help="Override the configured report URL")

    # Heartbeat command
    heartbeat_parser = subparsers.add_parser("heartbeat", help="Send one heartbeat")
    heartbeat_parser.add_argument("--url", help="Override the configured heartbeat URL")

    # Init-config command
    init_parser = subparsers.add_parser("init-config", help="Write a configuration file")
    init_parser.add_argument("--report-url", help="Endpoint for full snapshots")
    init_parser.add_argument("--heartbeat-url", help="Endpoint for heartbeats")
    init_parser.add_argument("--enable", action="store_true", help="Enable reporting")
    init_parser.add_argument("--force", action="store_true", help="Overwrite an existing file")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if not args.command:
        parser.print_help()
        return 1

    # Route to command handler
    if args.command == "run":
        return cmd_run(args)
    elif args.command == "snapshot":
        return cmd_snapshot(args)
    elif args.command == "heartbeat":
        return cmd_heartbeat(args)
    elif args.command == "init-config":
        return cmd_init_config(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
