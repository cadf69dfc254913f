"""
Devcomms Loop Entry Point

Run as:
    python -m devcomms_loop.main --poll "Bat\\r@1000"
    devcomms-loop (after pip install)
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys

from .config import settings
from .factory import create_update_loop

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure logging"""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_poll(value: str) -> tuple[str, float | None]:
    """
    Parse a COMMAND[@INTERVAL_MS] option value.

    Escaped carriage returns ("\\r") are unescaped so commands can be
    typed on a shell command line.
    """
    command, sep, interval = value.rpartition("@")
    if not sep:
        command, interval = value, ""
    command = command.replace("\\r", "\r").replace("\\n", "\n")
    if not interval:
        return command, None
    try:
        return command, float(interval)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid interval in {value!r}")


def print_response(payload: str) -> None:
    """Listener that echoes responses to stdout"""
    print(payload.replace("\r", "\n").rstrip("\n"), flush=True)


async def run_loop(args: argparse.Namespace) -> None:
    """Create the loop, register commands and run until stopped"""
    update_loop = create_update_loop(
        base_url=args.base_url,
        min_update_ms=args.min_update_ms,
    )
    update_loop.register_listener(print_response)

    for command, interval in args.poll:
        update_loop.add_recurring_message(command, interval)
    for command in args.send:
        update_loop.send_command(command.replace("\\r", "\r"))

    # Handle shutdown signals
    loop = asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, update_loop.stop)
        except NotImplementedError:
            # Not supported on Windows event loops
            pass

    try:
        await update_loop.run()
    finally:
        await update_loop.aclose()
        logger.info(f"Final stats: {update_loop.get_stats()}")


def main() -> int:
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description="Devcomms Loop - batched polling of a remote device"
    )
    parser.add_argument(
        "--base-url",
        default=settings.base_url,
        help=f"Remote host base URL (default: {settings.base_url})",
    )
    parser.add_argument(
        "--min-update-ms",
        type=float,
        default=settings.min_update_ms,
        help=f"Tick period in ms (default: {settings.min_update_ms:.1f})",
    )
    parser.add_argument(
        "--poll",
        type=parse_poll,
        action="append",
        default=[],
        metavar="COMMAND[@INTERVAL_MS]",
        help="Recurring command (repeatable)",
    )
    parser.add_argument(
        "--send",
        action="append",
        default=[],
        metavar="COMMAND",
        help="One-off command (repeatable)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=settings.debug,
        help="Enable debug logging",
    )

    args = parser.parse_args()

    setup_logging(args.debug)

    logger.info("Starting Devcomms Loop")
    logger.info(f"  Host: {args.base_url}")

    try:
        asyncio.run(run_loop(args))
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt")

    return 0


if __name__ == "__main__":
    sys.exit(main())
