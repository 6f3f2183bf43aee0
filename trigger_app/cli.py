"""Command-line interface for running a price trigger session."""

import argparse
import math
import sys
from pathlib import Path
from typing import Any, Callable, Optional, TextIO

import structlog

from .config.intent_delivery import delivery_config_from_params
from .config.loader import ConfigLoader
from .delivery.dispatcher import IntentDispatcher
from .errors import ConfigurationError, DeliveryError
from .logging.config import configure_logging
from .session import StreamSession
from .transport.wazirx import WazirXStreamClient

logger = structlog.get_logger(__name__)

QUIT_COMMAND = "quit"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="price-trigger",
        description="Emit one buy and one sell order intent when a streamed price crosses a trigger level.",
    )
    parser.add_argument("--trigger-price", type=float, help="Trigger price (prompted for when omitted)")
    parser.add_argument("--config-dir", type=Path, help="Directory containing app.yaml")
    parser.add_argument("--url", help="WebSocket stream URL")
    parser.add_argument(
        "--stream",
        action="append",
        dest="streams",
        help="Stream to subscribe to, e.g. btcinr@trade (repeatable)",
    )
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    parser.add_argument("--json-logs", action="store_true", default=None, help="Emit logs as JSON")
    parser.add_argument("--output-file", help="Also append intents to this JSON-lines file")
    parser.add_argument(
        "--replay",
        type=Path,
        help="Feed newline-delimited frames from a file instead of connecting",
    )
    return parser


def build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Translate command-line flags into configuration overrides."""
    overrides: dict[str, Any] = {}

    if args.trigger_price is not None:
        overrides.setdefault("trigger", {})["trigger_price"] = args.trigger_price
    if args.url:
        overrides.setdefault("stream", {})["url"] = args.url
    if args.streams:
        overrides.setdefault("stream", {})["streams"] = args.streams
    if args.log_level:
        overrides.setdefault("logging", {})["level"] = args.log_level
    if args.json_logs is not None:
        overrides.setdefault("logging", {})["format_json"] = args.json_logs
    if args.output_file:
        overrides.setdefault("delivery", {})["output_path"] = args.output_file

    return overrides


def prompt_trigger_price(
    input_fn: Optional[Callable[[], str]] = None,
    output: Optional[TextIO] = None,
) -> float:
    """
    Ask for the trigger price until a positive number is entered.

    Raises:
        EOFError: If input ends before a valid price is read
    """
    input_fn = input_fn or input
    output = output or sys.stdout
    while True:
        print("Enter trigger price:", file=output, flush=True)
        text = input_fn().strip()
        try:
            price = float(text)
        except ValueError:
            print(f"Not a number: {text!r}", file=output)
            continue
        if math.isfinite(price) and price > 0:
            return price
        print("Trigger price must be a positive number", file=output)


def run_command_loop(
    input_fn: Optional[Callable[[], str]] = None,
    output: Optional[TextIO] = None,
) -> None:
    """Block until the user types quit or input ends."""
    input_fn = input_fn or input
    output = output or sys.stdout
    while True:
        print("Enter command (quit to exit):", file=output, flush=True)
        try:
            command = input_fn().strip()
        except EOFError:
            break
        if command.lower() == QUIT_COMMAND:
            print("Exiting...", file=output)
            break


def replay_frames(session: StreamSession, path: Path) -> int:
    """Feed every non-blank line of a file to the session as one frame."""
    count = 0
    with open(path) as f:
        for line in f:
            frame = line.strip()
            if not frame:
                continue
            session.on_message(frame)
            count += 1
    return count


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the price-trigger command."""
    args = build_parser().parse_args(argv)

    try:
        config = ConfigLoader.create(args.config_dir).load_app_config(build_overrides(args))
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    configure_logging(
        level=config.logging.level,
        format_json=config.logging.format_json,
        include_caller=config.logging.include_caller,
    )

    trigger_price = config.trigger.trigger_price
    if trigger_price is None:
        try:
            trigger_price = prompt_trigger_price()
        except EOFError:
            print("No trigger price entered", file=sys.stderr)
            return 2

    try:
        dispatcher = IntentDispatcher(delivery_config_from_params(config.delivery))
    except DeliveryError as e:
        print(f"Delivery setup error: {e}", file=sys.stderr)
        return 1

    session = StreamSession(trigger_price, sink=dispatcher)

    if args.replay:
        try:
            count = replay_frames(session, args.replay)
        except OSError as e:
            print(f"Cannot read replay file: {e}", file=sys.stderr)
            return 1
        logger.info("Replay finished", frames=count, stats=session.get_stats())
        return 0

    print("Connecting to WazirX WebSocket...")
    client = WazirXStreamClient(session, config.stream)
    if not client.start():
        logger.warning("Connection not established yet, continuing in background")

    try:
        run_command_loop()
    except KeyboardInterrupt:
        print("Exiting...")
    finally:
        client.close()

    return 0
