"""Start-up of the node and a console front end that feeds it button presses."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import threading
from typing import Optional, Sequence, Union

from dominion_node.app import App
from dominion_node.buttons import check_startup, classify_press
from dominion_node.errors import AppError, FatalError, signal_fatal_error
from dominion_node.leds import LedBank
from dominion_node.states import AppEvent, AppState
from dominion_node.storage import ControlPoint, Storage, control_point_to_string

_log = logging.getLogger(__name__)

_BUTTONS = {
    "red": (True, False),
    "blue": (False, True),
    "both": (True, True),
}


def app_init(
    leds: Optional[LedBank] = None,
    storage: Union[Storage, str, os.PathLike, None] = None,
) -> tuple[LedBank, Storage]:
    """Prepare the LEDs and the settings store.

    ``storage`` is a ready Storage, a settings file path, or None for
    in-memory settings. Raises FatalError if any part fails to start.
    """
    _log.info("Initializing the app...")
    failed = False

    bank = leds if leds is not None else LedBank()
    bank.turn_all_off()
    _log.info("LED INIT OK")

    store: Optional[Storage] = None
    try:
        store = storage if isinstance(storage, Storage) else Storage(storage)
    except OSError as exc:
        _log.error("Error calling storage init: %s", exc)
        failed = True
    else:
        _log.info("STORAGE INIT OK")

    if failed or store is None:
        _log.error("Error initializing the app")
        raise FatalError(AppError.INIT)
    _log.info("App initialized OK")
    return bank, store


def _parse_press(line: str) -> AppEvent:
    parts = line.split()
    if len(parts) != 2 or parts[0].lower() not in _BUTTONS:
        raise ValueError("expected '<red|blue|both> <milliseconds>'")
    duration_ms = int(parts[1])
    if duration_ms < 0:
        raise ValueError("duration must not be negative")
    red, blue = _BUTTONS[parts[0].lower()]
    return classify_press(red, blue, duration_ms)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dominion-node",
        description=(
            "Run a control point node. Each input line is a press: "
            "'<red|blue|both> <milliseconds>'."
        ),
    )
    parser.add_argument("--storage", help="settings file (default: in memory)")
    parser.add_argument(
        "--control-point",
        choices=[p.name.lower() for p in ControlPoint if p is not ControlPoint.NONE],
        help="save this control point before starting",
    )
    parser.add_argument(
        "--setup-time", type=float, default=None, help="initial setup window in seconds"
    )
    parser.add_argument("--red-held", action="store_true", help="red button stuck at start")
    parser.add_argument("--blue-held", action="store_true", help="blue button stuck at start")
    parser.add_argument(
        "--blink-cycles",
        type=int,
        default=None,
        help="blink a fatal error this many times (default: forever)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log game events")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the node on presses read from standard input."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    leds = LedBank()
    try:
        check_startup(args.red_held, args.blue_held)
        leds, storage = app_init(leds, args.storage)
        if args.control_point:
            storage.set_control_point(ControlPoint[args.control_point.upper()])
    except FatalError as exc:
        try:
            signal_fatal_error(exc.error, leds, cycles=args.blink_cycles)
        except FatalError as final:
            print(f"fatal error: {final}", file=sys.stderr)
        return 1

    app = App(leds=leds, storage=storage, setup_time=args.setup_time)
    app.start()
    print(f"control point: {control_point_to_string(app.control_point)}")

    stop = threading.Event()
    worker = threading.Thread(target=app.run, args=(stop,), daemon=True)
    worker.start()
    try:
        for line in sys.stdin:
            text = line.strip()
            if not text or text.startswith("#"):
                continue
            try:
                event = _parse_press(text)
            except ValueError as exc:
                print(f"invalid press {text!r}: {exc}", file=sys.stderr)
                continue
            app.post(event)
    finally:
        stop.set()
        worker.join()

    blue, red = app.scores()
    print(f"state: {AppState(app.state).name}")
    print(f"BLUE TEAM: {blue}s")
    print(f"RED TEAM: {red}s")
    if app.state == AppState.FINISHED:
        print(f"WIN {app.winner().name} TEAM!")
    return 0


if __name__ == "__main__":
    sys.exit(main())