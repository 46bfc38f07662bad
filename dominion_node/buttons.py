"""Reading the two team buttons and turning presses into game events."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from dominion_node.errors import AppError, FatalError
from dominion_node.states import AppEvent

_log = logging.getLogger(__name__)

GPIO_BTN_RED = 5
GPIO_BTN_BLUE = 4

DEBOUNCE_DELAY_MS = 200
SETTINGS_HOLD_TIME_MS = 3000

BTN_RED_EVENT = 1 << 0
BTN_BLUE_EVENT = 1 << 1

PRESS_INTER_TIME_MS = 10
PRESS_SHORT_MAX_MS = 2000
PRESS_MEDIUM_MAX_MS = 4000
PRESS_LONG_MAX_MS = 10000

_EVENTS = {
    (True, True): (
        AppEvent.BTN_BOTH_SHORT,
        AppEvent.BTN_BOTH_MEDIUM,
        AppEvent.BTN_BOTH_LONG,
    ),
    (True, False): (
        AppEvent.BTN_RED_SHORT,
        AppEvent.BTN_RED_MEDIUM,
        AppEvent.BTN_RED_LONG,
    ),
    (False, True): (
        AppEvent.BTN_BLUE_SHORT,
        AppEvent.BTN_BLUE_MEDIUM,
        AppEvent.BTN_BLUE_LONG,
    ),
}


def classify_press(red: bool, blue: bool, duration_ms: int) -> AppEvent:
    """Name the event for a press of the given buttons lasting ``duration_ms``."""
    key = (bool(red), bool(blue))
    if key not in _EVENTS:
        raise ValueError("a press needs at least one button")
    short, medium, long_ = _EVENTS[key]
    if duration_ms < PRESS_SHORT_MAX_MS:
        return short
    if duration_ms < PRESS_MEDIUM_MAX_MS:
        return medium
    return long_


def check_startup(red_pressed: bool, blue_pressed: bool) -> None:
    """Raise FatalError if a button reads as held when the node starts."""
    if red_pressed or blue_pressed:
        _log.error(
            "BUTTON %s IS PRESSED AT STARTUP OR IS DAMAGED!",
            "RED" if red_pressed else "BLUE",
        )
        raise FatalError(AppError.BUTTON)


def _monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


class ButtonReader:
    """Times button presses and posts the resulting events.

    ``is_pressed`` takes a button pin and tells whether it is held down,
    ``post`` receives each event, ``sleep`` waits a number of seconds and
    ``clock`` returns the current time in milliseconds.
    """

    def __init__(
        self,
        is_pressed: Callable[[int], bool],
        post: Callable[[AppEvent], object],
        sleep: Callable[[float], object] = time.sleep,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self._is_pressed = is_pressed
        self._post = post
        self._sleep = sleep
        self._clock = clock if clock is not None else _monotonic_ms

    def _held(self, red: bool, blue: bool) -> bool:
        if red and blue:
            return self._is_pressed(GPIO_BTN_RED) and self._is_pressed(GPIO_BTN_BLUE)
        if red:
            return self._is_pressed(GPIO_BTN_RED)
        return self._is_pressed(GPIO_BTN_BLUE)

    def measure_press(self, red: bool, blue: bool) -> Optional[AppEvent]:
        """Debounce, time the press of the flagged buttons and post its event.

        Returns the posted event, or None when no button was flagged.
        """
        if not (red or blue):
            return None
        self._sleep(DEBOUNCE_DELAY_MS / 1000)
        start = self._clock()
        limit = PRESS_LONG_MAX_MS // PRESS_INTER_TIME_MS
        polls = 0
        while True:
            self._sleep(PRESS_INTER_TIME_MS / 1000)
            polls += 1
            if not (self._held(red, blue) and polls < limit):
                break
        duration_ms = self._clock() - start
        event = classify_press(red, blue, duration_ms)
        self._post(event)
        return event