"""Fatal error reporting through LED blink patterns."""

from __future__ import annotations

import enum
import logging
import time
from itertools import count
from typing import Callable, Optional, Union

from dominion_node.leds import Led, LedBank

_log = logging.getLogger(__name__)

BlinkStep = tuple[frozenset[Led], int]


class AppError(enum.IntEnum):
    """Kinds of fatal error the node can report."""

    INIT = 0
    BUTTON = 1


class FatalError(Exception):
    """Raised once a fatal error has finished being signalled."""

    def __init__(self, error: Union[AppError, int]) -> None:
        super().__init__(app_error_to_string(error))
        self.error = error


def app_error_to_string(error: Union[AppError, int]) -> str:
    """Return the description of an error."""
    if error == AppError.INIT:
        return "INITIALIZATION ERROR"
    return "UNKNOWN ERROR"


def blink_pattern(error: Union[AppError, int]) -> list[BlinkStep]:
    """Return one cycle of the blink pattern as (lit LEDs, delay in ms) steps."""
    if error == AppError.INIT:
        return [(frozenset({Led.RED}), 1000), (frozenset({Led.BLUE}), 1000)]
    if error == AppError.BUTTON:
        return [(frozenset({Led.RED, Led.BLUE}), 100), (frozenset(), 100)]
    return [(frozenset({Led.RED}), 3000), (frozenset({Led.BLUE}), 3000)]


def signal_fatal_error(
    error: Union[AppError, int],
    leds: Optional[LedBank] = None,
    sleep: Callable[[float], object] = time.sleep,
    cycles: Optional[int] = None,
) -> None:
    """Blink the error pattern, then raise FatalError.

    With ``cycles`` left as None the pattern repeats forever.
    """
    _log.error("A fatal error occurred: %s", app_error_to_string(error))
    bank = leds if leds is not None else LedBank()
    bank.turn_all_off()
    pattern = blink_pattern(error)
    rounds = count() if cycles is None else range(cycles)
    for _ in rounds:
        for lit, delay_ms in pattern:
            for led in lit:
                bank.turn_on(led)
            for led in Led:
                if led not in lit:
                    bank.turn_off(led)
            sleep(delay_ms / 1000)
    raise FatalError(error)