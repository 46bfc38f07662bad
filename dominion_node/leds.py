"""The two team LEDs of the node."""

from __future__ import annotations

import enum

GPIO_LED_RED = 19
GPIO_LED_BLUE = 18

OFF = 0
ON = 1


class Led(enum.IntEnum):
    """Team LEDs, valued by the pin that drives them."""

    BLUE = GPIO_LED_BLUE
    RED = GPIO_LED_RED


class LedBank:
    """Holds the on/off level of every LED; all start switched off."""

    def __init__(self) -> None:
        self._levels = {led: OFF for led in Led}

    def _set(self, led: Led | int, level: int) -> None:
        self._levels[Led(led)] = level

    def turn_on(self, led: Led | int) -> None:
        """Switch one LED on."""
        self._set(led, ON)

    def turn_off(self, led: Led | int) -> None:
        """Switch one LED off."""
        self._set(led, OFF)

    def turn_all_on(self) -> None:
        """Switch every LED on."""
        for led in (Led.BLUE, Led.RED):
            self._set(led, ON)

    def turn_all_off(self) -> None:
        """Switch every LED off."""
        for led in (Led.BLUE, Led.RED):
            self._set(led, OFF)

    def is_on(self, led: Led | int) -> bool:
        """Tell whether an LED is lit."""
        return self._levels[Led(led)] == ON

    def lit(self) -> frozenset[Led]:
        """Return the set of LEDs currently lit."""
        return frozenset(led for led, level in self._levels.items() if level == ON)