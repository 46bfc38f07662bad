"""Game states, events and the transition table of the node."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

APP_EVENT_ENQUEUE_TIMEOUT_MS = 100
INITIAL_SETUP_TIME_MS = 30000


class AppState(enum.IntEnum):
    """States of the game logic."""

    INIT = 0
    IDLE = 1
    SETTINGS_CONTROL_POINT = 2
    SETTINGS_CP_ALPHA = 3
    SETTINGS_CP_BRAVO = 4
    SETTINGS_CP_CHARLIE = 5
    SETTINGS_CP_DELTA = 6
    SETTINGS_CP_ECHO = 7
    SETTINGS_CP_EXIT = 8
    SETTINGS_EXIT = 9
    RUNNING_BLUE = 10
    RUNNING_RED = 11
    FINISHED = 12


class AppEvent(enum.IntEnum):
    """Events delivered to the game logic."""

    TMR_INIT_SETUP = 0
    BTN_RED_SHORT = 1
    BTN_RED_MEDIUM = 2
    BTN_RED_LONG = 3
    BTN_BLUE_SHORT = 4
    BTN_BLUE_MEDIUM = 5
    BTN_BLUE_LONG = 6
    BTN_BOTH_SHORT = 7
    BTN_BOTH_MEDIUM = 8
    BTN_BOTH_LONG = 9


class Action(enum.Enum):
    """Side effects a transition asks for."""

    STOP_SETUP_TIMER = "stop_setup_timer"
    RUN_BLUE = "run_blue"
    RUN_RED = "run_red"
    FINISH = "finish"
    RESET = "reset"


@dataclass(frozen=True)
class Transition:
    """Outcome of one event: the next state, its actions, and whether it was expected."""

    state: Union[AppState, int]
    actions: tuple[Action, ...] = ()
    expected: bool = True


_BUTTON_EVENTS = frozenset(AppEvent) - {AppEvent.TMR_INIT_SETUP}

_E = AppEvent
_S = AppState

_TABLE: dict[AppState, dict[AppEvent, Transition]] = {
    _S.INIT: {
        _E.BTN_BLUE_SHORT: Transition(_S.IDLE, (Action.STOP_SETUP_TIMER,)),
        _E.BTN_BLUE_MEDIUM: Transition(_S.IDLE, (Action.STOP_SETUP_TIMER,)),
        _E.BTN_RED_SHORT: Transition(_S.IDLE, (Action.STOP_SETUP_TIMER,)),
        _E.BTN_RED_MEDIUM: Transition(_S.IDLE, (Action.STOP_SETUP_TIMER,)),
        _E.BTN_BOTH_SHORT: Transition(_S.IDLE, (Action.STOP_SETUP_TIMER,)),
        _E.BTN_BOTH_MEDIUM: Transition(_S.IDLE, (Action.STOP_SETUP_TIMER,)),
        _E.BTN_BOTH_LONG: Transition(
            _S.SETTINGS_CONTROL_POINT, (Action.STOP_SETUP_TIMER,)
        ),
        _E.TMR_INIT_SETUP: Transition(_S.IDLE),
    },
    _S.IDLE: {
        _E.BTN_BLUE_SHORT: Transition(_S.RUNNING_BLUE, (Action.RUN_BLUE,)),
        _E.BTN_BLUE_MEDIUM: Transition(_S.RUNNING_BLUE, (Action.RUN_BLUE,)),
        _E.BTN_RED_SHORT: Transition(_S.RUNNING_RED, (Action.RUN_RED,)),
        _E.BTN_RED_MEDIUM: Transition(_S.RUNNING_RED, (Action.RUN_RED,)),
    },
    _S.RUNNING_BLUE: {
        _E.BTN_RED_SHORT: Transition(_S.RUNNING_RED, (Action.RUN_RED,)),
        _E.BTN_RED_MEDIUM: Transition(_S.RUNNING_RED, (Action.RUN_RED,)),
        _E.BTN_BOTH_MEDIUM: Transition(_S.FINISHED, (Action.FINISH,)),
        _E.BTN_BOTH_LONG: Transition(_S.FINISHED, (Action.FINISH,)),
    },
    _S.RUNNING_RED: {
        _E.BTN_BLUE_SHORT: Transition(_S.RUNNING_BLUE, (Action.RUN_BLUE,)),
        _E.BTN_BLUE_MEDIUM: Transition(_S.RUNNING_BLUE, (Action.RUN_BLUE,)),
        _E.BTN_BOTH_MEDIUM: Transition(_S.FINISHED, (Action.FINISH,)),
        _E.BTN_BOTH_LONG: Transition(_S.FINISHED, (Action.FINISH,)),
    },
    _S.FINISHED: {
        _E.BTN_BOTH_MEDIUM: Transition(_S.IDLE, (Action.RESET,)),
        _E.BTN_BOTH_LONG: Transition(_S.IDLE, (Action.RESET,)),
    },
    _S.SETTINGS_CONTROL_POINT: {
        _E.BTN_BLUE_SHORT: Transition(_S.SETTINGS_EXIT),
        _E.BTN_RED_SHORT: Transition(_S.SETTINGS_CP_ALPHA),
        _E.BTN_BOTH_MEDIUM: Transition(_S.IDLE),
        _E.BTN_BOTH_LONG: Transition(_S.IDLE),
    },
}


def transition(
    state: Union[AppState, int], event: Union[AppEvent, int]
) -> Transition:
    """Work out what an event does in a state.

    Button events a state does not react to leave it unchanged. Events a
    state does not expect, and states with no handling, give an unexpected
    transition that keeps the state as it is.
    """
    try:
        known_state = AppState(state)
    except ValueError:
        return Transition(state, expected=False)
    table = _TABLE.get(known_state)
    if table is None:
        return Transition(known_state, expected=False)
    try:
        known_event = AppEvent(event)
    except ValueError:
        return Transition(known_state, expected=False)
    result = table.get(known_event)
    if result is not None:
        return result
    if known_event in _BUTTON_EVENTS:
        return Transition(known_state)
    return Transition(known_state, expected=False)