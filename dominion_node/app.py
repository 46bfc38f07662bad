"""Game logic of the node: an event-driven state machine timing both teams."""

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, Optional, Union

from dominion_node.chrono import Chrono
from dominion_node.leds import Led, LedBank
from dominion_node.states import (
    APP_EVENT_ENQUEUE_TIMEOUT_MS,
    INITIAL_SETUP_TIME_MS,
    Action,
    AppEvent,
    AppState,
    transition,
)
from dominion_node.storage import ControlPoint, Storage, StorageError, control_point_to_string

_log = logging.getLogger(__name__)

QUEUE_LENGTH = 10
_POLL_INTERVAL_S = 0.05


class App:
    """Receives button and timer events and drives the game.

    ``clock`` returns the current time in microseconds and is shared by both
    team stopwatches; ``setup_time`` is the initial setup window in seconds.
    """

    def __init__(
        self,
        leds: Optional[LedBank] = None,
        storage: Optional[Storage] = None,
        clock: Optional[Callable[[], int]] = None,
        setup_time: Optional[float] = None,
    ) -> None:
        self.leds = leds if leds is not None else LedBank()
        self.storage = storage if storage is not None else Storage()
        self.setup_time = (
            setup_time if setup_time is not None else INITIAL_SETUP_TIME_MS / 1000
        )
        self.state: Union[AppState, int] = AppState.INIT
        self.control_point = ControlPoint.NONE
        self.blue_chrono = Chrono(clock)
        self.red_chrono = Chrono(clock)
        self._queue: queue.Queue[Union[AppEvent, int]] = queue.Queue(QUEUE_LENGTH)
        self._setup_timer: Optional[threading.Timer] = None

    def start(self) -> None:
        """Enter the initial state, load the control point and arm the setup timer."""
        self.state = AppState.INIT
        try:
            self.control_point = self.storage.get_control_point()
        except StorageError as exc:
            _log.error("Error getting control point! %s", exc)
            self.control_point = ControlPoint.ALPHA
        _log.info("CONTROL POINT: %s", control_point_to_string(self.control_point))

        timer = threading.Timer(self.setup_time, self._on_setup_timeout)
        timer.daemon = True
        try:
            timer.start()
        except RuntimeError as exc:
            _log.error("Error starting initial setup timer (%s); going idle", exc)
            self.state = AppState.IDLE
            return
        self._setup_timer = timer

    def _on_setup_timeout(self) -> None:
        self.post(AppEvent.TMR_INIT_SETUP)

    def _stop_setup_timer(self) -> None:
        if self._setup_timer is not None:
            self._setup_timer.cancel()

    def post(self, event: Union[AppEvent, int]) -> bool:
        """Queue an event; return False if the queue stayed full too long."""
        try:
            self._queue.put(event, timeout=APP_EVENT_ENQUEUE_TIMEOUT_MS / 1000)
        except queue.Full:
            _log.warning("Event queue full; dropped event %s", event)
            return False
        return True

    def handle(self, event: Union[AppEvent, int]) -> Union[AppState, int]:
        """Apply one event to the state machine and return the new state."""
        result = transition(self.state, event)
        if not result.expected:
            _log.error(
                "UNEXPECTED TRANSITION! STATE, EVENT: %d, %d", self.state, event
            )
            return self.state
        _log.info("STATE, EVENT: %d, %d", self.state, event)
        self.state = result.state
        for action in result.actions:
            self._perform(action)
        return self.state

    def _perform(self, action: Action) -> None:
        if action is Action.STOP_SETUP_TIMER:
            self._stop_setup_timer()
        elif action is Action.RUN_BLUE:
            self.blue_chrono.start()
            self.red_chrono.stop()
            self.leds.turn_on(Led.BLUE)
            self.leds.turn_off(Led.RED)
        elif action is Action.RUN_RED:
            self.blue_chrono.stop()
            self.red_chrono.start()
            self.leds.turn_off(Led.BLUE)
            self.leds.turn_on(Led.RED)
        elif action is Action.FINISH:
            self.blue_chrono.stop()
            self.red_chrono.stop()
            self.leds.turn_all_on()
            blue, red = self.scores()
            _log.info("BLUE TEAM: %ds", blue)
            _log.info("RED TEAM:  %ds", red)
            _log.info("WIN %s TEAM!", self.winner().name)
        elif action is Action.RESET:
            self.blue_chrono.reset()
            self.red_chrono.reset()
            self.leds.turn_all_off()

    def run(self, stop: Optional[threading.Event] = None) -> None:
        """Handle queued events until ``stop`` is set and the queue is drained."""
        while True:
            try:
                event = self._queue.get(timeout=_POLL_INTERVAL_S)
            except queue.Empty:
                if stop is not None and stop.is_set():
                    return
                continue
            self.handle(event)

    def scores(self) -> tuple[int, int]:
        """Return the whole seconds held by (blue, red)."""
        return self.blue_chrono.seconds(), self.red_chrono.seconds()

    def winner(self) -> Led:
        """Return the team with more time held; blue wins a tie."""
        blue, red = self.scores()
        return Led.BLUE if blue >= red else Led.RED