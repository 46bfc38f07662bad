import threading
import time

import pytest

from dominion_node.app import QUEUE_LENGTH, App
from dominion_node.leds import Led, LedBank
from dominion_node.states import AppEvent, AppState
from dominion_node.storage import ControlPoint, Storage


class FakeClock:
    def __init__(self):
        self.now = 0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def app(clock):
    return App(leds=LedBank(), storage=Storage(), clock=clock, setup_time=60)


def _idle(app):
    app.handle(AppEvent.TMR_INIT_SETUP)
    assert app.state == AppState.IDLE


def test_initial_state_is_init(app):
    assert app.state == AppState.INIT


def test_start_without_stored_point_defaults_to_alpha(app):
    app.start()
    try:
        assert app.control_point == ControlPoint.ALPHA
        assert app.state == AppState.INIT
    finally:
        app.handle(AppEvent.BTN_BLUE_SHORT)


def test_start_loads_stored_point(clock):
    storage = Storage()
    storage.set_control_point(ControlPoint.BRAVO)
    app = App(storage=storage, clock=clock, setup_time=60)
    app.start()
    try:
        assert app.control_point == ControlPoint.BRAVO
    finally:
        app.handle(AppEvent.BTN_RED_SHORT)


def test_setup_timer_moves_to_idle(clock):
    app = App(clock=clock, setup_time=0.01)
    app.start()
    stop = threading.Event()
    worker = threading.Thread(target=app.run, args=(stop,))
    worker.start()
    deadline = time.monotonic() + 2
    while app.state != AppState.IDLE and time.monotonic() < deadline:
        time.sleep(0.01)
    stop.set()
    worker.join(timeout=2)
    assert app.state == AppState.IDLE
    assert not worker.is_alive()


def test_button_in_init_goes_idle(app):
    assert app.handle(AppEvent.BTN_RED_MEDIUM) == AppState.IDLE


def test_both_long_in_init_enters_settings(app):
    assert app.handle(AppEvent.BTN_BOTH_LONG) == AppState.SETTINGS_CONTROL_POINT
    assert app.handle(AppEvent.BTN_RED_SHORT) == AppState.SETTINGS_CP_ALPHA


def test_unhandled_state_keeps_state(app):
    app.handle(AppEvent.BTN_BOTH_LONG)
    app.handle(AppEvent.BTN_BLUE_SHORT)
    assert app.state == AppState.SETTINGS_EXIT
    assert app.handle(AppEvent.BTN_RED_SHORT) == AppState.SETTINGS_EXIT


def test_timer_event_while_idle_is_ignored(app):
    _idle(app)
    assert app.handle(AppEvent.TMR_INIT_SETUP) == AppState.IDLE


def test_running_blue_lights_blue(app):
    _idle(app)
    app.handle(AppEvent.BTN_BLUE_SHORT)
    assert app.state == AppState.RUNNING_BLUE
    assert app.leds.lit() == frozenset({Led.BLUE})
    assert app.blue_chrono.is_running
    assert not app.red_chrono.is_running


def test_running_red_lights_red(app):
    _idle(app)
    app.handle(AppEvent.BTN_RED_SHORT)
    assert app.state == AppState.RUNNING_RED
    assert app.leds.lit() == frozenset({Led.RED})


def test_full_game_scores_and_winner(app, clock):
    _idle(app)
    app.handle(AppEvent.BTN_BLUE_SHORT)
    clock.now = 5_000_000
    app.handle(AppEvent.BTN_RED_SHORT)
    clock.now = 12_000_000
    assert app.handle(AppEvent.BTN_BOTH_MEDIUM) == AppState.FINISHED
    assert app.scores() == (5, 7)
    assert app.winner() is Led.RED
    assert app.leds.lit() == frozenset({Led.BLUE, Led.RED})


def test_scores_frozen_after_finish(app, clock):
    _idle(app)
    app.handle(AppEvent.BTN_RED_SHORT)
    clock.now = 3_000_000
    app.handle(AppEvent.BTN_BOTH_LONG)
    before = app.scores()
    clock.now = 50_000_000
    assert app.scores() == before


def test_tie_goes_to_blue(app):
    _idle(app)
    app.handle(AppEvent.BTN_BLUE_SHORT)
    app.handle(AppEvent.BTN_BOTH_LONG)
    assert app.scores()[0] == app.scores()[1]
    assert app.winner() is Led.BLUE


def test_finished_both_long_resets(app, clock):
    _idle(app)
    app.handle(AppEvent.BTN_BLUE_SHORT)
    clock.now = 4_000_000
    app.handle(AppEvent.BTN_BOTH_MEDIUM)
    assert app.handle(AppEvent.BTN_BOTH_LONG) == AppState.IDLE
    assert app.scores() == (0, 0)
    assert app.leds.lit() == frozenset()


def test_finished_ignores_single_buttons(app):
    _idle(app)
    app.handle(AppEvent.BTN_BLUE_SHORT)
    app.handle(AppEvent.BTN_BOTH_MEDIUM)
    assert app.handle(AppEvent.BTN_RED_SHORT) == AppState.FINISHED


def test_post_and_run_processes_in_order(app):
    for event in (AppEvent.TMR_INIT_SETUP, AppEvent.BTN_RED_SHORT, AppEvent.BTN_BLUE_SHORT):
        assert app.post(event) is True
    stop = threading.Event()
    stop.set()
    app.run(stop)
    assert app.state == AppState.RUNNING_BLUE


def test_post_fails_when_queue_full(app):
    results = [app.post(AppEvent.BTN_BLUE_LONG) for _ in range(QUEUE_LENGTH)]
    assert all(results)
    assert app.post(AppEvent.BTN_BLUE_LONG) is False