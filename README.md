# dominion-node

A software model of a field unit for a domination-style control point game.
The unit has a red and a blue team button, a red and a blue LED, and one
stopwatch per team. The team that holds the point longest wins.

## Install

```
pip install .
pip install ".[test]"   # with pytest
```

## Running the unit

```
dominion-node [options] < presses.txt
```

The command sets up the LEDs and the settings store, prints the control point
(`control point: Alpha`), then reads button presses from standard input, one
per line:

```
red 500
blue 2500
both 3000
```

Each line is `<red|blue|both> <milliseconds>`. Blank lines and lines starting
with `#` are skipped; a malformed line is reported on standard error and
skipped. When input ends, the unit stops and prints the final state and each
team's seconds, and the winner if the game has finished:

```
state: FINISHED
BLUE TEAM: 12s
RED TEAM: 7s
WIN BLUE TEAM!
```

Options:

- `--storage FILE` – keep settings in a JSON file (default: in memory only).
  A file that cannot be read as settings is erased and started afresh.
- `--control-point {alpha,bravo,charlie,delta,echo}` – save this control point
  before starting. With none saved, the unit uses Alpha.
- `--setup-time SECONDS` – length of the start-up window (default 30).
- `--red-held`, `--blue-held` – pretend a button is stuck down at start-up.
  This is a fatal button error.
- `--blink-cycles N` – on a fatal error, blink the LED pattern this many
  times and exit with status 1 (default: blink forever).
- `-v`, `--verbose` – log game events.

## How a game goes

Presses are sorted by length: short (under 2 s), medium (under 4 s) and long
(4 s or more). Pressing both buttons together gives a "both" press.

- **Start-up** (`AppState.INIT`): any short or medium press, or the set-up
  timer running out, moves the unit to idle. A long press of both buttons
  enters `AppState.SETTINGS_CONTROL_POINT`.
- **Idle**: a short or medium press of a team's button gives that team the
  point. Its stopwatch starts and its LED lights.
- **Running**: the other team takes the point with its own short or medium
  press. A medium or long press of both buttons ends the game; both LEDs light
  and the team with more whole seconds wins (blue wins a tie).
- **Finished**: a medium or long press of both buttons clears the stopwatches,
  turns the LEDs off and returns to idle.

## Using the pieces

```python
from dominion_node.leds import Led, LedBank
from dominion_node.storage import Storage, ControlPoint, control_point_to_string
from dominion_node.states import AppEvent
from dominion_node.app import App

leds = LedBank()
storage = Storage("settings.json")
storage.set_control_point(ControlPoint.BRAVO)
print(control_point_to_string(storage.get_control_point()))  # Bravo

app = App(leds, storage)
app.start()
app.handle(AppEvent.BTN_RED_SHORT)     # leave start-up
app.handle(AppEvent.BTN_BLUE_SHORT)    # blue takes the point
print(leds.is_on(Led.BLUE))            # True
app.handle(AppEvent.BTN_BOTH_MEDIUM)   # end the game
print(app.scores(), app.winner())
```

- `dominion_node.states.transition(state, event)` gives the state machine on
  its own, as a `Transition` with the next state, its `Action`s and whether the
  event was expected.
- `App.post(event)` queues an event and `App.run(stop)` handles queued events
  on a thread until the `threading.Event` is set and the queue is drained.
- `dominion_node.chrono.Chrono` is the per-team stopwatch; it takes a clock
  that returns microseconds.
- `dominion_node.buttons.classify_press(red, blue, duration_ms)` turns a press
  into its event. `ButtonReader` times a press by polling an `is_pressed`
  callable every 10 ms after a 200 ms debounce, stops at 10 s, and posts the
  event. `check_startup` raises on a stuck button.
- `Storage.get_control_point()` raises `StorageError` when nothing valid is
  saved; `set_control_point` raises `ValueError` for `ControlPoint.NONE`.
- Fatal faults raise `dominion_node.errors.FatalError`; `blink_pattern` gives
  the LED steps that signal each `AppError`, and `signal_fatal_error` plays
  them before raising.

## What it does not do

- It drives no real buttons or LEDs: `LedBank` only records which LEDs are lit,
  and presses come from standard input or from your own `is_pressed` callable.
- The control point cannot be chosen with the buttons. The settings menu
  reached by a long press of both buttons leads to states that handle no
  further events, so the unit stays there; set the control point with
  `--control-point` or `Storage.set_control_point` instead.
- It does not talk to any master node or other units.