import io

import pytest

from dominion_node.errors import AppError, FatalError
from dominion_node.leds import Led, LedBank
from dominion_node.main import app_init, main
from dominion_node.storage import ControlPoint, Storage


def test_app_init_turns_leds_off():
    bank = LedBank()
    bank.turn_all_on()
    leds, storage = app_init(bank, None)
    assert leds is bank
    assert not leds.is_on(Led.RED)
    assert not leds.is_on(Led.BLUE)
    storage.set_control_point(ControlPoint.DELTA)
    assert storage.get_control_point() == ControlPoint.DELTA


def test_app_init_opens_settings_file(tmp_path):
    path = tmp_path / "settings.json"
    _, storage = app_init(None, path)
    storage.set_control_point(ControlPoint.CHARLIE)
    assert Storage(path).get_control_point() == ControlPoint.CHARLIE


def test_app_init_keeps_given_storage():
    given = Storage()
    _, storage = app_init(None, given)
    assert storage is given


def test_app_init_fails_on_unusable_settings_path(tmp_path):
    with pytest.raises(FatalError) as info:
        app_init(None, tmp_path)
    assert info.value.error == AppError.INIT


def _run(monkeypatch, text, argv):
    monkeypatch.setattr("sys.stdin", io.StringIO(text))
    return main(argv)


def test_main_plays_a_game(monkeypatch, capsys):
    code = _run(monkeypatch, "red 100\nblue 100\nboth 3000\n", [])
    out = capsys.readouterr().out
    assert code == 0
    assert "control point: Alpha" in out
    assert "state: FINISHED" in out
    assert "RED TEAM: 0s" in out
    assert "WIN BLUE TEAM!" in out


def test_main_saves_control_point(monkeypatch, capsys, tmp_path):
    path = tmp_path / "settings.json"
    code = _run(monkeypatch, "", ["--storage", str(path), "--control-point", "bravo"])
    out = capsys.readouterr().out
    assert code == 0
    assert "control point: Bravo" in out
    assert "state: INIT" in out
    assert Storage(path).get_control_point() == ControlPoint.BRAVO


def test_main_reports_bad_input_and_continues(monkeypatch, capsys):
    code = _run(monkeypatch, "green 10\nred 100\nred -5\n", [])
    captured = capsys.readouterr()
    assert code == 0
    assert "invalid press 'green 10'" in captured.err
    assert "invalid press 'red -5'" in captured.err
    assert "state: IDLE" in captured.out


def test_main_stuck_button_is_fatal(monkeypatch, capsys):
    code = _run(monkeypatch, "", ["--red-held", "--blink-cycles", "0"])
    assert code == 1
    assert "fatal error" in capsys.readouterr().err


def test_main_init_failure_is_fatal(monkeypatch, capsys, tmp_path):
    code = _run(monkeypatch, "", ["--storage", str(tmp_path), "--blink-cycles", "0"])
    assert code == 1
    assert "INITIALIZATION ERROR" in capsys.readouterr().err