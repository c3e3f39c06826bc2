from __future__ import annotations

import pytest

from blockfall.__main__ import LogicalClock, main, parse_args, render_text, run_text
from blockfall.game import MenuView, Signal
from blockfall.settings import Settings


def test_parse_args_defaults() -> None:
    args = parse_args([])
    assert (args.cols, args.rows, args.delay) == (10, 20, 500)
    assert args.frontend == "text"
    assert args.seed is None


def test_run_text_prints_field_and_score() -> None:
    frame = run_text(Settings(), frames=3, seed=1)
    lines = frame.splitlines()
    assert len(lines) == 21
    assert all(len(line) == 10 for line in lines[:20])
    assert "#" in frame
    assert lines[-1] == "Score: 0"


def test_render_text_marks_selected_menu_entry() -> None:
    view = MenuView((("Menu", False), ("Continue", True)), 1)
    assert render_text(view) == "  Menu\n> Continue"


def test_main_runs_text_frontend(tmp_path, capsys) -> None:
    main(["--frames", "1", "--seed", "2", "--log-file", str(tmp_path / "game.log")])
    out = capsys.readouterr().out
    assert "Score: 0" in out


def test_settings_validation() -> None:
    with pytest.raises(ValueError):
        Settings(cols=3)
    with pytest.raises(ValueError):
        Settings(rows=2)
    with pytest.raises(ValueError):
        Settings(delay=-1)


def test_logical_clock_only_moves_when_advanced() -> None:
    clock = LogicalClock()
    assert clock() == 0.0
    clock.advance(250)
    assert clock() == 250.0


def test_render_text_skips_signals() -> None:
    assert render_text(Signal.IDLE) == ""
    assert render_text(None) == ""
