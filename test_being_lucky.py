"""Tests for the unified entry point — score lookup and frontend dispatch."""

import pytest

import being_lucky


def test_score_prints_sorted_roll_and_points(capsys):
    being_lucky.main(["--score", "24454"])
    assert capsys.readouterr().out == "24445: 450\n"


def test_score_marks_hot_dice(capsys):
    being_lucky.main(["--score", "11155"])
    assert capsys.readouterr().out == "11155: 1100 (hot dice)\n"


def test_score_of_nothing(capsys):
    being_lucky.main(["--score", "2346"])
    assert capsys.readouterr().out == "2346: 0\n"


@pytest.mark.parametrize("dice", ["", "123456", "1270", "abc"])
def test_score_rejects_bad_dice(dice, capsys):
    with pytest.raises(SystemExit) as excinfo:
        being_lucky.main(["--score", dice])
    assert excinfo.value.code == 2


def test_console_receives_remaining_args(monkeypatch):
    seen = []
    monkeypatch.setattr("console.main", seen.append)
    being_lucky.main(["--players", "greedy", "random", "--no-clear"])
    assert seen == [["--players", "greedy", "random", "--no-clear"]]
