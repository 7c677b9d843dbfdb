from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from pokemon_quiz.main import cli
from pokemon_quiz.roster import Roster


def test_roster_command_lists_every_name() -> None:
    result = CliRunner().invoke(cli, ["roster"])

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert len(lines) == 151
    assert lines[0] == "1: Bulbasaur"
    assert lines[-1] == "151: Mew"


def test_play_to_completion_exits_zero(roster: Roster) -> None:
    names = "\n".join(e.name for e in roster) + "\n"

    result = CliRunner().invoke(cli, ["play", "--no-timer", "--delay", "0", "--columns", "4"], input=names)

    assert result.exit_code == 0, result.output
    assert "Congratulations, you have found all 151 Pokémon!" in result.output


def test_play_with_custom_roster(tmp_path: Path) -> None:
    path = tmp_path / "starters.json"
    path.write_text(json.dumps([{"id": 1, "name": "Bulbasaur"}, {"id": 2, "name": "Charmander"}]), encoding="utf-8")

    result = CliRunner().invoke(
        cli,
        ["play", "--roster", str(path), "--no-timer", "--no-banner", "--delay", "0"],
        input="\nsquirtle\ncharmander\nBULBASAUR\n",
    )

    assert result.exit_code == 0, result.output
    assert "Please enter a Pokémon name." in result.output
    assert "Incorrect: squirtle" in result.output
    assert "Congratulations, you have found all 2 Pokémon!" in result.output


def test_play_stops_with_status_one_on_end_of_input() -> None:
    result = CliRunner().invoke(cli, ["play", "--no-timer", "--delay", "0"], input="bulbasaur\n")

    assert result.exit_code == 1
    assert "Correct: Bulbasaur" in result.output
    assert "Congratulations" not in result.output


def test_play_rejects_broken_roster(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text(json.dumps([{"id": 2, "name": "Ivysaur"}]), encoding="utf-8")

    result = CliRunner().invoke(cli, ["play", "--roster", str(path)])

    assert result.exit_code == 1
    assert "Invalid roster" in result.output


def test_play_rejects_bad_columns() -> None:
    result = CliRunner().invoke(cli, ["play", "--columns", "11"])

    assert result.exit_code == 2


def test_play_rejects_undecodable_roster(tmp_path: Path) -> None:
    path = tmp_path / "latin1.json"
    path.write_bytes(b'[{"id": 1, "name": "Pok\xe9mon\xff"}]')

    result = CliRunner().invoke(cli, ["play", "--roster", str(path)])

    assert result.exit_code == 1
    assert "Invalid roster" in result.output
    assert not isinstance(result.exception, UnicodeDecodeError)


def test_play_rejects_empty_roster(tmp_path: Path) -> None:
    path = tmp_path / "empty.json"
    path.write_text("[]", encoding="utf-8")

    result = CliRunner().invoke(cli, ["play", "--roster", str(path), "--no-timer"])

    assert result.exit_code == 1
    assert "Invalid roster" in result.output
    assert "Congratulations" not in result.output
