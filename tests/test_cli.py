import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from canasta.cli import main


def test_validate_reports_run_metadata(capsys):
    assert main(["validate", "4S", "5S", "JK", "7S"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("VALID")
    assert "Type: run" in out
    assert "Direction: up" in out
    assert "Canasta: no" in out


def test_validate_reports_error_code(capsys):
    assert main(["validate", "JK", "4S", "5S", "6S"]) == 1
    assert "INVALID MELD_STARTS_WITH_WILD" in capsys.readouterr().out


def test_validate_with_first_meld_and_intended_type(capsys):
    assert main(["validate", "--first-meld", "4S", "5S", "JK", "7S"]) == 1
    assert "INSUFFICIENT_NATURALS_BEFORE_WILD" in capsys.readouterr().out
    assert main(["validate", "--as", "set", "4S", "5S", "6S"]) == 1
    assert "SET_RANK_MISMATCH" in capsys.readouterr().out


def test_validate_wild_canasta_shows_bonus(capsys):
    assert main(["validate"] + ["JK"] * 7) == 0
    out = capsys.readouterr().out
    assert "Canasta kind: wild" in out
    assert "Wild canasta bonus: 1000" in out


def test_add_checks_existing_meld(capsys):
    assert main(["add", "--meld", "4S 5S 6S", "7S"]) == 0
    assert "Cards: 4S 5S 6S 7S" in capsys.readouterr().out
    assert main(["add", "--meld", "4S 5S 6S", "3S"]) == 1
    assert "RUN_PREPEND_FORBIDDEN" in capsys.readouterr().out


def test_unknown_card_is_a_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main(["validate", "ZZ", "4S", "5S"])
    assert excinfo.value.code == 2
