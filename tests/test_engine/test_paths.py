"""Tests for dxlcomplete.engine.paths -- file-name completion of flag values."""

from __future__ import annotations

from pathlib import Path

import pytest

from dxlcomplete.engine.paths import complete_path


@pytest.fixture
def tree(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    (tmp_path / "ttyUSB0").touch()
    (tmp_path / "ttyUSB1").touch()
    (tmp_path / "ttyACM0").touch()
    (tmp_path / ".hidden").touch()
    (tmp_path / "dev").mkdir()
    (tmp_path / "dev" / "ttyS0").touch()
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_empty_prefix_lists_visible_entries(tree: Path) -> None:
    assert complete_path("") == ["dev", "ttyACM0", "ttyUSB0", "ttyUSB1"]


def test_prefix_filters(tree: Path) -> None:
    assert complete_path("ttyU") == ["ttyUSB0", "ttyUSB1"]


def test_dot_prefix_shows_hidden(tree: Path) -> None:
    assert complete_path(".h") == [".hidden"]


def test_relative_directory_kept_as_typed(tree: Path) -> None:
    assert complete_path("dev/tty") == ["dev/ttyS0"]
    assert complete_path("./tty") == ["./ttyACM0", "./ttyUSB0", "./ttyUSB1"]


def test_absolute_directory(tree: Path) -> None:
    assert complete_path(f"{tree}/dev/") == [f"{tree}/dev/ttyS0"]


def test_tilde_kept_as_typed(tree: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tree / "dev"))
    assert complete_path("~/tty") == ["~/ttyS0"]


def test_missing_directory_is_empty(tree: Path) -> None:
    assert complete_path("nope/x") == []


def test_no_match_is_empty(tree: Path) -> None:
    assert complete_path("zzz") == []
