from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

import pytest

from conftest import make_file
from goco.errors import InvalidGamePackage
from goco.library.game import Game
from goco.library.scanner import scan


def test_game_name_strips_package_extension(tmp_path: Path) -> None:
    game = Game.discover(make_file(tmp_path / "gd-paint.pck"))
    assert game.name == "gd-paint"
    assert str(game) == "gd-paint"


def test_icon_path_follows_the_filesystem(tmp_path: Path) -> None:
    game = Game.discover(make_file(tmp_path / "fsm.pck"))
    assert game.icon_path is None

    icon = make_file(tmp_path / "fsm.png")
    assert game.icon_path == icon

    icon.unlink()
    assert game.icon_path is None


def test_discover_rejects_wrong_extension(tmp_path: Path) -> None:
    with pytest.raises(InvalidGamePackage):
        Game.discover(make_file(tmp_path / "readme.txt"))


def test_discover_rejects_missing_and_directories(tmp_path: Path) -> None:
    with pytest.raises(InvalidGamePackage):
        Game.discover(tmp_path / "ghost.pck")

    (tmp_path / "folder.pck").mkdir()
    with pytest.raises(InvalidGamePackage):
        Game.discover(tmp_path / "folder.pck")


def test_game_is_immutable(tmp_path: Path) -> None:
    game = Game.discover(make_file(tmp_path / "fsm.pck"))
    with pytest.raises(dataclasses.FrozenInstanceError):
        game.path = tmp_path / "other.pck"  # type: ignore[misc]


def test_scan_counts_only_packages_at_any_depth(tmp_path: Path) -> None:
    packages = [
        "fsm.pck",
        "arcade/gd-paint.pck",
        "arcade/retro/deep/nested/pong.pck",
        "puzzles/tetra.pck",
    ]
    others = [
        "fsm.png",
        "notes.txt",
        "arcade/gd-paint.png",
        "arcade/retro/deep/readme.md",
        "puzzles/tetra.zip",
    ]
    for name in packages + others:
        make_file(tmp_path / name)

    games = scan(tmp_path)

    assert len(games) == len(packages)
    assert {g.name for g in games} == {"fsm", "gd-paint", "pong", "tetra"}


def test_scan_missing_root_is_empty(tmp_path: Path) -> None:
    assert scan(tmp_path / "nope") == []


def test_scan_empty_root_is_empty(tmp_path: Path) -> None:
    assert scan(tmp_path) == []


def test_scan_extension_is_case_sensitive(tmp_path: Path) -> None:
    make_file(tmp_path / "LOUD.PCK")
    make_file(tmp_path / "quiet.pck")

    assert [g.name for g in scan(tmp_path)] == ["quiet"]


def test_scan_skips_hidden_entries(tmp_path: Path) -> None:
    make_file(tmp_path / "._fsm.pck")
    make_file(tmp_path / ".Trashes" / "old.pck")
    make_file(tmp_path / "fsm.pck")

    assert [g.name for g in scan(tmp_path)] == ["fsm"]


def test_scan_skips_invalid_entries_with_warning(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    (tmp_path / "bogus.pck").mkdir()
    make_file(tmp_path / "bogus.pck" / "inner.pck")
    make_file(tmp_path / "fsm.pck")

    with caplog.at_level(logging.WARNING, logger="goco.library.scanner"):
        games = scan(tmp_path)

    assert {g.name for g in games} == {"fsm", "inner"}
    assert any("bogus.pck" in r.getMessage() for r in caplog.records)


def test_permission_denied_hides_icon_and_library(tmp_path: Path, deny_access) -> None:
    game = Game.discover(make_file(tmp_path / "stick" / "fsm.pck"))
    make_file(tmp_path / "stick" / "fsm.png")
    deny_access(tmp_path / "stick")

    assert game.icon_path is None
    assert not game.exists()
    assert scan(tmp_path / "stick") == []
