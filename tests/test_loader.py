import json

import pytest

from chromaroll.game.game_core import Color, Position
from chromaroll.game.generator import generate_grid, make_rng
from chromaroll.game.loader import (
    GridLoadError, grid_from_data, grid_to_data, load_grid_from_json, save_grid_to_json
)


def test_export_then_import_restores_board(tmp_path):
    grid = generate_grid(rng=make_rng(9))
    path = save_grid_to_json(grid, tmp_path / "boards" / "b.json")
    assert load_grid_from_json(path) == grid


def test_export_uses_hex_tags():
    data = grid_to_data([[Color.START, Color.RED], [Color.MATCHED, Color.WHITE]])
    assert data == [["#71717a", "#ef4444"], ["#171717", "#ffffff"]]


def test_import_accepts_color_names():
    data = [["start", "RED"], ["matched", "#ffffff"]]
    grid = grid_from_data(data, size=2, start=Position(0, 0))
    assert grid == [[Color.START, Color.RED], [Color.MATCHED, Color.WHITE]]


@pytest.mark.parametrize("data", [
    {"rows": []},
    [["start", "red"]],
    [["start", "red"], ["red"]],
    [["start", "red"], ["red", "purple"]],
    [["red", "red"], ["red", "start"]],
    [["start", "red"], "red,red"],
])
def test_malformed_data_is_rejected(data):
    with pytest.raises(GridLoadError):
        grid_from_data(data, size=2, start=Position(0, 0))


def test_invalid_json_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[[not json")
    with pytest.raises(GridLoadError):
        load_grid_from_json(path)


def test_missing_file(tmp_path):
    with pytest.raises(GridLoadError):
        load_grid_from_json(tmp_path / "nope.json")


def test_wrong_row_count_in_file(tmp_path):
    path = tmp_path / "short.json"
    path.write_text(json.dumps([["#71717a"] * 5] * 4))
    with pytest.raises(GridLoadError, match="row count"):
        load_grid_from_json(path)


def test_grid_load_error_is_value_error():
    assert issubclass(GridLoadError, ValueError)
