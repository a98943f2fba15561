from chromaroll.cli import main
from chromaroll.core.config import load_config
from chromaroll.game.loader import load_grid_from_json


def test_no_arguments_prints_help():
    assert main([]) == 1


def test_generate_and_solve(tmp_path, capsys):
    board = tmp_path / "board.json"
    assert main(["generate", "--seed", "3", "--output", str(board)]) == 0
    assert len(load_grid_from_json(board)) == 5

    assert main(["solve", str(board)]) == 0
    assert "Par Moves" in capsys.readouterr().out


def test_solve_rejects_bad_board(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text('[["#71717a"]]')
    assert main(["solve", str(bad)]) == 1


def test_create_and_validate_config(tmp_path):
    path = tmp_path / "config.yaml"
    assert main(["create-config", "--output", str(path), "--agent-type", "human"]) == 0
    assert load_config(str(path)).agent.type == "human"
    assert main(["create-config", "--output", str(path)]) == 1
    # human agent without scripted actions only warns
    assert main(["validate-config", str(path)]) == 0
    assert main(["validate-config", str(path), "--strict"]) == 1


def test_autoplay_command(tmp_path):
    assert main(["autoplay", "--seed", "3", "--no-logs"]) == 0


def test_play_command_with_actions(tmp_path):
    actions = tmp_path / "moves.json"
    actions.write_text('["w", "d", "quit"]')
    score = tmp_path / "score.json"
    assert main(["play", "--seed", "3", "--no-logs", "--actions", str(actions), "--score-file", str(score)]) == 0


def test_missing_config_fails(tmp_path):
    assert main(["autoplay", "--config", str(tmp_path / "none.yaml")]) == 1
