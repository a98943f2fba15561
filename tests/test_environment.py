import pytest

from chromaroll.core.base import InMemoryScoreStore
from chromaroll.core.config import BoardConfig
from chromaroll.environment import JsonFileScoreStore, RollerEnvironment
from chromaroll.game.game_core import Color, Direction, ErrorCode, GameStatus, Position
from chromaroll.game.loader import GridLoadError, save_grid_to_json


def test_same_seed_same_boards():
    a = RollerEnvironment(BoardConfig(seed=21))
    b = RollerEnvironment(BoardConfig(seed=21))
    a.reset()
    b.reset()
    assert a.game_state.initial_grid == b.game_state.initial_grid
    a.reset()
    b.reset()
    assert a.game_state.initial_grid == b.game_state.initial_grid


def test_successive_resets_draw_new_boards():
    env = RollerEnvironment(BoardConfig(seed=21))
    env.reset()
    first = env.game_state.initial_grid
    env.reset()
    assert env.game_state.initial_grid != first


def test_first_observation():
    env = RollerEnvironment(BoardConfig(seed=1))
    obs = env.reset()
    assert obs.position == Position(2, 2)
    assert obs.tile == "start"
    assert obs.moves == 0
    assert obs.matched_count == 1
    assert obs.status == GameStatus.PLAYING
    assert not obs.done
    assert "[S]" in obs.description
    assert "Moves: 0" in obs.description


def test_roll_gate(uniform_grid):
    env = RollerEnvironment(BoardConfig())
    env.reset(uniform_grid(Color.YELLOW))

    assert env.begin_roll(Direction.RIGHT).success
    assert env.roll_pending
    busy = env.begin_roll(Direction.UP)
    assert not busy.success and busy.error == ErrorCode.ROLL_IN_PROGRESS

    done = env.complete_roll()
    assert done.success and done.matched
    assert env.game_state.position == Position(3, 2)

    idle = env.complete_roll()
    assert not idle.success and idle.error == ErrorCode.NO_ROLL_PENDING
    assert env.game_state.moves == 1


def test_game_over_gate(uniform_grid):
    env = RollerEnvironment(BoardConfig())
    env.reset(uniform_grid(Color.RED))
    env.step(Direction.LEFT)
    env.step(Direction.LEFT)
    obs = env.step(Direction.LEFT)
    assert obs.status == GameStatus.LOST
    assert obs.last_result.error == ErrorCode.OUT_OF_BOUNDS

    rejected = env.begin_roll(Direction.RIGHT)
    assert rejected.error == ErrorCode.GAME_OVER
    assert env.next_path() is None
    assert "fell off" in env.describe()


def test_win_records_score_and_par(tiny_board_config, tiny_win_grid):
    store = InMemoryScoreStore()
    env = RollerEnvironment(tiny_board_config, score_store=store)
    env.reset(tiny_win_grid)

    obs = env.step(Direction.RIGHT)

    assert obs.status == GameStatus.WON
    assert env.efficiency == 400
    assert env.high_score == 400
    assert store.load() == 400
    assert env.par is not None
    assert env.par.moves == 1
    assert env.par.efficiency == 400
    assert "Par: 1 moves" in env.describe()


def test_high_score_keeps_maximum(tiny_board_config, tiny_win_grid):
    store = InMemoryScoreStore(initial=500)
    env = RollerEnvironment(tiny_board_config, score_store=store)
    env.reset(tiny_win_grid)
    assert env.high_score == 500

    env.step(Direction.RIGHT)
    assert env.high_score == 500
    assert store.load() == 500


def test_no_par_before_win(uniform_grid):
    env = RollerEnvironment(BoardConfig())
    env.reset(uniform_grid(Color.YELLOW))
    env.step(Direction.RIGHT)
    assert env.par is None


def test_next_path_uses_live_board(uniform_grid):
    env = RollerEnvironment(BoardConfig())
    env.reset(uniform_grid(Color.YELLOW))
    assert env.next_path() == [Direction.RIGHT]
    snapshot = [list(row) for row in env.game_state.grid]
    env.next_path()
    assert env.game_state.grid == snapshot


def test_export_and_load_board(tmp_path):
    env = RollerEnvironment(BoardConfig(seed=5))
    env.reset()
    original = env.game_state.initial_grid
    env.step(Direction.UP)

    path = env.export_board(tmp_path / "board.json")
    env.reset()
    obs = env.load_board(path)

    assert env.game_state.initial_grid == original
    assert obs.moves == 0


def test_failed_load_leaves_session_untouched(tmp_path):
    env = RollerEnvironment(BoardConfig(seed=5))
    env.reset()
    env.step(Direction.UP)
    state = env.game_state

    bad = tmp_path / "bad.json"
    bad.write_text("[]")
    with pytest.raises(GridLoadError):
        env.load_board(bad)

    assert env.game_state is state
    assert state.moves == 1


def test_reset_reads_configured_board_file(tmp_path, uniform_grid):
    path = save_grid_to_json(uniform_grid(Color.BLUE), tmp_path / "blue.json")
    env = RollerEnvironment(BoardConfig(board_file=str(path)))
    env.reset()
    assert env.game_state.initial_grid[0][0] == Color.BLUE


def test_requires_reset():
    env = RollerEnvironment(BoardConfig())
    with pytest.raises(RuntimeError):
        env.step(Direction.UP)


def test_file_score_store(tmp_path):
    path = tmp_path / "scores" / "high.json"
    store = JsonFileScoreStore(path)
    assert store.load() == 0
    assert store.submit(120) == 120
    assert store.submit(90) == 120
    assert JsonFileScoreStore(path).load() == 120


@pytest.mark.parametrize("content", ["", '{"high_score": 1', "[120]", '{"high_score": "lots"}', "null"])
def test_corrupt_score_file_reads_as_zero(tmp_path, content):
    path = tmp_path / "high.json"
    path.write_text(content)
    store = JsonFileScoreStore(path)
    assert store.load() == 0

    env = RollerEnvironment(BoardConfig(seed=1), score_store=store)
    obs = env.reset()
    assert env.high_score == 0
    assert obs.status == GameStatus.PLAYING

    assert store.submit(80) == 80
    assert JsonFileScoreStore(path).load() == 80
