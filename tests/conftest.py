import pytest

from chromaroll.core.config import AgentConfig, BoardConfig, Config, RunnerConfig, SolverConfig
from chromaroll.game.game_core import Color, GRID_SIZE, START_POS


def make_uniform_grid(color, n=GRID_SIZE, start=START_POS):
    """n x n grid of one color with the start marker at `start`."""
    grid = [[color for _ in range(n)] for _ in range(n)]
    grid[start.y][start.x] = Color.START
    return grid


@pytest.fixture
def uniform_grid():
    return make_uniform_grid


@pytest.fixture
def tiny_win_grid():
    """2x2 board, start (0, 0), one yellow tile at (1, 0): rolling right wins."""
    return [
        [Color.START, Color.YELLOW],
        [Color.MATCHED, Color.MATCHED],
    ]


@pytest.fixture
def tiny_board_config():
    return BoardConfig(grid_size=2, start_position=[0, 0], palette=["yellow"], seed=0)


@pytest.fixture
def config(tmp_path):
    return Config(
        board=BoardConfig(seed=7),
        solver=SolverConfig(),
        agent=AgentConfig(type="solver", max_moves=1000),
        runner=RunnerConfig(
            experiment_name="test_run",
            log_dir=str(tmp_path / "logs"),
            save_logs=False,
        ),
    )
