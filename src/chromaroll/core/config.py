"""
Configuration management for chromaroll.

This module handles loading and validation of configuration files,
environment variables, and provides typed configuration objects.
"""

import os
import yaml
from typing import Any, Dict, Optional, List
from dataclasses import dataclass, field
from pathlib import Path

from chromaroll.game.game_core import (
    Color, Orientation, Position, FACINGS, GRID_SIZE, START_POS, ALL_COLORS, INITIAL_CUBE_FACES
)
from chromaroll.game.solver import MAX_PATH_LENGTH


@dataclass
class BoardConfig:
    """Configuration for board generation and the cube's starting state."""
    grid_size: int = GRID_SIZE
    start_position: List[int] = field(default_factory=lambda: list(START_POS.to_tuple()))
    palette: List[str] = field(default_factory=lambda: [c.name.lower() for c in ALL_COLORS])
    initial_faces: Dict[str, str] = field(
        default_factory=lambda: {k: Color(v).name.lower() for k, v in INITIAL_CUBE_FACES.to_dict().items()}
    )
    seed: Optional[int] = None
    board_file: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.grid_size, int) or self.grid_size <= 0:
            raise ValueError("grid_size must be a positive integer")
        if not isinstance(self.start_position, (tuple, list)) or len(self.start_position) != 2:
            raise ValueError("start_position must be a list of 2 integers")
        self.start_position = [int(v) for v in self.start_position]
        if not self.start.in_bounds(self.grid_size):
            raise ValueError(f"start_position {self.start_position} is outside a {self.grid_size}x{self.grid_size} grid")
        if not self.palette:
            raise ValueError("palette must contain at least one color")
        colors = [Color.parse(tag) for tag in self.palette]
        if any(c.is_sentinel for c in colors):
            raise ValueError("palette must not contain the matched or start colors")
        missing = [f for f in FACINGS if f not in self.initial_faces]
        if missing:
            raise ValueError(f"initial_faces is missing facings: {missing}")
        faces = [Color.parse(self.initial_faces[f]) for f in FACINGS]
        if any(c.is_sentinel for c in faces):
            raise ValueError("initial_faces must not contain the matched or start colors")
        if len(set(faces)) != len(FACINGS):
            raise ValueError("initial_faces must hold six distinct colors")
        if self.seed is not None and not isinstance(self.seed, int):
            raise ValueError("seed must be an integer or null")

    @property
    def start(self) -> Position:
        return Position.from_list(self.start_position)

    @property
    def palette_colors(self) -> List[Color]:
        return [Color.parse(tag) for tag in self.palette]

    @property
    def faces(self) -> Orientation:
        return Orientation.from_dict(self.initial_faces)


@dataclass
class SolverConfig:
    """Configuration for the breadth-first path solver."""
    max_path_length: int = MAX_PATH_LENGTH

    def __post_init__(self):
        if not isinstance(self.max_path_length, int) or self.max_path_length <= 0:
            raise ValueError("max_path_length must be a positive integer")


@dataclass
class AgentConfig:
    """Configuration for agents."""
    type: str = "solver"
    step_delay: float = 0.0
    max_moves: int = 200
    actions: List[str] = field(default_factory=list)

    def __post_init__(self):
        if not isinstance(self.step_delay, (float, int)) or self.step_delay < 0:
            raise ValueError("step_delay must be a non-negative number")
        if not isinstance(self.max_moves, int) or self.max_moves <= 0:
            raise ValueError("max_moves must be a positive integer")
        if not isinstance(self.actions, list):
            raise ValueError("actions must be a list of strings")


@dataclass
class RunnerConfig:
    """Configuration for experiment runner."""
    experiment_name: str = "default_experiment"
    log_dir: Optional[str] = None
    results_excel_path: str = "experiment_results.xlsx"
    save_logs: bool = True
    score_store: str = "memory"
    score_file: str = "high_score.json"

    def __post_init__(self):
        # Directory creation is deferred to runner.setup() to avoid side effects on import
        if self.log_dir is None:
            self.log_dir = os.getenv("CHROMAROLL_LOG_DIR", "logs")


@dataclass
class Config:
    """Main configuration object."""
    board: BoardConfig = field(default_factory=BoardConfig)
    solver: SolverConfig = field(default_factory=SolverConfig)
    agent: AgentConfig = field(default_factory=AgentConfig)
    runner: RunnerConfig = field(default_factory=RunnerConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        board = BoardConfig(**(data.get("board") or {}))
        solver = SolverConfig(**(data.get("solver") or {}))
        agent = AgentConfig(**(data.get("agent") or {}))
        runner = RunnerConfig(**(data.get("runner") or {}))

        return cls(
            board=board,
            solver=solver,
            agent=agent,
            runner=runner,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert Config to dictionary."""
        return {
            "board": {
                **{k: v for k, v in self.board.__dict__.items()}
            },
            "solver": {
                **{k: v for k, v in self.solver.__dict__.items()}
            },
            "agent": {
                **{k: v for k, v in self.agent.__dict__.items()}
            },
            "runner": {
                **{k: v for k, v in self.runner.__dict__.items()}
            },
        }


def load_config(config_path: str) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Config object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is malformed
        ValueError: If required fields are missing or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing YAML config: {e}")

    if not data:
        raise ValueError("Configuration file is empty")

    try:
        return Config.from_dict(data)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Error creating config from data: {e}")


def create_default_config(output_path: Optional[str] = "config.yaml") -> Config:
    """
    Create a default configuration, optionally saving it.

    Args:
        output_path: Path where to save the default config; None skips writing

    Returns:
        Default Config object
    """
    config = Config(
        board=BoardConfig(),
        solver=SolverConfig(),
        agent=AgentConfig(type="solver"),
        runner=RunnerConfig(experiment_name="default_experiment"),
    )

    if output_path is not None:
        with open(output_path, 'w', encoding='utf-8') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False, indent=2, sort_keys=False)

    return config


def validate_config(config: Config) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration to validate

    Returns:
        List of validation messages
    """
    # Deferred import: registry is populated when the agents package loads
    from chromaroll.core.registry import AGENT_REGISTRY, SCORE_STORE_REGISTRY
    import chromaroll.agents  # noqa: F401
    import chromaroll.environment  # noqa: F401

    issues = []

    if not config.runner.experiment_name:
        issues.append("ERROR: Experiment name is required")

    if config.agent.type not in AGENT_REGISTRY:
        issues.append(f"ERROR: Unknown agent type '{config.agent.type}'. Known: {sorted(AGENT_REGISTRY)}")

    if config.runner.score_store not in SCORE_STORE_REGISTRY:
        issues.append(f"ERROR: Unknown score store '{config.runner.score_store}'. Known: {sorted(SCORE_STORE_REGISTRY)}")

    # Check paths exist
    if config.board.board_file and not os.path.exists(config.board.board_file):
        issues.append(f"ERROR: Board file does not exist: {config.board.board_file}")

    # Board balance
    n = config.board.grid_size
    palette_size = len(config.board.palette)
    if (n * n - 1) // palette_size == 0:
        issues.append("ERROR: Palette has more colors than playable cells; no tiles would be generated")
    elif (n * n - 1) % palette_size != 0:
        issues.append(
            f"WARNING: {(n * n - 1) % palette_size} cell(s) will be pre-cleared because "
            f"{n * n - 1} playable cells do not divide evenly among {palette_size} colors"
        )

    faces = config.board.faces
    missing = set(config.board.palette_colors) - set(faces.colors())
    if missing:
        names = sorted(c.name.lower() for c in missing)
        issues.append(f"WARNING: No cube face carries {names}; those tiles can never be matched")

    if config.solver.max_path_length < 2 * n:
        issues.append("WARNING: Solver max_path_length is short for this grid; autoplay may stop early")

    if config.agent.type == "human" and not config.agent.actions:
        issues.append("WARNING: Human agent has no scripted actions; input will be read from the console")

    return issues
