"""
Base classes and interfaces for chromaroll.

This module defines the fundamental abstractions for environments, agents,
evaluators and score stores that the runner wires together.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING
from dataclasses import dataclass, field
from abc import ABC, abstractmethod

from chromaroll.game.game_core import Direction, GameStatus, Orientation, Position, RollResult
from chromaroll.core.registry import register_score_store
if TYPE_CHECKING:
    from chromaroll.core.config import BoardConfig, AgentConfig, RunnerConfig


@dataclass
class Observation:
    """Observation data provided to the agent."""
    position: Position
    orientation: Orientation
    tile: str
    moves: int
    matched_count: int
    total_cells: int
    status: GameStatus
    description: str
    last_result: Optional[RollResult] = None

    @property
    def done(self) -> bool:
        return self.status != GameStatus.PLAYING

    def to_dict(self) -> Dict[str, Any]:
        """Convert observation to dictionary representation."""
        data = {
            "position": list(self.position.to_tuple()),
            "orientation": self.orientation.to_dict(),
            "tile": self.tile,
            "moves": self.moves,
            "matched_count": self.matched_count,
            "total_cells": self.total_cells,
            "status": self.status.value,
        }
        if self.last_result is not None:
            data["last_error"] = self.last_result.error.value
            data["last_message"] = self.last_result.message
        return data


@dataclass
class GameResult:
    """Results from one played game."""
    game_id: str
    status: GameStatus
    moves: int
    matched_count: int
    total_cells: int
    efficiency: int
    execution_time: float
    trajectory: List[Dict[str, Any]] = field(default_factory=list)
    par_moves: Optional[int] = None
    par_efficiency: Optional[int] = None
    high_score: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)
    error_message: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status == GameStatus.WON

    def to_dict(self) -> Dict[str, Any]:
        """Convert game result to dictionary representation."""
        return {
            "game_id": self.game_id,
            "status": self.status.value,
            "success": self.success,
            "moves": self.moves,
            "matched_count": self.matched_count,
            "total_cells": self.total_cells,
            "efficiency": self.efficiency,
            "par_moves": self.par_moves,
            "par_efficiency": self.par_efficiency,
            "high_score": self.high_score,
            "execution_time": self.execution_time,
            "trajectory": self.trajectory,
            "metadata": self.metadata,
            "error_message": self.error_message,
        }


@dataclass
class EvaluationResult:
    """Aggregated metrics over several games."""
    win_rate: float
    mean_efficiency: float
    mean_par_efficiency: float
    distance_to_par: float
    detailed_metrics: Dict[str, float]
    game_results: List[GameResult]

    def to_dict(self) -> Dict[str, Any]:
        """Convert evaluation result to dictionary representation."""
        return {
            "win_rate": self.win_rate,
            "mean_efficiency": self.mean_efficiency,
            "mean_par_efficiency": self.mean_par_efficiency,
            "distance_to_par": self.distance_to_par,
            "detailed_metrics": self.detailed_metrics,
            "num_games": len(self.game_results)
        }


class BaseScoreStore(ABC):
    """Persistent best-efficiency storage."""

    @classmethod
    def from_config(cls, config: RunnerConfig) -> "BaseScoreStore":
        return cls()

    @abstractmethod
    def load(self) -> int:
        """Stored high score, 0 when nothing is stored."""
        pass

    @abstractmethod
    def save(self, score: int) -> None:
        pass

    def submit(self, score: int) -> int:
        """Keep the maximum of the stored and the submitted score; returns the new best."""
        stored = self.load()
        if score > stored:
            self.save(score)
            return score
        return stored


@register_score_store("memory")
class InMemoryScoreStore(BaseScoreStore):
    def __init__(self, initial: int = 0):
        self._score = initial

    def load(self) -> int:
        return self._score

    def save(self, score: int) -> None:
        self._score = score


class BaseEnvironment(ABC):
    """Base class for game session environments."""

    def __init__(self, config: BoardConfig):
        self.config: BoardConfig = config

    @abstractmethod
    def reset(self) -> Observation:
        """Start a new game and return the first observation."""
        pass

    @abstractmethod
    def step(self, direction: Direction) -> Observation:
        """Execute one roll and return the new observation."""
        pass

    @abstractmethod
    def next_path(self) -> Optional[List[Direction]]:
        """Shortest path to the nearest matchable cell, None when unreachable."""
        pass

    @abstractmethod
    def describe(self) -> str:
        """Text rendering of the current session."""
        pass


class BaseAgent(ABC):
    """Base class for agents that choose rolls."""

    def __init__(self, config: AgentConfig):
        self.config: AgentConfig = config

    @abstractmethod
    def act(self, observation: Observation, environment: BaseEnvironment) -> Optional[Direction]:
        """
        Choose the next roll.

        Returns:
            Direction, or None to stop playing
        """
        pass

    def reset(self) -> None:
        """Clear per-game state."""
        pass


class BaseEvaluator(ABC):
    """Base class for evaluating game results."""

    def __init__(self, config: RunnerConfig):
        self.config: RunnerConfig = config

    @abstractmethod
    def evaluate_metrics(self, game_results: List[GameResult]) -> EvaluationResult:
        """Evaluate multiple game results and aggregate metrics."""
        pass


def trajectory_entry(step: int, direction: Direction, result: RollResult) -> Dict[str, Any]:
    """One trajectory record for a roll attempt."""
    position: Optional[Tuple[int, int]] = result.position.to_tuple() if result.position else None
    return {
        "step": step,
        "direction": direction.value,
        "success": result.success,
        "error": result.error.value,
        "status": result.status.value,
        "position": list(position) if position else None,
        "matched": result.matched,
        "message": result.message,
    }
