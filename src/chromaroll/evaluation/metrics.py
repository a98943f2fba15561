"""
Metrics calculation for chromaroll game evaluation.
"""

import numpy as np
from typing import List, Dict, Any
from collections import defaultdict

from chromaroll.core.base import GameResult, EvaluationResult
from chromaroll.game.game_core import GameStatus


class MetricsCalculator:
    """Calculator for game evaluation metrics."""

    def calculate_win_rate(self, game_results: List[GameResult]) -> float:
        """
        Calculate the share of games that cleared the board.

        Args:
            game_results: List of game results

        Returns:
            Win rate as float between 0 and 1
        """
        if not game_results:
            return 0.0

        won = sum(1 for result in game_results if result.success)
        return won / len(game_results)

    def calculate_mean_efficiency(self, game_results: List[GameResult]) -> float:
        """
        Mean player efficiency over won games (efficiency is only scored on a win).

        Returns:
            Mean efficiency percent, 0.0 when nothing was won
        """
        values = [r.efficiency for r in game_results if r.success]
        return float(np.mean(values)) if values else 0.0

    def calculate_mean_par_efficiency(self, game_results: List[GameResult]) -> float:
        """Mean efficiency of the reference solver run over won games."""
        values = [r.par_efficiency for r in game_results if r.success and r.par_efficiency is not None]
        return float(np.mean(values)) if values else 0.0

    def calculate_distance_to_par(self, game_results: List[GameResult]) -> float:
        """
        Calculate average distance from the reference move count.

        Args:
            game_results: List of game results

        Returns:
            Average normalized distance (moves - par) / par over won games,
            inf when no won game has a par
        """
        distances = []

        for result in game_results:
            if not result.success or result.par_moves is None:
                continue
            if result.par_moves > 0:
                # Normalized distance: (actual - par) / par
                distances.append(max(0, result.moves - result.par_moves) / result.par_moves)
            elif result.moves > 0:
                distances.append(float('inf'))

        return float(np.mean(distances)) if distances else float('inf')

    def calculate_moves_per_win(self, game_results: List[GameResult]) -> float:
        """Average moves per won game."""
        moves = [r.moves for r in game_results if r.success]
        return float(np.mean(moves)) if moves else float('inf')

    def calculate_time_per_game(self, game_results: List[GameResult]) -> float:
        """Average wall-clock seconds per game."""
        times = [r.execution_time for r in game_results]
        return float(np.mean(times)) if times else 0.0

    def calculate_status_breakdown(self, game_results: List[GameResult]) -> Dict[str, float]:
        """
        Share of games per final status (won / lost / playing when stopped early).
        """
        counts: Dict[str, int] = defaultdict(int)
        for result in game_results:
            counts[result.status.value] += 1

        total = len(game_results)
        return {status: count / total for status, count in counts.items()} if total else {}

    def calculate_clear_ratio(self, game_results: List[GameResult]) -> float:
        """Mean fraction of cells cleared, counting unfinished games too."""
        ratios = [r.matched_count / r.total_cells for r in game_results if r.total_cells]
        return float(np.mean(ratios)) if ratios else 0.0

    def calculate_trajectory_analysis(self, game_results: List[GameResult]) -> Dict[str, Any]:
        """
        Analyze direction usage and where lost games fell off.

        Args:
            game_results: List of game results

        Returns:
            Dictionary with trajectory analysis
        """
        analysis: Dict[str, Any] = {
            "avg_trajectory_length": 0.0,
            "direction_usage": {},
            "fall_steps": {},
        }

        if not game_results:
            return analysis

        analysis["avg_trajectory_length"] = float(np.mean([len(r.trajectory) for r in game_results]))

        usage: Dict[str, int] = defaultdict(int)
        for result in game_results:
            for entry in result.trajectory:
                usage[entry.get("direction", "unknown")] += 1
        total_rolls = sum(usage.values())
        if total_rolls:
            analysis["direction_usage"] = {d: n / total_rolls for d, n in usage.items()}

        fall_steps: Dict[str, int] = defaultdict(int)
        for result in game_results:
            for entry in result.trajectory:
                if entry.get("error") == "OutOfBounds":
                    fall_steps[f"step_{entry.get('step')}"] += 1
        analysis["fall_steps"] = dict(fall_steps)

        return analysis

    def calculate_comprehensive_metrics(self, game_results: List[GameResult]) -> EvaluationResult:
        """
        Calculate all metrics and return comprehensive evaluation result.

        Args:
            game_results: List of game results

        Returns:
            EvaluationResult with all calculated metrics
        """
        detailed_metrics = {
            "moves_per_win": self.calculate_moves_per_win(game_results),
            "time_per_game": self.calculate_time_per_game(game_results),
            "clear_ratio": self.calculate_clear_ratio(game_results),
            "status_breakdown": self.calculate_status_breakdown(game_results),
            "trajectory_analysis": self.calculate_trajectory_analysis(game_results),
            "total_games": len(game_results),
            "won_games": sum(1 for r in game_results if r.success),
            "lost_games": sum(1 for r in game_results if r.status == GameStatus.LOST),
        }

        return EvaluationResult(
            win_rate=self.calculate_win_rate(game_results),
            mean_efficiency=self.calculate_mean_efficiency(game_results),
            mean_par_efficiency=self.calculate_mean_par_efficiency(game_results),
            distance_to_par=self.calculate_distance_to_par(game_results),
            detailed_metrics=detailed_metrics,
            game_results=game_results,
        )
