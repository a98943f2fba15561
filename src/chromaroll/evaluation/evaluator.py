"""
Main evaluator for chromaroll runs.
"""

from typing import List, Dict, Any
import json
import os
from datetime import datetime
import pandas as pd
import numpy as np
from chromaroll.core.base import BaseEvaluator, GameResult, EvaluationResult
from chromaroll.evaluation.metrics import MetricsCalculator
from chromaroll.core import RunnerConfig


class GameEvaluator(BaseEvaluator):
    """Main evaluator for chromaroll games."""

    def __init__(self, config: RunnerConfig):
        super().__init__(config)
        self.metrics_calculator = MetricsCalculator()

    def evaluate_metrics(self, game_results: List[GameResult]) -> EvaluationResult:
        """Evaluate multiple game results and aggregate metrics."""
        return self.metrics_calculator.calculate_comprehensive_metrics(game_results)

    def export_results_to_excel(self, evaluation_result: EvaluationResult, output_path: str,
                                agent_name: str = "unknown") -> List[str]:
        """Export evaluation results into two Excel files:
        1. Detailed results (one row per game)
        2. Per-status statistics

        Returns:
            Paths of the written files
        """
        written = []
        out_dir = os.path.dirname(output_path)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)

        # ========= 1. Detailed Results =========
        results_data = []
        for game in evaluation_result.game_results:
            row_data = {
                "Agent": agent_name,
                "Game ID": game.game_id,
                "Status": game.status.value.title(),
                "Won": 1 if game.success else 0,
                "Moves": game.moves,
                "Matched": game.matched_count,
                "Total Cells": game.total_cells,
                "Efficiency (%)": game.efficiency,
                "Par Moves": game.par_moves,
                "Par Efficiency (%)": game.par_efficiency,
                "High Score (%)": game.high_score,
                "Execution Time (s)": game.execution_time,
                "Eval Time": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            }
            results_data.append(row_data)

        df = pd.DataFrame(results_data)
        detailed_path = output_path.replace(".xlsx", "_Detailed.xlsx")
        df.to_excel(detailed_path, index=False)
        written.append(detailed_path)
        print(f"✅ Detailed results saved to {detailed_path}")

        # ========= 2. Status Statistics =========
        status_stats = []
        statuses = sorted(set(g.status.value for g in evaluation_result.game_results))

        for status in statuses:
            games = [g for g in evaluation_result.game_results if g.status.value == status]
            status_stats.append({
                "Status": status.title(),
                "Num Games": len(games),
                "Share": f"{len(games) / len(evaluation_result.game_results):.1%}",
                "Avg Moves": f"{np.mean([g.moves for g in games]):.1f}",
                "Avg Matched": f"{np.mean([g.matched_count for g in games]):.1f}",
                "Avg Time (s)": f"{np.mean([g.execution_time for g in games]):.2f}",
            })

        if status_stats:
            stats_path = output_path.replace(".xlsx", "_Status.xlsx")
            pd.DataFrame(status_stats).to_excel(stats_path, index=False)
            written.append(stats_path)
            print(f"✅ Status stats saved to {stats_path}")

        return written

    def export_detailed_report(self, evaluation_result: EvaluationResult,
                               output_dir: str, agent_name: str = "unknown") -> str:
        """Export detailed evaluation report; returns the report path."""
        os.makedirs(output_dir, exist_ok=True)

        report = {
            "agent": agent_name,
            "evaluation_timestamp": datetime.now().isoformat(),
            "summary": {
                "total_games": len(evaluation_result.game_results),
                "won_games": sum(1 for g in evaluation_result.game_results if g.success),
                "win_rate": evaluation_result.win_rate,
                "mean_efficiency": evaluation_result.mean_efficiency,
                "mean_par_efficiency": evaluation_result.mean_par_efficiency,
                "distance_to_par": evaluation_result.distance_to_par,
            },
            "detailed_metrics": evaluation_result.detailed_metrics,
            "game_breakdown": []
        }

        for game in evaluation_result.game_results:
            game_data = game.to_dict()
            game_data["trajectory_length"] = len(game_data.pop("trajectory"))
            report["game_breakdown"].append(game_data)

        report_path = os.path.join(output_dir, f"{agent_name}_evaluation_report.json")
        with open(report_path, 'w') as f:
            json.dump(report, f, indent=2, default=str)

        trajectories_path = os.path.join(output_dir, f"{agent_name}_trajectories.json")
        trajectories_data = {game.game_id: game.trajectory for game in evaluation_result.game_results}
        with open(trajectories_path, 'w') as f:
            json.dump(trajectories_data, f, indent=2, default=str)

        print(f"Detailed report exported to {output_dir}")
        return report_path

    def compare_agents(self, evaluation_results: Dict[str, EvaluationResult]) -> Dict[str, Any]:
        """Compare evaluation results across agents."""
        comparison: Dict[str, Any] = {
            "agents": list(evaluation_results.keys()),
            "metrics_comparison": {},
            "rankings": {},
        }

        higher_is_better = {"win_rate": True, "mean_efficiency": True, "distance_to_par": False}

        for metric, descending in higher_is_better.items():
            values = {name: getattr(result, metric) for name, result in evaluation_results.items()}
            comparison["metrics_comparison"][metric] = values
            ranked = sorted(values.items(), key=lambda x: x[1], reverse=descending)
            comparison["rankings"][metric] = [name for name, _ in ranked]

        return comparison
