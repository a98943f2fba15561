"""
Main runner for chromaroll.

This module drives games end to end: it wires the environment, the agent,
the score store and the evaluator together, records trajectories and
exports aggregated results.
"""

import os
import time
from datetime import datetime
from typing import List, Optional, Sequence

import chromaroll.agents  # noqa: F401  (registers agent types)
from chromaroll.core import Config, AGENT_REGISTRY
from chromaroll.core.base import BaseAgent, BaseScoreStore, EvaluationResult, GameResult, Observation, trajectory_entry
from chromaroll.environment import RollerEnvironment, create_score_store
from chromaroll.evaluation import GameEvaluator
from chromaroll.game.game_core import Color, ErrorCode, GameStatus
from chromaroll.game.loader import grid_to_data
from chromaroll.utils.logger import ExperimentLogger
from chromaroll.utils.display import ProgressDisplay, StatusDisplay, LiveLogger


class GameRunner:
    """Main runner for chromaroll games."""

    def __init__(self, config: Config,
                 agent: Optional[BaseAgent] = None,
                 score_store: Optional[BaseScoreStore] = None,
                 verbose: bool = True):
        self.config = config
        self.logger: Optional[ExperimentLogger] = None

        # Initialize components
        self.environment: Optional[RollerEnvironment] = None
        self.agent: Optional[BaseAgent] = agent
        self.score_store: Optional[BaseScoreStore] = score_store
        self.evaluator: Optional[GameEvaluator] = None

        # Execution state
        self.trajectory: List[dict] = []
        self.start_time = None
        self.games_played = 0

        # Display utilities
        self.verbose = verbose
        self.live_logger = LiveLogger(verbose=verbose)

    def setup(self) -> None:
        """Setup all components. Called once; the environment keeps one seeded random source across games."""
        if self.config.runner.save_logs:
            # Directory creation is deferred from RunnerConfig to here
            os.makedirs(self.config.runner.log_dir, exist_ok=True)
            self.logger = ExperimentLogger(
                log_dir=self.config.runner.log_dir,
                experiment_name=self.config.runner.experiment_name
            )

        if self.score_store is None:
            self.score_store = create_score_store(self.config.runner)

        self.environment = RollerEnvironment(
            self.config.board,
            solver_config=self.config.solver,
            score_store=self.score_store,
        )

        if self.agent is None:
            self.agent = self._create_agent()

        self.evaluator = GameEvaluator(self.config.runner)

        self.live_logger.log_info("Runner setup complete")

    def _create_agent(self) -> BaseAgent:
        """Create agent based on configuration."""
        agent_cls = AGENT_REGISTRY.get(self.config.agent.type)
        if agent_cls is None:
            raise RuntimeError(f"Unknown or unsupported agent type: {self.config.agent.type}")
        return agent_cls(self.config.agent)

    def _validate_components(self) -> None:
        if not all([self.environment, self.agent, self.evaluator]):
            raise RuntimeError("Components not properly initialized. Call setup() first.")

    def run_single_game(self, grid: Optional[Sequence[Sequence[Color]]] = None) -> GameResult:
        """
        Play one game until it is won or lost, the agent stops, or max_moves is reached.

        Args:
            grid: board to play; defaults to the environment's board source

        Returns:
            GameResult
        """
        self._validate_components()
        self.games_played += 1
        game_id = f"game_{self.games_played:03d}_{datetime.now().strftime('%H%M%S')}"
        if self.verbose:
            StatusDisplay.print_header(f"Starting Game: {game_id}")

        self.trajectory = []
        self.start_time = time.time()

        try:
            observation = self._initialize_game(game_id, grid)
            self._execute_play_loop(game_id, observation)
            return self._create_game_result(game_id)
        except Exception as e:
            return self._handle_game_failure(game_id, e)

    def _initialize_game(self, game_id: str, grid: Optional[Sequence[Sequence[Color]]]) -> Observation:
        self.agent.reset()
        observation = self.environment.reset(grid)
        if self.logger:
            self.logger.log_step(0, {
                "step_type": "initial",
                "game_id": game_id,
                "board": grid_to_data(self.environment.game_state.initial_grid),
                "observation": observation.to_dict(),
            })
        if self.verbose:
            StatusDisplay.print_board(observation.description)
        return observation

    def _execute_play_loop(self, game_id: str, observation: Observation) -> None:
        max_moves = self.config.agent.max_moves
        step_delay = self.config.agent.step_delay

        for step in range(1, max_moves + 1):
            direction = self.agent.act(observation, self.environment)
            if direction is None:
                self.live_logger.log_info("Agent stopped")
                break

            observation = self.environment.step(direction)
            result = self.environment.last_result
            entry = trajectory_entry(step, direction, result)
            self.trajectory.append(entry)
            self.live_logger.log_roll(step, direction, result)

            if self.logger:
                if result.success:
                    step_type = "roll"
                elif result.error == ErrorCode.OUT_OF_BOUNDS:
                    step_type = "fall"
                else:
                    step_type = "rejected"
                self.logger.log_step(step, {"step_type": step_type, "game_id": game_id, **entry})

            if observation.done:
                break
            if step_delay > 0:
                time.sleep(step_delay)
        else:
            self.live_logger.log_warning(f"Move limit reached ({max_moves})")

        if self.verbose:
            StatusDisplay.print_board(observation.description)

    def _create_game_result(self, game_id: str) -> GameResult:
        execution_time = time.time() - self.start_time
        state = self.environment.game_state
        par = self.environment.par
        won = state.status == GameStatus.WON

        game_result = GameResult(
            game_id=game_id,
            status=state.status,
            moves=state.moves,
            matched_count=state.matched_count,
            total_cells=state.total_cells,
            efficiency=self.environment.efficiency if won else 0,
            execution_time=execution_time,
            trajectory=list(self.trajectory),
            par_moves=par.moves if par else None,
            par_efficiency=par.efficiency if par else None,
            high_score=self.environment.high_score,
            metadata={
                "agent_type": self.config.agent.type,
                "grid_size": state.size,
                "seed": self.config.board.seed,
                "board": grid_to_data(state.initial_grid),
            }
        )

        if self.verbose:
            StatusDisplay.print_results({
                "Status": state.status.value,
                "Moves": state.moves,
                "Matched": f"{state.matched_count}/{state.total_cells}",
                "Efficiency": f"{game_result.efficiency}%",
                "Par": f"{par.moves} moves ({par.efficiency}%)" if par else "n/a",
                "High Score": f"{game_result.high_score}%",
                "Execution Time": f"{execution_time:.2f}s",
            }, "Game Summary")

        if self.logger:
            self.logger.log_step(state.moves, {
                "step_type": "finish",
                "game_id": game_id,
                "status": state.status.value,
                "efficiency": game_result.efficiency,
                "par_moves": game_result.par_moves,
            })
            self.logger.save_logs()

        return game_result

    def _handle_game_failure(self, game_id: str, error: Exception) -> GameResult:
        execution_time = time.time() - self.start_time if self.start_time else 0
        self.live_logger.log_error(f"Game execution failed: {error}")

        state = self.environment.game_state if self.environment else None
        if self.logger:
            self.logger.log_step(len(self.trajectory), {"step_type": "error", "game_id": game_id, "error": str(error)})
            self.logger.save_logs()

        return GameResult(
            game_id=game_id,
            status=state.status if state else GameStatus.PLAYING,
            moves=state.moves if state else 0,
            matched_count=state.matched_count if state else 0,
            total_cells=state.total_cells if state else 0,
            efficiency=0,
            execution_time=execution_time,
            trajectory=list(self.trajectory),
            error_message=str(error),
            metadata={"agent_type": self.config.agent.type},
        )

    def run_multiple_games(self, num_runs: int = 1) -> List[GameResult]:
        """Play several games on successive boards."""
        results = []
        progress = ProgressDisplay(num_runs) if num_runs > 1 and self.verbose else None

        for i in range(num_runs):
            if progress:
                progress.update(i, f"Game {i + 1}/{num_runs}")
            self.live_logger.log_game_start(i + 1, f"board {i + 1}/{num_runs}")

            result = self.run_single_game()
            results.append(result)

            self.live_logger.log_game_end(i + 1, result.status.value, result.success)

        if progress:
            progress.finish(success=True)

        return results

    def run_benchmark(self, num_runs: int = 1) -> EvaluationResult:
        """Play num_runs games, aggregate metrics and export Excel and JSON reports."""
        if self.verbose:
            StatusDisplay.print_header(f"chromaroll Benchmark - {num_runs} Game{'s' if num_runs > 1 else ''}")
            StatusDisplay.print_config({
                "Agent": self.config.agent.type,
                "Grid Size": self.config.board.grid_size,
                "Palette": ", ".join(self.config.board.palette),
                "Seed": self.config.board.seed,
                "Solver Cutoff": self.config.solver.max_path_length,
                "Number of Games": num_runs,
            }, "Benchmark Configuration")

        game_results = self.run_multiple_games(num_runs)
        evaluation_result = self.evaluator.evaluate_metrics(game_results)

        output_dir = self.logger.run_dir if self.logger else self.config.runner.log_dir
        self.evaluator.export_results_to_excel(
            evaluation_result,
            os.path.join(output_dir, self.config.runner.results_excel_path),
            self.config.agent.type
        )
        self.evaluator.export_detailed_report(
            evaluation_result,
            os.path.join(output_dir, "detailed_reports"),
            self.config.agent.type
        )
        if self.logger:
            self.logger.save_results_to_excel({
                "experiment": self.logger.experiment_name,
                "agent": self.config.agent.type,
                "games": len(game_results),
                "win_rate": evaluation_result.win_rate,
                "mean_efficiency": evaluation_result.mean_efficiency,
                "mean_par_efficiency": evaluation_result.mean_par_efficiency,
                "distance_to_par": evaluation_result.distance_to_par,
            }, os.path.join(self.config.runner.log_dir, "benchmark_history.xlsx"))

        self._print_benchmark_summary(evaluation_result)
        return evaluation_result

    def _print_benchmark_summary(self, evaluation_result: EvaluationResult) -> None:
        if not self.verbose:
            return
        StatusDisplay.print_header("BENCHMARK SUMMARY")

        StatusDisplay.print_results({
            "Agent": self.config.agent.type,
            "Total Games": len(evaluation_result.game_results),
            "Won": sum(1 for r in evaluation_result.game_results if r.success),
            "Win Rate": evaluation_result.win_rate,
        }, "Basic Results")

        advanced_metrics = {
            "Mean Efficiency": f"{evaluation_result.mean_efficiency:.1f}%",
            "Mean Par Efficiency": f"{evaluation_result.mean_par_efficiency:.1f}%",
        }
        if evaluation_result.distance_to_par != float('inf'):
            advanced_metrics["Distance to Par"] = evaluation_result.distance_to_par
        StatusDisplay.print_results(advanced_metrics, "Advanced Metrics")

        if self.environment:
            self.live_logger.log_info(f"High score: {self.environment.high_score}%")
        StatusDisplay.print_separator("=", 60)
