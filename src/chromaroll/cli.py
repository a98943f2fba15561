"""
Command-line interface for chromaroll.

Play a board from the console, watch the solver autoplay it, benchmark
agents over many boards, and generate, solve or validate board and config
files.
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from chromaroll.agents.human_agent import HumanAgent
from chromaroll.core.config import Config, load_config, create_default_config, validate_config
from chromaroll.core.registry import AGENT_REGISTRY, SCORE_STORE_REGISTRY
from chromaroll.game.generator import generate_grid, make_rng
from chromaroll.game.loader import GridLoadError, load_grid_from_json, save_grid_to_json
from chromaroll.game.solver import simulate_optimal_clear, solve_nearest
from chromaroll.runner import GameRunner
from chromaroll.utils.display import StatusDisplay, LiveLogger


def get_available_components() -> Dict[str, List[str]]:
    """Get dynamically registered components."""
    # Import modules to trigger registration
    import chromaroll.agents  # noqa: F401
    import chromaroll.environment  # noqa: F401

    return {
        "agents": sorted(AGENT_REGISTRY.keys()),
        "score_stores": sorted(SCORE_STORE_REGISTRY.keys()),
    }


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    components = get_available_components()

    parser = argparse.ArgumentParser(
        prog="chromaroll",
        description="chromaroll: Chromatic Roller, a rolling-cube color matching puzzle",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # Play in the console (w/a/s/d)
  chromaroll play --seed 7

  # Watch the solver clear a saved board
  chromaroll autoplay --board board.json --delay 0.6

  # Benchmark the solver over 20 boards
  chromaroll benchmark --config config.yaml --num-runs 20

  # Generate and inspect boards
  chromaroll generate --seed 7 --output board.json
  chromaroll solve board.json

Available Components:
  Agents: {', '.join(components['agents'])}
  Score stores: {', '.join(components['score_stores'])}
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_game_options(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--config", "-c", help="Path to configuration file (defaults are used when omitted)")
        sub.add_argument("--seed", type=int, help="Override board seed")
        sub.add_argument("--board", help="Play a saved board file instead of generating one")
        sub.add_argument("--output-dir", help="Override log directory")
        sub.add_argument("--no-logs", action="store_true", help="Do not write run logs")
        sub.add_argument("--score-file", help="Persist the high score in this JSON file")
        sub.add_argument("--max-moves", type=int, help="Override move limit")
        sub.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")

    play_parser = subparsers.add_parser("play", help="Play one game from the console")
    add_game_options(play_parser)
    play_parser.add_argument("--actions", help="Replay actions from a file (JSON list or one per line)")

    auto_parser = subparsers.add_parser("autoplay", help="Let the solver play one game")
    add_game_options(auto_parser)
    auto_parser.add_argument("--delay", type=float, help="Seconds between moves")

    benchmark_parser = subparsers.add_parser("benchmark", help="Play many games and export metrics")
    add_game_options(benchmark_parser)
    benchmark_parser.add_argument("--num-runs", "-n", type=int, default=1, help="Number of games")
    benchmark_parser.add_argument("--agent", choices=components['agents'], help="Override agent type")

    generate_parser = subparsers.add_parser("generate", help="Generate a board file")
    generate_parser.add_argument("--config", "-c", help="Path to configuration file")
    generate_parser.add_argument("--seed", type=int, help="Board seed")
    generate_parser.add_argument("--output", "-o", default="board.json", help="Output board file")

    solve_parser = subparsers.add_parser("solve", help="Show the solver path and par for a board file")
    solve_parser.add_argument("board", help="Board file to solve")
    solve_parser.add_argument("--config", "-c", help="Path to configuration file")

    config_parser = subparsers.add_parser("create-config", help="Create default configuration file")
    config_parser.add_argument("--output", "-o", default="config.yaml", help="Output configuration file")
    config_parser.add_argument("--agent-type", choices=components['agents'], default="solver", help="Default agent type")
    config_parser.add_argument("--force", action="store_true", help="Overwrite an existing file")

    validate_parser = subparsers.add_parser("validate-config", help="Validate configuration file")
    validate_parser.add_argument("config", help="Configuration file to validate")
    validate_parser.add_argument("--strict", action="store_true", help="Treat warnings as errors")

    return parser


def _load_and_validate_config(args, logger: LiveLogger) -> Optional[Config]:
    """Load the config named on the command line (or defaults) and report issues."""
    config_path = getattr(args, 'config', None)
    try:
        if config_path:
            config = load_config(config_path)
            logger.log_result("Configuration loaded")
        else:
            config = create_default_config(output_path=None)
    except FileNotFoundError:
        logger.log_error(f"Configuration file not found: {config_path}")
        logger.log_info("Use 'chromaroll create-config' to create a default configuration")
        return None
    except Exception as e:
        logger.log_error(f"Configuration error: {e}")
        return None

    _apply_overrides(config, args)

    issues = validate_config(config)
    errors = [issue for issue in issues if issue.startswith("ERROR")]
    warnings = [issue for issue in issues if not issue.startswith("ERROR")]
    for warning in warnings:
        logger.log_warning(warning.replace("WARNING: ", ""))
    if errors:
        for error in errors:
            logger.log_error(error.replace("ERROR: ", ""))
        return None
    return config


def _apply_overrides(config: Config, args) -> None:
    """Apply command line overrides to configuration."""
    if getattr(args, 'seed', None) is not None:
        config.board.seed = args.seed
    if getattr(args, 'board', None):
        config.board.board_file = args.board
    if getattr(args, 'output_dir', None):
        config.runner.log_dir = args.output_dir
    if getattr(args, 'no_logs', False):
        config.runner.save_logs = False
    if getattr(args, 'score_file', None):
        config.runner.score_store = "file"
        config.runner.score_file = args.score_file
    if getattr(args, 'max_moves', None):
        config.agent.max_moves = args.max_moves
    if getattr(args, 'delay', None) is not None:
        config.agent.step_delay = args.delay
    if getattr(args, 'agent', None):
        config.agent.type = args.agent


def _run_one_game(config: Config, logger: LiveLogger, agent: Optional[HumanAgent] = None) -> int:
    runner = GameRunner(config, agent=agent)
    runner.setup()
    result = runner.run_single_game()
    if result.error_message:
        logger.log_error(f"Game failed: {result.error_message}")
        return 1
    return 0


def play_command(args) -> int:
    """Execute play command."""
    logger = LiveLogger(verbose=True)
    try:
        StatusDisplay.print_header("Chromatic Roller")
        config = _load_and_validate_config(args, logger)
        if config is None:
            return 1
        config.agent.type = "human"
        agent = HumanAgent(config.agent)
        if args.actions:
            agent.set_action_list(args.actions)
        return _run_one_game(config, logger, agent)
    except KeyboardInterrupt:
        logger.log_warning("Game interrupted by user")
        return 1
    except Exception as e:
        logger.log_error(f"Failed to play: {e}")
        return 1


def autoplay_command(args) -> int:
    """Execute autoplay command."""
    logger = LiveLogger(verbose=True)
    try:
        StatusDisplay.print_header("Chromatic Roller - Autoplay")
        config = _load_and_validate_config(args, logger)
        if config is None:
            return 1
        config.agent.type = "solver"
        return _run_one_game(config, logger)
    except KeyboardInterrupt:
        logger.log_warning("Autoplay interrupted by user")
        return 1
    except Exception as e:
        logger.log_error(f"Failed to autoplay: {e}")
        return 1


def benchmark_command(args) -> int:
    """Execute benchmark command."""
    logger = LiveLogger(verbose=True)
    try:
        config = _load_and_validate_config(args, logger)
        if config is None:
            return 1
        if args.num_runs <= 0:
            logger.log_error("--num-runs must be positive")
            return 1
        runner = GameRunner(config, verbose=args.verbose or args.num_runs == 1)
        runner.setup()
        evaluation_result = runner.run_benchmark(args.num_runs)
        StatusDisplay.print_results({
            "Win Rate": evaluation_result.win_rate,
            "Mean Efficiency": f"{evaluation_result.mean_efficiency:.1f}%",
            "Mean Par Efficiency": f"{evaluation_result.mean_par_efficiency:.1f}%",
        }, "Benchmark Results")
        return 0
    except KeyboardInterrupt:
        logger.log_warning("Benchmark interrupted by user")
        return 1
    except Exception as e:
        logger.log_error(f"Failed to run benchmark: {e}")
        return 1


def generate_command(args) -> int:
    """Execute generate command."""
    logger = LiveLogger(verbose=True)
    try:
        config = _load_and_validate_config(args, logger)
        if config is None:
            return 1
        board = config.board
        grid = generate_grid(board.grid_size, board.start, board.palette_colors, make_rng(board.seed))
        path = save_grid_to_json(grid, args.output)
        logger.log_result(f"Board written to {path}")
        return 0
    except Exception as e:
        logger.log_error(f"Failed to generate board: {e}")
        return 1


def solve_command(args) -> int:
    """Execute solve command."""
    logger = LiveLogger(verbose=True)
    try:
        config = _load_and_validate_config(args, logger)
        if config is None:
            return 1
        board = config.board
        grid = load_grid_from_json(args.board, board.grid_size, board.start)

        first = solve_nearest(grid, board.start, board.faces, config.solver.max_path_length)
        sim = simulate_optimal_clear(grid, board.start, board.faces, config.solver.max_path_length)

        StatusDisplay.print_results({
            "First Path": " ".join(d.value for d in first) if first is not None else "unreachable",
            "Par Moves": sim.moves,
            "Par Efficiency": f"{sim.efficiency}%",
            "Cleared": sim.cleared,
            "Matched": f"{sim.matched_count}/{sim.total_cells}",
        }, "Solver Reference")
        return 0
    except GridLoadError as e:
        logger.log_error(f"Invalid board file: {e}")
        return 1
    except Exception as e:
        logger.log_error(f"Failed to solve board: {e}")
        return 1


def create_config_command(args) -> int:
    """Execute create-config command."""
    logger = LiveLogger(verbose=True)
    try:
        if Path(args.output).exists() and not args.force:
            logger.log_error(f"Configuration file already exists: {args.output} (use --force to overwrite)")
            return 1

        config = create_default_config(output_path=None)
        config.agent.type = args.agent_type
        with open(args.output, 'w', encoding='utf-8') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False, indent=2, sort_keys=False)

        logger.log_result(f"Configuration created: {args.output}")
        logger.log_info("Validate it with: chromaroll validate-config " + args.output)
        return 0
    except Exception as e:
        logger.log_error(f"Failed to create config: {e}")
        return 1


def validate_config_command(args) -> int:
    """Execute validate-config command."""
    logger = LiveLogger(verbose=True)
    try:
        StatusDisplay.print_header("Configuration Validation")
        config = load_config(args.config)
        StatusDisplay.print_config(config.to_dict(), "Configuration")

        issues = validate_config(config)
        errors = [issue for issue in issues if issue.startswith("ERROR")]
        warnings = [issue for issue in issues if not issue.startswith("ERROR")]

        if args.strict and warnings:
            errors.extend(warnings)
            warnings = []

        for i, error in enumerate(errors, 1):
            logger.log_error(f"{i}. {error.replace('ERROR: ', '')}")
        for i, warning in enumerate(warnings, 1):
            logger.log_warning(f"{i}. {warning.replace('WARNING: ', '')}")

        StatusDisplay.print_results({
            "Status": "FAILED" if errors else ("VALID (with warnings)" if warnings else "VALID"),
            "Errors Found": len(errors),
            "Warnings Found": len(warnings),
        }, "Validation Summary")
        return 1 if errors else 0

    except FileNotFoundError:
        logger.log_error(f"Configuration file not found: {args.config}")
        return 1
    except Exception as e:
        logger.log_error(f"Failed to validate config: {e}")
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    try:
        parser = create_parser()
        argv = sys.argv[1:] if argv is None else argv

        if not argv:
            parser.print_help()
            return 1

        args = parser.parse_args(argv)

        command_handlers = {
            "play": play_command,
            "autoplay": autoplay_command,
            "benchmark": benchmark_command,
            "generate": generate_command,
            "solve": solve_command,
            "create-config": create_config_command,
            "validate-config": validate_config_command,
        }

        handler = command_handlers.get(args.command)
        if handler:
            return handler(args)
        parser.print_help()
        return 1

    except KeyboardInterrupt:
        print("\n⚠️  Interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
