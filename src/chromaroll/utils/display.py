"""
Console display utilities for chromaroll.
"""

import time
from typing import Dict, Any, Optional
from datetime import datetime

from chromaroll.game.game_core import Direction, RollResult


class ProgressDisplay:
    """Progress bar over a batch of games."""

    def __init__(self, total_games: int = 1):
        self.total_games = max(total_games, 1)
        self.current_game = 0
        self.start_time = time.time()

    def update(self, game: int, description: str = ""):
        """Update progress display."""
        self.current_game = game
        progress = min(game / self.total_games, 1.0)

        elapsed = time.time() - self.start_time
        eta = (elapsed / game) * (self.total_games - game) if game > 0 else 0

        bar_length = 30
        filled_length = int(bar_length * progress)
        bar = "█" * filled_length + "░" * (bar_length - filled_length)

        progress_line = (f"\r⏳ Games: [{bar}] {progress:.1%} ({game}/{self.total_games}) | "
                         f"Elapsed: {self._format_time(elapsed)} | ETA: {self._format_time(eta)}")
        if description:
            progress_line += f" | {description}"

        print(progress_line, end="", flush=True)

    def finish(self, success: bool = True):
        """Finish progress display."""
        total_time_str = self._format_time(time.time() - self.start_time)
        if success:
            print(f"\n✅ Complete! Total time: {total_time_str}")
        else:
            print(f"\n❌ Failed! Total time: {total_time_str}")

    @staticmethod
    def _format_time(seconds: float) -> str:
        if seconds < 60:
            return f"{seconds:.1f}s"
        elif seconds < 3600:
            return f"{int(seconds // 60)}m {int(seconds % 60)}s"
        return f"{int(seconds // 3600)}h {int((seconds % 3600) // 60)}m"


class StatusDisplay:
    """Handles status display for different operations."""

    @staticmethod
    def print_header(title: str, width: int = 80):
        """Print a formatted header."""
        print("\n" + "=" * width)
        print(f"{title:^{width}}")
        print("=" * width)

    @staticmethod
    def print_section(title: str, width: int = 60):
        """Print a section header."""
        print(f"\n📋 {title}")
        print("-" * width)

    @staticmethod
    def print_config(config_dict: Dict[str, Any], title: str = "Configuration"):
        """Print a flat or one-level nested configuration dict."""
        StatusDisplay.print_section(title)
        for key, value in config_dict.items():
            if isinstance(value, dict):
                print(f"  {key}:")
                for sub_key, sub_value in value.items():
                    print(f"    {sub_key:<18} : {sub_value}")
            else:
                print(f"  {key:<20} : {value}")

    @staticmethod
    def print_status(message: str, status: str = "info"):
        """Print a status message with appropriate emoji."""
        icons = {
            "info": "ℹ️",
            "success": "✅",
            "warning": "⚠️",
            "error": "❌",
            "loading": "⏳",
            "processing": "🔄",
            "match": "🎯",
        }
        icon = icons.get(status, "ℹ️")
        timestamp = datetime.now().strftime("%H:%M:%S")
        print(f"{icon} [{timestamp}] {message}")

    @staticmethod
    def print_results(results: Dict[str, Any], title: str = "Results"):
        """Print results; floats in [0, 1] are shown as percentages."""
        StatusDisplay.print_section(title)
        for key, value in results.items():
            if isinstance(value, bool):
                icon = "✅" if value else "❌"
                print(f"  {key:<20} : {icon} {value}")
            elif isinstance(value, float):
                if 0 <= value <= 1:
                    print(f"  {key:<20} : {value:.1%}")
                else:
                    print(f"  {key:<20} : {value:.3f}")
            else:
                print(f"  {key:<20} : {value}")

    @staticmethod
    def print_board(description: str):
        print(description)

    @staticmethod
    def print_separator(char: str = "-", length: int = 60):
        """Print a separator line."""
        print(char * length)


class LiveLogger:
    """Live logging with real-time updates."""

    def __init__(self, verbose: bool = True):
        self.verbose = verbose
        self.game_times: Dict[int, float] = {}

    def log_game_start(self, game: int, description: str):
        if self.verbose:
            StatusDisplay.print_status(f"Starting game {game}: {description}", "processing")
        self.game_times[game] = time.time()

    def log_game_end(self, game: int, result: str, success: bool = True):
        if self.verbose:
            elapsed = time.time() - self.game_times.get(game, time.time())
            StatusDisplay.print_status(f"Game {game} finished: {result} ({elapsed:.2f}s)",
                                       "success" if success else "error")

    def log_roll(self, step: int, direction: Direction, result: RollResult, par_note: Optional[str] = None):
        """One line per roll attempt."""
        if not self.verbose:
            return
        if not result.success:
            status = "error" if result.error.value == "OutOfBounds" else "warning"
        elif result.matched:
            status = "match"
        else:
            status = "info"
        message = f"Move {step}: {direction.value:<5} → {result.message}"
        if par_note:
            message += f" | {par_note}"
        StatusDisplay.print_status(message, status)

    def log_result(self, message: str, success: bool = True):
        if self.verbose:
            StatusDisplay.print_status(message, "success" if success else "error")

    def log_info(self, message: str):
        if self.verbose:
            StatusDisplay.print_status(message, "info")

    def log_warning(self, message: str):
        if self.verbose:
            StatusDisplay.print_status(message, "warning")

    def log_error(self, message: str):
        if self.verbose:
            StatusDisplay.print_status(message, "error")
