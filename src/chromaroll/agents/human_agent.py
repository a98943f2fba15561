"""
Human agent implementation for interactive play.

This agent lets a human roll the cube from the console, or replays a
predefined action list (from config or a file) for automated runs.
"""

import json
from pathlib import Path
from typing import Callable, List, Optional, Union

from chromaroll.core.base import BaseAgent, BaseEnvironment, Observation
from chromaroll.core import register_agent, AgentConfig
from chromaroll.game.game_core import Direction


KEY_BINDINGS = {
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


def parse_direction(text: str) -> Optional[Direction]:
    """Map a key or a direction name to a Direction; None when unrecognized."""
    return KEY_BINDINGS.get(text.strip().lower())


@register_agent("human")
class HumanAgent(BaseAgent):
    """Agent that allows human interaction through console interface or predefined action list."""

    def __init__(self, config: AgentConfig, input_fn: Callable[[str], str] = input):
        super().__init__(config)
        self.step_count = 0
        self.action_list: Optional[List[str]] = None
        self.action_index = 0
        self.interactive_mode = True
        self._input = input_fn
        # Store original action list to restore after reset
        self._original_action_list: Optional[List[str]] = None
        if config.actions:
            self.set_action_list(config.actions)

    def set_action_list(self, actions: Union[List[str], str]) -> None:
        """Set action list for automated execution.

        Args:
            actions: List of action strings or path to action list file
        """
        if isinstance(actions, str):
            self._load_action_list(actions)
        elif isinstance(actions, list):
            self.action_list = list(actions)
            self._original_action_list = list(actions)
            self.action_index = 0
            self.interactive_mode = False
            print(f"📋 Set {len(self.action_list)} actions for automated execution")
        else:
            raise ValueError("actions must be a list of strings or a file path")

    def reset(self) -> None:
        """Rewind the action list for the next game."""
        self.step_count = 0
        if self._original_action_list is not None:
            self.action_list = list(self._original_action_list)
            self.action_index = 0
            self.interactive_mode = False

    def _load_action_list(self, action_list_path: str) -> None:
        """Load action list from a JSON list or a plain text file (one action per line)."""
        path = Path(action_list_path)
        if not path.exists():
            raise FileNotFoundError(f"Action list file not found: {action_list_path}")

        if path.suffix.lower() == '.json':
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if isinstance(data, list):
                actions = data
            elif isinstance(data, dict) and 'actions' in data:
                actions = data['actions']
            else:
                raise ValueError("Invalid JSON format. Expected list of actions or dict with 'actions' key.")
        else:
            with open(path, 'r', encoding='utf-8') as f:
                actions = [line.strip() for line in f if line.strip() and not line.strip().startswith('#')]

        self.set_action_list([str(a) for a in actions])

    def act(self, observation: Observation, environment: BaseEnvironment) -> Optional[Direction]:
        """Next direction from the action list or the console; None to stop."""
        self.step_count += 1
        if self.interactive_mode:
            return self._get_human_input(observation, environment)
        return self._get_next_action_from_list()

    def _get_next_action_from_list(self) -> Optional[Direction]:
        while self.action_list and self.action_index < len(self.action_list):
            action_str = self.action_list[self.action_index]
            self.action_index += 1

            if action_str.strip().lower() in ("quit", "finish"):
                return None

            direction = parse_direction(action_str)
            if direction is not None:
                print(f"🤖 Executing action {self.action_index}/{len(self.action_list)}: {direction.value}")
                return direction
            print(f"⚠️  Invalid action: {action_str!r}, skipping")

        print("📋 Action list completed.")
        return None

    def _get_human_input(self, observation: Observation, environment: BaseEnvironment) -> Optional[Direction]:
        """Read keys until a roll or quit is entered."""
        print("\n" + "=" * 60)
        print(f"🎮 Step {self.step_count}")
        print("=" * 60)
        print(observation.description)
        print("-" * 60)
        print("   w/a/s/d or up/down/left/right to roll, 'hint' for the solver path, 'quit' to stop")

        while True:
            try:
                user_input = self._input(">>> ").strip().lower()
            except (KeyboardInterrupt, EOFError):
                print("\n👋 Goodbye!")
                return None

            if not user_input:
                continue
            if user_input == "quit":
                return None
            if user_input == "hint":
                path = environment.next_path()
                if path is None:
                    print("💡 No matchable cell is reachable")
                else:
                    print(f"💡 Solver path: {' '.join(d.value for d in path) or '(already on a match)'}")
                continue

            direction = parse_direction(user_input)
            if direction is not None:
                return direction
            print("❌ Unknown command. Use w/a/s/d, up/down/left/right, hint or quit.")
