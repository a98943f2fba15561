"""
Autoplay agent driven by the breadth-first solver.
"""

from collections import deque
from typing import Deque, Optional

from chromaroll.core.base import BaseAgent, BaseEnvironment, Observation
from chromaroll.core import register_agent, AgentConfig
from chromaroll.game.game_core import Direction


@register_agent("solver")
class SolverAgent(BaseAgent):
    """
    Follows the shortest path to the nearest matchable cell, replanning
    against the live board each time the queued path runs out.
    """

    def __init__(self, config: AgentConfig):
        super().__init__(config)
        self.queue: Deque[Direction] = deque()
        self.plans_made = 0

    def reset(self) -> None:
        self.queue.clear()
        self.plans_made = 0

    def act(self, observation: Observation, environment: BaseEnvironment) -> Optional[Direction]:
        if observation.done:
            return None
        if not self.queue:
            path = environment.next_path()
            if not path:
                # None when nothing is reachable; [] cannot occur on a live board
                return None
            self.queue.extend(path)
            self.plans_made += 1
        return self.queue.popleft()
