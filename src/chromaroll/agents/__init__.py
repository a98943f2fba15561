"""
Agent implementations.

- SolverAgent: autoplay along breadth-first solver paths
- HumanAgent: console input or a scripted action list
"""

from chromaroll.agents.solver_agent import SolverAgent
from chromaroll.agents.human_agent import HumanAgent, parse_direction, KEY_BINDINGS

__all__ = [
    "SolverAgent",
    "HumanAgent",
    "parse_direction",
    "KEY_BINDINGS",
]
