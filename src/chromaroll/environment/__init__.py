"""
Environment implementations for chromaroll.

- RollerEnvironment: game session (roll gate, scoring, import/export)
- JsonFileScoreStore: high score persisted to disk
"""

# Normal imports to ensure proper score store registration
from chromaroll.environment.roller_env import RollerEnvironment
from chromaroll.environment.score_store import JsonFileScoreStore, create_score_store

__all__ = [
    "RollerEnvironment",
    "JsonFileScoreStore",
    "create_score_store",
]
