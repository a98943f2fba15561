"""
High-score persistence.

The stored value is the best efficiency ever reached; it only grows.
"""

import json
from pathlib import Path
from typing import Union

from chromaroll.core.base import BaseScoreStore
from chromaroll.core.config import RunnerConfig
from chromaroll.core.registry import SCORE_STORE_REGISTRY, register_score_store


@register_score_store("file")
class JsonFileScoreStore(BaseScoreStore):
    """High score kept in a small JSON file: {"high_score": <int>}"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    @classmethod
    def from_config(cls, config: RunnerConfig) -> "JsonFileScoreStore":
        return cls(config.score_file)

    def load(self) -> int:
        if not self.path.exists():
            return 0
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError):
            # Unreadable or truncated file reads as no stored score
            return 0
        if not isinstance(data, dict):
            return 0
        score = data.get("high_score", 0)
        if not isinstance(score, int) or isinstance(score, bool):
            return 0
        return score

    def save(self, score: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump({"high_score": int(score)}, f)


def create_score_store(config: RunnerConfig) -> BaseScoreStore:
    """Instantiate the score store named by runner.score_store"""
    store_cls = SCORE_STORE_REGISTRY.get(config.score_store)
    if store_cls is None:
        raise ValueError(f"Unknown score store: {config.score_store}")
    return store_cls.from_config(config)
