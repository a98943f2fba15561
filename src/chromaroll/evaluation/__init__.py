"""
Evaluation system for chromaroll.

This package contains evaluation components including:
- Metrics calculation (win rate, efficiency, distance to par)
- Result aggregation and Excel/JSON export
"""

from chromaroll.evaluation.metrics import MetricsCalculator
from chromaroll.evaluation.evaluator import GameEvaluator

__all__ = [
    "MetricsCalculator",
    "GameEvaluator",
]
