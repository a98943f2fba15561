"""Utility modules for chromaroll."""

from chromaroll.utils.logger import ExperimentLogger
from chromaroll.utils.display import ProgressDisplay, StatusDisplay, LiveLogger

__all__ = [
    "ExperimentLogger",
    "ProgressDisplay",
    "StatusDisplay",
    "LiveLogger",
]
