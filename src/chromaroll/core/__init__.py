"""
Core modules for chromaroll.

This package contains the fundamental components:
- Base classes for environments, agents, evaluators and score stores
- Configuration management
- Registry for component discovery
"""

from chromaroll.core.base import (
    Observation,
    GameResult,
    EvaluationResult,
    BaseEnvironment,
    BaseAgent,
    BaseEvaluator,
    BaseScoreStore,
    InMemoryScoreStore,
)

from chromaroll.core.config import Config, load_config, create_default_config, validate_config, BoardConfig, SolverConfig, AgentConfig, RunnerConfig

from chromaroll.core.registry import register_agent, register_score_store, AGENT_REGISTRY, SCORE_STORE_REGISTRY

__all__ = [
    "Observation",
    "GameResult",
    "EvaluationResult",
    "BaseEnvironment",
    "BaseAgent",
    "BaseEvaluator",
    "BaseScoreStore",
    "InMemoryScoreStore",
    "Config",
    "load_config",
    "create_default_config",
    "validate_config",
    "BoardConfig",
    "SolverConfig",
    "AgentConfig",
    "RunnerConfig",
    "register_agent",
    "register_score_store",
    "AGENT_REGISTRY",
    "SCORE_STORE_REGISTRY",
]
