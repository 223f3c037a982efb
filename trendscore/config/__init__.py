"""Scoring configuration: schemas, YAML loading, and error hints."""

from trendscore.config.loader import ConfigValidationError, ScoringConfigLoader
from trendscore.config.schemas import ScoringConfig


__all__ = [
    "ConfigValidationError",
    "ScoringConfig",
    "ScoringConfigLoader",
]
