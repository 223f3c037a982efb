"""Configuration schema definitions."""

from trendscore.config.schemas.scoring import (
    AuthorFactorConfig,
    CategoryConfig,
    EngagementWeights,
    QualityBonusConfig,
    ScoringConfig,
    TimeDecayConfig,
    VelocityConfig,
    WilsonConfig,
)


__all__ = [
    "AuthorFactorConfig",
    "CategoryConfig",
    "EngagementWeights",
    "QualityBonusConfig",
    "ScoringConfig",
    "TimeDecayConfig",
    "VelocityConfig",
    "WilsonConfig",
]
