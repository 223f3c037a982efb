"""Trending score engine for notes.

This module scores notes from engagement, freshness, content quality, and
author credibility, estimates growth velocity and small-sample confidence,
and ranks batches for the trending, hot, and rising feeds.
"""

from trendscore.ranker.author import AuthorFactorCalculator
from trendscore.ranker.category import CategoryRanker, rank_by_category
from trendscore.ranker.content_classifier import (
    ContentClassifier,
    RegexContentClassifier,
)
from trendscore.ranker.engagement import EngagementScorer
from trendscore.ranker.errors import (
    ComputationError,
    InputError,
    ScoringError,
    ScoringErrorClass,
)
from trendscore.ranker.metrics import RankerMetrics
from trendscore.ranker.models import (
    AuthorProfile,
    ContentItem,
    DroppedEntry,
    EngagementStats,
    HistoricalBaseline,
    RankCategory,
    RankerResult,
    ScoreResult,
    ScoringInput,
)
from trendscore.ranker.quality import QualityBonusEvaluator
from trendscore.ranker.ranker import TrendingRanker, rank_notes_pure
from trendscore.ranker.scorer import NoteScorer, combine_trending_score, compute_score
from trendscore.ranker.time_decay import TimeDecayCalculator
from trendscore.ranker.velocity import VelocityScorer
from trendscore.ranker.wilson import WilsonScoreEstimator


__all__ = [
    "AuthorFactorCalculator",
    "AuthorProfile",
    "CategoryRanker",
    "ComputationError",
    "ContentClassifier",
    "ContentItem",
    "DroppedEntry",
    "EngagementScorer",
    "EngagementStats",
    "HistoricalBaseline",
    "InputError",
    "NoteScorer",
    "QualityBonusEvaluator",
    "RankCategory",
    "RankerMetrics",
    "RankerResult",
    "RegexContentClassifier",
    "ScoreResult",
    "ScoringError",
    "ScoringErrorClass",
    "ScoringInput",
    "TimeDecayCalculator",
    "TrendingRanker",
    "VelocityScorer",
    "WilsonScoreEstimator",
    "combine_trending_score",
    "compute_score",
    "rank_by_category",
    "rank_notes_pure",
]
