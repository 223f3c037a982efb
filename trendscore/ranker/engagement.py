"""Engagement scoring: log-dampened weighted sum of interaction counts."""

import math

from trendscore.config.schemas import EngagementWeights
from trendscore.ranker.constants import COMPONENT_ENGAGEMENT
from trendscore.ranker.errors import InputError, ensure_finite
from trendscore.ranker.models import EngagementStats


class EngagementScorer:
    """Scores raw interaction counts.

    Formula:
        score = sum(weight[m] * log10(count[m] + 1))

    The logarithm keeps one viral metric from dominating, so the first ten
    stars weigh as much as the next ninety.
    """

    def __init__(self, weights: EngagementWeights) -> None:
        """Initialize the scorer.

        Args:
            weights: Per-metric weights.
        """
        self._weights = weights

    def score(self, stats: EngagementStats | None) -> float:
        """Compute the engagement score.

        Args:
            stats: Interaction snapshot.

        Returns:
            Non-negative engagement score.

        Raises:
            InputError: If stats are missing.
        """
        if stats is None:
            msg = "Engagement stats are missing"
            raise InputError(msg, field="stats")

        w = self._weights
        score = (
            w.stars * _log_count(stats.stars)
            + w.forks * _log_count(stats.forks)
            + w.views * _log_count(stats.views)
            + w.comments * _log_count(stats.comments)
            + w.shares * _log_count(stats.shares)
        )
        return ensure_finite(score, COMPONENT_ENGAGEMENT)


def _log_count(count: int) -> float:
    """log10(count + 1) with negative counts clamped to zero."""
    return math.log10(max(0, count) + 1)
