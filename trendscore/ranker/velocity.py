"""Velocity: current growth against a historical baseline."""

from trendscore.config.schemas import VelocityConfig
from trendscore.ranker.constants import COMPONENT_VELOCITY
from trendscore.ranker.errors import ensure_finite
from trendscore.ranker.models import EngagementStats, HistoricalBaseline


class VelocityScorer:
    """Scores growth of stars + forks relative to the prior window.

    Formula:
        velocity = min((current / baseline) / growth_divisor, max_velocity)

    With the defaults, 2x growth maps to 1.0 and 5x or more saturates at
    2.5. A zero baseline (new note) yields the neutral velocity.
    """

    def __init__(self, config: VelocityConfig) -> None:
        """Initialize the scorer.

        Args:
            config: Growth divisor, cap, and neutral value.
        """
        self._config = config

    @property
    def neutral(self) -> float:
        """Velocity for notes without history."""
        return self._config.neutral_velocity

    def score_totals(self, current_total: float, baseline_total: float) -> float:
        """Compute velocity from precomputed totals.

        Args:
            current_total: Current stars + forks.
            baseline_total: Baseline stars + forks.

        Returns:
            Velocity in [0, max_velocity], or the neutral value for a zero baseline.
        """
        cfg = self._config
        current_total = max(0.0, current_total)
        baseline_total = max(0.0, baseline_total)

        if baseline_total == 0:
            return cfg.neutral_velocity

        ratio = current_total / baseline_total
        return ensure_finite(
            min(ratio / cfg.growth_divisor, cfg.max_velocity), COMPONENT_VELOCITY
        )

    def score(
        self,
        stats: EngagementStats | None,
        baseline: HistoricalBaseline | None,
    ) -> float:
        """Compute velocity for a note.

        Args:
            stats: Current engagement snapshot.
            baseline: Historical baseline; None is treated as no history.

        Returns:
            Velocity score; neutral when either input is missing.
        """
        if baseline is None or stats is None:
            return self._config.neutral_velocity

        current = float(max(0, stats.stars) + max(0, stats.forks))
        return self.score_totals(current, baseline.total)
