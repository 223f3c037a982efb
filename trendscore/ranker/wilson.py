"""Wilson score: lower confidence bound of a proportion.

Ranks fairly under small samples, so 1 positive out of 1 does not
outrank 40 out of 50.
"""

import math

from trendscore.config.schemas import WilsonConfig
from trendscore.ranker.constants import COMPONENT_WILSON
from trendscore.ranker.errors import ensure_finite


class WilsonScoreEstimator:
    """Computes the Wilson score interval lower bound.

    Formula, with p = positive / total:
        (p + z^2/(2n) - z * sqrt((p(1-p) + z^2/(4n)) / n)) / (1 + z^2/n)
    """

    def __init__(self, config: WilsonConfig) -> None:
        """Initialize the estimator.

        Args:
            config: Confidence quantile.
        """
        self._z = config.z

    def estimate(self, positive: float, total: float) -> float:
        """Compute the lower bound.

        Args:
            positive: Positive outcomes; clamped into [0, total].
            total: Total trials.

        Returns:
            Score in [0, 1); zero when there are no trials.
        """
        if total <= 0:
            return 0.0

        positive = min(max(0.0, positive), total)
        z2 = self._z * self._z
        p_hat = positive / total

        numerator = (
            p_hat
            + z2 / (2 * total)
            - self._z * math.sqrt((p_hat * (1 - p_hat) + z2 / (4 * total)) / total)
        )
        denominator = 1 + z2 / total

        return ensure_finite(max(0.0, numerator / denominator), COMPONENT_WILSON)
