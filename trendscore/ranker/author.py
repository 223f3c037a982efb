"""Author factor: bounded bonus from author credibility."""

import math

from trendscore.config.schemas import AuthorFactorConfig
from trendscore.ranker.constants import COMPONENT_AUTHOR
from trendscore.ranker.errors import ensure_finite
from trendscore.ranker.models import AuthorProfile


class AuthorFactorCalculator:
    """Computes the author credibility bonus.

    Followers and reputation are each normalized and capped at 1 before
    weighting, so raw popularity cannot dominate ranking.
    """

    def __init__(self, config: AuthorFactorConfig) -> None:
        """Initialize the calculator.

        Args:
            config: Normalization divisors and weights.
        """
        self._config = config

    def factor(self, author: AuthorProfile | None) -> float:
        """Compute the author factor.

        Args:
            author: Author profile; None yields zero.

        Returns:
            Bonus in [0, follower_weight + reputation_weight + verified_bonus].

        Raises:
            ComputationError: If the profile carries non-finite values.
        """
        if author is None:
            return 0.0

        cfg = self._config
        followers = max(0, author.follower_count)
        reputation = max(0.0, author.reputation)

        normalized_followers = min(
            math.log10(followers + 1) / cfg.follower_log_divisor, 1.0
        )
        normalized_reputation = min(reputation / cfg.reputation_divisor, 1.0)

        factor = (
            normalized_followers * cfg.follower_weight
            + normalized_reputation * cfg.reputation_weight
        )
        if author.verified:
            factor += cfg.verified_bonus

        return ensure_finite(factor, COMPONENT_AUTHOR)
