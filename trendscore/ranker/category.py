"""Category filtering, ordering, and truncation for ranked feeds."""

from collections.abc import Callable, Sequence
from datetime import datetime

import structlog

from trendscore.config.schemas import CategoryConfig, ScoringConfig
from trendscore.ranker.errors import InputError
from trendscore.ranker.models import ContentItem, RankCategory, ScoreResult
from trendscore.ranker.time_decay import age_hours


logger = structlog.get_logger()


class CategoryRanker:
    """Selects and orders score results for one feed category.

    Rules:
    - trending: age <= trending_max_age_hours, by trending_score, top trending_limit
    - hot: age <= hot_max_age_hours, by engagement_score, top hot_limit
    - rising: velocity_score > rising_velocity_threshold, by velocity_score,
      top rising_limit
    - anything else: the first default_limit results in input order, unsorted

    Sorting is stable, so ties keep input order.
    """

    def __init__(self, run_id: str, config: CategoryConfig | None = None) -> None:
        """Initialize the category ranker.

        Args:
            run_id: Run identifier for logging.
            config: Category limits (defaults to CategoryConfig()).
        """
        self._run_id = run_id
        self._config = config or CategoryConfig()
        self._log = logger.bind(
            component="ranker",
            subcomponent="category",
            run_id=run_id,
        )

    def rank(
        self,
        results: Sequence[ScoreResult],
        category: str | RankCategory,
        now: datetime,
    ) -> list[ContentItem]:
        """Rank notes for a category.

        Args:
            results: Score results for the whole batch.
            category: Category name (case-insensitive) or member.
            now: Reference time for age windows.

        Returns:
            Ordered, length-bounded notes.
        """
        return [r.item for r in self.rank_results(results, category, now)]

    def rank_results(
        self,
        results: Sequence[ScoreResult],
        category: str | RankCategory,
        now: datetime,
    ) -> list[ScoreResult]:
        """Rank score results for a category.

        Args:
            results: Score results for the whole batch.
            category: Category name (case-insensitive) or member.
            now: Reference time for age windows.

        Returns:
            Ordered, length-bounded score results.
        """
        resolved = RankCategory.parse(category)
        cfg = self._config

        if resolved is RankCategory.TRENDING:
            ranked = self._select(
                self._within_age(results, cfg.trending_max_age_hours, now),
                key=lambda r: r.trending_score,
                limit=cfg.trending_limit,
            )
        elif resolved is RankCategory.HOT:
            ranked = self._select(
                self._within_age(results, cfg.hot_max_age_hours, now),
                key=lambda r: r.engagement_score,
                limit=cfg.hot_limit,
            )
        elif resolved is RankCategory.RISING:
            threshold = cfg.rising_velocity_threshold
            ranked = self._select(
                [r for r in results if r.velocity_score > threshold],
                key=lambda r: r.velocity_score,
                limit=cfg.rising_limit,
            )
        else:
            # Pass-through: callers rely on the unsorted input order here.
            ranked = list(results[: cfg.default_limit])

        self._log.info(
            "category_ranked",
            category=resolved.value,
            requested_category=str(getattr(category, "value", category)),
            candidates=len(results),
            ranked_count=len(ranked),
        )
        return ranked

    @staticmethod
    def _select(
        results: Sequence[ScoreResult],
        key: Callable[[ScoreResult], float],
        limit: int,
    ) -> list[ScoreResult]:
        """Stable descending sort, then truncate."""
        return sorted(results, key=key, reverse=True)[:limit]

    def _within_age(
        self,
        results: Sequence[ScoreResult],
        max_age_hours: float,
        now: datetime,
    ) -> list[ScoreResult]:
        """Keep results no older than ``max_age_hours``.

        Notes whose timestamp cannot be parsed have no age and are left out
        of age-windowed categories.
        """
        kept: list[ScoreResult] = []
        skipped = 0
        for r in results:
            try:
                hours = age_hours(r.item.created_at, now)
            except InputError:
                skipped += 1
                continue
            if hours <= max_age_hours:
                kept.append(r)

        if skipped:
            self._log.warning(
                "undated_notes_skipped",
                skipped_count=skipped,
                max_age_hours=max_age_hours,
            )
        return kept


def rank_by_category(
    results: Sequence[ScoreResult],
    category: str | RankCategory,
    now: datetime,
    config: ScoringConfig | None = None,
) -> list[ContentItem]:
    """Pure function API for category ranking.

    Args:
        results: Score results for the whole batch.
        category: Category name or member.
        now: Reference time.
        config: Scoring configuration; only its category section is used.

    Returns:
        Ordered, length-bounded notes.
    """
    category_config = config.categories if config is not None else None
    return CategoryRanker(run_id="pure", config=category_config).rank(
        results, category, now
    )
