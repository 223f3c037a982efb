"""Main trending ranker orchestrator."""

import hashlib
import json
import time
from collections.abc import Sequence
from datetime import datetime

import structlog

from trendscore.config.schemas import ScoringConfig
from trendscore.ranker.category import CategoryRanker
from trendscore.ranker.content_classifier import ContentClassifier
from trendscore.ranker.metrics import RankerMetrics
from trendscore.ranker.models import (
    RankCategory,
    RankerResult,
    ScoreResult,
    ScoringInput,
)
from trendscore.ranker.scorer import NoteScorer


logger = structlog.get_logger()


class TrendingRanker:
    """Scores a batch of notes and ranks it for one category.

    Flow:
        inputs -> NoteScorer.score_batch -> CategoryRanker.rank_results
               -> RankerResult (with checksum for replay comparison)
    """

    def __init__(  # noqa: PLR0913
        self,
        run_id: str,
        now: datetime,
        config: ScoringConfig | None = None,
        classifier: ContentClassifier | None = None,
        metrics: RankerMetrics | None = None,
        max_workers: int = 1,
    ) -> None:
        """Initialize the ranker.

        Args:
            run_id: Run identifier for logging.
            now: Reference time for decay and age windows.
            config: Scoring configuration.
            classifier: Content classifier for the quality bonus.
            metrics: Optional metrics instance.
            max_workers: Worker threads for batch scoring.
        """
        self._run_id = run_id
        self._now = now
        self._config = config or ScoringConfig()
        self._max_workers = max_workers
        self._metrics = metrics or RankerMetrics()

        self._scorer = NoteScorer(run_id, self._config, classifier)
        self._category_ranker = CategoryRanker(run_id, self._config.categories)

        self._log = logger.bind(
            component="ranker",
            run_id=run_id,
        )

    @property
    def metrics(self) -> RankerMetrics:
        """Metrics collected by this ranker."""
        return self._metrics

    def rank_notes(
        self,
        inputs: Sequence[ScoringInput],
        category: str | RankCategory,
    ) -> RankerResult:
        """Score and rank notes for a category.

        This is the main entry point for the ranker.

        Args:
            inputs: Notes with their stats, authors, and baselines.
            category: Category name or member.

        Returns:
            RankerResult with ranked notes, scores, and diagnostics.
        """
        resolved = RankCategory.parse(category)
        self._log.info(
            "ranker_started",
            notes_in=len(inputs),
            category=resolved.value,
            now=self._now.isoformat(),
        )
        self._metrics.record_notes_in(len(inputs))

        start_score = time.perf_counter()
        scores, dropped = self._scorer.score_batch(
            inputs, self._now, max_workers=self._max_workers
        )
        scoring_ms = (time.perf_counter() - start_score) * 1000
        self._metrics.record_scoring_duration(scoring_ms)

        for s in scores:
            self._metrics.record_scored(s.trending_score, s.degraded)
        for _ in dropped:
            self._metrics.record_drop()

        start_rank = time.perf_counter()
        ranked = self._category_ranker.rank_results(scores, category, self._now)
        ranking_ms = (time.perf_counter() - start_rank) * 1000
        self._metrics.record_ranking_duration(ranking_ms)
        self._metrics.record_ranked_out(len(ranked))

        result = RankerResult(
            category=resolved,
            ranked=[r.item for r in ranked],
            scores=scores,
            dropped=dropped,
            notes_in=len(inputs),
            notes_out=len(ranked),
            score_percentiles=self._metrics.get_score_percentiles(),
            output_checksum=compute_checksum(resolved, ranked),
        )

        self._log.info(
            "ranker_complete",
            notes_in=len(inputs),
            notes_out=len(ranked),
            dropped_total=len(dropped),
            degraded_by_component=self._metrics.degraded_by_component,
        )

        return result


def compute_checksum(category: RankCategory, ranked: Sequence[ScoreResult]) -> str:
    """Compute SHA-256 checksum of an ordered ranking.

    Args:
        category: Ranked category.
        ranked: Score results in output order.

    Returns:
        SHA-256 hex digest.
    """
    data = {
        "category": category.value,
        "ranked": [r.to_dict() for r in ranked],
    }
    json_str = json.dumps(data, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(json_str.encode("utf-8")).hexdigest()


def rank_notes_pure(  # noqa: PLR0913
    inputs: Sequence[ScoringInput],
    category: str | RankCategory,
    now: datetime,
    config: ScoringConfig | None = None,
    classifier: ContentClassifier | None = None,
    run_id: str = "pure",
    max_workers: int = 1,
) -> RankerResult:
    """Pure function API for scoring and ranking.

    Args:
        inputs: Notes to rank.
        category: Category name or member.
        now: Reference time.
        config: Scoring configuration.
        classifier: Content classifier.
        run_id: Run identifier.
        max_workers: Worker threads for batch scoring.

    Returns:
        RankerResult for the category.
    """
    ranker = TrendingRanker(
        run_id=run_id,
        now=now,
        config=config,
        classifier=classifier,
        max_workers=max_workers,
    )
    return ranker.rank_notes(inputs, category)
