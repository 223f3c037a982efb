"""Scoring engine for notes.

Runs the leaf scorers for each note, substitutes neutral defaults for
components that fail on bad input, and combines them into the trending
score. Batches are scored with per-note failure isolation.
"""

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime

import structlog

from trendscore.config.schemas import ScoringConfig
from trendscore.ranker.author import AuthorFactorCalculator
from trendscore.ranker.constants import (
    COMPONENT_AUTHOR,
    COMPONENT_COMBINER,
    COMPONENT_ENGAGEMENT,
    COMPONENT_QUALITY,
    COMPONENT_TIME_DECAY,
    COMPONENT_VELOCITY,
    COMPONENT_WILSON,
    NEUTRAL_AUTHOR,
    NEUTRAL_ENGAGEMENT,
    NEUTRAL_QUALITY,
    NEUTRAL_WILSON,
    TRENDING_COMPONENTS,
)
from trendscore.ranker.content_classifier import ContentClassifier
from trendscore.ranker.engagement import EngagementScorer
from trendscore.ranker.errors import (
    ComputationError,
    ScoringError,
    ScoringErrorClass,
    ensure_finite,
)
from trendscore.ranker.models import (
    AuthorProfile,
    ContentItem,
    DroppedEntry,
    EngagementStats,
    HistoricalBaseline,
    ScoreResult,
    ScoringInput,
)
from trendscore.ranker.quality import QualityBonusEvaluator
from trendscore.ranker.time_decay import TimeDecayCalculator
from trendscore.ranker.velocity import VelocityScorer
from trendscore.ranker.wilson import WilsonScoreEstimator


logger = structlog.get_logger()


def combine_trending_score(
    engagement_score: float,
    time_decay: float,
    quality_bonus: float,
    author_factor: float,
) -> float:
    """Combine component scores into the trending score.

    Decay multiplies only the engagement term; quality and author signals
    do not age. The result is floored at zero.

    Args:
        engagement_score: Engagement component.
        time_decay: Decay multiplier.
        quality_bonus: Quality component.
        author_factor: Author component.

    Returns:
        Non-negative trending score.

    Raises:
        ComputationError: If the combined value is not finite.
    """
    score = max(0.0, engagement_score * time_decay + quality_bonus + author_factor)
    return ensure_finite(score, COMPONENT_COMBINER)


class NoteScorer:
    """Computes score breakdowns for notes.

    Scoring formula:
        trending = max(0, engagement * time_decay + quality + author)

    velocity_score and wilson_score are computed alongside for the
    rising category and small-sample ordering.
    """

    def __init__(
        self,
        run_id: str,
        config: ScoringConfig | None = None,
        classifier: ContentClassifier | None = None,
    ) -> None:
        """Initialize the scorer.

        Args:
            run_id: Run identifier for logging.
            config: Scoring configuration (defaults to ScoringConfig()).
            classifier: Content classifier for the quality bonus.
        """
        self._run_id = run_id
        self._config = config or ScoringConfig()

        self._engagement = EngagementScorer(self._config.engagement)
        self._time_decay = TimeDecayCalculator(self._config.time_decay)
        self._quality = QualityBonusEvaluator(self._config.quality, classifier)
        self._author = AuthorFactorCalculator(self._config.author)
        self._velocity = VelocityScorer(self._config.velocity)
        self._wilson = WilsonScoreEstimator(self._config.wilson)

        self._log = logger.bind(
            component="ranker",
            subcomponent="scorer",
            run_id=run_id,
        )

    @property
    def config(self) -> ScoringConfig:
        """Scoring configuration in use."""
        return self._config

    def score_note(  # noqa: PLR0913
        self,
        item: ContentItem,
        stats: EngagementStats | None,
        author: AuthorProfile | None,
        baseline: HistoricalBaseline | None,
        now: datetime,
    ) -> ScoreResult:
        """Compute the score breakdown for one note.

        Args:
            item: Note to score.
            stats: Engagement snapshot.
            author: Author profile.
            baseline: Historical baseline for velocity.
            now: Reference time.

        Returns:
            ScoreResult with every component.

        Raises:
            ComputationError: If the combined score is not finite, or every
                trending component fell back to its neutral default.
        """
        degraded: list[str] = []

        def run(name: str, compute: Callable[[], float], fallback: float) -> float:
            return self._run_component(item.id, name, compute, fallback, degraded)

        engagement_score = run(
            COMPONENT_ENGAGEMENT,
            lambda: self._engagement.score(stats),
            NEUTRAL_ENGAGEMENT,
        )
        time_decay = run(
            COMPONENT_TIME_DECAY,
            lambda: self._time_decay.decay(item.created_at, now),
            self._time_decay.neutral,
        )
        quality_bonus = run(
            COMPONENT_QUALITY,
            lambda: self._quality.evaluate(item.content),
            NEUTRAL_QUALITY,
        )
        author_factor = run(
            COMPONENT_AUTHOR,
            lambda: self._author.factor(author),
            NEUTRAL_AUTHOR,
        )
        velocity_score = run(
            COMPONENT_VELOCITY,
            lambda: self._velocity.score(stats, baseline),
            self._velocity.neutral,
        )
        wilson_score = run(
            COMPONENT_WILSON,
            lambda: self._wilson.estimate(*_wilson_counts(stats)),
            NEUTRAL_WILSON,
        )

        if TRENDING_COMPONENTS.issubset(degraded):
            msg = "All trending components fell back to neutral defaults"
            raise ComputationError(msg, component=COMPONENT_COMBINER, note_id=item.id)

        try:
            trending_score = combine_trending_score(
                engagement_score, time_decay, quality_bonus, author_factor
            )
        except ComputationError as e:
            e.note_id = item.id
            raise

        self._log.debug(
            "note_scored",
            note_id=item.id,
            engagement_score=round(engagement_score, 4),
            time_decay=round(time_decay, 4),
            quality_bonus=round(quality_bonus, 4),
            author_factor=round(author_factor, 4),
            trending_score=round(trending_score, 4),
        )

        return ScoreResult(
            item=item,
            engagement_score=engagement_score,
            time_decay=time_decay,
            quality_bonus=quality_bonus,
            author_factor=author_factor,
            trending_score=trending_score,
            velocity_score=velocity_score,
            wilson_score=wilson_score,
            degraded=tuple(degraded),
        )

    def score_input(self, scoring_input: ScoringInput, now: datetime) -> ScoreResult:
        """Score one batch element.

        Args:
            scoring_input: Note with its stats, author, and baseline.
            now: Reference time.

        Returns:
            ScoreResult for the note.
        """
        return self.score_note(
            scoring_input.item,
            scoring_input.stats,
            scoring_input.author,
            scoring_input.baseline,
            now,
        )

    def score_batch(
        self,
        inputs: Sequence[ScoringInput],
        now: datetime,
        max_workers: int = 1,
    ) -> tuple[list[ScoreResult], list[DroppedEntry]]:
        """Score many notes with per-note failure isolation.

        Notes are independent, so they may be scored on worker threads.
        Results keep input order either way.

        Args:
            inputs: Notes to score.
            now: Reference time shared by the whole batch.
            max_workers: Worker threads; 1 or less scores sequentially.

        Returns:
            Tuple of (score results, dropped entries).
        """
        slots: list[ScoreResult | DroppedEntry | None] = [None] * len(inputs)

        if max_workers <= 1:
            for index, scoring_input in enumerate(inputs):
                slots[index] = self._score_isolated(scoring_input, now)
        else:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                future_to_index = {
                    executor.submit(self._score_isolated, scoring_input, now): index
                    for index, scoring_input in enumerate(inputs)
                }
                for future in as_completed(future_to_index):
                    slots[future_to_index[future]] = future.result()

        results = [s for s in slots if isinstance(s, ScoreResult)]
        dropped = [s for s in slots if isinstance(s, DroppedEntry)]

        self._log.info(
            "scoring_complete",
            notes_in=len(inputs),
            notes_scored=len(results),
            notes_dropped=len(dropped),
            max_workers=max_workers,
            min_score=min((r.trending_score for r in results), default=0.0),
            max_score=max((r.trending_score for r in results), default=0.0),
        )

        return results, dropped

    def _score_isolated(
        self, scoring_input: ScoringInput, now: datetime
    ) -> ScoreResult | DroppedEntry:
        """Score one note, converting any failure into a DroppedEntry."""
        note_id = scoring_input.item.id
        try:
            return self.score_input(scoring_input, now)
        except ScoringError as e:
            entry = DroppedEntry(
                note_id=note_id,
                error_class=e.error_class.value,
                component=str(e.details.get("component", COMPONENT_COMBINER)),
                message=e.message,
            )
        except Exception as e:  # noqa: BLE001
            entry = DroppedEntry(
                note_id=note_id,
                error_class=ScoringErrorClass.COMPUTATION.value,
                component="scorer",
                message=f"{type(e).__name__}: {e}",
            )

        self._log.error(
            "note_dropped",
            note_id=entry.note_id,
            error_class=entry.error_class,
            failed_component=entry.component,
            error=entry.message,
        )
        return entry

    def _run_component(  # noqa: PLR0913
        self,
        note_id: str,
        name: str,
        compute: Callable[[], float],
        fallback: float,
        degraded: list[str],
    ) -> float:
        """Run one component, substituting its neutral value on failure."""
        try:
            return compute()
        except ScoringError as e:
            degraded.append(name)
            self._log.warning(
                "neutral_default_substituted",
                note_id=note_id,
                failed_component=name,
                error_class=e.error_class.value,
                error=e.message,
                fallback=fallback,
            )
            return fallback


def _wilson_counts(stats: EngagementStats | None) -> tuple[float, float]:
    """Positive and total counts for the Wilson bound.

    A star implies a view, so the total is never below the star count.
    """
    if stats is None:
        return 0.0, 0.0
    stars = max(0, stats.stars)
    return float(stars), float(max(stats.views, stars))


def compute_score(  # noqa: PLR0913
    item: ContentItem,
    stats: EngagementStats | None,
    author: AuthorProfile | None,
    baseline: HistoricalBaseline | None,
    now: datetime,
    config: ScoringConfig | None = None,
    classifier: ContentClassifier | None = None,
) -> ScoreResult:
    """Pure function API for scoring one note.

    Args:
        item: Note to score.
        stats: Engagement snapshot.
        author: Author profile.
        baseline: Historical baseline.
        now: Reference time.
        config: Scoring configuration.
        classifier: Content classifier.

    Returns:
        ScoreResult for the note.
    """
    scorer = NoteScorer(run_id="pure", config=config, classifier=classifier)
    return scorer.score_note(item, stats, author, baseline, now)
