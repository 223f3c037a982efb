"""Quality bonus: additive score from content-richness heuristics."""

from trendscore.config.schemas import QualityBonusConfig
from trendscore.ranker.constants import COMPONENT_QUALITY
from trendscore.ranker.content_classifier import (
    ContentClassifier,
    RegexContentClassifier,
)
from trendscore.ranker.errors import ensure_finite


class QualityBonusEvaluator:
    """Computes the content quality bonus.

    Bonuses are independent and additive:
        - length: min(len / length_divisor, max_length_factor) * content_length_bonus,
          only when len > min_content_length
        - image_bonus when an image is embedded
        - markdown_bonus for headers, bold, italic, or links
        - code_block_bonus for fenced or inline code
    """

    def __init__(
        self,
        config: QualityBonusConfig,
        classifier: ContentClassifier | None = None,
    ) -> None:
        """Initialize the evaluator.

        Args:
            config: Bonus amounts and length thresholds.
            classifier: Feature detector (defaults to the regex classifier).
        """
        self._config = config
        self._classifier = classifier or RegexContentClassifier()

    def evaluate(self, content: str | None) -> float:
        """Compute the quality bonus for note text.

        Args:
            content: Note body; None is treated as empty.

        Returns:
            Non-negative bonus.
        """
        cfg = self._config
        text = content or ""
        bonus = 0.0

        if len(text) > cfg.min_content_length:
            length_factor = min(len(text) / cfg.length_divisor, cfg.max_length_factor)
            bonus += length_factor * cfg.content_length_bonus

        if self._classifier.has_images(text):
            bonus += cfg.image_bonus

        if self._classifier.has_markdown_formatting(text):
            bonus += cfg.markdown_bonus

        if self._classifier.has_code_blocks(text):
            bonus += cfg.code_block_bonus

        return ensure_finite(bonus, COMPONENT_QUALITY)
