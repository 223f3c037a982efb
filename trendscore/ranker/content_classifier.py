"""Content feature detection for the quality bonus.

The quality evaluator depends only on the ``ContentClassifier`` protocol,
so the regex heuristics here can be replaced by a structured markdown
parser without touching the scorer.
"""

import re
from typing import Protocol

from trendscore.ranker.constants import (
    CODE_BLOCK_PATTERN,
    IMAGE_PATTERN,
    MARKDOWN_PATTERN,
)


class ContentClassifier(Protocol):
    """Detects rich-content features in note text."""

    def has_images(self, content: str) -> bool:
        """Return True if the content embeds an image."""
        ...

    def has_markdown_formatting(self, content: str) -> bool:
        """Return True if the content uses headers, emphasis, or links."""
        ...

    def has_code_blocks(self, content: str) -> bool:
        """Return True if the content has fenced or inline code."""
        ...


class RegexContentClassifier:
    """Pattern-based classifier using pre-compiled expressions.

    Defaults to the module constants in ``trendscore.ranker.constants``;
    alternative patterns can be injected for experiments.
    """

    def __init__(
        self,
        image_pattern: re.Pattern[str] = IMAGE_PATTERN,
        markdown_pattern: re.Pattern[str] = MARKDOWN_PATTERN,
        code_block_pattern: re.Pattern[str] = CODE_BLOCK_PATTERN,
    ) -> None:
        """Initialize the classifier.

        Args:
            image_pattern: Pattern for image markdown or <img> tags.
            markdown_pattern: Pattern for headers, bold, italic, and links.
            code_block_pattern: Pattern for fenced or inline code.
        """
        self._image_pattern = image_pattern
        self._markdown_pattern = markdown_pattern
        self._code_block_pattern = code_block_pattern

    def has_images(self, content: str) -> bool:
        """Return True if the content embeds an image."""
        return self._image_pattern.search(content) is not None

    def has_markdown_formatting(self, content: str) -> bool:
        """Return True if the content uses headers, emphasis, or links."""
        return self._markdown_pattern.search(content) is not None

    def has_code_blocks(self, content: str) -> bool:
        """Return True if the content has fenced or inline code."""
        return self._code_block_pattern.search(content) is not None
