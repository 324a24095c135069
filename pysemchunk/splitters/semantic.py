"""Default separator policy.

A span is split on the most desirable separator it contains, in order:

1. the longest run of newlines and/or carriage returns;
2. the longest run of tabs;
3. the longest run of any other Unicode White_Space character;
4. the first semantically meaningful punctuation mark present, taken from
   ``NON_WHITESPACE_SEMANTIC_SEPARATORS`` (sentence terminators before clause
   separators before interrupters before word joiners).

If none of these occur the span is split into individual characters.
"""

from __future__ import annotations

import re

from ..constants import NON_WHITESPACE_SEMANTIC_SEPARATORS, WHITESPACE_CHARACTERS
from ..types import SplitResult

__all__ = ["SemanticSplitter"]


class SemanticSplitter:
    def __init__(
        self, separators: tuple[str, ...] = NON_WHITESPACE_SEMANTIC_SEPARATORS
    ) -> None:
        self.separators = tuple(separators)
        self._line_breaks = re.compile(r"[\n\r]+")
        self._tabs = re.compile(r"\t+")
        self._whitespace = re.compile(f"[{WHITESPACE_CHARACTERS}]+")

    def split(self, text: str) -> SplitResult:
        # Cheap presence checks first so that the whitespace classes are only
        # scanned when they can match.
        if "\n" in text or "\r" in text:
            pattern = self._line_breaks
        elif "\t" in text:
            pattern = self._tabs
        elif self._whitespace.search(text):
            pattern = self._whitespace
        else:
            pattern = None

        if pattern is not None:
            # max() keeps the first of several equally long runs.
            separator = max(pattern.findall(text), key=len)
            return SplitResult(
                separator=separator,
                is_whitespace=True,
                splits=text.split(separator),
            )

        for separator in self.separators:
            if separator and separator in text:
                return SplitResult(
                    separator=separator,
                    is_whitespace=False,
                    splits=text.split(separator),
                )

        return SplitResult(separator="", is_whitespace=True, splits=list(text))
