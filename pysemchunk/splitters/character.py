from __future__ import annotations

from ..types import SplitResult

__all__ = ["CharacterSplitter"]


class CharacterSplitter:
    """Always splits into single characters, ignoring text structure."""

    def split(self, text: str) -> SplitResult:
        return SplitResult(separator="", is_whitespace=True, splits=list(text))
