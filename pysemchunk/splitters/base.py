from __future__ import annotations

from typing import Protocol

from ..types import SplitResult


class Splitter(Protocol):
    def split(self, text: str) -> SplitResult:
        """Split text on one separator; joining the pieces must restore it."""
        ...
