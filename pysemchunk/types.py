from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal


@dataclass(frozen=True)
class SplitResult:
    """Outcome of splitting one span.

    ``separator.join(splits)`` always reproduces the split text.
    """

    separator: str
    is_whitespace: bool
    splits: list[str]


@dataclass(frozen=True)
class TraceEvent:
    stage: Literal["split", "merge", "chunk"]
    name: str
    ms: float
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class Trace:
    """Structured debugging output for a single run."""

    events: list[TraceEvent] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    # Counters
    token_count_calls: int = 0
    cache_hits: int = 0
    merge_calls: int = 0
    max_depth: int = 0


@dataclass
class ChunkResult:
    chunks: list[str] = field(default_factory=list)
    trace: Trace | None = None

    def __len__(self) -> int:
        return len(self.chunks)
