"""Token-bounded text chunking over nested splits.

The chunker asks its splitter for the most meaningful way to break a span,
splits again any piece that is over budget on its own, and greedily merges
the remaining pieces into the largest chunks that still fit. Merging searches
for the longest fitting prefix with a binary search whose candidate lengths are
estimated from a running characters-per-token ratio, which keeps the number
of (expensive) token-counter calls low without affecting the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any

import numpy as np

from .chunker_config import ChunkerConfig
from .runtime.cache import Cache, NullCache, cache_for
from .runtime.tracing import trace_timing
from .splitters.base import Splitter
from .splitters.semantic import SemanticSplitter
from .token_counters import TokenCounter, resolve_token_counter
from .types import ChunkResult, Trace

logger = logging.getLogger(__name__)

__all__ = ["Chunker", "chunkerify"]


@dataclass
class _RunState:
    """Mutable state owned by a single chunking run."""

    config: ChunkerConfig
    chars_per_token: float
    cache: Cache = field(default_factory=NullCache)
    trace: Trace = field(default_factory=Trace)


@dataclass
class _Frame:
    """One span being chunked, at a given nesting depth."""

    depth: int
    text_length: int
    separator: str
    is_whitespace: bool
    splits: list[str]
    chunks: list[str] = field(default_factory=list)
    i: int = 0


class Chunker:
    """Split text into chunks of at most ``config.chunk_size`` tokens.

    Args:
        config: Chunk size and behavior toggles.
        token_counter: Callable counting the tokens in a string, or anything
            :func:`~pysemchunk.token_counters.resolve_token_counter` accepts.
        splitter: Separator policy. Defaults to :class:`SemanticSplitter`.

    Example:
        >>> from pysemchunk.token_counters import word_counter
        >>> chunker = Chunker(ChunkerConfig(chunk_size=4), word_counter)
        >>> chunker.chunk("The quick brown fox jumps over the lazy dog.")
        ['The quick brown fox', 'jumps over the lazy', 'dog.']

    A chunker holds no per-run state and may be shared between threads as
    long as the token counter is thread-safe.
    """

    def __init__(
        self,
        config: ChunkerConfig,
        token_counter: TokenCounter | Any,
        *,
        splitter: Splitter | None = None,
    ) -> None:
        self.config = config
        self.token_counter = resolve_token_counter(token_counter)
        self.splitter = SemanticSplitter() if splitter is None else splitter

    def run(self, text: str, **overrides: Any) -> ChunkResult:
        """Chunk ``text``, optionally overriding config fields for this call."""
        cfg = replace(self.config, **overrides) if overrides else self.config
        state = _RunState(
            config=cfg,
            chars_per_token=cfg.initial_chars_per_token,
            cache=cache_for(cfg.memoize),
        )

        with trace_timing(state.trace, "chunk", "chunk", chars=len(text)) as details:
            chunks = self._chunk(text, state)
            details["chunks"] = len(chunks)

        trace = state.trace
        logger.debug(
            "Chunked %d characters into %d chunks with %d token-counter calls",
            len(text),
            len(chunks),
            trace.token_count_calls,
        )
        return ChunkResult(chunks=chunks, trace=trace if cfg.return_trace else None)

    def chunk(self, text: str) -> list[str]:
        return self.run(text).chunks

    def __call__(self, text: str) -> list[str]:
        return self.chunk(text)

    def merge_splits(self, splits: list[str], separator: str) -> tuple[int, str]:
        """Merge the longest prefix of ``splits`` that fits in one chunk.

        Args:
            splits: Consecutive pieces of a span.
            separator: String the pieces were split on.

        Returns:
            Tuple of (number of pieces consumed, pieces joined by separator).
            The count is 0 when even the first piece is over budget.

        Example:
            >>> from pysemchunk.token_counters import word_counter
            >>> chunker = Chunker(ChunkerConfig(chunk_size=4), word_counter)
            >>> chunker.merge_splits(["The", "quick", "brown", "fox", "jumps"], " ")
            (4, 'The quick brown fox')
        """
        state = _RunState(
            config=self.config, chars_per_token=self.config.initial_chars_per_token
        )
        return self._merge(splits, separator, state)

    def _count(self, text: str, state: _RunState) -> int:
        cached = state.cache.get(text)
        if cached is not None:
            state.trace.cache_hits += 1
            return cached
        state.trace.token_count_calls += 1
        n_tokens = self.token_counter(text)
        state.cache.set(text, n_tokens)
        return n_tokens

    def _chunk(self, text: str, state: _RunState) -> list[str]:
        # Nested spans are walked with an explicit stack; depth is only
        # bounded by the input, not by the interpreter's recursion limit.
        stack = [self._open_frame(text, 0, state)]
        while True:
            frame = stack[-1]
            child = self._advance(frame, state)
            if child is not None:
                stack.append(child)
                continue

            stack.pop()
            chunks = frame.chunks
            if frame.depth > 0:
                chunks = [c for c in chunks if c]
            if not stack:
                return chunks

            parent = stack[-1]
            parent.chunks.extend(chunks)
            parent.i += 1
            self._reattach_separator(parent, state)

    def _open_frame(self, text: str, depth: int, state: _RunState) -> _Frame:
        trace = state.trace
        trace.max_depth = max(trace.max_depth, depth)
        result = self.splitter.split(text)
        return _Frame(
            depth=depth,
            text_length=len(text),
            separator=result.separator,
            is_whitespace=result.is_whitespace,
            splits=list(result.splits),
        )

    def _advance(self, frame: _Frame, state: _RunState) -> _Frame | None:
        """Work through ``frame`` until it is done or a piece needs splitting.

        Returns the frame for that piece, or None once ``frame`` is finished.
        """
        chunk_size = state.config.chunk_size
        splits = frame.splits
        while frame.i < len(splits):
            split = splits[frame.i]
            if self._count(split, state) > chunk_size:
                if len(split) >= frame.text_length:
                    # Nothing smaller to fall back to; emit over budget.
                    message = (
                        f"Could not split {split[:20]!r} below {chunk_size} tokens"
                    )
                    logger.debug(message)
                    state.trace.warnings.append(message)
                    frame.chunks.append(split)
                    frame.i += 1
                else:
                    child = self._open_frame(split, frame.depth + 1, state)
                    # The child owns this piece now.
                    splits[frame.i] = ""
                    return child
            else:
                n_merged, merged = self._merge(
                    splits[frame.i :], frame.separator, state
                )
                if n_merged == 0:
                    # The counter gave a different answer for the same text.
                    n_merged, merged = 1, split
                frame.chunks.append(merged)
                frame.i += n_merged

            self._reattach_separator(frame, state)
        return None

    def _reattach_separator(self, frame: _Frame, state: _RunState) -> None:
        if frame.is_whitespace or frame.i >= len(frame.splits):
            return
        # Put back the punctuation that str.split() removed.
        chunks = frame.chunks
        separator = frame.separator
        with_separator = chunks[-1] + separator if chunks else None
        if (
            with_separator is not None
            and self._count(with_separator, state) <= state.config.chunk_size
        ):
            chunks[-1] = with_separator
        else:
            chunks.append(separator)

    def _merge(
        self, splits: list[str], separator: str, state: _RunState
    ) -> tuple[int, str]:
        chunk_size = state.config.chunk_size
        state.trace.merge_calls += 1

        # low: longest prefix known to fit; high: longest prefix not yet
        # ruled out.
        low = 0
        high = len(splits)
        cumulative_chars = np.cumsum([len(s) for s in splits], dtype=np.int64)

        while low < high:
            target = chunk_size * state.chars_per_token
            estimate = low + int(
                np.searchsorted(cumulative_chars[low:high], target, side="left")
            )
            candidate = min(max(estimate, low + 1), high)

            n_tokens = self._count(separator.join(splits[:candidate]), state)
            n_chars = int(cumulative_chars[candidate - 1])
            if n_tokens > 0 and n_chars > 0:
                state.chars_per_token = n_chars / n_tokens

            if n_tokens > chunk_size:
                high = candidate - 1
            elif n_tokens == chunk_size:
                low = candidate
                break
            else:
                low = candidate

        return low, separator.join(splits[:low])


def chunkerify(
    token_counter: TokenCounter | Any,
    chunk_size: int,
    *,
    splitter: Splitter | None = None,
    **options: Any,
) -> Chunker:
    """Build a :class:`Chunker` in one call.

    ``options`` are passed on to :class:`ChunkerConfig`.
    """
    config = ChunkerConfig(chunk_size=chunk_size, **options)
    return Chunker(config, token_counter, splitter=splitter)
