from __future__ import annotations

from dataclasses import dataclass

from .constants import DEFAULT_CHARS_PER_TOKEN


@dataclass(frozen=True)
class ChunkerConfig:
    """User-facing configuration for a :class:`~pysemchunk.Chunker`.

    Keep this frozen+hashable so a chunker can be shared between threads.
    """

    chunk_size: int

    # Starting estimate for the merge search, refined after every
    # token-counter call.
    initial_chars_per_token: float = DEFAULT_CHARS_PER_TOKEN

    # Behavior toggles
    memoize: bool = False
    return_trace: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.chunk_size, bool) or not isinstance(self.chunk_size, int):
            raise ValueError(
                f"chunk_size must be an integer, got {type(self.chunk_size).__name__}"
            )
        if self.chunk_size < 1:
            raise ValueError(
                f"chunk_size must be at least 1, got {self.chunk_size}. "
                "A budget of 0 tokens cannot hold any text."
            )
        if not self.initial_chars_per_token > 0:
            raise ValueError(
                "initial_chars_per_token must be positive, "
                f"got {self.initial_chars_per_token}"
            )
