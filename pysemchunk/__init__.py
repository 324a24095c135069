"""pysemchunk - split text into semantically meaningful, token-bounded chunks."""

from .chunker import Chunker, chunkerify
from .chunker_config import ChunkerConfig
from .splitters import CharacterSplitter, SemanticSplitter, Splitter
from .token_counters import (
    TokenCounter,
    huggingface_counter,
    tiktoken_counter,
    word_counter,
)
from .types import ChunkResult, SplitResult, Trace, TraceEvent

# Version info
try:
    from ._version import __version__, __version_tuple__
except ImportError:
    __version__ = "0.0.0"
    __version_tuple__ = (0, 0, 0)

__all__ = [
    "__version__",
    "Chunker",
    "ChunkerConfig",
    "ChunkResult",
    "CharacterSplitter",
    "SemanticSplitter",
    "SplitResult",
    "Splitter",
    "TokenCounter",
    "Trace",
    "TraceEvent",
    "chunkerify",
    "huggingface_counter",
    "tiktoken_counter",
    "word_counter",
]
