#!/usr/bin/env python3
"""
Compare token-counter calls with the number of chunks produced.

The chunker only calls the token counter a handful of times per chunk,
because merge candidates are placed using a running characters-per-token
estimate. This script prints the call counts for a few chunk sizes, with and
without memoization.

Usage:
    python examples/token_call_efficiency.py [encoding-or-model | words]

Pass "words" to count whitespace-separated words instead of tiktoken tokens.
"""

import sys
import time

from pysemchunk import Chunker, ChunkerConfig, tiktoken_counter, word_counter

TEXT = (
    """
The quick brown fox jumps over the lazy dog.
She sells seashells by the seashore; the shells she sells are surely seashells.
Peter Piper picked a peck of pickled peppers (a peck, not a pound).

How much wood would a woodchuck chuck if a woodchuck could chuck wood?
"""
    * 50
)


def load_counter():
    name = sys.argv[1] if len(sys.argv) > 1 else "cl100k_base"
    if name == "words":
        return word_counter, "words"
    return tiktoken_counter(name), f"tiktoken:{name}"


def main() -> None:
    counter, label = load_counter()
    print(f"Token counter: {label}")
    print(f"Text length: {len(TEXT)} characters\n")
    print(f"{'size':>6} {'memo':>5} {'chunks':>7} {'calls':>6} {'hits':>5} {'ms':>8}")

    for chunk_size in (16, 64, 256, 512):
        for memoize in (False, True):
            config = ChunkerConfig(
                chunk_size=chunk_size, memoize=memoize, return_trace=True
            )
            chunker = Chunker(config, counter)
            start = time.perf_counter()
            result = chunker.run(TEXT)
            elapsed = (time.perf_counter() - start) * 1000.0
            trace = result.trace
            print(
                f"{chunk_size:>6} {str(memoize):>5} {len(result):>7} "
                f"{trace.token_count_calls:>6} {trace.cache_hits:>5} {elapsed:>8.1f}"
            )


if __name__ == "__main__":
    main()
