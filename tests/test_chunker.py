from concurrent.futures import ThreadPoolExecutor

import pytest

from pysemchunk import (
    CharacterSplitter,
    Chunker,
    ChunkerConfig,
    SplitResult,
    chunkerify,
)
from pysemchunk.token_counters import word_counter

TEXT = "The quick brown fox jumps over the lazy dog."

DOCUMENT = (
    "Chapter 1\n\n"
    "It was a bright cold day in April, and the clocks were striking thirteen. "
    "Winston Smith, his chin nuzzled into his breast in an effort to escape the "
    "vile wind, slipped quickly through the glass doors of Victory Mansions.\n\n"
    "The hallway smelt of boiled cabbage and old rag mats.\tAt one end of it a "
    "coloured poster, too large for indoor display, had been tacked to the wall "
    "(it depicted simply an enormous face, more than a metre wide).\n"
    "Outside, even through the shut window-pane, the world looked cold!"
)


class NoopSplitter:
    def split(self, text: str) -> SplitResult:
        return SplitResult(separator="", is_whitespace=True, splits=[text])


def test_chunk_end_to_end():
    chunker = Chunker(ChunkerConfig(chunk_size=4), word_counter)
    assert chunker.chunk(TEXT) == ["The quick brown fox", "jumps over the lazy", "dog."]


def test_chunker_is_callable():
    chunker = Chunker(ChunkerConfig(chunk_size=4), word_counter)
    assert chunker(TEXT) == chunker.chunk(TEXT)


def test_chunkerify():
    chunker = chunkerify(word_counter, 4)
    assert chunker.config == ChunkerConfig(chunk_size=4)
    assert chunker.chunk(TEXT) == ["The quick brown fox", "jumps over the lazy", "dog."]


def test_run_overrides_chunk_size():
    chunker = Chunker(ChunkerConfig(chunk_size=4), word_counter)
    result = chunker.run(TEXT, chunk_size=2)
    assert result.chunks == ["The quick", "brown fox", "jumps over", "the lazy", "dog."]
    assert chunker.config.chunk_size == 4


def test_chunk_empty_text():
    chunker = Chunker(ChunkerConfig(chunk_size=4), word_counter)
    assert chunker.chunk("") == []


def test_separator_kept_inside_merged_chunk():
    chunker = Chunker(ChunkerConfig(chunk_size=5), word_counter)
    assert chunker.chunk("Hello,World!") == ["Hello,World!"]


def test_separator_attached_when_it_fits():
    chunker = Chunker(ChunkerConfig(chunk_size=5), len)
    assert chunker.chunk("abc.defgh") == ["abc.", "defgh"]


def test_separator_standalone_when_over_budget():
    chunker = Chunker(ChunkerConfig(chunk_size=5), len)
    assert chunker.chunk("abcde.fgh") == ["abcde", ".", "fgh"]


def test_empty_chunks_kept_at_top_level():
    chunker = Chunker(ChunkerConfig(chunk_size=5), len)
    assert chunker.chunk("abcde.") == ["abcde", ".", ""]


def test_empty_chunks_dropped_when_recursing():
    chunker = Chunker(ChunkerConfig(chunk_size=5), len)
    assert chunker.chunk("abcde. xy") == ["abcde", ".", "xy"]


def test_character_fallback():
    chunker = Chunker(ChunkerConfig(chunk_size=1), len)
    assert chunker.chunk("Hello_World") == list("Hello_World")


@pytest.mark.parametrize("chunk_size", [1, 3, 8, 20, 64])
def test_chunks_respect_budget(chunk_size):
    chunker = Chunker(ChunkerConfig(chunk_size=chunk_size), len)
    chunks = chunker.chunk(DOCUMENT)
    assert chunks
    assert all(len(chunk) <= chunk_size for chunk in chunks)


@pytest.mark.parametrize("chunk_size", [2, 5, 12])
def test_word_budget(chunk_size):
    chunker = Chunker(ChunkerConfig(chunk_size=chunk_size), word_counter)
    chunks = chunker.chunk(DOCUMENT)
    assert all(word_counter(chunk) <= chunk_size for chunk in chunks)
    # Only whitespace is ever dropped.
    assert "".join("".join(chunks).split()) == "".join(DOCUMENT.split())


@pytest.mark.parametrize("chunk_size", [1, 2, 4, 7, 50])
def test_reconstruction_without_whitespace(chunk_size):
    text = "alpha,beta;gamma.delta(epsilon)[zeta]“eta”:theta/iota-kappa&lambda"
    chunker = Chunker(ChunkerConfig(chunk_size=chunk_size), len)
    assert "".join(chunker.chunk(text)) == text


def test_reconstruction_with_single_spaces():
    chunker = Chunker(ChunkerConfig(chunk_size=3), word_counter)
    assert " ".join(chunker.chunk(TEXT)) == TEXT


def test_paragraphs_split_before_sentences():
    text = "First paragraph here.\n\nSecond paragraph here."
    chunker = Chunker(ChunkerConfig(chunk_size=3), word_counter)
    assert chunker.chunk(text) == ["First paragraph here.", "Second paragraph here."]


def test_indivisible_character_is_emitted_over_budget():
    def greedy_counter(text: str) -> int:
        return 10 * len(text)

    chunker = Chunker(ChunkerConfig(chunk_size=5, return_trace=True), greedy_counter)
    result = chunker.run("ab")

    assert result.chunks == ["a", "b"]
    assert result.trace is not None
    assert len(result.trace.warnings) == 2


def test_splitter_without_progress_terminates():
    chunker = Chunker(ChunkerConfig(chunk_size=1), word_counter, splitter=NoopSplitter())
    assert chunker.chunk("too many words") == ["too many words"]


def test_custom_splitter():
    chunker = Chunker(ChunkerConfig(chunk_size=2), len, splitter=CharacterSplitter())
    assert chunker.chunk("ab cd") == ["ab", " c", "d"]


def test_token_counter_errors_propagate():
    def broken_counter(text: str) -> int:
        raise RuntimeError("tokenizer unavailable")

    chunker = Chunker(ChunkerConfig(chunk_size=4), broken_counter)
    with pytest.raises(RuntimeError, match="tokenizer unavailable"):
        chunker.chunk(TEXT)


def test_run_override_is_validated():
    chunker = Chunker(ChunkerConfig(chunk_size=4), word_counter)
    with pytest.raises(ValueError, match="chunk_size"):
        chunker.run(TEXT, chunk_size=0)


def test_trace_is_optional():
    chunker = Chunker(ChunkerConfig(chunk_size=4), word_counter)
    assert chunker.run(TEXT).trace is None


def test_trace_records_run():
    chunker = Chunker(ChunkerConfig(chunk_size=4, return_trace=True), word_counter)
    result = chunker.run(TEXT)

    trace = result.trace
    assert trace is not None
    assert trace.token_count_calls == 7
    assert trace.merge_calls == 3
    assert trace.max_depth == 0
    assert trace.cache_hits == 0
    assert [event.stage for event in trace.events] == ["chunk"]
    assert trace.events[0].details == {"chars": len(TEXT), "chunks": 3}


def test_trace_records_recursion_depth():
    chunker = Chunker(ChunkerConfig(chunk_size=5, return_trace=True), len)
    result = chunker.run("abcde. xy")
    assert result.trace.max_depth == 1


def test_memoize_saves_counter_calls():
    plain = Chunker(ChunkerConfig(chunk_size=4, return_trace=True), word_counter)
    memo = Chunker(
        ChunkerConfig(chunk_size=4, return_trace=True, memoize=True), word_counter
    )

    plain_result = plain.run(TEXT)
    memo_result = memo.run(TEXT)

    assert memo_result.chunks == plain_result.chunks
    assert memo_result.trace.cache_hits >= 1
    assert (
        memo_result.trace.token_count_calls + memo_result.trace.cache_hits
        == plain_result.trace.token_count_calls
    )


def test_chunker_shared_between_threads():
    chunker = Chunker(ChunkerConfig(chunk_size=6), word_counter)
    texts = [DOCUMENT, TEXT, DOCUMENT.upper(), TEXT * 3] * 4
    expected = [chunker.chunk(text) for text in texts]

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(chunker.chunk, texts))

    assert results == expected


def test_information_separator_is_kept():
    chunker = Chunker(ChunkerConfig(chunk_size=3), len)
    assert chunker.chunk("ab\x1ccd") == ["ab\x1c", "cd"]


def test_deeply_nested_whitespace_runs():
    text = "a" + "".join(" " * n + "a" for n in range(1, 1101))
    chunker = Chunker(ChunkerConfig(chunk_size=1, return_trace=True), len)

    result = chunker.run(text)

    assert result.chunks == ["a"] * 1101
    assert result.trace.max_depth == 1099


class FalsySplitter:
    def __len__(self) -> int:
        return 0

    def split(self, text: str) -> SplitResult:
        return SplitResult(separator="", is_whitespace=True, splits=list(text))


def test_falsy_custom_splitter_is_used():
    splitter = FalsySplitter()
    chunker = Chunker(ChunkerConfig(chunk_size=2), len, splitter=splitter)
    assert chunker.splitter is splitter
    assert chunker.chunk("ab cd") == ["ab", " c", "d"]
