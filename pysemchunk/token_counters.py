"""Token counters for pysemchunk.

A token counter is any callable taking a string and returning a non-negative
integer. The chunker treats it as opaque and possibly expensive. This module
provides a trivial word counter plus adapters for tiktoken and Hugging Face
tokenizers; both libraries are optional and only imported when an adapter is
requested.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

TokenCounter = Callable[[str], int]

__all__ = [
    "TokenCounter",
    "huggingface_counter",
    "resolve_token_counter",
    "tiktoken_counter",
    "word_counter",
]


def word_counter(text: str) -> int:
    """Count whitespace-separated words.

    Examples:
        >>> word_counter("The quick brown fox")
        4
        >>> word_counter("")
        0
    """
    return len(text.split())


def tiktoken_counter(name: str = "cl100k_base") -> TokenCounter:
    """Build a counter from a tiktoken encoding or model name.

    Args:
        name: Encoding name (e.g. ``"cl100k_base"``) or a model name understood
            by ``tiktoken.encoding_for_model`` (e.g. ``"gpt-4o"``).

    Returns:
        Callable returning the number of tokens in a string. Special-token
        text such as ``<|endoftext|>`` is counted as ordinary text.

    Raises:
        ImportError: If tiktoken is not installed.
        ValueError: If ``name`` is neither an encoding nor a known model.
    """
    try:
        import tiktoken
    except ImportError as exc:
        raise ImportError(
            "tiktoken is required for tiktoken_counter(); "
            "install it with: pip install pysemchunk[tiktoken]"
        ) from exc

    if name in tiktoken.list_encoding_names():
        encoding = tiktoken.get_encoding(name)
    else:
        try:
            encoding = tiktoken.encoding_for_model(name)
        except KeyError as exc:
            raise ValueError(
                f"'{name}' is neither a tiktoken encoding nor a known model name"
            ) from exc
    logger.debug("Using tiktoken encoding %s", encoding.name)
    return _encoding_counter(encoding)


def huggingface_counter(tokenizer: Any) -> TokenCounter:
    """Build a counter from a Hugging Face tokenizer.

    Args:
        tokenizer: A ``tokenizers.Tokenizer``, a ``transformers`` tokenizer, or
            a model identifier to load with ``tokenizers.Tokenizer.from_pretrained``.

    Returns:
        Callable returning the number of tokens in a string, excluding special
        tokens such as ``<s>`` and ``</s>``.

    Raises:
        ImportError: If ``tokenizer`` is a name and tokenizers is not installed.
    """
    if isinstance(tokenizer, str):
        try:
            from tokenizers import Tokenizer
        except ImportError as exc:
            raise ImportError(
                "tokenizers is required to load a tokenizer by name; "
                "install it with: pip install pysemchunk[huggingface]"
            ) from exc
        logger.debug("Loading tokenizer %s", tokenizer)
        tokenizer = Tokenizer.from_pretrained(tokenizer)

    encode = tokenizer.encode

    def count(text: str) -> int:
        encoded = encode(text, add_special_tokens=False)
        # tokenizers returns an Encoding, transformers a list of ids.
        ids = getattr(encoded, "ids", encoded)
        return len(ids)

    return count


def resolve_token_counter(token_counter: Any) -> TokenCounter:
    """Turn whatever the caller passed into a plain token-counting callable.

    Accepts a callable, a tiktoken ``Encoding``, a Hugging Face tokenizer, or
    a tiktoken encoding/model name.

    Raises:
        TypeError: If ``token_counter`` is none of the above.
    """
    if isinstance(token_counter, str):
        return tiktoken_counter(token_counter)
    if _is_tiktoken_encoding(token_counter):
        return _encoding_counter(token_counter)
    if hasattr(token_counter, "encode"):
        return huggingface_counter(token_counter)
    if callable(token_counter):
        return token_counter
    raise TypeError(
        "token_counter must be a callable, a tokenizer with an encode() method, "
        f"or a tiktoken encoding/model name, got {type(token_counter).__name__}"
    )


def _is_tiktoken_encoding(obj: Any) -> bool:
    return type(obj).__module__.startswith("tiktoken") and hasattr(
        obj, "encode_ordinary"
    )


def _encoding_counter(encoding: Any) -> TokenCounter:
    encode = encoding.encode_ordinary

    def count(text: str) -> int:
        return len(encode(text))

    return count
