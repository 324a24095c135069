"""Constants for pysemchunk - separator priorities and default configuration."""

# Program metadata
PROGRAM_NAME = "pysemchunk"

# Non-whitespace separators, most to least desirable. The first one present
# in a span wins.
NON_WHITESPACE_SEMANTIC_SEPARATORS = (
    # Sentence terminators
    ".",
    "?",
    "!",
    "*",
    # Clause separators
    ";",
    ",",
    "(",
    ")",
    "[",
    "]",
    "“",
    "”",
    "‘",
    "’",
    "'",
    '"',
    "`",
    # Sentence interrupters
    ":",
    "—",
    "…",
    # Word joiners
    "/",
    "\\",
    "–",
    "&",
    "-",
)

# Prior for the merge search: assume 1 token per 5 characters until the
# token counter has been measured once.
DEFAULT_CHARS_PER_TOKEN = 5.0

# Body of a regex character class matching Unicode White_Space. Python's
# ``\s`` also matches the information separators U+001C..U+001F, which must
# not be dropped.
WHITESPACE_CHARACTERS = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000"
)
