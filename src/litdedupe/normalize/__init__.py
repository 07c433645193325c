"""Field normalization for duplicate detection.

Pure helpers that turn raw field text into comparable forms.
"""

from litdedupe.normalize.text import (
    normalize_author,
    normalize_text,
    parse_publication_date,
    trigrams,
    word_tokens,
)

__all__ = [
    "normalize_text",
    "normalize_author",
    "word_tokens",
    "trigrams",
    "parse_publication_date",
]
