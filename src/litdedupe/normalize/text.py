"""Pure text normalization for field comparison.

Every function here is deterministic, locale-independent and free of side
effects. normalize_text is idempotent.
"""

import re

from litdedupe.models.records import PublicationDate

__all__ = [
    "normalize_text",
    "normalize_author",
    "word_tokens",
    "trigrams",
    "parse_publication_date",
]

# Pre-compiled regex patterns
PUNCT_RE = re.compile(r"[^\w\s]")
WHITESPACE_RE = re.compile(r"\s+")
SINGLE_CHAR_TOKEN_RE = re.compile(r"\b\w\b")

ISO_DATE_RE = re.compile(
    r"^(\d{4})(?:[-/](\d{1,2})(?:[-/](\d{1,2}))?)?"
    r"(?:[T ]\d{1,2}:\d{2}[\d:.]*(?:Z|[+-][\d:]+)?)?$"
)
YEAR_MONTH_NAME_RE = re.compile(r"^(\d{4})\s+([A-Za-z]+)\.?(?:\s+\d{1,2})?$")
MONTH_NAME_YEAR_RE = re.compile(r"^(?:\d{1,2}\s+)?([A-Za-z]+)\.?,?\s+(?:\d{1,2},\s+)?(\d{4})$")

MONTHS: dict[str, int] = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

TOKEN_MIN_LENGTH = 3


def normalize_text(text: str) -> str:
    """Normalize free text for comparison.

    Lowercase, strip every character that is neither a word character nor
    whitespace, collapse whitespace runs to a single space, trim.

    Parameters
    ----------
    text : str
        Input text.

    Returns
    -------
    str
        Normalized text (possibly empty).

    Examples
    --------
        >>> normalize_text("  Effects of  Tele-medicine!  ")
        'effects of telemedicine'
    """
    text = PUNCT_RE.sub("", text.lower())
    return WHITESPACE_RE.sub(" ", text).strip()


def normalize_author(name: str) -> str:
    """Normalize an author name, dropping initials.

    Same as normalize_text, but single-character word tokens are removed
    before whitespace is collapsed, so "Smith, J. A." becomes "smith".

    Parameters
    ----------
    name : str
        Author name as supplied by the source.

    Returns
    -------
    str
        Normalized name without initials.
    """
    name = PUNCT_RE.sub("", name.lower())
    name = SINGLE_CHAR_TOKEN_RE.sub("", name)
    return WHITESPACE_RE.sub(" ", name).strip()


def word_tokens(text: str) -> set[str]:
    """Split normalized text into its set of tokens longer than two characters."""
    return {token for token in text.split() if len(token) >= TOKEN_MIN_LENGTH}


def trigrams(text: str) -> set[str]:
    """Build the set of overlapping 3-character substrings.

    Whitespace is removed first, so trigrams span word boundaries.

    Parameters
    ----------
    text : str
        Normalized text.

    Returns
    -------
    set[str]
        Character trigrams; empty when fewer than 3 characters remain.
    """
    compact = WHITESPACE_RE.sub("", text)
    return {compact[i : i + 3] for i in range(len(compact) - 2)}


def parse_publication_date(value: str | None) -> PublicationDate | None:
    """Parse a publication date to year/month precision.

    Accepted forms: ISO dates and datetimes ('2021', '2021-03',
    '2021-03-15', '2021-03-15T10:00:00Z', '2021-03-15 10:00'), slash forms
    ('2021/03/15'), PubMed style ('2021 Mar', '2021 Mar 15') and
    month-first forms ('Mar 2021', '15 March 2021', 'March 15, 2021').

    Parameters
    ----------
    value : str | None
        Raw date text.

    Returns
    -------
    PublicationDate | None
        Parsed date, or None when the value is missing or unparsable.
        Never raises.
    """
    if not value:
        return None

    text = value.strip()

    match = ISO_DATE_RE.match(text)
    if match:
        year = int(match.group(1))
        if match.group(2) is None:
            return PublicationDate(year=year)
        return _with_month(year, int(match.group(2)))

    match = YEAR_MONTH_NAME_RE.match(text)
    if match:
        return _with_month(int(match.group(1)), _month_from_name(match.group(2)))

    match = MONTH_NAME_YEAR_RE.match(text)
    if match:
        return _with_month(int(match.group(2)), _month_from_name(match.group(1)))

    return None


def _month_from_name(name: str) -> int | None:
    return MONTHS.get(name[:3].lower())


def _with_month(year: int, month: int | None) -> PublicationDate | None:
    if month is None or not 1 <= month <= 12:
        return None
    return PublicationDate(year=year, month=month)
