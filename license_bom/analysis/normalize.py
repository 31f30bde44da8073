"""License text normalization and tokenization.

Template bodies and candidate license files go through the same
functions, so their word sets are directly comparable.
"""
from __future__ import annotations

import re
from typing import Union

from license_bom.models.template import WordSet

WORD_PATTERN = re.compile(r"[\w']+")

# Copyright notices vary per project: drop the marker line with whatever
# holder and year follow it, along with the whitespace leading up to it.
COPYRIGHT_PATTERN = re.compile(
    r"\s*copyright (?:©|\(c\))?\s*(?:\d{4}|\[year\]).*",
    re.IGNORECASE,
)


def _as_text(data: Union[str, bytes]) -> str:
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


def clean_license_text(data: Union[str, bytes]) -> str:
    """Lower-case license text and strip copyright notices.

    Args:
        data: Raw license text or bytes (decoded as UTF-8).

    Returns:
        Cleaned text.
    """
    text = _as_text(data).lower()
    return COPYRIGHT_PATTERN.sub("", text)


def tokenize(data: Union[str, bytes]) -> list[str]:
    """Split cleaned license text into word tokens."""
    return WORD_PATTERN.findall(clean_license_text(data))


def make_word_set(data: Union[str, bytes]) -> WordSet:
    """Build the word set of a license text.

    Each distinct token maps to the index of its first occurrence in the
    token sequence. Words that do not belong to a template usually sit in
    a header, so keeping first positions preserves a readable order for
    diagnostics.

    Args:
        data: Raw license text or bytes.

    Returns:
        Mapping of normalized word to first token index.
    """
    words: WordSet = {}
    for index, token in enumerate(tokenize(data)):
        words.setdefault(token, index)
    return words
