"""Capitalisation rules for practice names and addresses.

Text is cut into alternating runs of letters and non-letters; joining the
tokens back together gives the original string. Names capitalise every
letter run. Addresses only capitalise runs made entirely of A-Z, so text
that is already mixed case is left as it was.
"""

from __future__ import annotations

import re
from typing import Iterable

_LETTER_RUN_RE = re.compile(r"([^\W\d_]+)")
_UPPER_ASCII_RE = re.compile(r"[A-Z]+")

ADDRESS_SEPARATOR = ", "


def word_tokens(text: str) -> list[str]:
    return [token for token in _LETTER_RUN_RE.split(text) if token]


def _is_letter_run(token: str) -> bool:
    return bool(_LETTER_RUN_RE.fullmatch(token))


def format_name(raw: str) -> str:
    return "".join(token.capitalize() if _is_letter_run(token) else token for token in word_tokens(raw))


def format_address_text(raw: str) -> str:
    return "".join(
        token.capitalize() if _UPPER_ASCII_RE.fullmatch(token) else token for token in word_tokens(raw)
    )


def format_address(lines: Iterable[str], postcode: str) -> str:
    # Postcode is appended even when blank.
    parts = [line for line in lines if line]
    parts.append(postcode)
    return format_address_text(ADDRESS_SEPARATOR.join(parts))
