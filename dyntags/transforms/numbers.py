#!/usr/bin/env python3
"""Leading numeral handling for Johnny Decimal style folder names.

Two prefix conventions are recognized:
- "01 - Projects" (digits, optional spaces, hyphen, optional spaces, name)
- "01 Projects" / "1. Projects" (digits, optional dot, spaces, name)

Numbers anywhere other than the start of the name are left alone.
"""

import re
from dataclasses import dataclass
from typing import Optional, Union

from dyntags.core.constants import NumberPrefixFormat, NumberPrefixHandling

_JOHNNY_DECIMAL_RE = re.compile(r"^([0-9]+)\s*-\s*(.+)$")
_SIMPLE_NUMBER_RE = re.compile(r"^([0-9]+)\.?\s+(.+)$")


@dataclass(frozen=True)
class NumberPrefixResult:
    """Outcome of splitting a numeric prefix from a name."""

    number: Optional[str]
    name: str
    full_match: bool


def extract_number_prefix(text: str) -> NumberPrefixResult:
    """Split a numeric prefix from a name.

    Example: "01 - Projects" -> NumberPrefixResult("01", "Projects", True)

    Returns:
        Result with number None and the original text when no prefix matches
    """
    for regex in (_JOHNNY_DECIMAL_RE, _SIMPLE_NUMBER_RE):
        match = regex.match(text)
        if match:
            return NumberPrefixResult(
                number=match.group(1), name=match.group(2).strip(), full_match=True
            )

    return NumberPrefixResult(number=None, name=text, full_match=False)


def strip_number_prefix(text: str) -> str:
    """Return the name without its numeric prefix."""
    return extract_number_prefix(text).name


def add_number_prefix(
    name: str,
    number: str,
    fmt: NumberPrefixFormat = NumberPrefixFormat.JOHNNY_DECIMAL,
) -> str:
    """Prefix a name with a number ("Projects", "01" -> "01 - Projects")."""
    if fmt == NumberPrefixFormat.JOHNNY_DECIMAL:
        return f"{number} - {name}"
    return f"{number} {name}"


def has_number_prefix(text: str) -> bool:
    """Check whether text starts with a recognized numeric prefix."""
    return extract_number_prefix(text).full_match


def normalize_number_prefix(text: str, pad_length: int = 2) -> str:
    """Zero-pad the prefix and rewrite it as "DD - Name".

    Example: "1 - Projects" -> "01 - Projects"
    """
    result = extract_number_prefix(text)
    if not result.full_match or result.number is None:
        return text

    return add_number_prefix(result.name, result.number.zfill(pad_length))


def apply_number_handling(
    text: str, handling: Union[NumberPrefixHandling, str, None]
) -> Union[str, NumberPrefixResult]:
    """Apply a number prefix handling mode.

    Returns:
        The stripped name for "strip", a NumberPrefixResult for "extract",
        and the unchanged text for "keep" or no handling
    """
    if handling in (NumberPrefixHandling.STRIP, NumberPrefixHandling.STRIP.value):
        return strip_number_prefix(text)
    if handling in (NumberPrefixHandling.EXTRACT, NumberPrefixHandling.EXTRACT.value):
        return extract_number_prefix(text)
    return text
