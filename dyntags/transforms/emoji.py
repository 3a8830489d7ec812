#!/usr/bin/env python3
"""Emoji and tag-character handling.

Folder names often carry decorative emoji ("📁 Projects", "⬇️ INBOX") that
have no place in a tag. This module strips them, detects them, extracts
them, removes characters that tag names cannot contain, and normalizes
Unicode to NFC.
"""

import re
import unicodedata
from typing import List, Union

from dyntags.core.constants import INVALID_TAG_CHARS, EmojiHandling

# Unicode blocks treated as emoji
EMOJI_RANGES = (
    ("\U0001F600", "\U0001F64F"),  # Emoticons
    ("\U0001F300", "\U0001F5FF"),  # Misc Symbols and Pictographs
    ("\U0001F680", "\U0001F6FF"),  # Transport and Map
    ("\U0001F1E0", "\U0001F1FF"),  # Regional indicator flags
    ("\u2600", "\u26FF"),  # Misc symbols
    ("\u2700", "\u27BF"),  # Dingbats
    ("\U0001F900", "\U0001F9FF"),  # Supplemental Symbols and Pictographs
    ("\U0001FA00", "\U0001FA6F"),  # Chess Symbols
    ("\U0001FA70", "\U0001FAFF"),  # Symbols and Pictographs Extended-A
    ("\U0001F000", "\U0001F02F"),  # Mahjong Tiles
    ("\u2B00", "\u2BFF"),  # Misc Symbols and Arrows
)
VARIATION_SELECTORS = ("\uFE00", "\uFE0F")

_EMOJI_CLASS = "".join(f"{start}-{end}" for start, end in EMOJI_RANGES)
_SELECTOR_CLASS = f"{VARIATION_SELECTORS[0]}-{VARIATION_SELECTORS[1]}"

_STRIP_RE = re.compile(f"[{_EMOJI_CLASS}{_SELECTOR_CLASS}]")
_DETECT_RE = re.compile(f"[{_EMOJI_CLASS}]")
_EXTRACT_RE = re.compile(f"[{_EMOJI_CLASS}][{_SELECTOR_CLASS}]?")
_INVALID_TAG_RE = re.compile(f"[{re.escape(INVALID_TAG_CHARS)}]")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_emoji(text: str) -> str:
    """Remove emoji, then collapse whitespace and trim.

    Example: "📁 01 - Projects" -> "01 - Projects"
    """
    return _WHITESPACE_RE.sub(" ", _STRIP_RE.sub("", text)).strip()


def contains_emoji(text: str) -> bool:
    """Check whether text contains at least one emoji."""
    return _DETECT_RE.search(text) is not None


def extract_emoji(text: str) -> List[str]:
    """Return the emoji in text, each with its variation selector if any."""
    return _EXTRACT_RE.findall(text)


def strip_invalid_tag_chars(text: str) -> str:
    r"""Remove characters tag names cannot contain (. : ; , ? ! @ \)."""
    return _INVALID_TAG_RE.sub("", text)


def normalize_unicode(text: str) -> str:
    """Normalize to canonical composed form (NFC)."""
    return unicodedata.normalize("NFC", text)


def apply_emoji_handling(text: str, handling: Union[EmojiHandling, str, None]) -> str:
    """Strip emoji when handling is "strip"; otherwise return text as is."""
    if handling in (EmojiHandling.STRIP, EmojiHandling.STRIP.value):
        return strip_emoji(text)
    return text
