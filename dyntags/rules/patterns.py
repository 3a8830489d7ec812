#!/usr/bin/env python3
r"""Pattern compilation for folder and tag paths with glob and regex support.

This module unifies the two pattern syntaxes a rule may use:
- Glob patterns (Projects/*, Areas/**, **/Inbox, 0?-Notes)
- Regular expressions (^Projects/(.+)$), compiled verbatim
- JavaScript-style regex written by other tools ((?<name>...), \u{1F4C1})
- String flag sets ("gi") translated to ``re`` flags

Glob patterns are anchored at both ends; regular expressions are searched.

Example:
    >>> glob_to_regex("Projects/*")
    '^Projects/[^/]*$'
    >>> matches_pattern("Projects/sub/file.md", "Projects/**")
    True
    >>> matches_pattern("Projects/Alpha", r"^Projects/(\w+)$")
    True
"""

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Optional, Pattern, Tuple

from dyntags.core.constants import ErrorCode
from dyntags.core.logging import get_logger

# Characters escaped when converting a glob (everything special except * and ?)
_GLOB_ESCAPE_RE = re.compile(r"[.+^${}()|\[\]\\]")

_DOUBLESTAR_PLACEHOLDER = "\x00DOUBLESTAR\x00"
_PATHSEG_PLACEHOLDER = "\x00PATHSEG\x00"
_STARTPATHSEG_PLACEHOLDER = "\x00STARTPATHSEG\x00"

_JS_NAMED_GROUP_RE = re.compile(r"(?<!\\)\(\?<(?![=!])")
_JS_CODEPOINT_RE = re.compile(r"\\u\{([0-9A-Fa-f]{1,6})\}")

# JavaScript shorthand classes are ASCII-only
_ASCII_CLASS_RANGES = {"w": "a-zA-Z0-9_", "d": "0-9"}

_FLAG_MAP = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "g": 0,  # replace-all, handled by callers
    "u": 0,  # str patterns are always unicode
    "y": 0,  # sticky matching has no re equivalent
}

PATTERN_CACHE_SIZE = 512


class PatternType(Enum):
    """Pattern syntax."""

    GLOB = "glob"  # Wildcard patterns (*, ?, **)
    REGEX = "regex"  # Regular expressions


class InvalidPatternError(Exception):
    """A glob or regex pattern could not be compiled."""

    def __init__(self, message: str, pattern: Optional[str] = None):
        self.message = message
        self.pattern = pattern
        self.error_code = ErrorCode.INVALID_INPUT
        super().__init__(message)


@dataclass(frozen=True)
class PatternEntry:
    """A compiled pattern with metadata."""

    pattern: str
    pattern_type: PatternType
    compiled: Pattern
    flags: str = ""

    def search(self, text: str) -> Optional[re.Match]:
        """Search text, honouring the anchoring of the pattern type."""
        if self.pattern_type == PatternType.GLOB:
            return self.compiled.fullmatch(text)
        return self.compiled.search(text)


def is_glob_pattern(pattern: str) -> bool:
    """Check whether a pattern uses glob syntax (contains * or ?)."""
    return "*" in pattern or "?" in pattern


def glob_to_regex(glob: str) -> str:
    """Convert a glob pattern to an anchored regular expression source.

    Supported wildcards:
    - ``/**/`` in the middle: zero or more path segments
    - ``/**`` at the end: anything after the slash
    - ``**/`` at the start: zero or more leading segments
    - remaining ``**``: anything
    - ``*``: any run of characters except ``/``
    - ``?``: exactly one character

    Args:
        glob: Glob pattern

    Returns:
        Regex source anchored with ``^`` and ``$``
    """
    regex = _GLOB_ESCAPE_RE.sub(lambda m: "\\" + m.group(0), glob)

    # ** must be handled before single * so the placeholders survive
    regex = regex.replace("/**/", _PATHSEG_PLACEHOLDER)
    regex = re.sub(r"/\*\*$", lambda m: "/" + _DOUBLESTAR_PLACEHOLDER, regex)
    regex = re.sub(r"^\*\*/", lambda m: _STARTPATHSEG_PLACEHOLDER, regex)
    regex = regex.replace("**", _DOUBLESTAR_PLACEHOLDER)

    regex = regex.replace("*", "[^/]*")
    regex = regex.replace("?", ".")

    regex = regex.replace(_DOUBLESTAR_PLACEHOLDER, ".*")
    regex = regex.replace(_PATHSEG_PLACEHOLDER, "(?:/[^/]+)*/")
    regex = regex.replace(_STARTPATHSEG_PLACEHOLDER, "(?:[^/]+/)*")

    return f"^{regex}$"


def translate_js_regex(pattern: str) -> str:
    r"""Rewrite JavaScript-only regex syntax into ``re`` syntax.

    Handles ``(?<name>...)`` named groups and ``\u{XXXXX}`` code point
    escapes. Everything else is shared by both flavours and left as is.
    """
    pattern = _JS_NAMED_GROUP_RE.sub("(?P<", pattern)
    return _JS_CODEPOINT_RE.sub(lambda m: "\\U%08X" % int(m.group(1), 16), pattern)


def restrict_shorthands_to_ascii(pattern: str) -> str:
    r"""Limit ``\w``, ``\d`` and ``\b`` to ASCII, as JavaScript does.

    Outside a character class the escape is wrapped in an ASCII-only
    group; inside one ``\w`` and ``\d`` are spelled out as ranges. The
    negated ``\W`` and ``\D`` inside a class are left Unicode-aware.
    ``\s`` keeps its Unicode meaning in both flavours.

        >>> restrict_shorthands_to_ascii(r"^\d+ [^\w-]")
        '^(?a:\\d)+ [^a-zA-Z0-9_-]'
    """
    out = []
    in_class = False
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "\\" and i + 1 < len(pattern):
            escaped = pattern[i + 1]
            if in_class and escaped in _ASCII_CLASS_RANGES:
                out.append(_ASCII_CLASS_RANGES[escaped])
            elif not in_class and escaped in "wWdDbB":
                out.append(f"(?a:\\{escaped})")
            else:
                out.append(pattern[i : i + 2])
            i += 2
            continue
        if char == "[" and not in_class:
            in_class = True
        elif char == "]" and in_class:
            in_class = False
        out.append(char)
        i += 1
    return "".join(out)


def parse_flags(flags: Optional[str]) -> Tuple[int, bool]:
    """Translate a flag string such as ``"gi"`` into ``re`` flags.

    Args:
        flags: Flag characters (g, i, m, s, u, y) or None

    Returns:
        Tuple of (re flags, replace-all)

    Raises:
        InvalidPatternError: On an unknown or repeated flag
    """
    if not flags:
        return 0, False

    re_flags = 0
    seen = set()
    for char in flags:
        if char not in _FLAG_MAP or char in seen:
            raise InvalidPatternError(f"Invalid regular expression flags '{flags}'")
        seen.add(char)
        re_flags |= _FLAG_MAP[char]

    return re_flags, "g" in seen


@lru_cache(maxsize=PATTERN_CACHE_SIZE)
def compile_regex(pattern: str, flags: str = "") -> Pattern:
    """Compile a pattern as a raw regular expression, never as a glob.

    Args:
        pattern: Regex source (JavaScript-only syntax is translated)
        flags: Optional flag string

    Returns:
        Compiled regex

    Raises:
        InvalidPatternError: If the pattern or flags are malformed
    """
    re_flags, _ = parse_flags(flags)

    try:
        return re.compile(restrict_shorthands_to_ascii(translate_js_regex(pattern)), re_flags)
    except re.error as e:
        raise InvalidPatternError(str(e), pattern) from e


@lru_cache(maxsize=PATTERN_CACHE_SIZE)
def compile_pattern(pattern: str, flags: str = "") -> PatternEntry:
    """Compile a glob or regex pattern, memoized per (pattern, flags).

    Args:
        pattern: Glob or regex pattern
        flags: Optional flag string

    Returns:
        Compiled pattern entry

    Raises:
        InvalidPatternError: If the pattern or flags are malformed
    """
    if not is_glob_pattern(pattern):
        compiled = compile_regex(pattern, flags)
        return PatternEntry(pattern, PatternType.REGEX, compiled, flags)

    re_flags, _ = parse_flags(flags)
    try:
        compiled = re.compile(glob_to_regex(pattern), re_flags)
    except re.error as e:
        raise InvalidPatternError(str(e), pattern) from e

    return PatternEntry(pattern, PatternType.GLOB, compiled, flags)


def pattern_to_regex(pattern: str) -> Pattern:
    """Compile a glob or regex pattern into a regular expression.

    Glob patterns go through glob_to_regex(); anything else is compiled
    literally, so ``^``, groups and classes behave as raw regex.

    Raises:
        InvalidPatternError: If the pattern is malformed
    """
    return compile_pattern(pattern).compiled


def matches_pattern(text: str, pattern: str, flags: Optional[str] = None) -> bool:
    """Check whether text matches a glob or regex pattern.

    Never raises: a pattern that fails to compile, or a pattern or text
    that is not a string, is treated as no match.

    Args:
        text: Folder path or tag to test
        pattern: Glob or regex pattern
        flags: Optional flag string

    Returns:
        True if the pattern matches
    """
    if not isinstance(pattern, str) or not isinstance(text, str):
        get_logger().debug("Pattern or input is not a string", pattern=repr(pattern))
        return False

    try:
        entry = compile_pattern(pattern, flags or "")
    except InvalidPatternError as e:
        get_logger().debug("Pattern failed to compile", pattern=pattern, error=e.message)
        return False

    return entry.search(text) is not None


def clear_pattern_cache() -> None:
    """Drop all memoized compiled patterns."""
    compile_pattern.cache_clear()
    compile_regex.cache_clear()
