#!/usr/bin/env python3
r"""Custom regex rewrites with capture-group replacement templates.

Replacement strings use the ``$`` template syntax stored in rule sets:
``$1``..``$99`` numbered groups, ``$<name>`` named groups, ``$&`` the whole
match, ``$`` + backtick / ``$'`` the text before / after the match and ``$$`` a
literal dollar sign. Flags default to ``"g"`` (replace every match).

Example:
    >>> apply_regex_transform(
    ...     "01 - Projects",
    ...     RegexTransform(pattern=r"^(\d+) - (.+)$", replacement="$2_$1"),
    ... )
    'Projects_01'
"""

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from dyntags.core.logging import get_logger
from dyntags.rules.models import RegexTransform
from dyntags.rules.patterns import InvalidPatternError, compile_regex, parse_flags

DEFAULT_FLAGS = "g"

# Ready-made patterns for common folder and tag layouts
COMMON_PATTERNS = {
    "johnny_decimal": r"^(\d+)\s*-\s*(.+)$",  # "01 - Projects"
    "emoji_prefix": r"^[\U0001F000-\U0001FAFF\u2600-\u27BF\u2B00-\u2BFF]\s*(.+)$",  # "📁 Projects"
    "nested_path": r"^([^/]+)/(.+)$",  # "parent/child/grandchild"
    "tag_with_prefix": r"^#([^/]+)/(.+)$",  # "#_/01_projects"
    "wildcard_suffix": r"^(.+)/\*$",  # "Projects/*"
    "any_depth": r"\*\*/(.+)$",  # "**/subfolder"
}


@dataclass(frozen=True)
class CaptureGroups:
    """Groups captured by the first match of a pattern."""

    matches: List[Optional[str]]
    groups: Optional[Dict[str, Optional[str]]] = None


def _group_reference(template: str, pos: int, match: re.Match) -> Tuple[Optional[str], int]:
    """Resolve ``$n``/``$nn`` at template[pos] (pos points after the ``$``)."""
    group_count = match.re.groups
    two = template[pos:pos + 2]
    if len(two) == 2 and two.isdigit() and 0 < int(two) <= group_count:
        return match.group(int(two)) or "", pos + 2
    one = template[pos:pos + 1]
    if one.isdigit() and 0 < int(one) <= group_count:
        return match.group(int(one)) or "", pos + 1
    return None, pos


def expand_replacement(template: str, match: re.Match) -> str:
    """Expand a ``$``-style replacement template for one match."""
    out = []
    i = 0
    while i < len(template):
        char = template[i]
        if char != "$" or i + 1 >= len(template):
            out.append(char)
            i += 1
            continue

        nxt = template[i + 1]
        if nxt == "$":
            out.append("$")
            i += 2
        elif nxt == "&":
            out.append(match.group(0))
            i += 2
        elif nxt == "`":
            out.append(match.string[:match.start()])
            i += 2
        elif nxt == "'":
            out.append(match.string[match.end():])
            i += 2
        elif nxt == "<" and match.re.groupindex:
            end = template.find(">", i + 2)
            name = template[i + 2:end] if end != -1 else None
            if name is not None and name in match.re.groupindex:
                out.append(match.group(name) or "")
                i = end + 1
            else:
                out.append(char)
                i += 1
        else:
            value, new_pos = _group_reference(template, i + 1, match)
            if value is None:
                out.append(char)
                i += 1
            else:
                out.append(value)
                i = new_pos

    return "".join(out)


def apply_regex_transform(text: str, transform: RegexTransform) -> str:
    """Apply one regex replacement.

    An invalid pattern or flag set leaves the text unchanged and logs a
    warning.

    Args:
        text: Input text
        transform: Pattern, replacement template and flags

    Returns:
        Rewritten text
    """
    flags = transform.flags or DEFAULT_FLAGS
    try:
        regex = compile_regex(transform.pattern, flags)
        _, replace_all = parse_flags(flags)
    except InvalidPatternError as e:
        get_logger().warning("Invalid regex pattern", pattern=transform.pattern, error=e.message)
        return text

    return regex.sub(
        lambda m: expand_replacement(transform.replacement, m),
        text,
        count=0 if replace_all else 1,
    )


def apply_regex_transforms(text: str, transforms: Iterable[RegexTransform]) -> str:
    """Apply regex replacements in order, each on the previous output."""
    result = text
    for transform in transforms:
        result = apply_regex_transform(result, transform)
    return result


def validate_regex_pattern(pattern: str) -> Tuple[bool, Optional[str]]:
    """Check whether a pattern compiles as a regular expression.

    Returns:
        Tuple of (valid, error message or None)
    """
    try:
        compile_regex(pattern)
    except InvalidPatternError as e:
        return False, e.message
    return True, None


def extract_capture_groups(
    text: str, pattern: str, flags: Optional[str] = None
) -> Optional[CaptureGroups]:
    """Return the groups captured by the first match of pattern in text.

    Returns:
        CaptureGroups, or None when nothing matches or the pattern is invalid
    """
    try:
        regex = compile_regex(pattern, flags or "")
    except InvalidPatternError as e:
        get_logger().warning("Invalid regex pattern", pattern=pattern, error=e.message)
        return None

    match = regex.search(text)
    if match is None:
        return None

    return CaptureGroups(
        matches=[match.group(0), *match.groups()],
        groups=match.groupdict() or None,
    )
