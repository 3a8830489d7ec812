#!/usr/bin/env python3
"""Case conversions between naming conventions.

Supports snake_case, kebab-case, camelCase, PascalCase, Title Case,
lowercase and UPPERCASE. The path-aware variant converts each ``/``
segment on its own so hierarchy separators are never touched.

Example:
    >>> to_snake_case("My Project Name")
    'my_project_name'
    >>> to_title_case("my_project_name")
    'My Project Name'
    >>> apply_case_transform_to_path("My Area/Sub Folder", "kebab-case")
    'my-area/sub-folder'
"""

import re
from typing import Optional, Union

from dyntags.core.constants import PATH_SEPARATOR, CaseTransform

_UPPER_RE = re.compile(r"([A-Z])")
_WORD_START_RE = re.compile(r"\b\w")
_SEPARATED_CHAR_RE = re.compile(r"[\s_\-]+(.)")


def _to_separated(text: str, separator: str, others: str) -> str:
    result = _UPPER_RE.sub(separator + r"\1", text)
    result = re.sub(rf"[\s{re.escape(others)}]+", separator, result)
    result = result.lower()
    result = re.sub(rf"{re.escape(separator)}+", separator, result)
    return result.lstrip(separator)


def to_snake_case(text: str) -> str:
    """Convert to snake_case ("My Project Name" -> "my_project_name")."""
    return _to_separated(text, "_", "-")


def to_kebab_case(text: str) -> str:
    """Convert to kebab-case ("My Project Name" -> "my-project-name")."""
    return _to_separated(text, "-", "_")


def to_title_case(text: str) -> str:
    """Convert to Title Case ("my_project_name" -> "My Project Name").

    Underscore and hyphen runs become single spaces and every word
    character that follows a non-word character is capitalized, so
    "(draft) o'neil" becomes "(Draft) O'Neil". The rest of each word keeps
    its case.
    """
    result = re.sub(r"[_\-]+", " ", text)
    result = _WORD_START_RE.sub(lambda m: m.group(0).upper(), result)
    return re.sub(r"\s+", " ", result).strip()


def to_camel_case(text: str) -> str:
    """Convert to camelCase ("my project name" -> "myProjectName")."""
    result = _SEPARATED_CHAR_RE.sub(lambda m: m.group(1).upper(), text)
    return result[:1].lower() + result[1:]


def to_pascal_case(text: str) -> str:
    """Convert to PascalCase ("my project name" -> "MyProjectName")."""
    result = _SEPARATED_CHAR_RE.sub(lambda m: m.group(1).upper(), text)
    return result[:1].upper() + result[1:]


_CONVERTERS = {
    CaseTransform.SNAKE_CASE: to_snake_case,
    CaseTransform.KEBAB_CASE: to_kebab_case,
    CaseTransform.TITLE_CASE: to_title_case,
    CaseTransform.CAMEL_CASE: to_camel_case,
    CaseTransform.PASCAL_CASE: to_pascal_case,
    CaseTransform.LOWERCASE: str.lower,
    CaseTransform.UPPERCASE: str.upper,
}


def _resolve(transform: Union[CaseTransform, str, None]) -> Optional[CaseTransform]:
    if transform is None or isinstance(transform, CaseTransform):
        return transform
    try:
        return CaseTransform(transform)
    except ValueError:
        return None


def apply_case_transform(text: str, transform: Union[CaseTransform, str, None]) -> str:
    """Apply a case transformation; "none" or an unknown name is identity.

    Args:
        text: Input text
        transform: CaseTransform member or its string value

    Returns:
        Converted text
    """
    converter = _CONVERTERS.get(_resolve(transform))
    if converter is None:
        return text
    return converter(text)


def apply_case_transform_to_path(text: str, transform: Union[CaseTransform, str, None]) -> str:
    """Apply a case transformation to each ``/``-delimited segment."""
    return PATH_SEPARATOR.join(
        apply_case_transform(segment, transform) for segment in text.split(PATH_SEPARATOR)
    )
