"""dyntags Transforms - Folder name and tag text transformation.

This module provides the text transformation system:
- TransformPipeline: Fixed-order stages built from a TransformConfig
- Base stage classes and result types
- Case conversion (snake_case, kebab-case, camelCase, ...)
- Emoji and invalid tag character handling
- Johnny Decimal number prefixes
- Custom regex rewrites
"""

from .base import TextTransform, TransformError, TransformResult
from .case import (
    apply_case_transform,
    apply_case_transform_to_path,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    to_snake_case,
    to_title_case,
)
from .emoji import (
    apply_emoji_handling,
    contains_emoji,
    extract_emoji,
    normalize_unicode,
    strip_emoji,
    strip_invalid_tag_chars,
)
from .numbers import (
    NumberPrefixResult,
    add_number_prefix,
    apply_number_handling,
    extract_number_prefix,
    has_number_prefix,
    normalize_number_prefix,
    strip_number_prefix,
)
from .pipeline import (
    ReversibilityReport,
    TransformPipeline,
    apply_transform_pipeline,
    create_bidirectional_mapping,
    folder_to_tag,
    is_transform_reversible,
    tag_to_folder,
)
from .regex import (
    COMMON_PATTERNS,
    CaptureGroups,
    apply_regex_transform,
    apply_regex_transforms,
    expand_replacement,
    extract_capture_groups,
    validate_regex_pattern,
)

__all__ = [
    # Pipeline
    "TransformPipeline",
    "ReversibilityReport",
    "apply_transform_pipeline",
    "folder_to_tag",
    "tag_to_folder",
    "create_bidirectional_mapping",
    "is_transform_reversible",
    # Base classes
    "TextTransform",
    "TransformResult",
    "TransformError",
    # Case
    "to_snake_case",
    "to_kebab_case",
    "to_camel_case",
    "to_pascal_case",
    "to_title_case",
    "apply_case_transform",
    "apply_case_transform_to_path",
    # Emoji
    "strip_emoji",
    "contains_emoji",
    "extract_emoji",
    "strip_invalid_tag_chars",
    "normalize_unicode",
    "apply_emoji_handling",
    # Number prefixes
    "NumberPrefixResult",
    "extract_number_prefix",
    "strip_number_prefix",
    "add_number_prefix",
    "has_number_prefix",
    "normalize_number_prefix",
    "apply_number_handling",
    # Regex
    "COMMON_PATTERNS",
    "CaptureGroups",
    "expand_replacement",
    "apply_regex_transform",
    "apply_regex_transforms",
    "validate_regex_pattern",
    "extract_capture_groups",
]
