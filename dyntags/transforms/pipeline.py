#!/usr/bin/env python3
"""Transform pipeline for turning folder names into tags and back.

The pipeline runs a fixed sequence of stages built from a TransformConfig:
- Trim the raw input
- Emoji handling
- Number prefix handling (strip and extract both keep only the name)
- Case conversion per path segment
- Custom regex rewrites, in configured order
- Tag mode only: removal of characters invalid in tag names
- Final trim

A failing stage halts the pipeline. The caller gets either the untouched
input (preserve_on_error) or whatever the stages before the failure
produced; no exception escapes.

Example:
    >>> config = TransformConfig(
    ...     case_transform="kebab-case",
    ...     emoji_handling="strip",
    ...     number_prefix_handling="strip",
    ...     custom_transforms=(RegexTransform(r"[^a-z0-9\\-]", "", "gi"),),
    ... )
    >>> folder_to_tag("📁 01 - My Cool Project!!!", config)
    'my-cool-project'
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from dyntags.core.constants import (
    CaseTransform,
    EmojiHandling,
    NumberPrefixHandling,
)
from dyntags.core.logging import get_logger
from dyntags.rules.models import RegexTransform, TransformConfig
from dyntags.transforms.base import TextTransform, TransformResult
from dyntags.transforms.case import apply_case_transform_to_path
from dyntags.transforms.emoji import strip_emoji, strip_invalid_tag_chars
from dyntags.transforms.numbers import strip_number_prefix
from dyntags.transforms.regex import apply_regex_transforms

# Case transforms that keep enough information to be undone
_LOSSLESS_CASES = (CaseTransform.NONE, CaseTransform.TITLE_CASE)


class TrimStage(TextTransform):
    """Strip surrounding whitespace."""

    def transform(self, text: str) -> str:
        return text.strip()


class EmojiStage(TextTransform):
    """Remove emoji characters."""

    def transform(self, text: str) -> str:
        return strip_emoji(text)


class NumberPrefixStage(TextTransform):
    """Drop a leading "01 - " style prefix, keeping the name."""

    def transform(self, text: str) -> str:
        return strip_number_prefix(text)


class CaseStage(TextTransform):
    """Convert every path segment to one naming convention."""

    def __init__(self, case_transform: CaseTransform, name: Optional[str] = None):
        super().__init__(name)
        self.case_transform = case_transform

    def transform(self, text: str) -> str:
        return apply_case_transform_to_path(text, self.case_transform)


class RegexStage(TextTransform):
    """Apply custom regex rewrites in order."""

    def __init__(self, transforms: Tuple[RegexTransform, ...], name: Optional[str] = None):
        super().__init__(name)
        self.transforms = transforms

    def transform(self, text: str) -> str:
        return apply_regex_transforms(text, self.transforms)


class TagSanitizeStage(TextTransform):
    """Remove characters that tag names cannot contain."""

    def transform(self, text: str) -> str:
        return strip_invalid_tag_chars(text)


class TransformPipeline:
    """Pipeline for chaining text transforms.

    Stages run in the order they were added. With halt_on_error the
    pipeline stops at the first failing stage and reports the content
    produced so far.
    """

    def __init__(self, halt_on_error: bool = True):
        """Initialize transform pipeline.

        Args:
            halt_on_error: Stop pipeline on first error (vs continue)
        """
        self._transforms: List[TextTransform] = []
        self._halt_on_error = halt_on_error

    @classmethod
    def from_config(
        cls, config: Optional[TransformConfig], is_tag_transform: bool = False
    ) -> "TransformPipeline":
        """Build the fixed stage sequence for a transform config.

        Args:
            config: Transform settings (None means no optional stages)
            is_tag_transform: Add the tag character sanitizing stage

        Returns:
            Pipeline ready to apply
        """
        config = config or TransformConfig()
        pipeline = cls()

        pipeline.add_transform(TrimStage("trim"))
        if config.emoji_handling == EmojiHandling.STRIP:
            pipeline.add_transform(EmojiStage("emoji"))
        if config.number_prefix_handling in (
            NumberPrefixHandling.STRIP,
            NumberPrefixHandling.EXTRACT,
        ):
            pipeline.add_transform(NumberPrefixStage("number_prefix"))
        if config.case_transform not in (None, CaseTransform.NONE):
            pipeline.add_transform(CaseStage(config.case_transform, "case"))
        if config.custom_transforms:
            pipeline.add_transform(RegexStage(config.custom_transforms, "custom_regex"))
        if is_tag_transform:
            pipeline.add_transform(TagSanitizeStage("tag_chars"))
        pipeline.add_transform(TrimStage("final_trim"))

        return pipeline

    def add_transform(self, transform: TextTransform) -> None:
        """Add transform to pipeline.

        Transforms are executed in order they are added.
        """
        self._transforms.append(transform)

    def get_transforms(self) -> List[TextTransform]:
        """Get all transforms in pipeline.

        Returns:
            List of transforms (copy)
        """
        return self._transforms.copy()

    def apply(self, text: str) -> TransformResult:
        """Apply all transforms in pipeline.

        Args:
            text: Input text

        Returns:
            Final transform result
        """
        current = text
        transform_results: List[Dict[str, Any]] = []
        errors: List[str] = []

        for transform in self._transforms:
            if not transform.enabled:
                continue

            result = transform.apply(current)
            transform_results.append(
                {"name": transform.name, "success": result.success, "error": result.error}
            )

            if result.success:
                current = result.content
            else:
                errors.append(result.error)
                if self._halt_on_error:
                    break

        return TransformResult(
            content=current,
            success=not errors,
            error=errors[0] if errors else None,
            metadata={
                "transforms_applied": len(transform_results),
                "transform_results": transform_results,
                "pipeline_halted": bool(errors) and self._halt_on_error,
            },
        )

    def __len__(self) -> int:
        return len(self._transforms)


@dataclass(frozen=True)
class ReversibilityReport:
    """Whether a transform config can be undone, with the reasons it can't."""

    reversible: bool
    warnings: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.reversible


def apply_transform_pipeline(
    text: str,
    config: Optional[TransformConfig],
    is_tag_transform: bool = False,
    preserve_on_error: bool = False,
) -> str:
    """Run the fixed transform pipeline over text.

    Args:
        text: Folder name, folder path segment or tag
        config: Transform settings
        is_tag_transform: Remove characters invalid in tags
        preserve_on_error: Return the input untouched if a stage fails

    Returns:
        Transformed text
    """
    result = TransformPipeline.from_config(config, is_tag_transform).apply(text)
    if result.success:
        return result.content

    get_logger().warning(
        "Transform pipeline failed",
        error=result.error,
        preserve_on_error=preserve_on_error,
    )
    return text if preserve_on_error else result.content


def folder_to_tag(
    folder_segment: str, config: Optional[TransformConfig], preserve_on_error: bool = False
) -> str:
    """Transform a folder name or path into tag form."""
    return apply_transform_pipeline(
        folder_segment, config, is_tag_transform=True, preserve_on_error=preserve_on_error
    )


def tag_to_folder(
    tag_segment: str, config: Optional[TransformConfig], preserve_on_error: bool = False
) -> str:
    """Transform a tag name or path into folder form."""
    return apply_transform_pipeline(tag_segment, config, preserve_on_error=preserve_on_error)


def create_bidirectional_mapping(
    text: str,
    folder_config: Optional[TransformConfig],
    tag_config: Optional[TransformConfig],
) -> Dict[str, str]:
    """Compute both representations of one input.

    Returns:
        {"folder": <text through folder_config>, "tag": <text through tag_config>}
    """
    return {
        "folder": tag_to_folder(text, folder_config),
        "tag": folder_to_tag(text, tag_config),
    }


def is_transform_reversible(config: Optional[TransformConfig]) -> ReversibilityReport:
    """Report whether a transform config loses information.

    Emoji stripping, number prefix removal and custom regex rewrites make a
    config irreversible. Case conversions other than none and Title Case
    only add a warning.
    """
    config = config or TransformConfig()
    warnings: List[str] = []
    reversible = True

    if config.emoji_handling == EmojiHandling.STRIP:
        warnings.append("Emoji stripping is not reversible")
        reversible = False

    if config.number_prefix_handling in (NumberPrefixHandling.STRIP, NumberPrefixHandling.EXTRACT):
        warnings.append("Number prefix removal is not reversible")
        reversible = False

    if config.custom_transforms:
        warnings.append("Custom regex transformations may not be reversible")
        reversible = False

    if config.case_transform is not None and config.case_transform not in _LOSSLESS_CASES:
        warnings.append(
            f"Case transformation to {config.case_transform.value} may not preserve original casing"
        )

    return ReversibilityReport(reversible=reversible, warnings=warnings)
