#!/usr/bin/env python3
"""Rule and transform value objects.

Rules are immutable for the lifetime of a matching or transformation call.
Each model converts to and from the camelCase dictionary layout used by
stored rule sets (JSON or YAML), so a persisted rule set round-trips
without loss:

    >>> rule = Rule.from_dict({
    ...     "id": "projects", "name": "Projects", "enabled": True,
    ...     "priority": 1, "direction": "bidirectional",
    ...     "folderPattern": "Projects/*", "tagPattern": "projects/*",
    ...     "options": {},
    ... })
    >>> rule.to_dict()["folderPattern"]
    'Projects/*'
"""

import dataclasses
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple, Type

from dyntags.core.constants import (
    CaseTransform,
    ConflictStrategy,
    EmojiHandling,
    MatchType,
    NumberPrefixHandling,
    RuleDirection,
    TagSpecificity,
)
from dyntags.core.validators import ValidationError

REQUIRED_RULE_KEYS = ("id", "name", "enabled", "priority", "direction", "options")


def _camel(name: str) -> str:
    """Convert a snake_case field name to its camelCase key."""
    return re.sub(r"_([a-z])", lambda m: m.group(1).upper(), name)


def _coerce_enum(enum_cls: Type[Enum], value: Any) -> Any:
    """Accept either an enum member or its stored string value."""
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        valid = [m.value for m in enum_cls]
        raise ValidationError(f"Invalid {enum_cls.__name__} value: {value!r}. Must be one of {valid}")


def _check_keys(data: Dict[str, Any], known: Iterable[str], what: str) -> None:
    if not isinstance(data, dict):
        raise ValidationError(f"{what} must be a dictionary")
    unknown = sorted(set(data) - set(known))
    if unknown:
        raise ValidationError(f"Unknown {what} field(s): {', '.join(unknown)}")


@dataclass(frozen=True)
class RegexTransform:
    """A single regex replacement applied by the pipeline."""

    pattern: str
    replacement: str
    flags: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"pattern": self.pattern, "replacement": self.replacement}
        if self.flags is not None:
            data["flags"] = self.flags
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RegexTransform":
        _check_keys(data, ("pattern", "replacement", "flags"), "regex transform")
        if "pattern" not in data:
            raise ValidationError("Regex transform must have 'pattern' field")
        return cls(
            pattern=data["pattern"],
            replacement=data.get("replacement", ""),
            flags=data.get("flags"),
        )


@dataclass(frozen=True)
class TransformConfig:
    """One directional transformation (folder -> tag or tag -> folder)."""

    case_transform: Optional[CaseTransform] = None
    emoji_handling: Optional[EmojiHandling] = None
    number_prefix_handling: Optional[NumberPrefixHandling] = None
    custom_transforms: Tuple[RegexTransform, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "case_transform", _coerce_enum(CaseTransform, self.case_transform))
        object.__setattr__(self, "emoji_handling", _coerce_enum(EmojiHandling, self.emoji_handling))
        object.__setattr__(
            self,
            "number_prefix_handling",
            _coerce_enum(NumberPrefixHandling, self.number_prefix_handling),
        )
        transforms = tuple(
            t if isinstance(t, RegexTransform) else RegexTransform.from_dict(t)
            for t in (self.custom_transforms or ())
        )
        object.__setattr__(self, "custom_transforms", transforms)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.case_transform is not None:
            data["caseTransform"] = self.case_transform.value
        if self.emoji_handling is not None:
            data["emojiHandling"] = self.emoji_handling.value
        if self.number_prefix_handling is not None:
            data["numberPrefixHandling"] = self.number_prefix_handling.value
        if self.custom_transforms:
            data["customTransforms"] = [t.to_dict() for t in self.custom_transforms]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransformConfig":
        _check_keys(
            data,
            ("caseTransform", "emojiHandling", "numberPrefixHandling", "customTransforms"),
            "transform config",
        )
        return cls(
            case_transform=data.get("caseTransform"),
            emoji_handling=data.get("emojiHandling"),
            number_prefix_handling=data.get("numberPrefixHandling"),
            custom_transforms=tuple(
                RegexTransform.from_dict(t) for t in data.get("customTransforms") or ()
            ),
        )


@dataclass(frozen=True)
class RuleOptions:
    """Per-rule behaviour flags consumed by the host sync layer."""

    create_folders: bool = True
    add_tags: bool = True
    remove_orphaned_tags: bool = False
    sync_on_file_create: bool = True
    sync_on_file_move: bool = True
    sync_on_file_rename: bool = True
    on_conflict: Optional[ConflictStrategy] = None
    tag_specificity: Optional[TagSpecificity] = None
    remove_source_tag: Optional[bool] = None
    keep_destination_tag: Optional[bool] = None
    keep_relation_tags: Optional[bool] = None
    handle_folder_note: Optional[bool] = None
    move_attachments: Optional[bool] = None

    def __post_init__(self):
        object.__setattr__(self, "on_conflict", _coerce_enum(ConflictStrategy, self.on_conflict))
        object.__setattr__(
            self, "tag_specificity", _coerce_enum(TagSpecificity, self.tag_specificity)
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            data[_camel(f.name)] = value.value if isinstance(value, Enum) else value
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "RuleOptions":
        data = data or {}
        keys = {_camel(f.name): f.name for f in dataclasses.fields(cls)}
        _check_keys(data, keys, "rule options")
        return cls(**{keys[k]: v for k, v in data.items()})


@dataclass(frozen=True)
class Rule:
    """A folder <-> tag mapping rule.

    Lower priority numbers take precedence. Rules that map folders to tags
    (folder-to-tag, bidirectional) need a folder pattern; rules that map
    tags to folders (tag-to-folder, bidirectional) need a tag pattern.
    Missing patterns are reported by validate_rule(), not rejected here.
    """

    id: str
    name: str
    enabled: bool = True
    priority: int = 0
    direction: RuleDirection = RuleDirection.BIDIRECTIONAL
    description: Optional[str] = None
    folder_pattern: Optional[str] = None
    folder_entry_point: Optional[str] = None
    folder_transforms: Optional[TransformConfig] = None
    tag_pattern: Optional[str] = None
    tag_entry_point: Optional[str] = None
    tag_transforms: Optional[TransformConfig] = None
    options: RuleOptions = field(default_factory=RuleOptions)

    def __post_init__(self):
        object.__setattr__(self, "direction", _coerce_enum(RuleDirection, self.direction))
        for name in ("folder_pattern", "folder_entry_point", "tag_pattern", "tag_entry_point"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ValidationError(
                    f"{_camel(name)} must be a string, got {type(value).__name__}"
                )
        for name in ("folder_transforms", "tag_transforms"):
            value = getattr(self, name)
            if isinstance(value, dict):
                object.__setattr__(self, name, TransformConfig.from_dict(value))
        if isinstance(self.options, dict):
            object.__setattr__(self, "options", RuleOptions.from_dict(self.options))

    def pattern_for(self, match_type: MatchType) -> Optional[str]:
        """Return the folder or tag pattern of this rule."""
        if match_type == MatchType.FOLDER:
            return self.folder_pattern
        return self.tag_pattern

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "enabled": self.enabled,
            "priority": self.priority,
            "direction": self.direction.value,
        }
        if self.description is not None:
            data["description"] = self.description
        for name in ("folder_pattern", "folder_entry_point", "tag_pattern", "tag_entry_point"):
            value = getattr(self, name)
            if value is not None:
                data[_camel(name)] = value
        if self.folder_transforms is not None:
            data["folderTransforms"] = self.folder_transforms.to_dict()
        if self.tag_transforms is not None:
            data["tagTransforms"] = self.tag_transforms.to_dict()
        data["options"] = self.options.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Rule":
        keys = {_camel(f.name): f.name for f in dataclasses.fields(cls)}
        _check_keys(data, keys, "rule")

        missing = [k for k in REQUIRED_RULE_KEYS if k not in data]
        if missing:
            raise ValidationError(f"Rule is missing required field(s): {', '.join(missing)}")

        kwargs = {keys[k]: v for k, v in data.items()}
        for name in ("folder_transforms", "tag_transforms"):
            if kwargs.get(name) is not None:
                kwargs[name] = TransformConfig.from_dict(kwargs[name])
        kwargs["options"] = RuleOptions.from_dict(kwargs["options"])
        return cls(**kwargs)


@dataclass(frozen=True)
class RuleEvaluationContext:
    """What is being matched and which rules may take part."""

    input: str
    match_type: MatchType
    direction: Optional[RuleDirection] = None
    include_disabled: bool = False

    def __post_init__(self):
        object.__setattr__(self, "match_type", _coerce_enum(MatchType, self.match_type))
        object.__setattr__(self, "direction", _coerce_enum(RuleDirection, self.direction))


@dataclass(frozen=True)
class RuleMatch:
    """A rule that matched an input, with its specificity score."""

    rule: Rule
    match_type: MatchType
    matched_pattern: str
    confidence: float
