"""
dyntags Core: Constants and Type Definitions

This module provides library-wide constants, error codes, enumerations and
default settings shared by the matcher, the transform pipeline and the host
glue (config, rule-set store, CLI).
"""
from enum import Enum, IntEnum

# Version information
DYNTAGS_VERSION = "1.0.0"


# Error codes (0-9 range)
class ErrorCode(IntEnum):
    """Standardized error codes for dyntags operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad rule, pattern or configuration
    NOT_FOUND = 2  # Rule, file or mapping doesn't exist
    CONFLICT = 4  # Several rules share the winning priority
    INTERNAL_ERROR = 6  # Bug in dyntags


class RuleDirection(Enum):
    """Which evaluation contexts a rule participates in."""

    FOLDER_TO_TAG = "folder-to-tag"
    TAG_TO_FOLDER = "tag-to-folder"
    BIDIRECTIONAL = "bidirectional"


class MatchType(Enum):
    """Which side of a rule an input is matched against."""

    FOLDER = "folder"
    TAG = "tag"


class CaseTransform(Enum):
    """Naming conventions supported by the case transformer."""

    NONE = "none"
    SNAKE_CASE = "snake_case"
    KEBAB_CASE = "kebab-case"
    CAMEL_CASE = "camelCase"
    PASCAL_CASE = "PascalCase"
    TITLE_CASE = "Title Case"
    LOWERCASE = "lowercase"
    UPPERCASE = "UPPERCASE"


class EmojiHandling(Enum):
    """Emoji handling mode."""

    KEEP = "keep"
    STRIP = "strip"


class NumberPrefixHandling(Enum):
    """Leading numeral handling mode."""

    KEEP = "keep"
    STRIP = "strip"
    EXTRACT = "extract"


class NumberPrefixFormat(Enum):
    """Output format when re-adding a numeric prefix."""

    JOHNNY_DECIMAL = "johnny-decimal"  # "01 - Name"
    SIMPLE = "simple"  # "01 Name"


class ConflictStrategy(Enum):
    """How a host resolves same-priority conflicts."""

    PROMPT = "prompt"
    AUTO_RESOLVE = "auto-resolve"
    SKIP = "skip"


class TagSpecificity(Enum):
    """Preferred tag depth when several tags could apply."""

    BROADER = "broader"
    NARROWER = "narrower"


# Characters Obsidian-style tag names cannot contain
INVALID_TAG_CHARS = ".:;,?!@\\"

TAG_PREFIX = "#"
PATH_SEPARATOR = "/"


# Confidence scoring coefficients (kept for compatibility with stored rule sets)
class Confidence:
    """Coefficients of the rule specificity heuristic."""

    EXACT = 1.0
    BASE = 0.5
    STAR_PENALTY = 0.1
    QUESTION_PENALTY = 0.05
    LENGTH_BONUS = 0.2
    DEPTH_BONUS = 0.05


# Validation messages shown verbatim by host UIs
class ValidationMessage:
    """Stable validator error strings."""

    MISSING_ID = "Rule must have a valid ID"
    MISSING_NAME = "Rule must have a name"
    NEGATIVE_PRIORITY = "Priority must be non-negative"
    MISSING_FOLDER_PATTERN = "Folder-to-tag rules must have a folder pattern"
    MISSING_TAG_PATTERN = "Tag-to-folder rules must have a tag pattern"
    INVALID_FOLDER_PATTERN = "Invalid folder pattern: {error}"
    INVALID_TAG_PATTERN = "Invalid tag pattern: {error}"


# Configuration keys
class ConfigKey:
    """Configuration key constants."""

    # Top-level keys
    VERSION = "version"
    RULES = "rules"
    OPTIONS = "options"
    LOGGING = "logging"
    TRANSFORMS = "transforms"
    MATCHING = "matching"

    # Logging configuration
    LOG_LEVEL = "level"
    LOG_FILE = "file"

    # Pipeline configuration
    PRESERVE_ON_ERROR = "preserve_on_error"

    # Matching configuration
    INCLUDE_DISABLED = "include_disabled"


# Host options (carried through, interpreted by the host layer)
DEFAULT_OPTIONS = {
    "syncOnSave": False,
    "syncOnFileClose": False,
    "syncOnCreate": True,
    "syncOnRename": True,
    "showNotifications": True,
    "previewChanges": False,
    "debugMode": False,
    "handleFolderNotes": False,
    "moveAttachments": False,
    "defaultFolderForUntagged": "",
}


# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.VERSION: "1.0",
    ConfigKey.RULES: [],
    ConfigKey.OPTIONS: dict(DEFAULT_OPTIONS),
    ConfigKey.LOGGING: {
        ConfigKey.LOG_LEVEL: "WARNING",
        ConfigKey.LOG_FILE: None,
    },
    ConfigKey.TRANSFORMS: {
        ConfigKey.PRESERVE_ON_ERROR: False,
    },
    ConfigKey.MATCHING: {
        ConfigKey.INCLUDE_DISABLED: False,
    },
}
