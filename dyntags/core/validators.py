"""
dyntags Core: Rule and Settings Validators.

Rule validation is advisory: it reports every problem it finds as a stable,
human-readable sentence and never stops the matcher from being called
with an invalid rule. Settings validation (used when loading a rule set
from disk) raises ValidationError on the first structural problem.
"""
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List

from dyntags.core.constants import (
    ConfigKey,
    ErrorCode,
    RuleDirection,
    ValidationMessage,
)

if TYPE_CHECKING:
    from dyntags.rules.models import Rule


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


@dataclass
class ValidationResult:
    """Outcome of validate_rule()."""

    valid: bool
    errors: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or value.strip() == ""


def _requires_folder_pattern(direction: RuleDirection) -> bool:
    return direction in (RuleDirection.FOLDER_TO_TAG, RuleDirection.BIDIRECTIONAL)


def _requires_tag_pattern(direction: RuleDirection) -> bool:
    return direction in (RuleDirection.TAG_TO_FOLDER, RuleDirection.BIDIRECTIONAL)


def validate_rule(rule: "Rule") -> ValidationResult:
    """Check a rule's structure and patterns.

    All problems are collected; the check never short-circuits.

    Args:
        rule: Rule to validate

    Returns:
        ValidationResult with valid flag and error sentences
    """
    from dyntags.rules.patterns import InvalidPatternError, pattern_to_regex

    errors: List[str] = []

    if _is_blank(rule.id):
        errors.append(ValidationMessage.MISSING_ID)

    if _is_blank(rule.name):
        errors.append(ValidationMessage.MISSING_NAME)

    if not isinstance(rule.priority, int) or rule.priority < 0:
        errors.append(ValidationMessage.NEGATIVE_PRIORITY)

    if _requires_folder_pattern(rule.direction) and not rule.folder_pattern:
        errors.append(ValidationMessage.MISSING_FOLDER_PATTERN)

    if _requires_tag_pattern(rule.direction) and not rule.tag_pattern:
        errors.append(ValidationMessage.MISSING_TAG_PATTERN)

    if rule.folder_pattern:
        try:
            pattern_to_regex(rule.folder_pattern)
        except InvalidPatternError as e:
            errors.append(ValidationMessage.INVALID_FOLDER_PATTERN.format(error=e.message))

    if rule.tag_pattern:
        try:
            pattern_to_regex(rule.tag_pattern)
        except InvalidPatternError as e:
            errors.append(ValidationMessage.INVALID_TAG_PATTERN.format(error=e.message))

    return ValidationResult(valid=not errors, errors=errors)


def validate_pattern(pattern: Any) -> bool:
    """Validate a glob or regex pattern.

    Args:
        pattern: Pattern to validate

    Returns:
        True if the pattern compiles
    """
    from dyntags.rules.patterns import InvalidPatternError, pattern_to_regex

    if not isinstance(pattern, str) or not pattern:
        return False

    try:
        pattern_to_regex(pattern)
    except InvalidPatternError:
        return False

    return True


def validate_settings(settings: Dict[str, Any]) -> bool:
    """Validate the structure of a stored settings document.

    Only the envelope is checked here (types of ``rules`` and ``options``,
    unique rule IDs); individual rules are parsed by Rule.from_dict() and
    checked by validate_rule().

    Args:
        settings: Settings dictionary

    Returns:
        True if valid

    Raises:
        ValidationError: If the document is malformed
    """
    if not isinstance(settings, dict):
        raise ValidationError("Settings must be a dictionary")

    rules = settings.get(ConfigKey.RULES, [])
    if not isinstance(rules, list):
        raise ValidationError("Rules must be a list")

    seen_ids = set()
    for i, rule in enumerate(rules):
        if not isinstance(rule, dict):
            raise ValidationError(f"Invalid rule at index {i}: rule must be a dictionary")
        rule_id = rule.get("id")
        if rule_id in seen_ids:
            raise ValidationError(f"Duplicate rule ID at index {i}: {rule_id}", ErrorCode.CONFLICT)
        seen_ids.add(rule_id)

    options = settings.get(ConfigKey.OPTIONS, {})
    if not isinstance(options, dict):
        raise ValidationError("Options must be a dictionary")

    return True
