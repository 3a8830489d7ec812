#!/usr/bin/env python3
"""Rule matcher for folder path and tag evaluation.

This module decides which mapping rule applies to an input:
- Per-rule evaluation (enabled flag, direction, folder or tag pattern)
- Confidence scoring to rank equally prioritized rules
- Best-match selection (lowest priority number, then highest confidence)
- Conflict detection for rules sharing a priority

Matching never raises: disabled rules, missing patterns and patterns that
fail to compile simply do not match.

Example:
    >>> rules = [
    ...     Rule(id="generic", name="Generic", priority=1, folder_pattern="Projects/*"),
    ...     Rule(id="specific", name="Specific", priority=1, folder_pattern="Projects/Test"),
    ... ]
    >>> context = RuleEvaluationContext(input="Projects/Test", match_type=MatchType.FOLDER)
    >>> find_best_match("Projects/Test", rules, context).rule.id
    'specific'
"""

from typing import Dict, Iterable, List, Optional

from dyntags.core.constants import Confidence, MatchType, RuleDirection
from dyntags.core.logging import get_logger
from dyntags.core.validators import ValidationResult, validate_rule
from dyntags.rules.models import Rule, RuleEvaluationContext, RuleMatch
from dyntags.rules.patterns import matches_pattern


def calculate_match_confidence(text: str, pattern: str) -> float:
    """Score how specifically a pattern describes the text it matched.

    Args:
        text: Matched folder path or tag
        pattern: Pattern that matched

    Returns:
        Score in [0, 1]; 1.0 for an exact match
    """
    if pattern == text:
        return Confidence.EXACT

    confidence = Confidence.BASE
    confidence -= pattern.count("*") * Confidence.STAR_PENALTY
    confidence -= pattern.count("?") * Confidence.QUESTION_PENALTY

    literal_length = len(pattern.replace("*", "").replace("?", ""))
    if text:
        confidence += min(1.0, literal_length / len(text)) * Confidence.LENGTH_BONUS

    confidence += pattern.count("/") * Confidence.DEPTH_BONUS

    return max(0.0, min(1.0, confidence))


def evaluate_rule(text: str, rule: Rule, context: RuleEvaluationContext) -> Optional[RuleMatch]:
    """Evaluate one rule against an input.

    Args:
        text: Folder path or tag to match
        rule: Rule to evaluate
        context: Match type, direction filter and disabled-rule policy

    Returns:
        RuleMatch, or None when the rule does not apply
    """
    logger = get_logger()

    if not rule.enabled and not context.include_disabled:
        logger.debug("Rule skipped: disabled", rule=rule.id)
        return None

    if (
        context.direction is not None
        and rule.direction != RuleDirection.BIDIRECTIONAL
        and rule.direction != context.direction
    ):
        logger.debug("Rule skipped: direction", rule=rule.id, direction=rule.direction.value)
        return None

    pattern = rule.pattern_for(context.match_type)
    if not pattern:
        logger.debug("Rule skipped: no pattern", rule=rule.id, match_type=context.match_type.value)
        return None

    if not matches_pattern(text, pattern):
        return None

    confidence = calculate_match_confidence(text, pattern)
    logger.debug("Rule matched", rule=rule.id, pattern=pattern, confidence=round(confidence, 3))

    return RuleMatch(
        rule=rule,
        match_type=context.match_type,
        matched_pattern=pattern,
        confidence=confidence,
    )


def find_matching_rules(
    text: str, rules: Iterable[Rule], context: RuleEvaluationContext
) -> List[RuleMatch]:
    """Return every matching rule, in rule order."""
    matches = []
    for rule in rules:
        match = evaluate_rule(text, rule, context)
        if match is not None:
            matches.append(match)
    return matches


def find_best_match(
    text: str, rules: Iterable[Rule], context: RuleEvaluationContext
) -> Optional[RuleMatch]:
    """Select the match with the lowest priority number.

    Ties are broken by higher confidence; remaining ties keep rule order.

    Returns:
        Best RuleMatch, or None if nothing matches
    """
    matches = find_matching_rules(text, rules, context)
    if not matches:
        return None

    matches.sort(key=lambda m: (m.rule.priority, -m.confidence))
    return matches[0]


def find_conflicts(
    text: str, rules: Iterable[Rule], context: RuleEvaluationContext
) -> List[List[RuleMatch]]:
    """Group matches sharing a priority.

    Returns:
        Groups of two or more matches, ordered by first appearance
    """
    groups: Dict[int, List[RuleMatch]] = {}
    for match in find_matching_rules(text, rules, context):
        groups.setdefault(match.rule.priority, []).append(match)

    return [group for group in groups.values() if len(group) > 1]


def is_rule_applicable(rule: Rule, direction: RuleDirection) -> bool:
    """Check whether a rule may be used in the given direction."""
    return rule.direction in (RuleDirection.BIDIRECTIONAL, RuleDirection(direction))


def get_folder_to_tag_rules(rules: Iterable[Rule]) -> List[Rule]:
    """Enabled rules with a folder pattern that can map folders to tags."""
    return [
        rule
        for rule in rules
        if rule.enabled
        and rule.folder_pattern
        and is_rule_applicable(rule, RuleDirection.FOLDER_TO_TAG)
    ]


def get_tag_to_folder_rules(rules: Iterable[Rule]) -> List[Rule]:
    """Enabled rules with a tag pattern that can map tags to folders."""
    return [
        rule
        for rule in rules
        if rule.enabled
        and rule.tag_pattern
        and is_rule_applicable(rule, RuleDirection.TAG_TO_FOLDER)
    ]


def match_context(
    text: str,
    match_type: MatchType,
    direction: Optional[RuleDirection] = None,
    include_disabled: bool = False,
) -> RuleEvaluationContext:
    """Build an evaluation context for one input."""
    return RuleEvaluationContext(
        input=text,
        match_type=match_type,
        direction=direction,
        include_disabled=include_disabled,
    )


__all__ = [
    "ValidationResult",
    "calculate_match_confidence",
    "evaluate_rule",
    "find_best_match",
    "find_conflicts",
    "find_matching_rules",
    "get_folder_to_tag_rules",
    "get_tag_to_folder_rules",
    "is_rule_applicable",
    "match_context",
    "validate_rule",
]
