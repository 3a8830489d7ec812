"""dyntags Rules System.

This module provides rule models, pattern compilation and matching:
- Glob and regex pattern compilation
- Rule, TransformConfig and RuleMatch value objects
- Rule evaluation, best match and conflict detection
- Rule-set loading and saving

Rules decide which folder paths map to which tags, and back.
"""

from .matcher import (
    calculate_match_confidence,
    evaluate_rule,
    find_best_match,
    find_conflicts,
    find_matching_rules,
    get_folder_to_tag_rules,
    get_tag_to_folder_rules,
    is_rule_applicable,
    match_context,
    validate_rule,
)
from .models import (
    RegexTransform,
    Rule,
    RuleEvaluationContext,
    RuleMatch,
    RuleOptions,
    TransformConfig,
)
from .patterns import (
    InvalidPatternError,
    PatternEntry,
    PatternType,
    clear_pattern_cache,
    compile_pattern,
    glob_to_regex,
    is_glob_pattern,
    matches_pattern,
    pattern_to_regex,
)
from .ruleset import RuleSet, dump_rule_set, load_rule_set, rule_set_from_dict, rule_set_to_dict

__all__ = [
    # Patterns
    "PatternType",
    "PatternEntry",
    "InvalidPatternError",
    "is_glob_pattern",
    "glob_to_regex",
    "compile_pattern",
    "pattern_to_regex",
    "matches_pattern",
    "clear_pattern_cache",
    # Models
    "RegexTransform",
    "TransformConfig",
    "RuleOptions",
    "Rule",
    "RuleEvaluationContext",
    "RuleMatch",
    # Matcher
    "calculate_match_confidence",
    "evaluate_rule",
    "find_matching_rules",
    "find_best_match",
    "find_conflicts",
    "is_rule_applicable",
    "get_folder_to_tag_rules",
    "get_tag_to_folder_rules",
    "match_context",
    "validate_rule",
    # Rule sets
    "RuleSet",
    "rule_set_from_dict",
    "rule_set_to_dict",
    "load_rule_set",
    "dump_rule_set",
]
