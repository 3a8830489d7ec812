#!/usr/bin/env python3
"""Tests for rule, pattern and settings validation."""

import pytest

from dyntags.core.constants import ErrorCode
from dyntags.core.validators import (
    ValidationError,
    ValidationResult,
    validate_pattern,
    validate_rule,
    validate_settings,
)
from dyntags.rules import matcher
from dyntags.rules.models import Rule


class TestValidateRule:
    """Tests for validate_rule."""

    def test_valid_rule(self, projects_rule):
        """Test a complete rule has no errors."""
        result = validate_rule(projects_rule)
        assert result == ValidationResult(valid=True, errors=[])
        assert bool(result)

    def test_all_structural_errors(self):
        """Test every problem is reported, in a fixed order."""
        result = validate_rule(Rule(id="", name="", priority=-1))

        assert not result
        assert result.errors == [
            "Rule must have a valid ID",
            "Rule must have a name",
            "Priority must be non-negative",
            "Folder-to-tag rules must have a folder pattern",
            "Tag-to-folder rules must have a tag pattern",
        ]

    def test_blank_strings(self):
        """Test whitespace-only ID and name are missing."""
        result = validate_rule(Rule(id="   ", name="\t", folder_pattern="a", tag_pattern="b"))
        assert result.errors == ["Rule must have a valid ID", "Rule must have a name"]

    def test_one_way_rules(self):
        """Test one-way rules need only their own pattern."""
        assert validate_rule(Rule(id="f", name="F", direction="folder-to-tag", folder_pattern="A/*"))
        assert validate_rule(Rule(id="t", name="T", direction="tag-to-folder", tag_pattern="a/*"))

        result = validate_rule(Rule(id="t", name="T", direction="tag-to-folder", folder_pattern="A"))
        assert result.errors == ["Tag-to-folder rules must have a tag pattern"]

    def test_invalid_patterns(self):
        """Test malformed patterns carry the compiler's message."""
        result = validate_rule(Rule(id="r", name="R", folder_pattern="(x", tag_pattern="[y"))

        assert len(result.errors) == 2
        assert result.errors[0].startswith("Invalid folder pattern: ")
        assert result.errors[1].startswith("Invalid tag pattern: ")
        assert len(result.errors[0]) > len("Invalid folder pattern: ")

    def test_reexported_by_matcher(self):
        """Test the matcher exposes the same validator."""
        assert matcher.validate_rule is validate_rule


class TestValidatePattern:
    """Tests for validate_pattern."""

    @pytest.mark.parametrize("pattern", ["Projects/*", "**/Inbox", r"^Areas/(\d+)$", "Inbox"])
    def test_valid(self, pattern):
        """Test globs and regexes that compile."""
        assert validate_pattern(pattern) is True

    @pytest.mark.parametrize("pattern", ["(x", "", None, 42])
    def test_invalid(self, pattern):
        """Test malformed and non-string patterns."""
        assert validate_pattern(pattern) is False


class TestValidateSettings:
    """Tests for validate_settings."""

    def test_valid(self, settings_data):
        """Test a well-formed document."""
        assert validate_settings(settings_data) is True

    def test_empty(self):
        """Test an empty document is valid."""
        assert validate_settings({}) is True

    @pytest.mark.parametrize(
        "settings,message",
        [
            ([], "Settings must be a dictionary"),
            ({"rules": {}}, "Rules must be a list"),
            ({"rules": ["x"]}, "Invalid rule at index 0"),
            ({"options": []}, "Options must be a dictionary"),
        ],
    )
    def test_structure(self, settings, message):
        """Test envelope problems."""
        with pytest.raises(ValidationError, match=message) as exc_info:
            validate_settings(settings)
        assert exc_info.value.error_code == ErrorCode.INVALID_INPUT

    def test_duplicate_ids(self):
        """Test duplicate rule IDs are a conflict."""
        with pytest.raises(ValidationError) as exc_info:
            validate_settings({"rules": [{"id": "a"}, {"id": "a"}]})

        assert exc_info.value.error_code == ErrorCode.CONFLICT
        assert "Duplicate rule ID at index 1: a" in exc_info.value.message
