"""Tests for constants and type definitions."""
import pytest

from dyntags.core.constants import (
    DEFAULT_CONFIG,
    DEFAULT_OPTIONS,
    DYNTAGS_VERSION,
    INVALID_TAG_CHARS,
    CaseTransform,
    ConfigKey,
    ErrorCode,
    RuleDirection,
)


class TestErrorCodes:
    """Test error code definitions."""

    def test_error_codes_unique(self):
        """All error codes must have unique values."""
        codes = [e.value for e in ErrorCode]
        assert len(codes) == len(set(codes))

    def test_success_is_zero(self):
        """SUCCESS code must be 0 for system compatibility."""
        assert ErrorCode.SUCCESS == 0

    def test_error_code_values(self):
        """Test specific error code values."""
        assert ErrorCode.INVALID_INPUT == 1
        assert ErrorCode.NOT_FOUND == 2
        assert ErrorCode.CONFLICT == 4
        assert ErrorCode.INTERNAL_ERROR == 6


class TestEnums:
    """Test the closed value sets stored in rule sets."""

    def test_directions(self):
        """Exactly three directions exist."""
        assert {d.value for d in RuleDirection} == {
            "folder-to-tag",
            "tag-to-folder",
            "bidirectional",
        }

    @pytest.mark.parametrize(
        "value",
        ["none", "snake_case", "kebab-case", "camelCase", "PascalCase", "Title Case", "lowercase", "UPPERCASE"],
    )
    def test_case_transform_values(self, value):
        """Stored case names map onto members."""
        assert CaseTransform(value).value == value


class TestDefaults:
    """Test default configuration."""

    def test_version_format(self):
        """Version is dotted numeric."""
        assert all(part.isdigit() for part in DYNTAGS_VERSION.split("."))

    def test_default_config_sections(self):
        """Every settings section has a default."""
        assert set(DEFAULT_CONFIG) == {
            ConfigKey.VERSION,
            ConfigKey.RULES,
            ConfigKey.OPTIONS,
            ConfigKey.LOGGING,
            ConfigKey.TRANSFORMS,
            ConfigKey.MATCHING,
        }
        assert DEFAULT_CONFIG[ConfigKey.OPTIONS] == DEFAULT_OPTIONS
        assert DEFAULT_CONFIG[ConfigKey.OPTIONS] is not DEFAULT_OPTIONS

    def test_invalid_tag_chars(self):
        """Tags may not hold punctuation used by the host's syntax."""
        assert set(INVALID_TAG_CHARS) == set(".:;,?!@\\")
