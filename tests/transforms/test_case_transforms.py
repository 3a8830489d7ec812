#!/usr/bin/env python3
"""Tests for case conversions."""

import pytest

from dyntags.core.constants import CaseTransform
from dyntags.transforms.case import (
    apply_case_transform,
    apply_case_transform_to_path,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    to_snake_case,
    to_title_case,
)


class TestSnakeCase:
    """Tests for to_snake_case."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("My Project Name", "my_project_name"),
            ("myProjectName", "my_project_name"),
            ("my-project", "my_project"),
            ("already_snake", "already_snake"),
            ("  Leading Space", "leading_space"),
        ],
    )
    def test_conversion(self, text, expected):
        """Test words, camel humps and hyphens become underscores."""
        assert to_snake_case(text) == expected


class TestKebabCase:
    """Tests for to_kebab_case."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("My Project Name", "my-project-name"),
            ("My_Project Name", "my-project-name"),
            ("myProject", "my-project"),
            ("My Cool Project!!!", "my-cool-project!!!"),
        ],
    )
    def test_conversion(self, text, expected):
        """Test words, camel humps and underscores become hyphens."""
        assert to_kebab_case(text) == expected


class TestTitleCase:
    """Tests for to_title_case."""

    def test_from_snake(self):
        """Test underscores become spaces."""
        assert to_title_case("my_project_name") == "My Project Name"

    def test_collapses_separators(self):
        """Test separator runs and whitespace collapse."""
        assert to_title_case("hello   world--again") == "Hello World Again"

    def test_keeps_inner_case(self):
        """Test only the first letter of a word changes."""
        assert to_title_case("iPhone notes") == "IPhone Notes"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("(draft) notes", "(Draft) Notes"),
            ("o'neil plans", "O'Neil Plans"),
            ("#inbox [old]", "#Inbox [Old]"),
            ("élan vital", "Élan Vital"),
        ],
    )
    def test_first_letter_after_punctuation(self, text, expected):
        """Test leading punctuation does not hide the first letter."""
        assert to_title_case(text) == expected

    @pytest.mark.parametrize("text", ["My Project Name", "Inbox", "A B C"])
    def test_snake_round_trip(self, text):
        """Test Title Case and snake_case undo each other."""
        assert to_title_case(to_snake_case(text)) == text
        assert to_title_case(to_snake_case(to_title_case(to_snake_case(text)))) == text


class TestCamelAndPascalCase:
    """Tests for to_camel_case and to_pascal_case."""

    def test_camel(self):
        """Test camelCase conversion."""
        assert to_camel_case("my project name") == "myProjectName"
        assert to_camel_case("My Project") == "myProject"

    def test_pascal(self):
        """Test PascalCase conversion."""
        assert to_pascal_case("my-project_name") == "MyProjectName"

    def test_empty(self):
        """Test empty input."""
        assert to_camel_case("") == ""
        assert to_pascal_case("") == ""


class TestApplyCaseTransform:
    """Tests for apply_case_transform."""

    def test_none_is_identity(self):
        """Test none leaves text untouched."""
        assert apply_case_transform("Mixed Case_text", "none") == "Mixed Case_text"
        assert apply_case_transform("Mixed", None) == "Mixed"

    def test_unknown_is_identity(self):
        """Test unrecognized names leave text untouched."""
        assert apply_case_transform("Mixed", "sPoNgEcAsE") == "Mixed"

    def test_enum_and_string(self):
        """Test members and their stored values are both accepted."""
        assert apply_case_transform("Hello", CaseTransform.UPPERCASE) == "HELLO"
        assert apply_case_transform("Hello", "lowercase") == "hello"
        assert apply_case_transform("my notes", "PascalCase") == "MyNotes"

    def test_path_segments(self):
        """Test each path segment is converted on its own."""
        assert apply_case_transform_to_path("My Area/Sub Folder", "kebab-case") == "my-area/sub-folder"
        assert apply_case_transform_to_path("my area/sub folder", "camelCase") == "myArea/subFolder"
