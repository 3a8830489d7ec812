#!/usr/bin/env python3
"""Tests for the pipeline stage base classes."""

import pytest

from dyntags.core.constants import ErrorCode
from dyntags.transforms.base import TextTransform, TransformError, TransformResult


class ReverseStage(TextTransform):
    """Stage that reverses its input."""

    def transform(self, text):
        return text[::-1]


class RejectingStage(TextTransform):
    """Stage that always fails."""

    def transform(self, text):
        raise TransformError("cannot handle input", self.name)


class TestTransformResult:
    """Tests for TransformResult."""

    def test_defaults(self):
        """Test default values."""
        result = TransformResult(content="x")
        assert result.success is True
        assert result.error is None
        assert result.metadata == {}
        assert result.transform_name is None


class TestTransformError:
    """Tests for TransformError."""

    def test_attributes(self):
        """Test message, stage name and error code."""
        error = TransformError("bad", "case")
        assert error.message == "bad"
        assert error.transform_name == "case"
        assert error.error_code == ErrorCode.INTERNAL_ERROR
        assert str(error) == "bad"


class TestTextTransform:
    """Tests for TextTransform."""

    def test_abstract(self):
        """Test the base class cannot be instantiated."""
        with pytest.raises(TypeError):
            TextTransform()

    def test_default_name(self):
        """Test stages are named after their class."""
        assert ReverseStage().name == "ReverseStage"
        assert ReverseStage("rev").name == "rev"

    def test_apply_success(self):
        """Test a successful stage."""
        result = ReverseStage("rev").apply("abc")
        assert result.success
        assert result.content == "cba"
        assert result.transform_name == "rev"

    def test_apply_failure(self):
        """Test failures are captured, keeping the input."""
        result = RejectingStage("reject").apply("abc")
        assert not result.success
        assert result.content == "abc"
        assert result.error == "reject: cannot handle input"

    def test_disabled(self):
        """Test disabled stages pass input through."""
        result = ReverseStage(enabled=False).apply("abc")
        assert result.content == "abc"
        assert result.metadata["skipped"] is True

    def test_repr(self):
        """Test string representation."""
        assert repr(ReverseStage("rev")) == "<ReverseStage name=rev enabled>"
        assert repr(ReverseStage("rev", enabled=False)) == "<ReverseStage name=rev disabled>"
