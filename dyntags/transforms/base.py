#!/usr/bin/env python3
"""Base classes for text transformation stages.

This module provides the foundation for pipeline stages:
- TextTransform abstract base class
- TransformResult for returning transformed text
- TransformError for error handling

Example:
    >>> class UppercaseStage(TextTransform):
    ...     def transform(self, text):
    ...         return text.upper()
    ...
    >>> UppercaseStage().apply("projects").content
    'PROJECTS'
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from dyntags.core.constants import ErrorCode


@dataclass
class TransformResult:
    """Result of a transformation.

    On failure ``content`` holds the input the stage received.
    """

    content: str
    success: bool = True
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    transform_name: Optional[str] = None


class TransformError(Exception):
    """Error during transformation."""

    def __init__(self, message: str, transform_name: Optional[str] = None):
        self.message = message
        self.transform_name = transform_name
        self.error_code = ErrorCode.INTERNAL_ERROR
        super().__init__(message)


class TextTransform(ABC):
    """Abstract base class for one pipeline stage.

    Subclasses implement transform(); apply() wraps it so that a stage
    never raises to the pipeline.
    """

    def __init__(self, name: Optional[str] = None, enabled: bool = True):
        """Initialize transform.

        Args:
            name: Optional name for this stage
            enabled: Whether the stage runs
        """
        self.name = name or self.__class__.__name__
        self.enabled = enabled

    @abstractmethod
    def transform(self, text: str) -> str:
        """Transform text.

        Raises:
            TransformError: If transformation fails
        """

    def apply(self, text: str) -> TransformResult:
        """Apply the stage, capturing any error in the result."""
        if not self.enabled:
            return TransformResult(
                content=text,
                metadata={"skipped": True, "reason": "Transform disabled"},
                transform_name=self.name,
            )

        try:
            transformed = self.transform(text)
        except Exception as e:
            return TransformResult(
                content=text,
                success=False,
                error=f"{self.name}: {e}",
                transform_name=self.name,
            )

        return TransformResult(content=transformed, transform_name=self.name)

    def __repr__(self) -> str:
        """String representation."""
        status = "enabled" if self.enabled else "disabled"
        return f"<{self.__class__.__name__} name={self.name} {status}>"
