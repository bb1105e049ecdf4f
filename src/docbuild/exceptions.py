"""
Custom exception hierarchy for the documentation build cache.

All exceptions inherit from DocBuildError, which provides optional context
for structured error handling and logging.

The cache itself is policy-free: failures raised by parser compute functions
are never wrapped and reach the caller unchanged.
"""

from __future__ import annotations

from typing import Any


class DocBuildError(Exception):
    """Base exception for all documentation build cache errors.

    Attributes:
        message: Human-readable error message.
        context: Optional structured context for logging/debugging.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, context={self.context!r})"


class ConfigurationError(DocBuildError):
    """Raised when the build configuration is invalid or missing.

    Examples:
        - Docs root does not exist
        - Base docs link is not a slash-delimited path
    """

    pass


class UnknownNamespaceError(DocBuildError):
    """Raised when a namespace name does not match any artifact kind.

    Context should include:
        - namespace: The name that was requested
        - known: The valid namespace names
    """

    pass
