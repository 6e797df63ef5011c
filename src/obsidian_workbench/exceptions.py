"""Centralized exception hierarchy for obsidian-workbench.

All custom exceptions inherit from ObsidianWorkbenchError, so callers at the
command boundary can recover from every workbench failure with a single
except clause and report it to the user.

Exception Hierarchy:
    ObsidianWorkbenchError (base)
     ConfigurationError - Configuration loading/validation errors
     InvalidNameError - Empty or colliding workbench names
     NotFoundError - Lookup failures
        WorkbenchNotFoundError - Unknown workbench name
        IdentifierNotFoundError - Identifier does not resolve to a heading
        CardNotFoundError - Card is not in the workbench
     ProtectedWorkbenchError - Attempt to delete/rename the default workbench
     ExtractionError - No heading could be read at a location
     PersistenceError - Snapshot write or load failed

Usage Examples:
    try:
        store.delete_workbench("default")
    except ObsidianWorkbenchError as e:
        logger.error("delete_failed", **e.to_dict())
"""

from typing import Any

from .error_codes import ErrorCode


class ObsidianWorkbenchError(Exception):
    """Base exception for all workbench errors.

    Attributes:
        message: Human-readable error message
        suggestion: Optional suggestion for resolving the error
        error_code: Structured error code for machine-readable handling
        context: Additional context for debugging (names, paths, identifiers)
    """

    default_error_code: ErrorCode | None = None

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            suggestion: Optional suggestion for resolving the error
            error_code: Structured error code (e.g., "WB-NAME-001"); falls
                back to the class default
            context: Additional context for debugging
        """
        self.message = message
        self.suggestion = suggestion
        if error_code is None and self.default_error_code is not None:
            error_code = self.default_error_code.value
        self.error_code = error_code
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with error code and suggestion if available."""
        parts = []
        if self.error_code:
            parts.append(f"[{self.error_code}] {self.message}")
        else:
            parts.append(self.message)
        if self.suggestion:
            parts.append(f"\nSuggestion: {self.suggestion}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging.

        Returns:
            Dictionary with error details
        """
        return {
            "message": self.message,
            "error_code": self.error_code,
            "suggestion": self.suggestion,
            "context": self.context,
            "type": type(self).__name__,
        }


class ConfigurationError(ObsidianWorkbenchError):
    """Configuration loading or validation errors.

    Raised when:
    - Config file is malformed
    - Configuration values fail validation
    """

    default_error_code = ErrorCode.CFG_INVALID


class InvalidNameError(ObsidianWorkbenchError):
    """Workbench name rejected.

    Raised when:
    - Name is empty or only whitespace
    - Name collides with a different existing workbench
    """

    default_error_code = ErrorCode.NAME_INVALID


class NotFoundError(ObsidianWorkbenchError):
    """Base class for lookup failures."""


class WorkbenchNotFoundError(NotFoundError):
    """No workbench with the requested name exists."""

    default_error_code = ErrorCode.NOTFOUND_WORKBENCH


class IdentifierNotFoundError(NotFoundError):
    """An identifier did not resolve to a heading in the vault."""

    default_error_code = ErrorCode.NOTFOUND_IDENTIFIER


class CardNotFoundError(NotFoundError):
    """A card (or card position) is not present in the workbench."""

    default_error_code = ErrorCode.NOTFOUND_CARD


class ProtectedWorkbenchError(ObsidianWorkbenchError):
    """The default workbench cannot be deleted or renamed."""

    default_error_code = ErrorCode.PROTECTED_DEFAULT


class ExtractionError(ObsidianWorkbenchError):
    """The outline host could not read a heading at the expected location.

    Raised when:
    - The location lies before the first heading of the note
    - The note file is missing or unreadable
    """

    default_error_code = ErrorCode.EXTRACT_NOT_A_HEADING


class PersistenceError(ObsidianWorkbenchError):
    """Snapshot write or load failed.

    Raised when:
    - The snapshot file cannot be written
    - The snapshot file is unreadable, not JSON, or fails validation
    """

    default_error_code = ErrorCode.PERSIST_SAVE_FAILED


__all__ = [
    "CardNotFoundError",
    "ConfigurationError",
    "ExtractionError",
    "IdentifierNotFoundError",
    "InvalidNameError",
    "NotFoundError",
    "ObsidianWorkbenchError",
    "PersistenceError",
    "ProtectedWorkbenchError",
    "WorkbenchNotFoundError",
]
