"""Structured error codes for machine-readable error handling.

Error codes follow the format: WB-{CATEGORY}-{NUMBER}

Categories:
    NAME - Workbench naming errors
    NOTFOUND - Unknown workbench, card, or identifier
    PROTECTED - Operations refused on the default workbench
    EXTRACT - Heading extraction errors
    PERSIST - Snapshot read/write errors
    CFG - Configuration errors

Usage:
    from obsidian_workbench.error_codes import ErrorCode

    logger.error(
        "snapshot_save_failed",
        error_code=ErrorCode.PERSIST_SAVE_FAILED.value,
        path=str(path),
    )
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Structured error codes for machine-readable handling.

    All error codes inherit from str for JSON serialization compatibility.
    """

    # =========================================================================
    # Naming Errors (WB-NAME-xxx)
    # =========================================================================
    NAME_INVALID = "WB-NAME-001"
    """Workbench name is empty or collides with an existing workbench."""

    # =========================================================================
    # Lookup Errors (WB-NOTFOUND-xxx)
    # =========================================================================
    NOTFOUND_WORKBENCH = "WB-NOTFOUND-001"
    """No workbench with the requested name."""

    NOTFOUND_IDENTIFIER = "WB-NOTFOUND-002"
    """Identifier does not resolve to a heading in the vault."""

    NOTFOUND_CARD = "WB-NOTFOUND-003"
    """Card is not present in the workbench."""

    # =========================================================================
    # Protection Errors (WB-PROTECTED-xxx)
    # =========================================================================
    PROTECTED_DEFAULT = "WB-PROTECTED-001"
    """The default workbench cannot be deleted or renamed."""

    # =========================================================================
    # Extraction Errors (WB-EXTRACT-xxx)
    # =========================================================================
    EXTRACT_NOT_A_HEADING = "WB-EXTRACT-001"
    """No heading found at the requested location."""

    EXTRACT_UNREADABLE = "WB-EXTRACT-002"
    """Source note could not be read."""

    # =========================================================================
    # Persistence Errors (WB-PERSIST-xxx)
    # =========================================================================
    PERSIST_SAVE_FAILED = "WB-PERSIST-001"
    """Snapshot write failed."""

    PERSIST_LOAD_FAILED = "WB-PERSIST-002"
    """Snapshot could not be read or parsed."""

    # =========================================================================
    # Configuration Errors (WB-CFG-xxx)
    # =========================================================================
    CFG_INVALID = "WB-CFG-001"
    """Configuration file is malformed or holds invalid values."""


__all__ = ["ErrorCode"]
