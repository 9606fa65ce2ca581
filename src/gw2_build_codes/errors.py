"""
Exceptions raised by the build code encoder and decoder.

Every codec failure is a BuildCodeError carrying a machine-readable
BuildCodeErrorCode, so callers can branch on the failure kind without
parsing messages.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class BuildCodeErrorCode(str, Enum):
    """Failure kinds for build code operations."""
    INVALID_LENGTH = "INVALID_LENGTH"                # Buffer shorter than the base layout
    INVALID_TYPE = "INVALID_TYPE"                    # Byte 0 is not 0x0D
    INVALID_PROFESSION = "INVALID_PROFESSION"        # Byte 1 outside 1-9
    PALETTE_LOOKUP_FAILED = "PALETTE_LOOKUP_FAILED"  # Mapper rejected an index or skill ID
    BASE64_DECODE_FAILED = "BASE64_DECODE_FAILED"    # Input is not valid base64


class BuildCodeError(Exception):
    """Raised when a build code cannot be decoded or encoded.

    Attributes:
        message: Human-readable error message
        code: Failure kind for programmatic handling
        cause: The underlying exception, if any (also chained as __cause__)
        details: Additional error context (offending index, profession, lengths)
    """

    def __init__(
        self,
        message: str,
        code: BuildCodeErrorCode,
        cause: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ):
        """Initialize the error.

        Args:
            message: Human-readable error message
            code: Failure kind
            cause: Optional underlying exception
            details: Optional dictionary of additional error context
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"
