"""Exception hierarchy for the LED board effects.

Every failure surfaced to callers derives from :class:`LedBoardError` so the
HTTP layer and the CLI can report them uniformly.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class LedBoardError(Exception):
    """Base exception for all LED board errors.

    Attributes:
        message: Human-readable error message
        details: Additional context as key-value pairs
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class DecodeError(LedBoardError):
    """Input bytes are malformed or in an unsupported format."""


class EncodeError(LedBoardError):
    """A buffer cannot be encoded (empty buffer or unknown format)."""


class InvalidCellSizeError(LedBoardError):
    """The LED cell size is below one or larger than the image."""


class InvalidFontSizeError(LedBoardError):
    pass


class EmptyTextError(LedBoardError):
    pass


class InvalidOptionsError(LedBoardError):
    """Effect or text options are out of range or cannot be coerced."""


class CaptureError(LedBoardError):
    """The external capture service could not produce an image."""


class ImageNotFoundError(LedBoardError):
    pass


class InvalidFilenameError(LedBoardError):
    pass
