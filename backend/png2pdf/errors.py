"""
PNG2PDF — Structured error catalog.

Every conversion failure is a ConversionError with a code, a human
message, and a suggested fix. No raw exceptions leak to the client.
"""

from __future__ import annotations

from typing import Any


class ConversionError(Exception):
    """Base conversion failure with structured code + suggestion."""

    def __init__(
        self,
        code: str = "CONVERSION_FAILED",
        message: str = "Error during conversion. Please try again.",
        suggestion: str = "",
        detail: Any = None,
    ):
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "error_code": self.code,
            "message": self.message,
        }
        if self.suggestion:
            d["suggestion"] = self.suggestion
        if self.detail:
            d["detail"] = self.detail
        return d


class InvalidInputError(ConversionError):
    def __init__(self, reason: str):
        super().__init__(
            code="INVALID_INPUT",
            message=f"Invalid input: {reason}",
            suggestion="Select one or more PNG files and try again.",
        )


class DecodeFailureError(ConversionError):
    def __init__(self, index: int, reason: str = ""):
        self.index = index
        super().__init__(
            code="DECODE_FAILED",
            message=f"Image {index + 1} could not be decoded",
            suggestion="Check that the file is a valid PNG image.",
            detail=reason or None,
        )


class EmbedFailureError(ConversionError):
    def __init__(self, page: int, reason: str = ""):
        self.page = page
        super().__init__(
            code="EMBED_FAILED",
            message=f"Image could not be placed on page {page}",
            suggestion="Re-export the image and try again.",
            detail=reason or None,
        )


class SerializationFailureError(ConversionError):
    def __init__(self, reason: str = ""):
        super().__init__(
            code="SERIALIZATION_FAILED",
            message="The PDF document could not be written",
            suggestion="Retry the conversion with fewer or smaller images.",
            detail=reason or None,
        )


class UnsupportedFileTypeError(ConversionError):
    def __init__(self, names: list[str]):
        super().__init__(
            code="FILE_TYPE_REJECTED",
            message="Please select PNG files only.",
            suggestion="Only .png files (image/png) are accepted.",
            detail=names or None,
        )


class FileTooLargeError(ConversionError):
    def __init__(self, name: str, size_mb: float, limit_mb: float):
        super().__init__(
            code="FILE_TOO_LARGE",
            message=f"File exceeds {limit_mb:g}MB limit: {name} ({size_mb:.1f}MB)",
            suggestion="Compress or resize the image before uploading.",
        )


class UnknownPageSizeError(ConversionError):
    def __init__(self, name: str, known: list[str]):
        super().__init__(
            code="UNKNOWN_PAGE_SIZE",
            message=f"Unknown page size: {name}",
            suggestion=f"Use one of: {', '.join(known)}.",
        )
