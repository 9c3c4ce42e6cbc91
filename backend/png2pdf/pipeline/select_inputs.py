"""
PNG2PDF — Input selection step.

Filters an upload batch down to PNG files and enforces size limits
before a conversion is started. Fails fast with clear error messages.

Rules:
  - A file is a PNG when its media type is image/png or its name ends in .png
  - Other files are skipped with a warning; a batch with no PNG is rejected
  - Max single file, max total size and max file count come from config
"""

from __future__ import annotations

from dataclasses import dataclass

from png2pdf.errors import FileTooLargeError, InvalidInputError, UnsupportedFileTypeError
from png2pdf.utils.logging import logger

PNG_MEDIA_TYPE = "image/png"
PNG_EXTENSION = ".png"
MB = 1024 * 1024


@dataclass
class InputFile:
    name: str
    content_type: str
    data: bytes


def is_png(name: str | None, content_type: str | None) -> bool:
    if (content_type or "").lower() == PNG_MEDIA_TYPE:
        return True
    return (name or "").lower().endswith(PNG_EXTENSION)


def select_png_files(
    files: list[InputFile],
    max_file_mb: float = 10,
    max_total_mb: float = 50,
    max_files: int = 100,
) -> tuple[list[InputFile], list[str]]:
    """
    Keep the PNG files of an upload batch, in their original order.

    Returns the selected files and a list of warnings for skipped ones.
    Raises a ConversionError subclass when the batch cannot be converted.
    """
    if not files:
        raise InvalidInputError("no files supplied")

    selected: list[InputFile] = []
    warnings: list[str] = []
    rejected: list[str] = []

    for f in files:
        if is_png(f.name, f.content_type):
            selected.append(f)
        else:
            rejected.append(f.name)
            warnings.append(f"Skipped non-PNG file: {f.name}")

    if not selected:
        raise UnsupportedFileTypeError(rejected)

    if len(selected) > max_files:
        raise InvalidInputError(f"{len(selected)} files exceeds the limit of {max_files}")

    total_size = 0
    for f in selected:
        size = len(f.data)
        if size > max_file_mb * MB:
            raise FileTooLargeError(f.name, size / MB, max_file_mb)
        total_size += size

    if total_size > max_total_mb * MB:
        raise FileTooLargeError("total upload", total_size / MB, max_total_mb)

    logger.info(
        "  Selected %d PNG files (%.1f MB total), skipped %d",
        len(selected), total_size / MB, len(rejected),
    )
    return selected, warnings
