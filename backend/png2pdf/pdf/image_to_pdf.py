"""
PNG2PDF — Image to PDF building blocks.

Decodes image buffers into ImageAssets, places each one on its own
page of a pymupdf document, and serializes the document to bytes.
Each step raises the matching ConversionError subclass on failure.
"""

from __future__ import annotations

from dataclasses import dataclass

import fitz

from png2pdf.errors import DecodeFailureError, EmbedFailureError, SerializationFailureError
from png2pdf.models.conversion import EmbedMode, PageGeometry, Placement
from png2pdf.utils.logging import logger

JPEG_QUALITY = 75


@dataclass(frozen=True, eq=False)
class ImageAsset:
    """A decoded raster image, kept only until its page is embedded."""
    width: int
    height: int
    data: bytes
    pixmap: fitz.Pixmap


async def decode_image(data: bytes, index: int = 0) -> ImageAsset:
    """Decode an image buffer and read its natural pixel dimensions."""
    if not data:
        raise DecodeFailureError(index, "empty buffer")
    try:
        pix = fitz.Pixmap(data)
    except Exception as exc:
        raise DecodeFailureError(index, str(exc)) from exc

    if pix.width <= 0 or pix.height <= 0:
        raise DecodeFailureError(index, f"invalid dimensions {pix.width}x{pix.height}")
    return ImageAsset(width=pix.width, height=pix.height, data=data, pixmap=pix)


def compact_stream(pix: fitz.Pixmap) -> bytes:
    """
    Re-encode decoded pixels as JPEG.

    JPEG has no alpha channel, so transparency is dropped; colorspaces
    other than gray, RGB and CMYK are converted to RGB first.
    """
    if pix.alpha:
        pix = fitz.Pixmap(pix, 0)
    if pix.colorspace is None or pix.colorspace.n not in (1, 3, 4):
        pix = fitz.Pixmap(fitz.csRGB, pix)
    return pix.tobytes("jpg", jpg_quality=JPEG_QUALITY)


def new_document(geometry: PageGeometry) -> fitz.Document:
    """Open an empty document holding its first blank page."""
    doc = fitz.open()
    doc.new_page(width=geometry.page_width, height=geometry.page_height)
    return doc


def add_page(doc: fitz.Document, geometry: PageGeometry) -> fitz.Page:
    return doc.new_page(width=geometry.page_width, height=geometry.page_height)


def embed_image(
    page: fitz.Page,
    asset: ImageAsset,
    placement: Placement,
    mode: EmbedMode = EmbedMode.FAST,
) -> None:
    """Draw the image into the placement rect on the given page."""
    rect = fitz.Rect(
        placement.offset_x,
        placement.offset_y,
        placement.offset_x + placement.draw_width,
        placement.offset_y + placement.draw_height,
    )
    page_no = page.number + 1
    try:
        if mode == EmbedMode.COMPACT:
            stream = compact_stream(asset.pixmap)
        else:
            stream = asset.data
        page.insert_image(rect, stream=stream, keep_proportion=False)
    except Exception as exc:
        raise EmbedFailureError(page_no, str(exc)) from exc

    logger.info(
        "  Page %d: %dx%d px → %.1fx%.1f pt at (%.1f, %.1f)",
        page_no, asset.width, asset.height,
        placement.draw_width, placement.draw_height,
        placement.offset_x, placement.offset_y,
    )


def serialize(doc: fitz.Document) -> bytes:
    """Write the finished document to PDF bytes."""
    try:
        pdf_bytes = doc.tobytes(garbage=3, deflate=True)
    except Exception as exc:
        raise SerializationFailureError(str(exc)) from exc

    logger.info("  Created %d-page PDF (%d bytes)", doc.page_count, len(pdf_bytes))
    return pdf_bytes
