"""
PNG2PDF — Page size registry.

Ships the common paper presets in PDF points (1/72 inch). Each preset
resolves to a PageGeometry in either orientation.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from png2pdf.errors import UnknownPageSizeError
from png2pdf.models.conversion import PageGeometry

Orientation = Literal["portrait", "landscape"]


class PageSizeEntry(BaseModel):
    id: str
    name: str
    width: float
    height: float


PAGE_SIZES: dict[str, PageSizeEntry] = {
    "A3": PageSizeEntry(id="A3", name="ISO A3", width=841.89, height=1190.55),
    "A4": PageSizeEntry(id="A4", name="ISO A4", width=595.28, height=841.89),
    "A5": PageSizeEntry(id="A5", name="ISO A5", width=419.53, height=595.28),
    "LETTER": PageSizeEntry(id="LETTER", name="US Letter", width=612, height=792),
    "LEGAL": PageSizeEntry(id="LEGAL", name="US Legal", width=612, height=1008),
}


def get_page_size(page_size_id: str) -> PageSizeEntry | None:
    return PAGE_SIZES.get(page_size_id.upper())


def list_page_sizes() -> list[PageSizeEntry]:
    return list(PAGE_SIZES.values())


def resolve_geometry(page_size_id: str, orientation: Orientation = "portrait") -> PageGeometry:
    """Look up a preset and return its geometry, swapping axes for landscape."""
    entry = get_page_size(page_size_id)
    if entry is None:
        raise UnknownPageSizeError(page_size_id, list(PAGE_SIZES))

    if orientation == "landscape":
        return PageGeometry(page_width=entry.height, page_height=entry.width)
    return PageGeometry(page_width=entry.width, page_height=entry.height)
