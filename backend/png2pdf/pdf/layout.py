"""
PNG2PDF — Aspect-fit page layout.

Scales an image so it fits inside the page on its limiting axis,
keeping the width/height ratio, and centers it on the other axis.
"""

from __future__ import annotations

from png2pdf.models.conversion import PageGeometry, Placement


def compute_placement(
    image_width: float,
    image_height: float,
    page_width: float,
    page_height: float,
) -> Placement:
    """
    Return the draw size and offset that aspect-fit an image on a page.

    The image touches the page edges on the axis where it is relatively
    larger; when both ratios match it fills the page with zero offsets.
    Raises ValueError if any dimension is not positive.
    """
    if min(image_width, image_height, page_width, page_height) <= 0:
        raise ValueError(
            f"dimensions must be positive: image {image_width}x{image_height}, "
            f"page {page_width}x{page_height}"
        )

    img_ratio = image_width / image_height
    page_ratio = page_width / page_height

    if img_ratio > page_ratio:
        draw_width = page_width
        draw_height = page_width / img_ratio
    else:
        draw_height = page_height
        draw_width = page_height * img_ratio

    return Placement(
        draw_width=draw_width,
        draw_height=draw_height,
        offset_x=(page_width - draw_width) / 2,
        offset_y=(page_height - draw_height) / 2,
    )


def place_on_page(image_width: int, image_height: int, geometry: PageGeometry) -> Placement:
    return compute_placement(image_width, image_height, geometry.page_width, geometry.page_height)
