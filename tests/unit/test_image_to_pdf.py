"""Unit tests for decoding, embedding and serializing."""

import fitz
import pytest

from png2pdf.errors import DecodeFailureError
from png2pdf.models.conversion import EmbedMode, PageGeometry
from png2pdf.pdf.image_to_pdf import (
    add_page, compact_stream, decode_image, embed_image, new_document, serialize,
)
from png2pdf.pdf.layout import place_on_page

GEOMETRY = PageGeometry(page_width=612, page_height=792)


class TestDecodeImage:
    async def test_reads_pixel_dimensions(self, wide_png):
        asset = await decode_image(wide_png)
        assert (asset.width, asset.height) == (200, 100)
        assert asset.data == wide_png

    async def test_alpha_png(self, square_png):
        asset = await decode_image(square_png)
        assert asset.width == asset.height == 64

    async def test_garbage_fails(self):
        with pytest.raises(DecodeFailureError) as exc_info:
            await decode_image(b"definitely not an image", index=3)
        assert exc_info.value.index == 3

    async def test_empty_buffer_fails(self):
        with pytest.raises(DecodeFailureError):
            await decode_image(b"")


class TestDocument:
    def test_new_document_has_first_page(self):
        doc = new_document(GEOMETRY)
        assert doc.page_count == 1
        assert doc[0].rect.width == pytest.approx(612)
        doc.close()

    @pytest.mark.parametrize("mode", [EmbedMode.FAST, EmbedMode.COMPACT])
    async def test_embed_and_serialize(self, tall_png, mode):
        asset = await decode_image(tall_png)
        doc = new_document(GEOMETRY)
        embed_image(doc[0], asset, place_on_page(asset.width, asset.height, GEOMETRY), mode)
        page = add_page(doc, GEOMETRY)
        embed_image(page, asset, place_on_page(asset.width, asset.height, GEOMETRY), mode)
        pdf = serialize(doc)
        doc.close()

        out = fitz.open(stream=pdf, filetype="pdf")
        assert out.page_count == 2
        assert all(len(p.get_images()) == 1 for p in out)
        bbox = fitz.Rect(out[0].get_image_info()[0]["bbox"])
        assert bbox.height == pytest.approx(792, abs=0.5)
        assert bbox.width == pytest.approx(396, abs=0.5)
        assert bbox.x0 == pytest.approx(108, abs=0.5)
        out.close()


class TestCompactStream:
    async def test_alpha_png_becomes_jpeg(self, square_png):
        asset = await decode_image(square_png)
        jpeg = compact_stream(asset.pixmap)
        assert jpeg[:2] == b"\xff\xd8"
        assert fitz.Pixmap(jpeg).alpha == 0

    async def test_keeps_dimensions(self, tall_png):
        asset = await decode_image(tall_png)
        pix = fitz.Pixmap(compact_stream(asset.pixmap))
        assert (pix.width, pix.height) == (100, 200)
