"""Unit tests for PDF verification module."""

import fitz
import pytest

from png2pdf.models.conversion import PageGeometry
from png2pdf.pdf.verify import PDFVerifier, VerifyExpectations


@pytest.fixture
def verifier():
    return PDFVerifier()


@pytest.fixture
def image_pdf(make_png):
    """Two letter pages with one image each."""
    png = make_png(50, 40)
    doc = fitz.open()
    for _ in range(2):
        page = doc.new_page(width=612, height=792)
        page.insert_image(fitz.Rect(0, 0, 612, 489.6), stream=png)
    pdf_bytes = doc.tobytes()
    doc.close()
    return pdf_bytes


@pytest.fixture
def text_pdf():
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Hello World", fontsize=12)
    pdf_bytes = doc.tobytes()
    doc.close()
    return pdf_bytes


def test_image_pdf_passes(verifier, image_pdf):
    result = verifier.verify(
        image_pdf,
        VerifyExpectations(expected_pages=2, geometry=PageGeometry(page_width=612, page_height=792)),
    )
    assert result.passed is True
    assert result.page_count == 2
    assert result.images_per_page == [1, 1]
    assert result.checks_passed == result.checks_total == 4


def test_has_content_hash(verifier, image_pdf):
    result = verifier.verify(image_pdf, VerifyExpectations())
    assert len(result.content_hash) == 64
    assert result.file_size == len(image_pdf)


def test_page_count_mismatch(verifier, image_pdf):
    result = verifier.verify(image_pdf, VerifyExpectations(expected_pages=3))
    assert result.passed is False


def test_page_size_mismatch(verifier, image_pdf):
    a4 = PageGeometry(page_width=595.28, page_height=841.89)
    result = verifier.verify(image_pdf, VerifyExpectations(geometry=a4))
    assert result.passed is False


def test_page_without_image_fails(verifier, text_pdf):
    result = verifier.verify(text_pdf, VerifyExpectations(expected_pages=1))
    assert result.images_per_page == [0]
    assert result.passed is False
    assert result.is_encrypted is False
