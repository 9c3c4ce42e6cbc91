"""
PNG2PDF — PDF verification module.

Inspects a produced PDF locally with pymupdf to confirm the conversion
kept its contract.

Checks:
  1. PDF opens and parses
  2. Page count matches the number of input images
  3. Exactly one image on every page
  4. Every page has the requested geometry
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any

import fitz

from png2pdf.models.conversion import PageGeometry, VerificationResult
from png2pdf.utils.logging import logger, step_timer

# pymupdf rounds page boxes; presets are given to two decimals
_SIZE_TOLERANCE = 0.05


@dataclass
class VerifyExpectations:
    expected_pages: int | None = None
    geometry: PageGeometry | None = None


class PDFVerifier:
    """Local PDF inspection using pymupdf."""

    def verify(self, pdf_bytes: bytes, expectations: VerifyExpectations) -> VerificationResult:
        with step_timer("Verify PDF"):
            doc = fitz.open(stream=pdf_bytes, filetype="pdf")
            try:
                checks: dict[str, bool] = {}

                checks["opens_and_parses"] = len(doc) > 0

                if expectations.expected_pages is not None:
                    checks["page_count_matches"] = len(doc) == expectations.expected_pages
                else:
                    checks["page_count_matches"] = True

                images_per_page = [len(page.get_images(full=True)) for page in doc]
                checks["one_image_per_page"] = all(n == 1 for n in images_per_page)

                if expectations.geometry is not None:
                    g = expectations.geometry
                    checks["page_size_matches"] = all(
                        abs(page.rect.width - g.page_width) <= _SIZE_TOLERANCE
                        and abs(page.rect.height - g.page_height) <= _SIZE_TOLERANCE
                        for page in doc
                    )
                else:
                    checks["page_size_matches"] = True

                passed_count = sum(checks.values())
                total_count = len(checks)

                metadata_raw = doc.metadata or {}
                metadata: dict[str, Any] = {k: v for k, v in metadata_raw.items() if v}

                result = VerificationResult(
                    page_count=len(doc),
                    images_per_page=images_per_page,
                    is_encrypted=doc.is_encrypted,
                    file_size=len(pdf_bytes),
                    content_hash=hashlib.sha256(pdf_bytes).hexdigest(),
                    metadata=metadata,
                    checks_passed=passed_count,
                    checks_total=total_count,
                    passed=passed_count == total_count,
                )
            finally:
                doc.close()

            failed = [name for name, ok in checks.items() if not ok]
            if failed:
                logger.warning("  Verification failed checks: %s", ", ".join(failed))
            logger.info(
                "  Verification: %d/%d checks passed %s",
                passed_count, total_count,
                "✓" if result.passed else "✗",
            )
            return result
