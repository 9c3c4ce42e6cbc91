"""
PNG2PDF — Conversion job (image → PDF pipeline).

Runs one conversion as a state machine:

  IDLE → PROCESSING → FINALIZING → DONE
                 ↘          ↘
                   FAILED

Images are decoded, placed and embedded strictly in input order, one at
a time. Progress is reported before each image starts and once more
(100) before the document is serialized. Any failure aborts the whole
job; no partial PDF is returned and the job cannot be re-run.
"""

from __future__ import annotations

import hashlib
import time
import uuid
from typing import Callable, Sequence

import fitz

from png2pdf.errors import ConversionError, EmbedFailureError, InvalidInputError
from png2pdf.models.conversion import (
    ArtifactMetadata,
    ConversionResult,
    ConversionState,
    EmbedMode,
    PageGeometry,
    Placement,
    StepTiming,
    VerificationResult,
)
from png2pdf.pdf.image_to_pdf import add_page, decode_image, embed_image, new_document, serialize
from png2pdf.pdf.layout import place_on_page
from png2pdf.pdf.verify import PDFVerifier, VerifyExpectations
from png2pdf.utils.logging import logger, step_timer

ProgressCallback = Callable[[float], None]

# A4 portrait, in points
DEFAULT_GEOMETRY = PageGeometry(page_width=595.28, page_height=841.89)


def output_filename(now: float | None = None) -> str:
    """Suggested download name: converted-<epoch milliseconds>.pdf"""
    ts = int((time.time() if now is None else now) * 1000)
    return f"converted-{ts}.pdf"


class ConversionContext:
    """Mutable state owned by a single conversion job."""

    def __init__(self):
        self.document: fitz.Document | None = None
        self.placements: list[Placement] = []
        self.progress: list[float] = []
        self.pdf: bytes = b""


class ConversionJob:
    """
    State-machine runner for one image → PDF conversion.

    Owns its document exclusively; callers start a fresh job for every
    conversion, including retries after a failure.
    """

    def __init__(
        self,
        images: Sequence[bytes],
        geometry: PageGeometry | None = None,
        on_progress: ProgressCallback | None = None,
        embed_mode: EmbedMode = EmbedMode.FAST,
        verify: bool = False,
    ):
        self.job_id = uuid.uuid4().hex[:12]
        self.images = list(images)
        self.geometry = geometry or DEFAULT_GEOMETRY
        self.on_progress = on_progress
        self.embed_mode = EmbedMode(embed_mode)
        self.verify = verify
        self.state = ConversionState.IDLE
        self.ctx = ConversionContext()
        self.timings: list[StepTiming] = []

    def _record_step(self, name: str, start: float, status: str = "ok", detail: str = ""):
        ms = int((time.perf_counter() - start) * 1000)
        self.timings.append(StepTiming(step=name, duration_ms=ms, status=status, detail=detail))
        symbol = "✓" if status == "ok" else ("⊘" if status == "skipped" else "✗")
        logger.info("  %s %s — %dms %s", symbol, name, ms, detail)

    def _report(self, percent: float):
        self.ctx.progress.append(percent)
        if self.on_progress is not None:
            self.on_progress(percent)

    async def run(self) -> ConversionResult:
        """Execute the conversion. Returns a complete ConversionResult."""
        if self.state != ConversionState.IDLE:
            raise RuntimeError(f"conversion job {self.job_id} already ran (state={self.state.value})")

        logger.info("[%s] Conversion starting — %d images, %.2fx%.2f pt, mode=%s",
                    self.job_id, len(self.images),
                    self.geometry.page_width, self.geometry.page_height,
                    self.embed_mode.value)
        started = time.perf_counter()

        try:
            if not self.images:
                raise InvalidInputError("no images supplied")

            self.state = ConversionState.PROCESSING
            await self._step_pages()

            self.state = ConversionState.FINALIZING
            self._report(100.0)
            self._step_serialize()

            verification = self._step_verify() if self.verify else None
            self.state = ConversionState.DONE

        except ConversionError as exc:
            self.state = ConversionState.FAILED
            logger.warning("[%s] Conversion failed: %s", self.job_id, exc.code)
            raise
        except Exception:
            self.state = ConversionState.FAILED
            logger.exception("[%s] Conversion failed unexpectedly", self.job_id)
            raise
        finally:
            if self.ctx.document is not None:
                self.ctx.document.close()
                self.ctx.document = None

        pdf = self.ctx.pdf
        total_ms = int((time.perf_counter() - started) * 1000)
        logger.info("[%s] Conversion complete — %d bytes, %d pages, %dms",
                    self.job_id, len(pdf), len(self.ctx.placements), total_ms)

        return ConversionResult(
            job_id=self.job_id,
            page_size=self.geometry,
            embed_mode=self.embed_mode,
            artifact=ArtifactMetadata(
                filename=output_filename(),
                size_bytes=len(pdf),
                pages=len(self.ctx.placements),
                content_hash=hashlib.sha256(pdf).hexdigest(),
            ),
            placements=self.ctx.placements,
            progress=self.ctx.progress,
            timings=self.timings,
            verification=verification,
        )

    async def _step_pages(self):
        t = time.perf_counter()
        total = len(self.images)
        self.ctx.document = new_document(self.geometry)

        try:
            with step_timer(f"Embed {total} images"):
                for i, data in enumerate(self.images):
                    self._report(i / total * 100)

                    asset = await decode_image(data, index=i)

                    if i > 0:
                        page = add_page(self.ctx.document, self.geometry)
                    else:
                        page = self.ctx.document[0]

                    try:
                        placement = place_on_page(asset.width, asset.height, self.geometry)
                    except ValueError as exc:
                        raise EmbedFailureError(i + 1, str(exc)) from exc

                    embed_image(page, asset, placement, self.embed_mode)
                    self.ctx.placements.append(placement)
                    del asset
        except Exception as exc:
            self._record_step("pages", t, "failed", str(exc))
            raise

        self._record_step("pages", t, detail=f"{total} embedded")

    def _step_serialize(self):
        t = time.perf_counter()
        try:
            with step_timer("Serialize PDF"):
                self.ctx.pdf = serialize(self.ctx.document)
        except Exception as exc:
            self._record_step("serialize", t, "failed", str(exc))
            raise
        self._record_step("serialize", t, detail=f"{len(self.ctx.pdf)} bytes")

    def _step_verify(self) -> VerificationResult | None:
        """Check the produced PDF. Problems are reported, never fatal."""
        t = time.perf_counter()
        try:
            verification = PDFVerifier().verify(
                self.ctx.pdf,
                VerifyExpectations(expected_pages=len(self.images), geometry=self.geometry),
            )
        except Exception as exc:
            logger.warning("[%s] Verification could not run: %s", self.job_id, exc)
            self._record_step("verify", t, "skipped", str(exc))
            return None

        self._record_step(
            "verify", t,
            detail=f"{verification.checks_passed}/{verification.checks_total} checks",
        )
        return verification


async def convert(
    images: Sequence[bytes],
    geometry: PageGeometry | None = None,
    on_progress: ProgressCallback | None = None,
    embed_mode: EmbedMode = EmbedMode.FAST,
) -> bytes:
    """Convenience wrapper: run a fresh job and return just the PDF bytes."""
    job = ConversionJob(images, geometry=geometry, on_progress=on_progress, embed_mode=embed_mode)
    await job.run()
    return job.ctx.pdf
