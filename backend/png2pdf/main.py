"""
PNG2PDF — FastAPI Backend

Endpoints:
  POST /v1/png-to-pdf   — PNG image(s) → single multi-page PDF
  GET  /v1/page-sizes   — List available page size presets
  GET  /health          — Health check
"""

import base64
import time
import uuid
from typing import Literal

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from png2pdf import __version__
from png2pdf.core.config import settings
from png2pdf.errors import ConversionError, FileTooLargeError
from png2pdf.models.conversion import EmbedMode
from png2pdf.pdf.page_sizes import list_page_sizes, resolve_geometry
from png2pdf.pipeline.convert import ConversionJob
from png2pdf.pipeline.select_inputs import InputFile, select_png_files
from png2pdf.utils.logging import logger


app = FastAPI(
    title="PNG2PDF API",
    description="Convert PNG images into a single PDF, one aspect-fit image per page.",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Conversion-Job", "X-Pipeline-Duration-Ms", "X-Request-Id"],
)


@app.on_event("startup")
async def _startup_banner():
    logger.info("")
    logger.info("╔══════════════════════════════════════════════════╗")
    logger.info("║            PNG2PDF  ·  API Server v%-13s║", __version__)
    logger.info("╠══════════════════════════════════════════════════╣")
    logger.info("║  POST /v1/png-to-pdf  → PNG images → PDF        ║")
    logger.info("║  GET  /v1/page-sizes  → Page size presets       ║")
    logger.info("║  GET  /health         → Health check            ║")
    logger.info("╠══════════════════════════════════════════════════╣")
    logger.info("║  Page size   : %-33s║", f"{settings.page_size} {settings.page_orientation}")
    logger.info("║  Embed mode  : %-33s║", settings.embed_mode)
    logger.info("║  Max file    : %-33s║", f"{settings.limits.max_file_mb:g} MB")
    logger.info("╚══════════════════════════════════════════════════╝")
    logger.info("")


# ──────────────────────────────────────────────────────────
# Endpoints
# ──────────────────────────────────────────────────────────

@app.get("/health")
async def health():
    return {"status": "ok", "service": "png2pdf-api", "version": __version__}


@app.get("/v1/page-sizes")
async def get_page_sizes():
    """List available page size presets (PDF points, portrait)."""
    return [p.model_dump() for p in list_page_sizes()]


@app.post(
    "/v1/png-to-pdf",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}, "description": "Converted PDF"},
        413: {"description": "File too large"},
        422: {"description": "Invalid input or conversion failure"},
        500: {"description": "Unexpected error"},
    },
)
async def png_to_pdf(
    files: list[UploadFile] = File(..., description="One or more PNG images, in page order"),
    page_size: str | None = None,
    orientation: Literal["portrait", "landscape"] | None = None,
    mode: EmbedMode | None = None,
    verify: bool | None = None,
):
    """
    Convert uploaded PNG images into a single PDF.

    Non-PNG files in the batch are skipped. Each image gets its own page,
    scaled to fit and centered. The response carries an X-Conversion-Job
    header with the full ConversionResult (base64 JSON).

    Data handling: nothing is stored. Images are processed in memory and
    discarded after the PDF is returned.
    """
    request_id = uuid.uuid4().hex[:12]
    start = time.perf_counter()
    logger.info("[%s] POST /v1/png-to-pdf — %d files", request_id, len(files))

    uploads: list[InputFile] = []
    for f in files:
        content = await f.read()
        uploads.append(InputFile(
            name=f.filename or "",
            content_type=f.content_type or "",
            data=content,
        ))

    try:
        selected, warnings = select_png_files(
            uploads,
            max_file_mb=settings.limits.max_file_mb,
            max_total_mb=settings.limits.max_total_mb,
            max_files=settings.limits.max_files,
        )
        for w in warnings:
            logger.info("[%s]   %s", request_id, w)

        geometry = resolve_geometry(
            page_size or settings.page_size,
            orientation or settings.page_orientation,
        )
        job = ConversionJob(
            [f.data for f in selected],
            geometry=geometry,
            embed_mode=mode or EmbedMode(settings.embed_mode),
            verify=settings.verify_output if verify is None else verify,
        )
        result = await job.run()
        pdf_bytes = job.ctx.pdf

    except FileTooLargeError as exc:
        logger.warning("[%s] Upload rejected: %s", request_id, exc.message)
        raise HTTPException(status_code=413, detail=exc.to_dict())
    except ConversionError as exc:
        logger.warning("[%s] Conversion error: %s", request_id, exc.code)
        raise HTTPException(status_code=422, detail=exc.to_dict())
    except Exception:
        logger.exception("[%s] Conversion failed", request_id)
        raise HTTPException(status_code=500, detail=ConversionError().to_dict())

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info("[%s] Complete — %d bytes in %.0f ms", request_id, len(pdf_bytes), elapsed_ms)

    job_json = result.model_dump_json()
    job_b64 = base64.b64encode(job_json.encode()).decode("ascii")

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{result.artifact.filename}"',
            "X-Pipeline-Duration-Ms": f"{elapsed_ms:.0f}",
            "X-Request-Id": request_id,
            "X-Conversion-Job": job_b64,
        },
    )
