"""
PNG2PDF — Conversion job contracts.

Every conversion returns a ConversionResult with full traceability:
per-step timings, per-page placements, reported progress, and the
artifact's hash.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ConversionState(str, enum.Enum):
    IDLE = "IDLE"
    PROCESSING = "PROCESSING"
    FINALIZING = "FINALIZING"
    DONE = "DONE"
    FAILED = "FAILED"


class EmbedMode(str, enum.Enum):
    FAST = "fast"  # embed the uploaded PNG stream as-is
    COMPACT = "compact"  # re-encode decoded pixels as JPEG (lossy)


class PageGeometry(BaseModel):
    """Fixed page size for one document, in PDF points."""

    model_config = ConfigDict(frozen=True)

    page_width: float = Field(gt=0)
    page_height: float = Field(gt=0)


class Placement(BaseModel):
    """Size and offset of an image drawn on a page."""

    model_config = ConfigDict(frozen=True)

    draw_width: float
    draw_height: float
    offset_x: float
    offset_y: float


class StepTiming(BaseModel):
    step: str
    duration_ms: int
    status: str = "ok"  # ok | skipped | failed
    detail: str = ""


class ArtifactMetadata(BaseModel):
    filename: str
    size_bytes: int
    pages: int = 0
    content_hash: str = ""  # SHA-256 of the PDF


class VerificationResult(BaseModel):
    page_count: int = 0
    images_per_page: list[int] = Field(default_factory=list)
    is_encrypted: bool = False
    file_size: int = 0
    content_hash: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)
    checks_passed: int = 0
    checks_total: int = 0
    passed: bool = False

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "page_count": 3,
                "images_per_page": [1, 1, 1],
                "is_encrypted": False,
                "checks_passed": 4,
                "checks_total": 4,
                "passed": True,
            }
        }
    )


class ConversionResult(BaseModel):
    """Complete output contract for every conversion job."""

    job_id: str
    page_size: PageGeometry
    embed_mode: EmbedMode = EmbedMode.FAST
    artifact: ArtifactMetadata
    placements: list[Placement] = Field(default_factory=list)
    progress: list[float] = Field(default_factory=list)
    timings: list[StepTiming] = Field(default_factory=list)
    verification: VerificationResult | None = None
