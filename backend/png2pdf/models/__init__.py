"""PNG2PDF data models — typed contracts for the conversion pipeline."""

from png2pdf.models.conversion import (
    ConversionState,
    EmbedMode,
    PageGeometry,
    Placement,
    StepTiming,
    ArtifactMetadata,
    VerificationResult,
    ConversionResult,
)

__all__ = [
    "ConversionState",
    "EmbedMode",
    "PageGeometry",
    "Placement",
    "StepTiming",
    "ArtifactMetadata",
    "VerificationResult",
    "ConversionResult",
]
