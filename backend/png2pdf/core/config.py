"""
PNG2PDF — Backend Configuration
Loads .env automatically, then reads all settings from environment variables.
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from png2pdf.models.conversion import EmbedMode
from png2pdf.pdf.page_sizes import PAGE_SIZES

_env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(_env_path)


@dataclass(frozen=True)
class LimitsConfig:
    """Upload limits applied before a conversion starts."""
    max_file_mb: float
    max_total_mb: float
    max_files: int


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""
    host: str
    port: int
    debug: bool
    page_size: str
    page_orientation: str
    embed_mode: str
    verify_output: bool
    limits: LimitsConfig


def _load_config() -> AppConfig:
    return AppConfig(
        host=os.getenv("APP_HOST", "0.0.0.0"),
        port=int(os.getenv("APP_PORT", "8000")),
        debug=os.getenv("APP_DEBUG", "false").lower() == "true",
        page_size=os.getenv("PAGE_SIZE", "A4").upper(),
        page_orientation=os.getenv("PAGE_ORIENTATION", "portrait").lower(),
        embed_mode=os.getenv("EMBED_MODE", EmbedMode.FAST.value).lower(),
        verify_output=os.getenv("VERIFY_OUTPUT", "false").lower() == "true",
        limits=LimitsConfig(
            max_file_mb=float(os.getenv("MAX_FILE_MB", "10")),
            max_total_mb=float(os.getenv("MAX_TOTAL_MB", "50")),
            max_files=int(os.getenv("MAX_FILES", "100")),
        ),
    )


def _validate_config(cfg: AppConfig) -> None:
    """Fail fast on settings the converter cannot honour."""
    problems: list[str] = []
    if cfg.page_size not in PAGE_SIZES:
        problems.append(f"PAGE_SIZE={cfg.page_size} (known: {', '.join(PAGE_SIZES)})")
    if cfg.page_orientation not in ("portrait", "landscape"):
        problems.append(f"PAGE_ORIENTATION={cfg.page_orientation} (portrait | landscape)")
    if cfg.embed_mode not in {m.value for m in EmbedMode}:
        problems.append(f"EMBED_MODE={cfg.embed_mode} (fast | compact)")
    if cfg.limits.max_file_mb <= 0 or cfg.limits.max_total_mb <= 0 or cfg.limits.max_files <= 0:
        problems.append("MAX_FILE_MB, MAX_TOTAL_MB and MAX_FILES must be positive")
    if problems:
        print(
            f"\n  ERROR: Invalid configuration: {'; '.join(problems)}\n"
            f"  Fix backend/.env or the environment and restart.\n",
            file=sys.stderr,
        )
        sys.exit(1)


settings = _load_config()
_validate_config(settings)
