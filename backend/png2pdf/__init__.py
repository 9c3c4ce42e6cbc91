"""PNG2PDF — convert PNG images into a single multi-page PDF."""

__version__ = "1.0.0"
