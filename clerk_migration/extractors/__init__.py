"""Extractors for the input exports."""

from .base import BaseExtractor, ExtractionResult
from .json_extractor import JSONExtractor

__all__ = [
    "BaseExtractor",
    "ExtractionResult",
    "JSONExtractor",
]
