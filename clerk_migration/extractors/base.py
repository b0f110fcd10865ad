"""Base extractor interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


@dataclass
class ExtractionResult:
    """Result of an extraction operation."""
    source: str
    records: List[Any] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def total_extracted(self) -> int:
        return len(self.records)

    @property
    def duration_seconds(self) -> Optional[float]:
        """Get duration in seconds."""
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None


class BaseExtractor(ABC):
    """
    Base class for input extractors.

    Extractors read raw records from an export and hand them over
    unchanged; shaping and validation happen downstream.
    """

    def __init__(self, source: str):
        """
        Initialize the extractor.

        Args:
            source: Human-readable name of the source (usually a file path)
        """
        self.source = source
        self._warnings: List[str] = []

    @abstractmethod
    def extract(self) -> ExtractionResult:
        """
        Extract all records from the source.

        Returns:
            ExtractionResult containing the raw records
        """
        pass

    def add_warning(self, message: str) -> None:
        """Add a warning to the extraction."""
        self._warnings.append(message)
        logger.warning(f"Extraction warning: {message}")

    def get_extraction_result(
        self,
        records: List[Any],
        started_at: Optional[datetime] = None
    ) -> ExtractionResult:
        """Create an ExtractionResult from extracted records."""
        return ExtractionResult(
            source=self.source,
            records=records,
            warnings=self._warnings.copy(),
            started_at=started_at,
            completed_at=datetime.now(timezone.utc),
        )

    def reset(self) -> None:
        """Reset the extractor state."""
        self._warnings = []
