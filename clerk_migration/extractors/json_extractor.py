"""JSON file-based data extractor."""

import json
import logging
from pathlib import Path
from typing import Any, List, Union
from datetime import datetime, timezone

from .base import BaseExtractor, ExtractionResult
from ..exceptions import ExtractionError

logger = logging.getLogger(__name__)


class JSONExtractor(BaseExtractor):
    """
    Extractor for JSON array exports.

    The file must contain a single top-level array. Optional sources (the
    phone-number export) that are missing yield an empty result with a
    warning instead of an error.
    """

    def __init__(
        self,
        file_path: Union[str, Path],
        required: bool = True,
        encoding: str = "utf-8"
    ):
        """
        Initialize the JSON extractor.

        Args:
            file_path: Path to the JSON export
            required: If False, a missing file produces an empty result
            encoding: File encoding
        """
        super().__init__(str(file_path))
        self.file_path = Path(file_path)
        self.required = required
        self.encoding = encoding

    def extract(self) -> ExtractionResult:
        """Read the file and return its records."""
        self.reset()
        started_at = datetime.now(timezone.utc)

        if not self.file_path.exists():
            if self.required:
                raise ExtractionError(
                    f"Input file not found: {self.file_path}", str(self.file_path)
                )
            self.add_warning(f"No file found at {self.file_path}, continuing without it")
            return self.get_extraction_result([], started_at)

        records = self._read_array()
        logger.info(f"Extracted {len(records)} records from {self.file_path}")
        return self.get_extraction_result(records, started_at)

    def _read_array(self) -> List[Any]:
        try:
            with open(self.file_path, encoding=self.encoding) as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ExtractionError(
                f"Invalid JSON in {self.file_path}: {e}", str(self.file_path)
            ) from e
        except OSError as e:
            raise ExtractionError(
                f"Could not read {self.file_path}: {e}", str(self.file_path)
            ) from e

        if not isinstance(data, list):
            raise ExtractionError(
                f"Expected a JSON array in {self.file_path}, got {type(data).__name__}",
                str(self.file_path),
            )
        return data
