"""Tests for reading the JSON exports."""

import json

import pytest

from clerk_migration.exceptions import ExtractionError
from clerk_migration.extractors.json_extractor import JSONExtractor


def test_reads_array(tmp_path):
    path = tmp_path / "users.json"
    path.write_text(json.dumps([{"userId": "a"}, {"userId": "b"}]))

    result = JSONExtractor(path).extract()

    assert result.records == [{"userId": "a"}, {"userId": "b"}]
    assert result.total_extracted == 2
    assert result.warnings == []
    assert result.source == str(path)


def test_missing_required_file(tmp_path):
    with pytest.raises(ExtractionError, match="not found"):
        JSONExtractor(tmp_path / "users.json").extract()


def test_missing_optional_file(tmp_path):
    result = JSONExtractor(tmp_path / "phones.json", required=False).extract()

    assert result.records == []
    assert len(result.warnings) == 1


def test_invalid_json(tmp_path):
    path = tmp_path / "users.json"
    path.write_text("[{")

    with pytest.raises(ExtractionError, match="Invalid JSON") as exc_info:
        JSONExtractor(path).extract()

    assert exc_info.value.file_path == str(path)


def test_top_level_must_be_array(tmp_path):
    path = tmp_path / "users.json"
    path.write_text(json.dumps({"users": []}))

    with pytest.raises(ExtractionError, match="Expected a JSON array"):
        JSONExtractor(path).extract()


def test_undecodable_bytes(tmp_path):
    path = tmp_path / "users.json"
    path.write_bytes(b'[{"userId": "\xff"}]')

    with pytest.raises(ExtractionError) as exc_info:
        JSONExtractor(path).extract()

    assert exc_info.value.file_path == str(path)
