"""Verify the JSON logging configuration emits one JSON object per record."""

import io
import json
import logging

from roadmap_studio.config import setup_json_logging


def _emit(log_level=logging.INFO):
    stream = io.StringIO()
    setup_json_logging(log_level=log_level, stream=stream)
    return stream, logging.getLogger("roadmap_studio.test")


def test_basic_logging():
    stream, logger = _emit()
    logger.info("Basic log message without extra fields")

    record = json.loads(stream.getvalue().strip())
    assert record["message"] == "Basic log message without extra fields"
    assert record["levelname"] == "INFO"
    assert record["name"] == "roadmap_studio.test"
    # unset format fields are dropped rather than written as null
    assert "roadmap_id" not in record
    assert "item_id" not in record


def test_logging_with_extra():
    stream, logger = _emit()
    logger.info("store.item.added", extra={"roadmap_id": "rm-1", "item_id": "i-1"})

    record = json.loads(stream.getvalue().strip())
    assert record["message"] == "store.item.added"
    assert record["roadmap_id"] == "rm-1"
    assert record["item_id"] == "i-1"
    assert "category" not in record


def test_level_filtering_and_no_duplicate_handlers():
    stream, logger = _emit(logging.WARNING)
    setup_json_logging(log_level=logging.WARNING, stream=stream)

    logger.info("persistence.load.done", extra={"count": 3})
    logger.warning("persistence.load.discarded", extra={"key": "roadmaps", "bytes": 12})

    lines = [json.loads(line) for line in stream.getvalue().splitlines()]
    assert [line["message"] for line in lines] == ["persistence.load.discarded"]
    assert lines[0]["bytes"] == 12
    assert len(logging.getLogger("roadmap_studio").handlers) == 1
