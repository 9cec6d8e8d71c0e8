"""Tests for logging setup."""

import logging

import pytest
from loguru import logger

from clinic.core.logger import _session_patcher, session_id_ctx, setup_structured_logging


@pytest.fixture
def restore_logger():
    yield
    logger.remove()
    logger.configure(patcher=None, extra={})
    logging.basicConfig(handlers=[], force=True)


def test_patcher_adds_session_id():
    token = session_id_ctx.set("abc123")
    try:
        record = {"extra": {}}
        _session_patcher(record)
        assert record["extra"]["session_id"] == "abc123"
    finally:
        session_id_ctx.reset(token)


def test_patcher_without_session():
    record = {"extra": {}}
    _session_patcher(record)
    assert "session_id" not in record["extra"]


def test_setup_creates_log_files(tmp_path, restore_logger):
    setup_structured_logging("INFO", json_format=True, logs_dir=tmp_path / "logs")
    logger.info("hello")
    assert (tmp_path / "logs" / "clinic_booking.jsonl").exists()


def test_stdlib_records_are_intercepted(tmp_path, restore_logger):
    setup_structured_logging("DEBUG", json_format=False, logs_dir=tmp_path)
    messages = []
    logger.add(lambda message: messages.append(message.record), level="DEBUG")

    token = session_id_ctx.set("sess-1")
    try:
        logging.getLogger("tenacity").warning("retrying call")
    finally:
        session_id_ctx.reset(token)

    record = next(r for r in messages if r["message"] == "retrying call")
    assert record["level"].name == "WARNING"
    assert record["extra"]["session_id"] == "sess-1"
