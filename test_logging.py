"""Tests for the logging context helpers."""

import asyncio
import logging

import pytest

from claim_predictor.utils.logging import (
    ContextFilter,
    clear_context,
    get_context,
    set_context,
    setup_logging,
    with_context,
)


@pytest.fixture(autouse=True)
def reset_context():
    clear_context()
    yield
    clear_context()


def test_with_context_restores_previous_context():
    set_context(request="r1")

    @with_context(component="engine")
    def scoring():
        set_context(claim_id="CLM-1")
        return get_context()

    assert scoring() == {"request": "r1", "component": "engine", "claim_id": "CLM-1"}
    assert get_context() == {"request": "r1"}


@pytest.mark.asyncio
async def test_concurrent_tasks_keep_separate_context():
    @with_context(component="predictor")
    async def predict(claim_id):
        set_context(claim_id=claim_id)
        await asyncio.sleep(0)
        return get_context()["claim_id"]

    assert await asyncio.gather(predict("A"), predict("B")) == ["A", "B"]
    assert get_context() == {}


def test_filter_copies_context_onto_records():
    set_context(claim_id="CLM-9")
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)

    assert ContextFilter().filter(record)
    assert record.claim_id == "CLM-9"


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "predictor.log"
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging(level="debug", log_file=str(log_file))
        logging.getLogger("claim_predictor.test").debug("hello")
        for handler in root.handlers:
            handler.flush()

        assert root.level == logging.DEBUG
        assert "hello" in log_file.read_text()
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
