from __future__ import annotations

import logging
from contextlib import contextmanager

from infra.logging_config import setup_logging
from infra.operational_support import bind_trace_id, current_trace_id


@contextmanager
def _preserved_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield root
    finally:
        for handler in list(root.handlers):
            if handler not in handlers:
                handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)


def test_setup_logging_writes_trace_ids_to_file(tmp_path, monkeypatch):
    monkeypatch.setenv("TDP_LOG_LEVEL", "debug")

    with _preserved_root_logger() as root:
        log_file = setup_logging(tmp_path / "logs")

        assert log_file == tmp_path / "logs" / "planner.log"
        assert root.level == logging.DEBUG

        with bind_trace_id("trc-test-1"):
            assert current_trace_id() == "trc-test-1"
            logging.getLogger("tests.logging").info("inside trace")
        logging.getLogger("tests.logging").info("outside trace")
        for handler in root.handlers:
            handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "Logging initialized" in text
    assert "trace=trc-test-1 tests.logging - inside trace" in text
    assert "trace=- tests.logging - outside trace" in text


def test_setup_logging_does_not_stack_handlers(tmp_path, monkeypatch):
    monkeypatch.delenv("TDP_LOG_LEVEL", raising=False)

    with _preserved_root_logger() as root:
        setup_logging(tmp_path)
        setup_logging(tmp_path)

        assert len(root.handlers) == 2
        assert root.level == logging.INFO


def test_bind_trace_id_generates_and_resets():
    assert current_trace_id() is None
    with bind_trace_id() as trace_id:
        assert trace_id.startswith("trc-")
        assert current_trace_id() == trace_id
    assert current_trace_id() is None
