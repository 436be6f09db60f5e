"""Tests for the TRACE level and Rich logging setup."""

import io
import logging

import pytest
from rich.console import Console

from batchexec.utils.logging import TRACE, resolve_level, setup_logging, trace


def test_trace_level_registered():
    assert logging.getLevelName(TRACE) == "TRACE"
    assert resolve_level("trace") == TRACE
    assert resolve_level("info") == logging.INFO
    assert resolve_level(logging.ERROR) == logging.ERROR


def test_resolve_unknown_level():
    with pytest.raises(ValueError):
        resolve_level("chatty")


def test_trace_only_when_enabled(caplog):
    log = logging.getLogger("batchexec.test")
    with caplog.at_level(logging.DEBUG):
        trace(log, "hidden %s", "detail")
    assert "hidden" not in caplog.text

    with caplog.at_level(TRACE):
        trace(log, "shown %s", "detail")
    assert "shown detail" in caplog.text


def test_setup_logging_flags():
    stream = io.StringIO()
    console = Console(file=stream, width=200)
    assert setup_logging(console=console) == logging.WARNING
    assert setup_logging(verbose=True, console=console) == logging.INFO
    assert setup_logging(verbose=True, debug=True, console=console) == logging.DEBUG
    assert logging.getLogger("batchexec").level == logging.DEBUG
    assert setup_logging(level="error", console=console) == logging.ERROR


def test_setup_logging_writes_plain_messages():
    stream = io.StringIO()
    setup_logging(verbose=True, console=Console(file=stream, width=200))
    logging.getLogger("batchexec.demo").info("value [red] kept")
    assert "value [red] kept" in stream.getvalue()
