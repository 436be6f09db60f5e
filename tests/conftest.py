"""Shared fixtures: isolate global config, logging and the shared LoV registry."""

import logging

import pytest

from batchexec.config import BatchExecConfig, configure, reset_config
from batchexec.core import EnumRegistry


@pytest.fixture(autouse=True)
def isolated_globals():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    configure(BatchExecConfig())
    EnumRegistry.reset_shared()
    yield
    EnumRegistry.reset_shared()
    reset_config()
    # CLI tests call setup_logging(), which replaces root handlers and
    # pins the package logger level
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("batchexec").setLevel(logging.NOTSET)


@pytest.fixture
def lov():
    return EnumRegistry()
