"""Tests for configuration, path resolution and logging setup."""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager

import pytest

from counter_api.app.core import db
from counter_api.app.core.db import StoreError, StoreErrorKind, get_database_path, validate_collection
from counter_api.app.core.logging_config import setup_logging


class TestDatabasePath:
    def test_absolute_path_is_kept(self, tmp_path):
        path = str(tmp_path / "c.db")
        assert get_database_path(path) == path

    def test_relative_path_resolves_to_project_root(self):
        resolved = get_database_path("data/c.db")

        assert os.path.isabs(resolved)
        assert resolved.endswith(os.path.join("data", "c.db"))
        project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(db.__file__))))
        assert resolved.startswith(os.path.realpath(project_root))


@pytest.mark.parametrize("name", ["counters", "_hits", "Counter2"])
def test_valid_collection_names(name):
    assert validate_collection(name) == name


@pytest.mark.parametrize("name", ["", "1abc", "a-b", "a b", "x;drop"])
def test_invalid_collection_names(name):
    with pytest.raises(ValueError):
        validate_collection(name)


def test_store_error_carries_kind():
    error = StoreError(StoreErrorKind.NOT_FOUND, "Counter x not found")

    assert error.kind is StoreErrorKind.NOT_FOUND
    assert str(error) == "Counter x not found"
    assert "not_found" in repr(error)


@contextmanager
def bare_root_logger():
    """Run with no handlers on the root logger, restoring them afterwards."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers = []
    try:
        yield root
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = saved_handlers
        root.setLevel(saved_level)


class TestSetupLogging:
    def test_configures_console_and_file(self, tmp_path):
        logfile = tmp_path / "service.log"

        with bare_root_logger() as root:
            setup_logging("debug", str(logfile))
            logging.getLogger("counter_api.test").debug("hello")

            assert root.level == logging.DEBUG
            assert len(root.handlers) == 2
            for handler in root.handlers:
                handler.flush()

        assert "[DEBUG] counter_api.test: hello" in logfile.read_text(encoding="utf-8")

    def test_second_call_is_ignored(self):
        with bare_root_logger() as root:
            setup_logging("INFO")
            setup_logging("DEBUG")

            assert len(root.handlers) == 1
            assert root.level == logging.INFO
