# File: tests/conftest.py
# Shared pytest fixtures. Descriptor builders live in tests/helpers.py.

import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """
    The CLI replaces the root logger's handlers with a colored console handler.
    Put the original handlers back so later tests keep pytest's log capture.
    """
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
