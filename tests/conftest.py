# tests/conftest.py

"""Shared pytest fixtures for all storefront tests."""

import logging
from collections.abc import Generator

import pytest


@pytest.fixture(autouse=True)
def isolate_storefront_logger() -> Generator[None, None, None]:
    """Drop handlers a test added to the ``storefront`` logger."""
    root_logger = logging.getLogger("storefront")
    before = list(root_logger.handlers)
    yield
    for handler in root_logger.handlers:
        if handler not in before:
            handler.close()
    root_logger.handlers = before
