from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def reset_logger_utils() -> Iterator[None]:
    """Undo any LoggerUtils.configure() call so log capture works in every test."""
    yield
    root: logging.Logger = LoggerUtils.root_logger()
    for handler in list(root.handlers):
        if not isinstance(handler, logging.NullHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(logging.NOTSET)
    LoggerUtils._configured = False
