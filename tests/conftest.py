"""Shared fixtures for gridplace tests."""

from collections.abc import Iterator
import logging
from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Keep user config files and logging setup out of every test."""
    monkeypatch.delenv("GRIDPLACE_CONFIG_PATH", raising=False)
    home = tmp_path / "home"
    home.mkdir()

    logger = logging.getLogger("gridplace")
    saved = (list(logger.handlers), logger.level, logger.propagate)

    with patch.object(Path, "home", return_value=home):
        yield home

    handlers, level, propagate = saved
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate
