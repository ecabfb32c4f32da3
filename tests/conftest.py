from __future__ import annotations

import logging

import pytest

from osiris_build.commands.utils.logging import LOGGER_NAME


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo handler and propagation changes made by ``configure_logger``."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers = list(logger.handlers)
    propagate = logger.propagate
    level = logger.level
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            handler.close()
            logger.removeHandler(handler)
    logger.propagate = propagate
    logger.setLevel(level)
