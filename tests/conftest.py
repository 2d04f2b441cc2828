import logging

import pytest

from recordnorm.config import reset_settings
from recordnorm.utils.logging import LOGGER_NAME


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch):
    for name in (
        "RECORDNORM_CONFIG_FILE",
        "RECORDNORM_INPUT",
        "RECORDNORM_OUTPUT",
        "RECORDNORM_DELIMITER",
        "RECORDNORM_INCLUDE_HEADER",
        "RECORDNORM_SORT_ENABLED",
        "RECORDNORM_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()
    # The CLI installs its own handler and stops propagation; undo it so caplog keeps working.
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
