import logging

import pytest


@pytest.fixture(autouse=True)
def reset_tapebf_logger():
    yield
    logger = logging.getLogger("tapebf")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
