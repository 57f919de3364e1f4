import logging

import pytest

from iris_knn.utils import PACKAGE_LOGGER


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers added by setup_logging so they never outlive a test's captured streams."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
