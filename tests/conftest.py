import logging

import pytest


@pytest.fixture(autouse=True)
def reset_pos_import_logger():
    yield
    logger = logging.getLogger("pos_import")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
