import logging
from typing import Union

LOG_LEVEL = "INFO"
PACKAGE_LOGGER = "iso15118json"

# An extra logging level below DEBUG, used for the field-by-field walk of the
# JSON codec
TRACE = logging.DEBUG - 5


def init_logger(level: Union[str, int] = LOG_LEVEL):
    logging.addLevelName(TRACE, "TRACE")
    setattr(logging, "TRACE", TRACE)

    if isinstance(level, str):
        level = level.upper()
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
