"""Logging setup"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
HANDLER_NAME = "loan_ledger"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Safe to call more than once; the handler is only added the first time.

    Args:
        level: Logging level name (e.g. "INFO", "DEBUG")

    Returns:
        The configured package logger
    """
    logger = logging.getLogger("loan_ledger")
    logger.setLevel(level)

    if not any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
