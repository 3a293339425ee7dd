"""
Package logger for the photo strip compositor.

Asset skips and stale generations are reported at WARNING, published
strips at INFO and per-render timings at DEBUG, all through ``logger``.
"""

import logging

PACKAGE_LOGGER_NAME = "photo_strip"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(
        name: str = PACKAGE_LOGGER_NAME,
        level: int = logging.INFO,
        *,
        formatter: logging.Formatter | None = None,
        handler: logging.Handler | None = None,
) -> logging.Logger:
    """
    Return the named logger, attaching a handler on first use only.

    Repeated calls never stack handlers, so modules may call this at
    import time. The logger stops propagating once it owns a handler;
    tests re-enable propagation to use ``caplog``.

    Args:
        name: Logger name.
        level: Threshold applied on every call.
        formatter: Formatter for a newly attached handler. Defaults to
            :data:`LOG_FORMAT`.
        handler: Handler to attach. Defaults to a stderr stream.

    """
    log = logging.getLogger(name)
    log.setLevel(level)
    if log.handlers:
        return log
    handler = handler or logging.StreamHandler()
    handler.setFormatter(formatter or logging.Formatter(LOG_FORMAT))
    log.addHandler(handler)
    log.propagate = False
    return log


logger = setup_logger()
