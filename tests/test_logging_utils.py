"""Tests logging functions in photo_strip."""
import logging

import photo_strip.logging_utils as ps_logging_utils


class TestLoggingUtils:
    def test_logger_singleton_behavior(self) -> None:
        """Logger instances are shared per name with one handler."""
        logger1 = ps_logging_utils.setup_logger("strip_test_logger")
        logger2 = ps_logging_utils.setup_logger("strip_test_logger")
        assert logger1 is logger2
        assert len(logger1.handlers) == 1

    def test_logger_custom_formatter_and_handler(self) -> None:
        """Custom formatter and handler are applied."""
        formatter = logging.Formatter("[STRIP] %(message)s")
        handler = logging.StreamHandler()
        logger = ps_logging_utils.setup_logger(
            "strip_custom_logger",
            formatter=formatter,
            handler=handler,
        )
        assert logger.name == "strip_custom_logger"
        assert logger.handlers == [handler]
        assert handler.formatter is formatter

    def test_package_logger(self) -> None:
        """The shared package logger is named after the package."""
        assert ps_logging_utils.logger.name == "photo_strip"
        assert ps_logging_utils.logger.level == logging.INFO

    def test_default_format_names_the_logger(self) -> None:
        """The default handler format includes the logger name."""
        logger = ps_logging_utils.setup_logger("strip_default_format")
        fmt = logger.handlers[0].formatter._fmt  # noqa: SLF001
        assert fmt == ps_logging_utils.LOG_FORMAT
        assert "%(name)s" in fmt
        assert logger.propagate is False
