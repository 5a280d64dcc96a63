import logging
import os
import sys
from typing import Optional


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class PayloadRedactionFilter(logging.Filter):
    """
    Filter that keeps raw file content out of log records.

    Engine and server messages carry names and byte counts only; this acts
    when a caller hands raw content to a logger as an argument.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Replace bytes arguments with a size placeholder."""
        if isinstance(record.msg, (bytes, bytearray)):
            record.msg = self._describe(record.msg)

        if hasattr(record, 'args') and record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._mask_value(v) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._mask_value(arg) for arg in record.args)

        return True

    def _mask_value(self, value):
        if isinstance(value, (bytes, bytearray, memoryview)):
            return self._describe(value)
        return value

    @staticmethod
    def _describe(value) -> str:
        return f"<{len(value)} bytes>"


def setup_logging(
    component_name: str,
    log_level: Optional[str] = None
) -> logging.Logger:
    """
    Set up logging configuration for a component.

    Args:
        component_name: Name of the component (e.g., 'server', 'filestore')
        log_level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL env var or INFO

    Returns:
        Configured logger instance
    """
    if log_level is None:
        log_level = os.getenv('LOG_LEVEL', 'INFO').upper()

    level = getattr(logging, log_level, logging.INFO)

    logger = logging.getLogger(component_name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    handler.addFilter(PayloadRedactionFilter())

    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    The logger is given a PayloadRedactionFilter so content passed as a
    log argument is summarized even when no handler of ours is installed.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if not any(isinstance(f, PayloadRedactionFilter) for f in logger.filters):
        logger.addFilter(PayloadRedactionFilter())

    return logger
