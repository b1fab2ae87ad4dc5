import logging
import sys

from pythonjsonlogger import jsonlogger


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configures structured JSON logging for the application.

    Installs a JSON formatter that includes timestamp, level, logger name and
    message, plus any fields passed through ``extra``. Replaces the handlers
    of the root logger so repeated calls do not duplicate output.

    Args:
        level: Name of the log level, e.g. ``"INFO"`` or ``"DEBUG"``.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s"
    )
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers = []
    root_logger.addHandler(stream_handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return root_logger
