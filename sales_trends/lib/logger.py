import sys
import logging
from typing import TextIO
from loguru import logger
from sales_trends.core.config import settings

class InterceptHandler(logging.Handler):
    """
    Default handler from python logging to intercept standard logging messages
    and redirect them to loguru.
    """
    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())

def setup_logging(stream: TextIO = sys.stdout):
    """
    Configure logging with loguru.
    Includes intercepting standard library logging and formatting.

    The CLI passes ``sys.stderr`` so that stdout only carries the JSON payload.
    """
    log_level = settings.LOG_LEVEL.upper()
    log_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    )

    # Remove default handlers
    logger.remove()

    logger.add(
        stream,
        level=log_level,
        format=log_format,
        enqueue=True, # Thread-safe
        backtrace=True,
        diagnose=True if log_level == "DEBUG" else False
    )

    # Intercept standard library logging (e.g., from uvicorn, sqlalchemy)
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for name in ["uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine", "botocore"]:
        _logger = logging.getLogger(name)
        _logger.handlers = [InterceptHandler()]
        _logger.propagate = False

    return logger

# Initialize logger
log = logger
