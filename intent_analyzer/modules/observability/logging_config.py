"""
Logging configuration.

Call setup_logging() once at process start; modules use get_logger(__name__).
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at INFO
_NOISY_LOGGERS = ("chromadb", "sentence_transformers", "httpx", "urllib3")

_configured = False


def setup_logging(level: Optional[str] = None) -> None:
    global _configured
    if level is None:
        from intent_analyzer.core.config import get_settings
        level = get_settings().LOG_LEVEL

    root = logging.getLogger()
    root.setLevel(level)

    if not _configured:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(handler)
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
        _configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
