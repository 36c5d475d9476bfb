import logging
import os
import sys
from logging import Logger
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'


def setup_logger(name: str, log_file: Optional[str] = None, level: Optional[str] = None) -> Logger:
    """
    Configura o logger `name`. Sem log_file os registros vão para stderr;
    com log_file usa um arquivo rotativo. Sem level, usa LOG_LEVEL do ambiente.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        log_level = (level or os.getenv("LOG_LEVEL", "WARNING")).upper()
        if log_file:
            handler: logging.Handler = RotatingFileHandler(log_file, maxBytes=2 * 1024 * 1024, backupCount=2)
        else:
            handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, log_level, logging.WARNING))
    return logger
