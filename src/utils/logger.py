# -*- coding: utf-8 -*-
"""日志模块。"""
import logging
import sys
from typing import Optional, Union


def get_logger(name: str = "ecotrail", level: Optional[Union[int, str]] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        if level is None:
            from .config import LOG_LEVEL
            level = LOG_LEVEL
        logger.setLevel(level)
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        logger.addHandler(h)
    elif level is not None:
        logger.setLevel(level)
    return logger
