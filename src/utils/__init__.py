# -*- coding: utf-8 -*-
from .logger import get_logger
from . import config

__all__ = ["get_logger", "config"]
