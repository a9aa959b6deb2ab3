#!/usr/bin/env python3
"""
unwind Utilities
"""

from .logger import configure_logging_levels, get_logger, setup_logger
from .output_json import JsonOutputFormatter

__all__ = [
    "configure_logging_levels",
    "get_logger",
    "setup_logger",
    "JsonOutputFormatter",
]
