"""
Utility functions for the presentation playback engine
"""

from .logger import get_logger, get_category_logger, configure_logger
from .serialization import Serializer

__all__ = [
    'get_logger',
    'get_category_logger',
    'configure_logger',
    'Serializer',
]
