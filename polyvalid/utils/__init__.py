"""Utility helpers for polyvalid."""

from .logging import configure_logging, get_logger

__all__ = [
    'configure_logging',
    'get_logger',
]
