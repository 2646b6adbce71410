"""Utility modules"""
from .logger import get_logger, get_context_logger, setup_logging, set_correlation_id, get_correlation_id

__all__ = [
    "get_logger",
    "get_context_logger",
    "setup_logging",
    "set_correlation_id",
    "get_correlation_id",
]
