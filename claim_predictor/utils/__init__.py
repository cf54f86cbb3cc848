"""Utility modules for configuration, logging, and AWS integration."""

from .response_formatter import ResponseFormatter

__all__ = [
    'ResponseFormatter'
]
