"""Utility helpers for gomin."""

from gomin.utils.logger import get_logger

__all__ = ["get_logger"]
