"""Shared utilities for mesita."""

from mesita.utils.logger import get_logger

__all__ = ["get_logger"]
