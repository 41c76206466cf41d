"""Utility package for square overlay."""

from . import image_operations, validation

__all__ = ["image_operations", "validation"]
