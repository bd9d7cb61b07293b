"""Utility functions for osccodec.

This module provides alignment and size calculation helpers.
"""

from __future__ import annotations

from .sizing import element_sizes, encoded_size, pad4, value_sizes

__all__ = [
    "pad4",
    "encoded_size",
    "value_sizes",
    "element_sizes",
]
