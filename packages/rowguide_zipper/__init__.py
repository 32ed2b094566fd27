"""
Zipper package for Rowguide.

Expands, compresses and zips step sequences.
"""

from .service import TransformResult, Zipper, combine_rows
from .zipper import compress_steps, expand_steps, zip_steps

__all__ = [
    "TransformResult",
    "Zipper",
    "combine_rows",
    "compress_steps",
    "expand_steps",
    "zip_steps",
]
