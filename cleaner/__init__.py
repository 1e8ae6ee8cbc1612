"""HTML styles cleaner engine."""

from cleaner.engine import clean, clean_async, is_fragment
from models.options import CleanOptions

__all__ = ["CleanOptions", "clean", "clean_async", "is_fragment"]
