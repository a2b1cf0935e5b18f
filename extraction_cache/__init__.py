"""
Cache Module
============
Per-callable memoization of extraction results.
"""

from .cache_manager import ExtractionCache

__all__ = ['ExtractionCache']
