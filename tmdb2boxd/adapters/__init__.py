"""
Adapters package for tmdb2boxd.

This package contains components for integrating with external systems:
- Abstract interfaces that define the contracts for adaptors and caches
- Concrete implementations for specific sites
"""

from . import interfaces
from .implementations import LetterboxdAdaptor

__all__ = [
    'interfaces',
    'LetterboxdAdaptor',
]
