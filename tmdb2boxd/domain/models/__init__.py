"""
Domain models package.

Domain models are persistence-agnostic and focus only on the business domain.
"""

from tmdb2boxd.domain.models.record import ResolvedRecord

__all__ = ["ResolvedRecord"]
