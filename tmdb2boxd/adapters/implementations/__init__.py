"""
Adaptor implementations for the sites tmdb2boxd integrates with.
"""

from tmdb2boxd.adapters.implementations.letterboxd import (
    FetchedPage,
    LetterboxdAdaptor,
    decode_html,
    extract_record,
)

__all__ = [
    "FetchedPage",
    "LetterboxdAdaptor",
    "decode_html",
    "extract_record",
]
