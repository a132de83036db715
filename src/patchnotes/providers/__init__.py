"""Machine translation provider implementations.

Each provider wraps a third-party translation API and implements the
TranslationProvider interface.
"""

from .google import GoogleTranslationProvider

__all__ = [
    "GoogleTranslationProvider",
]
