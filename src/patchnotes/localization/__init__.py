"""Language registry for patch note locales.

Provides the immutable list of supported languages, their translation
service codes, and the mapping to the language codes written to JSON.
"""

from __future__ import annotations

from .registry import (
    DEFAULT_JSON_CODES,
    DEFAULT_LANGUAGES,
    DEFAULT_SOURCE_TAG,
    LanguageInfo,
    LanguageRegistry,
    build_default_registry,
)

__all__ = [
    "DEFAULT_JSON_CODES",
    "DEFAULT_LANGUAGES",
    "DEFAULT_SOURCE_TAG",
    "LanguageInfo",
    "LanguageRegistry",
    "build_default_registry",
]
