"""Patch Notes JSON Generator.

Builds versioned, multi-language patch note JSON files from a single source
language, optionally filling the other languages through Google Cloud
Translation.
"""

__version__ = "1.0.0"
