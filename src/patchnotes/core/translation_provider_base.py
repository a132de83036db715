"""Base abstractions for machine translation backends.

Every provider translates either a single string or an ordered batch of
strings between two service language codes, and reports failures through
the ``TranslationError`` hierarchy below.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence


class TranslationError(Exception):
    """Raised when a translation request cannot be completed."""


class MissingCredentialError(TranslationError):
    """Raised when no API credential is configured for the provider."""

    def __init__(self, provider: str = "translation provider") -> None:
        super().__init__(f"No API key configured for {provider}.")
        self.provider = provider


class EmptyInputError(TranslationError):
    """Raised when a batch translation is requested with no texts."""

    def __init__(self) -> None:
        super().__init__("Nothing to translate: the batch is empty.")


class ServiceError(TranslationError):
    """Raised when the service answers with a non-success HTTP status.

    Attributes:
        status_code: HTTP status code returned by the service.
        body: Raw response body, kept for diagnostics.
    """

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Translation service returned HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class MalformedResponseError(TranslationError):
    """Raised when a success response lacks the expected translations."""


class TranslationProvider(ABC):
    """Abstract base for machine translation backends.

    Attributes:
        name: Human-readable provider name used in messages.
    """

    name: str = "Translation provider"

    @abstractmethod
    def is_configured(self) -> bool:
        """Return True if the provider has the credentials it needs."""

    @abstractmethod
    def translate(self, text: str, source: str, target: str) -> str:
        """Translate one string.

        Args:
            text: Text to translate.
            source: Service code of the source language.
            target: Service code of the target language.

        Returns:
            The translated text with HTML entities decoded.

        Raises:
            TranslationError: If the request fails for any reason.
        """

    @abstractmethod
    def translate_batch(
        self, texts: Sequence[str], source: str, target: str
    ) -> List[str]:
        """Translate several strings in one request.

        Args:
            texts: Texts to translate, in order.
            source: Service code of the source language.
            target: Service code of the target language.

        Returns:
            One translated string per input, in the same order.

        Raises:
            TranslationError: If the request fails or the response does not
                contain exactly one translation per input.
        """


__all__ = [
    "EmptyInputError",
    "MalformedResponseError",
    "MissingCredentialError",
    "ServiceError",
    "TranslationError",
    "TranslationProvider",
]
