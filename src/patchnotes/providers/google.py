"""Google Cloud Translation (v2 REST API) provider.

Requires an API key from a Google Cloud project with the Translation API
enabled. The key is sent as the ``key`` query parameter; requests and
responses are JSON.
"""

from __future__ import annotations

import html
from typing import Any, List, Optional, Sequence, Union

import requests

from ..core.translation_provider_base import (
    EmptyInputError,
    MalformedResponseError,
    MissingCredentialError,
    ServiceError,
    TranslationError,
    TranslationProvider,
)

GOOGLE_TRANSLATE_ENDPOINT = "https://translation.googleapis.com/language/translate/v2"
DEFAULT_TIMEOUT = 30


class GoogleTranslationProvider(TranslationProvider):
    """Translate text through the Google Cloud Translation v2 endpoint.

    Each call issues exactly one POST request. Nothing is retried or cached;
    failures surface as ``TranslationError`` subclasses.

    Attributes:
        api_key: Google Cloud API key, or an empty string if unset.
        project_id: Optional Google Cloud project id, informational only.
        endpoint: URL of the translate endpoint.
        timeout: Request timeout in seconds.
        session: Optional ``requests.Session`` used instead of module-level calls.
    """

    name = "Google Cloud Translation"

    def __init__(
        self,
        api_key: Optional[str],
        project_id: Optional[str] = None,
        endpoint: str = GOOGLE_TRANSLATE_ENDPOINT,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = (api_key or "").strip()
        self.project_id = (project_id or "").strip() or None
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def translate(self, text: str, source: str, target: str) -> str:
        translations = self._request(text, source, target)
        if not translations:
            raise MalformedResponseError("Response contained no translations.")
        return translations[0]

    def translate_batch(
        self, texts: Sequence[str], source: str, target: str
    ) -> List[str]:
        if not self.is_configured():
            raise MissingCredentialError(self.name)
        if not texts:
            raise EmptyInputError()

        translations = self._request(list(texts), source, target)
        if len(translations) != len(texts):
            raise MalformedResponseError(
                f"Expected {len(texts)} translations, received {len(translations)}."
            )
        return translations

    def _request(
        self, query: Union[str, List[str]], source: str, target: str
    ) -> List[str]:
        """POST a translate request and return the decoded translations.

        Args:
            query: A single string or a list of strings for the ``q`` field.
            source: Source language code.
            target: Target language code.

        Returns:
            Translated strings in response order.

        Raises:
            MissingCredentialError: If no API key is configured.
            ServiceError: If the service returns a non-2xx status.
            MalformedResponseError: If the body is not the expected shape.
            TranslationError: If the request could not be sent at all.
        """
        if not self.is_configured():
            raise MissingCredentialError(self.name)

        payload = {
            "q": query,
            "source": source,
            "target": target,
            "format": "text",
        }
        post = self.session.post if self.session is not None else requests.post
        try:
            response = post(
                self.endpoint,
                params={"key": self.api_key},
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TranslationError(
                f"{self.name} request failed: {self._redact(str(exc))}"
            ) from exc

        if not 200 <= response.status_code < 300:
            raise ServiceError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedResponseError("Response body is not valid JSON.") from exc

        return [html.unescape(text) for text in self._extract_translations(data)]

    @staticmethod
    def _extract_translations(data: Any) -> List[str]:
        """Pull ``data.translations[*].translatedText`` out of a response."""
        container = data.get("data") if isinstance(data, dict) else None
        translations = (
            container.get("translations") if isinstance(container, dict) else None
        )
        if not isinstance(translations, list):
            raise MalformedResponseError("Response is missing data.translations.")

        texts: List[str] = []
        for item in translations:
            text = item.get("translatedText") if isinstance(item, dict) else None
            if not isinstance(text, str):
                raise MalformedResponseError(
                    "Translation entry is missing translatedText."
                )
            texts.append(text)
        return texts

    def _redact(self, message: str) -> str:
        # requests echoes the full URL, query string included, in its errors
        if self.api_key:
            return message.replace(self.api_key, "***")
        return message


__all__ = ["DEFAULT_TIMEOUT", "GOOGLE_TRANSLATE_ENDPOINT", "GoogleTranslationProvider"]
