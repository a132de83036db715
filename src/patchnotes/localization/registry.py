"""Supported patch note languages and their output JSON codes.

The registry is an immutable value: build it once with
``build_default_registry()`` and pass it to whatever needs a lookup.

Usage::

    from patchnotes.localization import build_default_registry

    registry = build_default_registry()
    registry.json_code_for("zh-TW")  # "zh_TW"
    registry.json_code_for("xx-YY")  # "xx_YY"
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class LanguageInfo:
    """Static description of a supported locale.

    Attributes:
        tag: Internal locale tag (e.g. ``ko-KR``, ``es-419``).
        display_name: Human-readable name shown in listings.
        translate_code: Language code understood by the translation service.
        is_default: True if the locale is selected in a fresh session.
    """

    tag: str
    display_name: str
    translate_code: str
    is_default: bool = False


DEFAULT_SOURCE_TAG = "ko-KR"

DEFAULT_LANGUAGES: Tuple[LanguageInfo, ...] = (
    LanguageInfo("ko-KR", "Korean (한국어)", "ko", True),
    LanguageInfo("en-US", "English (미국)", "en", True),
    LanguageInfo("ja-JP", "Japanese (日本語)", "ja", True),
    LanguageInfo("zh-CN", "Chinese Simplified (简体中文)", "zh", True),
    LanguageInfo("zh-TW", "Chinese Traditional (繁體中文)", "zh-TW"),
    LanguageInfo("th", "Thai (ไทย)", "th"),
    LanguageInfo("hi-IN", "Hindi (हिन्दी)", "hi"),
    LanguageInfo("it-IT", "Italian (Italiano)", "it"),
    LanguageInfo("fr-FR", "French (Français)", "fr"),
    LanguageInfo("de-DE", "German (Deutsch)", "de"),
    LanguageInfo("id", "Indonesian (Bahasa Indonesia)", "id"),
    LanguageInfo("vi", "Vietnamese (Tiếng Việt)", "vi"),
    LanguageInfo("ru-RU", "Russian (Русский)", "ru"),
    LanguageInfo("ar", "Arabic (العربية)", "ar"),
    LanguageInfo("sv-SE", "Swedish (Svenska)", "sv"),
    LanguageInfo("es-ES", "Spanish Spain (Español)", "es"),
    LanguageInfo("es-419", "Spanish Latin America (Español Latinoamérica)", "es"),
    LanguageInfo("pt-BR", "Portuguese Brazil (Português do Brasil)", "pt"),
    LanguageInfo("uk", "Ukrainian (Українська)", "uk"),
    LanguageInfo("tr-TR", "Turkish (Türkçe)", "tr"),
    LanguageInfo("pl-PL", "Polish (Polski)", "pl"),
    LanguageInfo("nl-NL", "Dutch (Nederlands)", "nl"),
)

# Tag -> language code written to each updateDetail entry
DEFAULT_JSON_CODES: Dict[str, str] = {
    "ko-KR": "ko_KR",
    "en-US": "en_US",
    "ja-JP": "ja_JP",
    "zh-CN": "zh_CN",
    "zh-TW": "zh_TW",
    "th": "th_TH",
    "hi-IN": "hi_IN",
    "it-IT": "it_IT",
    "fr-FR": "fr_FR",
    "de-DE": "de_DE",
    "id": "id_ID",
    "vi": "vi_VN",
    "ru-RU": "ru_RU",
    "ar": "ar_SA",
    "sv-SE": "sv_SE",
    "es-ES": "es_ES",
    "es-419": "es_419",
    "pt-BR": "pt_BR",
    "uk": "uk_UA",
    "tr-TR": "tr_TR",
    "pl-PL": "pl_PL",
    "nl-NL": "nl_NL",
}


class LanguageRegistry:
    """Read-only collection of supported languages.

    Attributes:
        json_codes: Read-only mapping of tag to output JSON language code.
    """

    def __init__(
        self,
        languages: Iterable[LanguageInfo],
        json_codes: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Create a registry from an ordered list of languages.

        Args:
            languages: Languages in display order.
            json_codes: Optional tag to JSON code overrides.

        Raises:
            ValueError: If two languages share the same tag.
        """
        self._languages: Tuple[LanguageInfo, ...] = tuple(languages)
        self._by_tag: Dict[str, LanguageInfo] = {}
        for info in self._languages:
            if info.tag in self._by_tag:
                raise ValueError(f"Duplicate language tag: {info.tag}")
            self._by_tag[info.tag] = info
        self.json_codes: Mapping[str, str] = MappingProxyType(dict(json_codes or {}))

    def list_languages(self) -> Tuple[LanguageInfo, ...]:
        """Return every language in registry order."""
        return self._languages

    def json_code_for(self, tag: str) -> str:
        """Return the output JSON language code for a tag.

        Falls back to the tag with ``-`` replaced by ``_`` when the
        registry has no explicit mapping.
        """
        code = self.json_codes.get(tag)
        if code:
            return code
        return tag.replace("-", "_")

    def get(self, tag: str) -> Optional[LanguageInfo]:
        return self._by_tag.get(tag)

    def tags(self) -> List[str]:
        return [info.tag for info in self._languages]

    def default_tags(self) -> List[str]:
        return [info.tag for info in self._languages if info.is_default]

    def resolve_tag(self, code: Optional[str]) -> Optional[str]:
        """Return the canonical registry tag for a user-supplied code.

        Performs a case-insensitive lookup that also accepts the JSON code
        form (``zh_TW``) in place of the tag (``zh-TW``).

        Args:
            code: Tag or JSON code to resolve.

        Returns:
            The matching tag with its registry casing, or None if not found.
        """
        if not code:
            return None
        normalized = code.strip().lower()
        if not normalized:
            return None
        for info in self._languages:
            if info.tag.lower() == normalized:
                return info.tag
        for info in self._languages:
            if self.json_code_for(info.tag).lower() == normalized:
                return info.tag
        return None

    def normalize_tags(self, codes: Optional[Sequence[str]]) -> List[str]:
        """Resolve many codes at once.

        Passing ``"all"`` anywhere in the sequence returns every tag. Unknown
        codes are dropped and duplicates collapse to their first occurrence.

        Args:
            codes: Tags or JSON codes to resolve.

        Returns:
            Canonical tags in the order given.
        """
        if not codes:
            return []
        resolved: List[str] = []
        for code in codes:
            if isinstance(code, str) and code.strip().lower() == "all":
                return self.tags()
            tag = self.resolve_tag(code)
            if tag and tag not in resolved:
                resolved.append(tag)
        return resolved

    def __contains__(self, tag: object) -> bool:
        return tag in self._by_tag

    def __iter__(self) -> Iterator[LanguageInfo]:
        return iter(self._languages)

    def __len__(self) -> int:
        return len(self._languages)


def build_default_registry() -> LanguageRegistry:
    """Construct the registry of languages supported out of the box."""
    return LanguageRegistry(DEFAULT_LANGUAGES, DEFAULT_JSON_CODES)


__all__ = [
    "DEFAULT_JSON_CODES",
    "DEFAULT_LANGUAGES",
    "DEFAULT_SOURCE_TAG",
    "LanguageInfo",
    "LanguageRegistry",
    "build_default_registry",
]
