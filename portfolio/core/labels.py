"""
Translated display strings.

Labels are opaque text looked up by dotted key (``contact.form.name``). The
catalogs themselves come from the page's content source.
"""

from typing import Any, Callable, Mapping, Optional

from portfolio.core.config import settings

LabelSource = Callable[[str], str]


class CatalogLabels:
    """Dotted-key lookup over per-language nested dictionaries.

    Missing keys fall back to the fallback language, then to the key itself.
    """

    def __init__(
        self,
        catalogs: Mapping[str, Mapping[str, Any]],
        language: Optional[str] = None,
        fallback_language: Optional[str] = None,
    ):
        self.catalogs = catalogs
        self.language = (language or settings.DEFAULT_LANGUAGE).lower()
        self.fallback_language = (
            fallback_language or settings.DEFAULT_LANGUAGE
        ).lower()

    def __call__(self, key: str) -> str:
        for language in (self.language, self.fallback_language):
            value = _lookup(self.catalogs.get(language, {}), key)
            if value is not None:
                return value
        return key


def _lookup(catalog: Mapping[str, Any], key: str) -> Optional[str]:
    node: Any = catalog
    for part in key.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return None
        node = node[part]
    return node if isinstance(node, str) else None


def is_rtl(language: str, rtl_languages=None) -> bool:
    """Whether text in language is laid out right to left."""
    rtl_languages = settings.RTL_LANGUAGES if rtl_languages is None else rtl_languages
    return language.lower().split("-")[0] in rtl_languages
