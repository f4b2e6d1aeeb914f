"""Simple gettext-based internationalization helper."""

from __future__ import annotations

import gettext as _gettext
from pathlib import Path


_DOMAIN = "repeatloop"


def _default_locale_dir() -> Path:
    return Path(__file__).resolve().parent.parent / "locale"


class _I18n:
    def __init__(self) -> None:
        self._translation = _gettext.NullTranslations()

    def set_language(self, language: str | None) -> None:
        languages = None
        if language:
            languages = [language]
        self._translation = _gettext.translation(
            _DOMAIN,
            localedir=_default_locale_dir(),
            languages=languages,
            fallback=True,
        )

    def gettext(self, message: str) -> str:
        return self._translation.gettext(message)

    def ngettext(self, singular: str, plural: str, count: int) -> str:
        return self._translation.ngettext(singular, plural, count)


_I18N = _I18n()


def set_language(language: str | None) -> None:
    """Configure active language for status messages."""

    _I18N.set_language(language)


def gettext(message: str) -> str:
    """Return translated message for current language."""

    return _I18N.gettext(message)


def ngettext(singular: str, plural: str, count: int) -> str:
    return _I18N.ngettext(singular, plural, count)


__all__ = ["set_language", "gettext", "ngettext"]
