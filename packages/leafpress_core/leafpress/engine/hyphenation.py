"""Hyphenation capability backed by pyphen dictionaries."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

try:  # pragma: no cover - optional dependency
    import pyphen
except ImportError:  # pragma: no cover - optional dependency
    pyphen = None  # type: ignore

from ..exceptions import HyphenationUnavailable

logger = logging.getLogger(__name__)


class Hyphenator(ABC):
    """Yields the character offsets inside a word where it may be broken."""

    @abstractmethod
    def hyphenate(self, word: str, locale: Optional[str] = None) -> Sequence[int]:
        """Return ascending break offsets, each strictly between 0 and ``len(word)``."""

    def check_locale(self, locale: str) -> None:
        """Raise :class:`HyphenationUnavailable` when ``locale`` cannot be hyphenated."""


class PyphenHyphenator(Hyphenator):
    """

    Hyphenator using pyphen's hunspell pattern dictionaries.

    The default locale is checked at construction, so a missing dictionary is
    reported before any layout happens.

    """

    def __init__(self, locale: str = "en_US", min_prefix: int = 2, min_suffix: int = 2):
        if pyphen is None:
            raise HyphenationUnavailable("pyphen is not installed", locale=locale)
        self.locale = locale
        self.min_prefix = min_prefix
        self.min_suffix = min_suffix
        self._dictionaries: Dict[str, "pyphen.Pyphen"] = {}
        self._dictionary(locale)

    def _dictionary(self, locale: str) -> "pyphen.Pyphen":
        dictionary = self._dictionaries.get(locale)
        if dictionary is not None:
            return dictionary
        resolved = pyphen.language_fallback(locale)
        if resolved is None:
            raise HyphenationUnavailable(f"No hyphenation dictionary for locale {locale!r}", locale=locale)
        dictionary = pyphen.Pyphen(lang=resolved, left=self.min_prefix, right=self.min_suffix)
        self._dictionaries[locale] = dictionary
        logger.debug("Loaded hyphenation dictionary %s for %s", resolved, locale)
        return dictionary

    def check_locale(self, locale: str) -> None:
        self._dictionary(locale)

    def hyphenate(self, word: str, locale: Optional[str] = None) -> List[int]:
        if len(word) < self.min_prefix + self.min_suffix:
            return []
        dictionary = self._dictionary(locale or self.locale)
        return [pos for pos in dictionary.positions(word) if 0 < pos < len(word)]
