from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from ...exceptions import ConstructionError
from ..text_metrics import FontHandle, FontMetricsProvider, GlyphCoverage, Metrics

if TYPE_CHECKING:  # pragma: no cover
    from ..style import Style

logger = logging.getLogger(__name__)

DEFAULT_FAMILY = "Helvetica"

# Standard PDF fonts grouped as (regular, bold, italic, bold italic)
BUILTIN_FAMILIES: Dict[str, Tuple[str, str, str, str]] = {
    "Helvetica": ("Helvetica", "Helvetica-Bold", "Helvetica-Oblique", "Helvetica-BoldOblique"),
    "Times": ("Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic"),
    "Courier": ("Courier", "Courier-Bold", "Courier-Oblique", "Courier-BoldOblique"),
}

VARIANT_SUFFIXES = ("Regular", "Bold", "Italic", "BoldItalic")

SEARCH_DIRECTORIES: List[Path] = [
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path.home() / ".fonts",
    Path.home() / ".local/share/fonts",
    Path("C:/Windows/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/Library/Fonts"),
]


@lru_cache()
def _build_font_index() -> Dict[str, Path]:
    index: Dict[str, Path] = {}
    for root in SEARCH_DIRECTORIES:
        if not root.exists():
            continue
        try:
            for candidate in root.rglob("*.ttf"):
                index.setdefault(candidate.name.lower(), candidate)
        except OSError as exc:
            logger.debug("Could not scan font directory %s: %s", root, exc)
    return index


def locate_font_file(candidates: Iterable[str]) -> Optional[Path]:
    """Find the first of ``candidates`` (file names) in the system font directories."""
    index = _build_font_index()
    for name in candidates:
        path = index.get(name.lower())
        if path:
            return path
    return None


@dataclass(frozen=True, slots=True)
class FontFamily:
    regular: FontHandle
    bold: FontHandle
    italic: FontHandle
    bold_italic: FontHandle

    def get(self, bold: bool, italic: bool) -> FontHandle:
        if bold and italic:
            return self.bold_italic
        if bold:
            return self.bold
        if italic:
            return self.italic
        return self.regular

    def handles(self) -> Tuple[FontHandle, ...]:
        return (self.regular, self.bold, self.italic, self.bold_italic)


class FontCache:
    """

    Font families known to one document.

    Resolves a style to a font handle and caches both the resolution and the
    scaled line metrics, so layout queries stay O(1) after the first lookup.
    Characters missing from a font are drawn with the first fallback family
    that has them.

    """

    def __init__(self, provider: FontMetricsProvider, default_family: str = DEFAULT_FAMILY):
        self.provider = provider
        self._families: Dict[str, FontFamily] = {}
        self._resolved: Dict[Tuple[str, bool, bool], FontHandle] = {}
        self._line_metrics: Dict[Tuple[str, float, float], Metrics] = {}
        self._glyphs: Dict[Tuple[str, str], bool] = {}
        self.fallback_families: Tuple[str, ...] = ()
        for name, variants in BUILTIN_FAMILIES.items():
            self._families[name] = FontFamily(*(provider.builtin(v) for v in variants))
        if default_family not in self._families:
            raise ConstructionError(f"Unknown default font family: {default_family}",
                                    field_name="default_family", field_value=default_family)
        self.default_family = default_family

    @property
    def families(self) -> List[str]:
        return sorted(self._families)

    def has_family(self, name: str) -> bool:
        return name in self._families

    def add_family(self, name: str, family: FontFamily) -> FontFamily:
        self._families[name] = family
        self._resolved = {k: v for k, v in self._resolved.items() if k[0] != name}
        return family

    def add_font_family(
        self,
        name: str,
        regular: bytes,
        bold: Optional[bytes] = None,
        italic: Optional[bytes] = None,
        bold_italic: Optional[bytes] = None,
    ) -> FontFamily:
        """

        Load a family from TrueType bytes.

        Missing variants fall back to the regular font (bold italic falls back
        to bold, then italic).

        """
        regular_handle = self.provider.load(regular, name)
        bold_handle = self.provider.load(bold, f"{name}-Bold") if bold else regular_handle
        italic_handle = self.provider.load(italic, f"{name}-Italic") if italic else regular_handle
        if bold_italic:
            bold_italic_handle = self.provider.load(bold_italic, f"{name}-BoldItalic")
        else:
            bold_italic_handle = bold_handle if bold else italic_handle
        logger.debug("Registered font family %s", name)
        return self.add_family(name, FontFamily(regular_handle, bold_handle, italic_handle, bold_italic_handle))

    def load_font_family(self, directory: Union[str, Path], name: str) -> FontFamily:
        """

        Load ``{name}-Regular.ttf``, ``-Bold``, ``-Italic`` and ``-BoldItalic``
        from ``directory``. Only the regular file is required.

        """
        directory = Path(directory)
        data: Dict[str, Optional[bytes]] = {}
        for suffix in VARIANT_SUFFIXES:
            path = directory / f"{name}-{suffix}.ttf"
            if path.exists():
                data[suffix] = path.read_bytes()
            elif suffix == "Regular":
                raise ConstructionError(f"Font file not found: {path}", field_name="directory",
                                        field_value=str(directory))
            else:
                logger.debug("No %s variant for %s in %s", suffix, name, directory)
                data[suffix] = None
        return self.add_font_family(name, data["Regular"], data["Bold"], data["Italic"], data["BoldItalic"])

    def load_system_family(self, name: str) -> FontFamily:
        """Load a family (e.g. ``DejaVuSans``) from the system font directories."""
        regular = locate_font_file((f"{name}.ttf", f"{name}-Regular.ttf"))
        if regular is None:
            raise ConstructionError(f"Font family {name} not found in system font directories",
                                    field_name="font_family", field_value=name)
        variants = {}
        for suffix, alternatives in (("Bold", ("Bold",)), ("Italic", ("Italic", "Oblique")),
                                     ("BoldItalic", ("BoldItalic", "BoldOblique"))):
            path = locate_font_file(f"{name}-{alt}.ttf" for alt in alternatives)
            variants[suffix] = path.read_bytes() if path else None
        return self.add_font_family(name, regular.read_bytes(), variants["Bold"], variants["Italic"],
                                    variants["BoldItalic"])

    def resolve(self, style: "Style") -> FontHandle:
        family_name = style.font_family or self.default_family
        key = (family_name, style.bold, style.italic)
        handle = self._resolved.get(key)
        if handle is None:
            family = self._families.get(family_name)
            if family is None:
                raise ConstructionError(f"Unknown font family: {family_name}", field_name="font_family",
                                        field_value=family_name)
            handle = family.get(style.bold, style.italic)
            self._resolved[key] = handle
        return handle

    def line_metrics(self, style: "Style") -> Metrics:
        handle = self.resolve(style)
        key = (handle.name, style.size, style.spacing)
        metrics = self._line_metrics.get(key)
        if metrics is None:
            metrics = self.provider.metrics(handle, style.size).scaled(style.spacing)
            self._line_metrics[key] = metrics
        return metrics

    def text_width(self, style: "Style", text: str) -> float:
        return self.provider.width(self.resolve(style), text, style.size)

    # Glyph coverage

    def set_fallback_families(self, names: Sequence[str]) -> None:
        """Families tried in order for characters the styled font cannot draw."""
        for name in names:
            if name not in self._families:
                raise ConstructionError(f"Unknown fallback font family: {name}", field_name="fallback_families",
                                        field_value=name)
        self.fallback_families = tuple(names)

    def has_glyph(self, handle: FontHandle, char: str) -> bool:
        key = (handle.name, char)
        covered = self._glyphs.get(key)
        if covered is None:
            covered = self.provider.has_glyph(handle, char)
            self._glyphs[key] = covered
        return covered

    def _chain(self, style: "Style") -> List["Style"]:
        return [style] + [style.with_font_family(name) for name in self.fallback_families]

    def font_for_char(self, style: "Style", char: str) -> "Style":
        """

        First style of the fallback chain whose font covers ``char``.

        Returns ``style`` itself when no font in the chain has the glyph, so
        the character is drawn as the primary font's .notdef.

        """
        for candidate in self._chain(style):
            if self.has_glyph(self.resolve(candidate), char):
                return candidate
        return style

    def segment_text(self, style: "Style", text: str) -> List[Tuple[str, "Style"]]:
        """Split ``text`` into runs of characters that share a font of the fallback chain."""
        if not self.fallback_families:
            return [(text, style)]
        segments: List[Tuple[str, "Style"]] = []
        for char in text:
            current = self.font_for_char(style, char)
            if segments and segments[-1][1] == current:
                segments[-1] = (segments[-1][0] + char, current)
            else:
                segments.append((char, current))
        return segments

    def check_coverage(self, style: "Style", text: str) -> GlyphCoverage:
        chain = [self.resolve(candidate) for candidate in self._chain(style)]
        unique = sorted(set(text))
        missing = tuple(char for char in unique if not any(self.has_glyph(handle, char) for handle in chain))
        if missing:
            logger.debug("No font in the chain of %s covers %r", chain[0].name, "".join(missing))
        return GlyphCoverage(total=len(unique), missing=missing)
