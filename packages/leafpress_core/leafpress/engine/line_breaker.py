"""Paragraph line breaking utilities with optional hyphenation support."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from .elements import TextCursor
from .geometry import EPSILON
from .hyphenation import Hyphenator
from .style import Style

logger = logging.getLogger(__name__)

HYPHEN = "-"

MeasureFn = Callable[[Style, str], float]
SegmentFn = Callable[[Style, str], List[Tuple[str, Style]]]

_WHITESPACE = re.compile(r"(\s+)")


@dataclass(frozen=True, slots=True)
class Fragment:
    """Part of a word drawn in a single style."""

    text: str
    style: Style
    width: float
    link: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Word:
    """

    A breakable unit: the fragments between two whitespace runs.

    ``source`` is the full word and ``offset`` the position where the
    fragments start inside it, so a word that was split by hyphenation can be
    resumed from its remainder. ``text`` never contains the inserted hyphen.

    """

    fragments: Tuple[Fragment, ...]
    space_width: float
    index: int
    source: str
    offset: int = 0
    hyphenated: bool = False
    hyphen_width: float = 0.0

    @property
    def text(self) -> str:
        return "".join(fragment.text for fragment in self.fragments)

    @property
    def width(self) -> float:
        return sum(fragment.width for fragment in self.fragments) + self.hyphen_width

    @property
    def styles(self) -> Tuple[Style, ...]:
        return tuple(fragment.style for fragment in self.fragments)

    def runs(self) -> List[Fragment]:
        """Fragments as drawn, with the hyphen glyph appended to the last one."""
        if not self.hyphenated:
            return list(self.fragments)
        *head, last = self.fragments
        return head + [Fragment(last.text + HYPHEN, last.style, last.width + self.hyphen_width, last.link)]


@dataclass(slots=True)
class Line:
    words: List[Word]
    width: float
    start: TextCursor
    end: TextCursor
    is_last: bool = False

    @property
    def hyphenated(self) -> bool:
        return bool(self.words) and self.words[-1].hyphenated

    @property
    def text(self) -> str:
        return " ".join(word.text + (HYPHEN if word.hyphenated else "") for word in self.words)

    @property
    def word_widths(self) -> List[float]:
        return [word.width for word in self.words]

    @property
    def gaps(self) -> List[float]:
        """Natural width of the space before every word except the first."""
        return [word.space_width for word in self.words[1:]]

    @property
    def styles(self) -> List[Style]:
        return [style for word in self.words for style in word.styles]


def tokenize(runs: Sequence[Tuple[str, Style, Optional[str]]], measure: MeasureFn,
             segment: Optional[SegmentFn] = None) -> List[Word]:
    """

    Split styled runs into words.

    Args:
        runs: ``(text, effective style, link)`` triples in reading order
        measure: Width function for a style and a string
        segment: Splits a piece of text into runs drawn with different
            fonts (glyph fallback); by default every piece keeps its style

    Returns:
        Words with measured fragments; a word spans several runs when no
        whitespace separates them. The space before a word is measured in the
        style of the run that contains the whitespace.

    """
    words: List[Word] = []
    fragments: List[Fragment] = []
    gap_style: Optional[Style] = None
    word_gap: Optional[Style] = None

    def flush() -> None:
        if not fragments:
            return
        space = measure(word_gap, " ") if words and word_gap is not None else 0.0
        source = "".join(fragment.text for fragment in fragments)
        words.append(Word(fragments=tuple(fragments), space_width=space, index=len(words), source=source))
        fragments.clear()

    for text, style, link in runs:
        for piece in _WHITESPACE.split(text):
            if not piece:
                continue
            if piece.isspace():
                flush()
                if gap_style is None:
                    gap_style = style
                continue
            if not fragments:
                word_gap, gap_style = gap_style, None
            parts = segment(style, piece) if segment is not None else [(piece, style)]
            for part, part_style in parts:
                fragments.append(Fragment(part, part_style, measure(part_style, part), link))
    flush()
    return words


def slice_word(word: Word, start: int, stop: Optional[int], measure: MeasureFn, hyphenated: bool = False) -> Word:
    """Cut ``word`` to the characters ``[start:stop]`` of its current text, re-measuring cut fragments."""
    stop = len(word.text) if stop is None else stop
    fragments: List[Fragment] = []
    position = 0
    for fragment in word.fragments:
        low, high = position, position + len(fragment.text)
        position = high
        begin, end = max(low, start), min(high, stop)
        if begin >= end:
            continue
        if begin == low and end == high:
            fragments.append(fragment)
            continue
        text = fragment.text[begin - low:end - low]
        fragments.append(Fragment(text, fragment.style, measure(fragment.style, text), fragment.link))

    hyphen_width = measure(fragments[-1].style, HYPHEN) if hyphenated and fragments else 0.0
    return Word(
        fragments=tuple(fragments),
        space_width=word.space_width if start == 0 else 0.0,
        index=word.index,
        source=word.source,
        offset=word.offset + start,
        hyphenated=hyphenated,
        hyphen_width=hyphen_width,
    )


@dataclass(slots=True)
class _LineState:
    words: List[Word] = field(default_factory=list)
    width: float = 0.0


class LineBreaker:
    """

    Greedy line breaker with optional hyphenation.

    Lines are produced lazily, so a caller that stops at a page boundary never
    pays for measuring the rest of the paragraph. A word that fits no line and
    cannot be hyphenated is emitted alone on an overflowing line.

    """

    def __init__(self, measure: MeasureFn, hyphenator: Optional[Hyphenator] = None,
                 locale: Optional[str] = None) -> None:
        self.measure = measure
        self.hyphenator = hyphenator
        self.locale = locale

    def break_words(self, words: Sequence[Word], max_width: float) -> List[Line]:
        return list(self.iter_lines(words, max_width))

    def iter_lines(self, words: Sequence[Word], max_width: float,
                   start: Optional[TextCursor] = None) -> Iterator[Line]:
        start = start or TextCursor()
        index = start.word_index
        carry: Optional[Word] = None
        if start.char_offset and index < len(words):
            carry = slice_word(words[index], start.char_offset, None, self.measure)
            index += 1

        line = _LineState()
        line_start = start

        while True:
            if carry is not None:
                word, carry = carry, None
            elif index < len(words):
                word = words[index]
                index += 1
            else:
                break

            space = word.space_width if line.words else 0.0
            if line.width + space + word.width <= max_width + EPSILON:
                line.words.append(word)
                line.width += space + word.width
                continue

            split = self._hyphenate(word, max_width - line.width - space)
            if split is not None:
                head, tail = split
                line.words.append(head)
                line.width += space + head.width
                resume = TextCursor(tail.index, tail.offset)
                yield Line(line.words, line.width, line_start, resume, is_last=False)
                line, line_start, carry = _LineState(), resume, tail
                continue

            if line.words:
                resume = TextCursor(word.index, word.offset)
                yield Line(line.words, line.width, line_start, resume, is_last=False)
                line, line_start, carry = _LineState(), resume, word
                continue

            logger.debug("Word %r (%.2fpt) overflows line width %.2fpt", word.text, word.width, max_width)
            resume = TextCursor(word.index + 1, 0)
            yield Line([word], word.width, line_start, resume, is_last=index >= len(words))
            line, line_start = _LineState(), resume

        if line.words:
            yield Line(line.words, line.width, line_start, TextCursor(len(words), 0), is_last=True)

    def _hyphenate(self, word: Word, available: float) -> Optional[Tuple[Word, Word]]:
        """Pick the widest prefix (plus hyphen) that fits ``available``."""
        if self.hyphenator is None or available <= 0:
            return None
        offsets = [
            position - word.offset
            for position in self.hyphenator.hyphenate(word.source, self.locale)
            if word.offset < position < len(word.source)
        ]
        for split_at in reversed(offsets):
            head = slice_word(word, 0, split_at, self.measure, hyphenated=True)
            if head.width <= available + EPSILON:
                logger.debug("Hyphenated %r at %d", word.source, word.offset + split_at)
                return head, slice_word(word, split_at, None, self.measure)
        return None
