"""
Pytest configuration for leafpress
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import pytest

from leafpress.engine.area import Area, Page
from leafpress.engine.element_renderer import ElementRenderer
from leafpress.engine.geometry import Size
from leafpress.engine.hyphenation import Hyphenator
from leafpress.engine.line_breaker import LineBreaker
from leafpress.engine.pdfcompiler.backend import DocumentBackend
from leafpress.engine.style import Style, StyleContext
from leafpress.engine.text_metrics import FontHandle, FontMetricsProvider, Metrics
from leafpress.engine.utils.font_registry import FontCache
from leafpress.exceptions import ConstructionError, InvalidFontData


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    # setup_logging() detaches the package logger from the root; undo that between tests
    package_logger = logging.getLogger("leafpress")
    package_logger.handlers.clear()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)

    yield

    root_logger.handlers.clear()


class FixedWidthMetrics(FontMetricsProvider):
    """Every glyph is half the font size wide; line height equals the font size."""

    def __init__(self, char_factor: float = 0.5):
        self.char_factor = char_factor
        self.width_calls = 0
        # font name -> characters that font has no glyph for
        self.missing: dict = {}

    def load(self, data: bytes, name: Optional[str] = None) -> FontHandle:
        if not data or data.startswith(b"bad"):
            raise InvalidFontData("Could not parse font data", field_name="data")
        return FontHandle(name=f"{name or 'Font'}-{len(data)}", builtin=False)

    def builtin(self, name: str) -> FontHandle:
        if not name:
            raise ConstructionError("empty font name")
        return FontHandle(name=name, builtin=True)

    def width(self, handle: FontHandle, text: str, size: float) -> float:
        self.width_calls += 1
        return len(text) * size * self.char_factor

    def metrics(self, handle: FontHandle, size: float) -> Metrics:
        return Metrics(line_height=size, glyph_height=size, ascent=0.8 * size, descent=-0.2 * size)

    def has_glyph(self, handle: FontHandle, char: str) -> bool:
        return char not in self.missing.get(handle.name, "")


class FixedHyphenator(Hyphenator):
    """Returns preset break offsets per word."""

    def __init__(self, breaks: dict):
        self.breaks = breaks
        self.calls: List[str] = []

    def hyphenate(self, word: str, locale: Optional[str] = None) -> Sequence[int]:
        self.calls.append(word)
        return self.breaks.get(word, [])


class RecordingBackend(DocumentBackend):
    """Backend that records every call instead of writing a document."""

    def __init__(self):
        self.events: List[tuple] = []
        self.pages: List[List[tuple]] = []
        self._current: Optional[List[tuple]] = None
        self.finished = False

    def set_page_size(self, width, height):
        self._current = []
        self.events.append(("page", width, height))

    def draw_text(self, run, position, style):
        event = ("text", run.text, position.x, position.y, style)
        self.events.append(event)
        self._current.append(event)

    def draw_line(self, start, end, line_style):
        event = ("line", start.x, start.y, end.x, end.y)
        self.events.append(event)
        self._current.append(event)

    def draw_image(self, image, rect):
        event = ("image", image, rect)
        self.events.append(event)
        self._current.append(event)

    def end_page(self):
        self.events.append(("end",))
        self.pages.append(self._current)
        self._current = None

    def finish(self) -> bytes:
        self.finished = True
        return b"%RECORDED"

    def page_texts(self, index: int) -> List[str]:
        return [event[1] for event in self.pages[index] if event[0] == "text"]

    def all_texts(self) -> List[str]:
        return [event[1] for event in self.events if event[0] == "text"]


@pytest.fixture
def metrics():
    return FixedWidthMetrics()


@pytest.fixture
def fonts(metrics):
    return FontCache(metrics)


@pytest.fixture
def style_context():
    return StyleContext(Style())


@pytest.fixture
def backend():
    return RecordingBackend()


@pytest.fixture
def char_measure():
    """Ten points per character, spaces and hyphens included."""
    return lambda style, text: 10.0 * len(text)


@pytest.fixture
def hyphenator_factory():
    return FixedHyphenator


@pytest.fixture
def renderer(fonts):
    return ElementRenderer(fonts, LineBreaker(fonts.text_width))


@pytest.fixture
def make_area(backend):
    """Factory for root areas on numbered pages."""

    def factory(width: float = 200.0, height: float = 100.0, number: int = 1) -> Area:
        page = Page(number=number, size=Size(width, height), backend=backend, content_height=height)
        return Area(page, 0.0, 0.0, width, height)

    return factory


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    import tempfile
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    logging.raiseExceptions = False
