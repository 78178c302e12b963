"""Tests for TextAlignmentEngine."""

import pytest

from leafpress.engine.elements import TextCursor
from leafpress.engine.line_breaker import Fragment, Line, Word
from leafpress.engine.style import Alignment, Style
from leafpress.engine.text_alignment import TextAlignmentEngine


def make_line(widths, spaces=None, is_last=False):
    spaces = spaces or [10.0] * len(widths)
    words = [
        Word(fragments=(Fragment("w", Style(), width),), space_width=spaces[i] if i else 0.0, index=i, source="w")
        for i, width in enumerate(widths)
    ]
    natural = sum(widths) + sum(spaces[1:len(widths)])
    return Line(words, natural, TextCursor(0, 0), TextCursor(len(words), 0), is_last=is_last)


class TestCalculateX:
    @pytest.mark.parametrize("alignment,expected", [
        ("left", 0.0),
        ("center", 40.0),
        ("right", 80.0),
        ("justify", 0.0),
    ])
    def test_offsets(self, alignment, expected):
        assert TextAlignmentEngine.calculate_x(200.0, 120.0, alignment) == pytest.approx(expected)

    def test_overflow_stays_at_left_edge(self):
        assert TextAlignmentEngine.calculate_x(100.0, 150.0, Alignment.RIGHT) == 0.0


class TestWordPositions:
    def test_left(self):
        line = make_line([30.0, 40.0])
        assert TextAlignmentEngine.word_positions(line, 200.0) == [0.0, 40.0]

    def test_right(self):
        line = make_line([30.0, 40.0])
        assert TextAlignmentEngine.word_positions(line, 200.0, "right") == [120.0, 160.0]

    def test_justify_fills_width(self):
        line = make_line([30.0, 40.0, 50.0])
        positions = TextAlignmentEngine.word_positions(line, 200.0, Alignment.JUSTIFY)
        gaps = TextAlignmentEngine.justified_gaps(line, 200.0)
        assert sum(gaps) == pytest.approx(200.0 - 120.0)
        assert positions[0] == 0.0
        assert positions[-1] + 50.0 == pytest.approx(200.0)

    def test_justify_is_proportional_to_spaces(self):
        line = make_line([20.0, 20.0, 20.0], spaces=[0.0, 10.0, 30.0])
        gaps = TextAlignmentEngine.justified_gaps(line, 100.0)
        assert gaps == pytest.approx([10.0, 30.0])

    def test_justify_zero_width_spaces(self):
        line = make_line([20.0, 20.0, 20.0], spaces=[0.0, 0.0, 0.0])
        assert TextAlignmentEngine.justified_gaps(line, 100.0) == pytest.approx([20.0, 20.0])

    def test_last_line_stays_left(self):
        line = make_line([30.0, 40.0], is_last=True)
        assert TextAlignmentEngine.word_positions(line, 200.0, "justify") == [0.0, 40.0]

    def test_single_word_line_stays_left(self):
        line = make_line([30.0])
        assert TextAlignmentEngine.word_positions(line, 200.0, "justify") == [0.0]
