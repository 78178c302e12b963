"""

TextAlignmentEngine - horizontal placement of a wrapped line.

Supports:
- left: left alignment (default)
- center: leftover width split evenly on both sides
- right: right alignment
- justify: leftover width distributed over the gaps between words

The last line of a paragraph, single-word lines and overflowing lines are
always left aligned.

"""

from typing import List, Union

from .geometry import EPSILON
from .line_breaker import Line
from .style import Alignment


class TextAlignmentEngine:
    """Computes the X offsets of the words of a line."""

    @staticmethod
    def calculate_x(max_width: float, text_width: float, alignment: Union[str, Alignment] = Alignment.LEFT) -> float:
        """

        Calculates the X offset of a line based on alignment.

        Args:
            max_width: Width available to the line
            text_width: Natural width of the line
            alignment: Alignment of the paragraph

        Returns:
            X offset relative to the left edge

        """
        alignment = Alignment.parse(alignment)
        if alignment == Alignment.CENTER:
            return max(0.0, (max_width - text_width) / 2)
        if alignment == Alignment.RIGHT:
            return max(0.0, max_width - text_width)
        return 0.0

    @staticmethod
    def can_justify(line: Line, max_width: float) -> bool:
        return not line.is_last and len(line.words) > 1 and line.width <= max_width + EPSILON

    @staticmethod
    def justified_gaps(line: Line, max_width: float) -> List[float]:
        """

        Gap widths for a justified line.

        The gaps sum to ``max_width - sum(word widths)`` and are proportional to
        the natural space widths (equal when all spaces are zero wide).

        """
        natural = line.gaps
        leftover = max_width - sum(line.word_widths)
        total = sum(natural)
        if total > 0:
            return [leftover * gap / total for gap in natural]
        return [leftover / len(natural)] * len(natural)

    @staticmethod
    def word_positions(line: Line, max_width: float, alignment: Union[str, Alignment] = Alignment.LEFT) -> List[float]:
        """X offset of every word of ``line``."""
        alignment = Alignment.parse(alignment)
        if alignment == Alignment.JUSTIFY and TextAlignmentEngine.can_justify(line, max_width):
            gaps = TextAlignmentEngine.justified_gaps(line, max_width)
            x = 0.0
        else:
            if alignment == Alignment.JUSTIFY:
                alignment = Alignment.LEFT
            gaps = line.gaps
            x = TextAlignmentEngine.calculate_x(max_width, line.width, alignment)

        positions = []
        for i, word in enumerate(line.words):
            if i:
                x += gaps[i - 1]
            positions.append(x)
            x += word.width
        return positions
