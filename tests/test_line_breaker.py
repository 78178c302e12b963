"""Tests for tokenization and greedy line breaking."""

import re

import pytest

from leafpress.engine.elements import TextCursor
from leafpress.engine.line_breaker import Fragment, LineBreaker, Word, slice_word, tokenize
from leafpress.engine.style import Style

STYLE = Style()


def make_words(*specs):
    """Words from (text, width, space_width) triples."""
    return [
        Word(fragments=(Fragment(text, STYLE, width),), space_width=space, index=i, source=text)
        for i, (text, width, space) in enumerate(specs)
    ]


def plain_words(text, measure):
    return tokenize([(text, STYLE, None)], measure)


class TestTokenize:
    def test_splits_on_whitespace(self, char_measure):
        words = plain_words("  Hello   big\nworld ", char_measure)
        assert [w.text for w in words] == ["Hello", "big", "world"]
        assert [w.index for w in words] == [0, 1, 2]
        assert words[0].space_width == 0.0
        assert words[1].space_width == 10.0

    def test_word_spans_runs(self, char_measure):
        bold = Style(bold=True)
        words = tokenize([("Hel", STYLE, None), ("lo there", bold, "https://example.com")], char_measure)
        assert [w.text for w in words] == ["Hello", "there"]
        assert [f.text for f in words[0].fragments] == ["Hel", "lo"]
        assert words[0].fragments[1].style == bold
        assert words[0].fragments[1].link == "https://example.com"

    def test_space_measured_in_run_containing_it(self):
        big = Style(font_size=24)

        def measure(style, text):
            return len(text) * style.size

        words = tokenize([("a ", big, None), ("b", STYLE, None)], measure)
        assert words[1].space_width == 24.0

    def test_empty_input(self, char_measure):
        assert tokenize([("   ", STYLE, None)], char_measure) == []

    def test_segments_use_their_own_style(self, char_measure):
        mono = Style(font_family="Courier")

        def segment(style, text):
            parts = re.findall(r"\d+|\D+", text)
            return [(part, mono if part.isdigit() else style) for part in parts]

        words = tokenize([("item42x next", STYLE, "https://example.com")], char_measure, segment)
        assert [w.text for w in words] == ["item42x", "next"]
        assert [(f.text, f.style) for f in words[0].fragments] == [("item", STYLE), ("42", mono), ("x", STYLE)]
        assert all(f.link == "https://example.com" for f in words[0].fragments)
        assert words[0].width == 70.0


class TestLineBreaker:
    def test_words_on_one_line(self):
        # Hello (60) + space (10) + World (60) fits in 200
        words = make_words(("Hello", 60.0, 0.0), ("World", 60.0, 10.0))
        hyphenator_calls = []

        class Recording:
            def hyphenate(self, word, locale=None):
                hyphenator_calls.append(word)
                return []

        lines = LineBreaker(lambda s, t: 10.0 * len(t), Recording()).break_words(words, 200.0)
        assert len(lines) == 1
        assert lines[0].width == pytest.approx(130.0)
        assert lines[0].is_last
        assert hyphenator_calls == []

    def test_hyphenated_prefix_closes_line(self, char_measure, hyphenator_factory):
        word = "abcdefghijklmnopqrstuvwxy"  # 25 chars, 250pt
        hyphenator = hyphenator_factory({word: [8]})
        words = plain_words(word, char_measure)
        lines = LineBreaker(char_measure, hyphenator).break_words(words, 200.0)
        assert len(lines) == 2
        head, tail = lines[0].words[0], lines[1].words[0]
        assert head.hyphenated
        assert head.width == pytest.approx(90.0)
        assert tail.width == pytest.approx(170.0)
        assert lines[0].text == "abcdefgh-"
        assert head.text + tail.text == word
        assert lines[0].end == TextCursor(0, 8)
        assert lines[1].start == TextCursor(0, 8)
        assert lines[1].is_last

    def test_widest_fitting_break_is_chosen(self, char_measure, hyphenator_factory):
        hyphenator = hyphenator_factory({"abcdefghij": [2, 4, 6, 8]})
        words = plain_words("xx abcdefghij", char_measure)
        # line holds "xx" (20) + space (10); 70pt left: prefix "abcdef-" is 70pt
        lines = LineBreaker(char_measure, hyphenator).break_words(words, 100.0)
        assert lines[0].text == "xx abcdef-"
        assert lines[1].text == "ghij"

    def test_word_moves_to_next_line_without_hyphenation(self, char_measure):
        words = plain_words("aaaa bbbb cccc", char_measure)
        lines = LineBreaker(char_measure).break_words(words, 95.0)
        assert [line.text for line in lines] == ["aaaa bbbb", "cccc"]
        assert [line.is_last for line in lines] == [False, True]
        assert lines[1].start == TextCursor(2, 0)

    def test_overlong_word_overflows_alone(self, char_measure):
        words = plain_words("ab abcdefghijklmnop cd", char_measure)
        lines = LineBreaker(char_measure).break_words(words, 100.0)
        assert [line.text for line in lines] == ["ab", "abcdefghijklmnop", "cd"]
        assert lines[1].width == pytest.approx(160.0)
        assert lines[1].end == TextCursor(2, 0)

    def test_overlong_word_split_repeatedly(self, char_measure, hyphenator_factory):
        word = "a" * 30
        hyphenator = hyphenator_factory({word: [9, 18, 27]})
        lines = LineBreaker(char_measure, hyphenator).break_words(plain_words(word, char_measure), 100.0)
        assert [len(line.words[0].text) for line in lines] == [9, 9, 9, 3]
        assert "".join(line.words[0].text for line in lines) == word

    def test_wrapping_bound(self, char_measure):
        text = "lorem ipsum dolor sit amet consectetur adipiscing elit sed do eiusmod tempor"
        for max_width in (60.0, 90.0, 130.0, 250.0):
            for line in LineBreaker(char_measure).break_words(plain_words(text, char_measure), max_width):
                assert line.width <= max_width or len(line.words) == 1

    def test_resume_from_cursor(self, char_measure):
        words = plain_words("aaaa bbbb cccc dddd", char_measure)
        breaker = LineBreaker(char_measure)
        lines = list(breaker.iter_lines(words, 95.0, TextCursor(2, 0)))
        assert [line.text for line in lines] == ["cccc dddd"]

    def test_resume_inside_hyphenated_word(self, char_measure):
        words = plain_words("abcdefgh ij", char_measure)
        lines = list(LineBreaker(char_measure).iter_lines(words, 200.0, TextCursor(0, 5)))
        assert lines[0].text == "fgh ij"
        assert lines[0].words[0].offset == 5

    def test_lines_are_lazy(self, char_measure):
        calls = []

        def measure(style, text):
            calls.append(text)
            return 10.0 * len(text)

        words = plain_words("aaaa bbbb cccc dddd", char_measure)
        iterator = LineBreaker(measure).iter_lines(words, 45.0)
        next(iterator)
        # only the second word was looked at; nothing was re-measured
        assert calls == []

    def test_empty_word_list(self, char_measure):
        assert LineBreaker(char_measure).break_words([], 100.0) == []


class TestSliceWord:
    def test_slice_across_fragments(self, char_measure):
        bold = Style(bold=True)
        word = tokenize([("abc", STYLE, None), ("def", bold, None)], char_measure)[0]
        head = slice_word(word, 0, 4, char_measure, hyphenated=True)
        assert [f.text for f in head.fragments] == ["abc", "d"]
        assert head.fragments[1].style == bold
        assert head.hyphen_width == 10.0
        assert head.runs()[-1].text == "d-"
        tail = slice_word(word, 4, None, char_measure)
        assert tail.text == "ef"
        assert tail.offset == 4
        assert tail.space_width == 0.0
