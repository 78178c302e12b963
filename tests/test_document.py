"""Tests for the Document API."""

import logging

import pytest

from leafpress.document import Document, paragraph, table
from leafpress.engine.elements import LinearLayout, PageBreak, Paragraph, Table, Text
from leafpress.engine.geometry import Margins, Size
from leafpress.engine.style import Style
from leafpress.exceptions import ConstructionError, FeatureDisabled


@pytest.fixture
def make_document(metrics):
    def factory(**kwargs):
        kwargs.setdefault("page_size", (220, 120))
        kwargs.setdefault("margins", Margins.uniform(10))
        return Document(metrics=metrics, **kwargs)

    return factory


class TestBuilding:
    def test_strings_become_paragraphs(self, make_document):
        doc = make_document().push("Hello")
        assert isinstance(doc.elements[0], Paragraph)
        assert len(doc) == 1

    def test_extend(self, make_document):
        doc = make_document().extend(["a", Text("b"), PageBreak()])
        assert len(doc) == 3

    def test_invalid_element(self, make_document):
        with pytest.raises(ConstructionError):
            make_document().push(42)
        with pytest.raises(ConstructionError):
            make_document().push(LinearLayout.vertical(Text("a"), object()))

    def test_unknown_font_family(self, make_document):
        doc = make_document()
        with pytest.raises(ConstructionError) as exc_info:
            doc.push(Paragraph.of("x", Style(font_family="Nope")))
        assert exc_info.value.field_value == "Nope"
        assert len(doc) == 0

    def test_unknown_font_in_nested_cell(self, make_document):
        cell = Paragraph((Text("x", Style(font_family="Nope")),))
        with pytest.raises(ConstructionError):
            make_document().push(Table(((cell,),)))

    def test_unknown_document_font(self, metrics):
        with pytest.raises(ConstructionError):
            Document(style=Style(font_family="Nope"), metrics=metrics)

    def test_registered_family_is_accepted(self, make_document):
        doc = make_document()
        doc.add_font_family("Custom", b"regular-font-bytes")
        doc.push(Paragraph.of("x", Style(font_family="Custom", bold=True)))
        assert len(doc) == 1

    def test_helpers(self):
        para = paragraph("Hello ", Text("world"), style=Style(italic=True))
        assert para.text == "Hello world" and para.style.italic
        built = table([["a", Text("b")]], column_weights=[1, 2], padding=3)
        assert isinstance(built.rows[0][0], Paragraph)
        assert built.column_weights == (1.0, 2.0)
        assert built.padding == 3


class TestOptionalFeatures:
    def test_images_disabled(self, make_document):
        doc = make_document(image_decoder=None)
        with pytest.raises(FeatureDisabled) as exc_info:
            doc.image(b"data")
        assert exc_info.value.feature == "images"
        with pytest.raises(FeatureDisabled):
            doc.image_from_path("missing.png")

    def test_unknown_hyphenation_locale_warns(self, make_document, caplog):
        pytest.importorskip("pyphen")
        with caplog.at_level(logging.WARNING, logger="leafpress"):
            doc = make_document(hyphenation_locale="xx_XX")
        assert doc.hyphenator is None
        assert "Hyphenation disabled" in caplog.text

    def test_explicit_hyphenator_with_unknown_locale(self, make_document, backend, caplog):
        pytest.importorskip("pyphen")
        from leafpress.engine.hyphenation import PyphenHyphenator

        with caplog.at_level(logging.WARNING, logger="leafpress"):
            doc = make_document(hyphenator=PyphenHyphenator("en_US"), hyphenation_locale="zz_ZZ")
        assert doc.hyphenator is None
        assert "zz_ZZ" in caplog.text

        doc.push(Paragraph.of("supercalifragilisticexpialidocious " * 40))
        doc.render(backend)
        assert backend.finished
        assert not any(text.endswith("-") for text in backend.all_texts())

    def test_custom_hyphenator_accepts_any_locale(self, make_document, hyphenator_factory):
        hyphenator = hyphenator_factory({})
        assert make_document(hyphenator=hyphenator, hyphenation_locale="zz_ZZ").hyphenator is hyphenator

    def test_explicit_hyphenator(self, make_document, hyphenator_factory, backend):
        hyphenator = hyphenator_factory({"abcdefghij" * 4: [10]})
        doc = make_document(hyphenator=hyphenator)
        doc.push("abcdefghij" * 4)
        doc.render(backend)
        assert backend.all_texts()[0] == "abcdefghij-"


class TestRendering:
    def test_render_with_backend(self, make_document, backend):
        doc = make_document().extend(["one", PageBreak(), "two"])
        assert doc.render(backend) == b"%RECORDED"
        assert backend.finished
        assert len(backend.pages) == 2
        assert backend.events[0] == ("page", 220.0, 120.0)

    def test_empty_document(self, make_document, backend):
        make_document().render(backend)
        assert len(backend.pages) == 1

    def test_render_twice(self, make_document, backend):
        doc = make_document().push("again")
        first, second = backend, type(backend)()
        doc.render(first)
        doc.render(second)
        assert first.events == second.events

    def test_document_style_applies(self, make_document, backend):
        make_document(style=Style(font_size=20)).push("big").render(backend)
        assert backend.pages[0][0][4].font_size == 20

    def test_header(self, make_document, backend):
        doc = make_document(header=lambda n: Paragraph.of(f"p{n}"), header_spacing=2)
        doc.extend(["a", PageBreak(), "b"]).render(backend)
        assert backend.page_texts(0) == ["p1", "a"]
        assert backend.page_texts(1) == ["p2", "b"]

    def test_page_size_from_tuple(self, make_document):
        assert make_document(page_size=(300, 400)).page_config.page_size == Size(300, 400)


@pytest.mark.integration
class TestPdfOutput:
    def test_render_to_file(self, temp_dir):
        doc = Document()
        doc.push("Hello world")
        path = doc.render_to_file(temp_dir / "hello.pdf")
        assert path.exists()
        assert path.read_bytes().startswith(b"%PDF")

    def test_render_bytes(self):
        data = Document().extend(["one", PageBreak(), "two"]).render()
        assert data.startswith(b"%PDF")
        assert data.rstrip().endswith(b"%%EOF")


class TestFontFallbacks:
    def test_fallbacks_and_coverage(self, make_document, metrics, backend):
        metrics.missing["Helvetica"] = "жя"
        doc = make_document()
        doc.add_font_family("Cyr", b"cyrillic")
        assert doc.set_font_fallbacks("Cyr") is doc
        assert doc.check_coverage("abж").is_complete
        doc.push("aж").render(backend)
        fonts = [event[4].font_family for event in backend.pages[0]]
        assert fonts == [None, "Cyr"]

    def test_coverage_without_fallbacks(self, make_document, metrics):
        metrics.missing["Times-Roman"] = "ж"
        coverage = make_document(style=Style(font_family="Times")).check_coverage("aж")
        assert coverage.missing == ("ж",)

    def test_unknown_fallback(self, make_document):
        with pytest.raises(ConstructionError):
            make_document().set_font_fallbacks("Nope")

    def test_system_family(self, make_document, monkeypatch, temp_dir):
        from leafpress.engine.utils import font_registry

        monkeypatch.setattr(font_registry, "SEARCH_DIRECTORIES", [temp_dir])
        font_registry._build_font_index.cache_clear()
        try:
            (temp_dir / "Noto-Regular.ttf").write_bytes(b"noto")
            doc = make_document()
            doc.load_system_font_family("Noto")
            doc.push(Paragraph.of("x", Style(font_family="Noto")))
            assert len(doc) == 1
        finally:
            font_registry._build_font_index.cache_clear()


class TestHeaderValidation:
    def test_header_font_checked_before_layout(self, make_document, backend):
        doc = make_document(header=lambda n: Paragraph.of(f"p{n}", Style(font_family="Nope")))
        doc.push("body")
        with pytest.raises(ConstructionError) as exc_info:
            doc.render(backend)
        assert exc_info.value.field_value == "Nope"
        assert backend.events == []

    def test_header_must_be_an_element(self, make_document, backend):
        doc = make_document(header=lambda n: f"page {n}")
        with pytest.raises(ConstructionError):
            doc.render(backend)
        assert backend.events == []
