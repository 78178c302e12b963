"""Tests for the exception hierarchy."""

import pytest

from leafpress.exceptions import (
    BackendError,
    ConstructionError,
    DocumentError,
    FeatureDisabled,
    HyphenationUnavailable,
    InvalidFontData,
    LayoutError,
    OutOfSpace,
)


class TestHierarchy:
    @pytest.mark.parametrize("cls", [ConstructionError, LayoutError, BackendError])
    def test_base(self, cls):
        assert issubclass(cls, DocumentError)

    def test_subclasses(self):
        assert issubclass(FeatureDisabled, ConstructionError)
        assert issubclass(InvalidFontData, ConstructionError)
        assert issubclass(OutOfSpace, LayoutError)
        assert issubclass(HyphenationUnavailable, LayoutError)


class TestErrorInfo:
    def test_document_error(self):
        cause = ValueError("boom")
        error = DocumentError("failed", cause=cause, error_code="E1", details={"k": 1})
        info = error.get_error_info()
        assert info["type"] == "DocumentError"
        assert info["cause"] == "boom"
        assert info["details"] == {"k": 1}
        assert str(error) == "DocumentError: failed"

    def test_construction_error(self):
        info = ConstructionError("bad", element_type="Table", field_name="padding", field_value=-1).get_error_info()
        assert (info["element_type"], info["field_name"], info["field_value"]) == ("Table", "padding", -1)

    def test_feature_disabled(self):
        error = FeatureDisabled("no images", feature="images", element_type="Image")
        assert error.get_error_info()["feature"] == "images"
        assert error.element_type == "Image"

    def test_out_of_space(self):
        error = OutOfSpace("too tall", requested=120.0, available=80.0, element_type="Image", page_number=2)
        info = error.get_error_info()
        assert info["error_code"] == "out_of_space"
        assert (info["requested"], info["available"], info["page_number"]) == (120.0, 80.0, 2)

    def test_hyphenation_unavailable(self):
        error = HyphenationUnavailable("missing", locale="xx")
        assert error.locale == "xx"
        assert error.error_code == "hyphenation_unavailable"

    def test_backend_error(self):
        info = BackendError("write failed", output_path="/tmp/x.pdf").get_error_info()
        assert info["render_engine"] == "reportlab"
        assert info["output_path"] == "/tmp/x.pdf"
