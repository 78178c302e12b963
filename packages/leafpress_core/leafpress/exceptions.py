"""
Exceptions for leafpress documents.

Construction problems are raised while the element tree is built, layout
problems while pages are filled, and backend problems while the PDF is
serialized.
"""

from __future__ import annotations

import traceback
from typing import Any, Dict, Optional


class DocumentError(Exception):
    """
    Base exception for document-related errors.

    Handles error metadata shared by all leafpress exceptions.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None,
                 error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """
        Initialize document error.

        Args:
            message: Error message
            cause: Causing exception
            error_code: Error code
            details: Additional details
        """
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.error_code = error_code
        self.details = details or {}
        self.traceback = traceback.format_exc() if cause is not None else None

    def get_error_info(self) -> Dict[str, Any]:
        """
        Get error information.

        Returns:
            Dictionary with error information
        """
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "error_code": self.error_code,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"


class ConstructionError(DocumentError):
    """Invalid element or document parameters, raised before any rendering."""

    def __init__(self, message: str, element_type: Optional[str] = None,
                 field_name: Optional[str] = None, field_value: Any = None,
                 cause: Optional[BaseException] = None, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        """
        Initialize construction error.

        Args:
            message: Error message
            element_type: Kind of element being built
            field_name: Name of the rejected parameter
            field_value: Value of the rejected parameter
            cause: Causing exception
            error_code: Error code
            details: Additional details
        """
        super().__init__(message, cause, error_code, details)
        self.element_type = element_type
        self.field_name = field_name
        self.field_value = field_value

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info.update({
            "element_type": self.element_type,
            "field_name": self.field_name,
            "field_value": self.field_value,
        })
        return info


class FeatureDisabled(ConstructionError):
    """An optional capability (image decoding, hyphenation) was requested but is not available."""

    def __init__(self, message: str, feature: Optional[str] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.feature = feature

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info["feature"] = self.feature
        return info


class InvalidFontData(ConstructionError):
    """Font bytes could not be parsed by the metrics provider."""

    pass


class LayoutError(DocumentError):
    """
    Exception for layout errors.

    Carries the element kind and the page on which layout failed.
    """

    def __init__(self, message: str, element_type: Optional[str] = None,
                 page_number: Optional[int] = None,
                 cause: Optional[BaseException] = None, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        """
        Initialize layout error.

        Args:
            message: Error message
            element_type: Type of element causing error
            page_number: Page number where error occurred
            cause: Causing exception
            error_code: Error code
            details: Additional details
        """
        super().__init__(message, cause, error_code, details)
        self.element_type = element_type
        self.page_number = page_number

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info.update({
            "element_type": self.element_type,
            "page_number": self.page_number,
        })
        return info


class OutOfSpace(LayoutError):
    """Content needs more room than the area (or a whole fresh page) can give."""

    def __init__(self, message: str, requested: Optional[float] = None,
                 available: Optional[float] = None, **kwargs: Any):
        kwargs.setdefault("error_code", "out_of_space")
        super().__init__(message, **kwargs)
        self.requested = requested
        self.available = available

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info.update({"requested": self.requested, "available": self.available})
        return info


class HyphenationUnavailable(LayoutError):
    """Hyphenation was requested but no dictionary is available; wrapping continues without it."""

    def __init__(self, message: str, locale: Optional[str] = None, **kwargs: Any):
        kwargs.setdefault("error_code", "hyphenation_unavailable")
        super().__init__(message, **kwargs)
        self.locale = locale


class BackendError(DocumentError):
    """
    Exception for failures of the PDF writer.

    Handles serialization and output errors raised by the backend.
    """

    def __init__(self, message: str, render_engine: Optional[str] = "reportlab",
                 output_path: Optional[str] = None,
                 cause: Optional[BaseException] = None, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        """
        Initialize backend error.

        Args:
            message: Error message
            render_engine: Backend that failed
            output_path: Output path where error occurred
            cause: Causing exception
            error_code: Error code
            details: Additional details
        """
        super().__init__(message, cause, error_code, details)
        self.render_engine = render_engine
        self.output_path = output_path

    def get_error_info(self) -> Dict[str, Any]:
        info = super().get_error_info()
        info.update({
            "render_engine": self.render_engine,
            "output_path": self.output_path,
        })
        return info
