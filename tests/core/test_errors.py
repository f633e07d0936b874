"""
Tests for core/errors.py.
"""
import pytest

from core.errors import (
    BookNameParseError,
    BooksConversionError,
    EmptyChapterError,
    ErrorContext,
    ErrorSeverity,
    InvalidVerseRangeError,
    RemoteStorageError,
    ScripturaConfigError,
    ScripturaError,
    TranslationInvalidError,
)
from domain.books import BookIdentifier
from pipeline.validation import EmptyBook


class TestScripturaError:
    """Tests for the base error."""

    def test_str_includes_code(self):
        error = ScripturaError("Something failed")
        assert str(error) == "[SCRIPTURA_ERROR] Something failed"

    def test_to_dict(self):
        cause = ValueError("inner")
        error = EmptyChapterError("Ruth", 2, cause=cause, suggestions=["add verses"])
        data = error.to_dict()
        assert data["error_code"] == "EMPTY_CHAPTER"
        assert data["severity"] == "error"
        assert data["suggestions"] == ["add verses"]
        assert data["cause"] == "inner"
        assert data["context"] is None

    def test_context(self):
        context = ErrorContext(operation="convert_books", component="pipeline.conversion", book="RUT", chapter=2)
        error = EmptyChapterError("Ruth", 2, context=context)
        assert "(component: pipeline.conversion)" in str(error)
        assert error.to_dict()["context"]["book"] == "RUT"

    def test_context_from_current_span(self):
        context = ErrorContext.from_current_span("validate", "pipeline.validation")
        assert context.trace_id is None
        assert context.operation == "validate"
        assert context.stack_trace is None

    def test_config_error_severity(self):
        error = ScripturaConfigError("bad", config_key="LOG_LEVEL", actual_value="LOUD")
        assert error.severity is ErrorSeverity.CRITICAL
        assert error.config_key == "LOG_LEVEL"


class TestErrorTaxonomy:
    """Tests for the conversion and validation error types."""

    def test_conversion_errors_share_base(self):
        assert issubclass(BookNameParseError, BooksConversionError)
        assert issubclass(InvalidVerseRangeError, BooksConversionError)
        assert issubclass(InvalidVerseRangeError, ValueError)

    def test_invalid_range_message(self):
        error = InvalidVerseRangeError(7, 5)
        assert error.message == "Invalid verse range: start (7) must be less than or equal to end (5)"

    def test_remote_storage(self):
        error = RemoteStorageError()
        assert error.location is None
        assert error.error_code == "REMOTE_STORAGE"

    def test_translation_invalid_carries_defect(self):
        defect = EmptyBook(BookIdentifier.RUTH)
        error = TranslationInvalidError(defect)
        assert error.defect is defect
        assert error.message == "Empty book detected: Ruth has no chapters"

    def test_errors_are_raisable(self):
        with pytest.raises(ScripturaError):
            raise RemoteStorageError(location="https://example.org")
