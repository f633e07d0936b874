"""
Scriptura - Unified Error Handling

Provides the error hierarchy shared by the catalog, the data model,
the conversion pipeline and the validation engine.

Features:
- Hierarchical exception classes with context preservation
- Error severity levels for prioritized handling
- Structured error context for debugging
- OpenTelemetry integration for error tracing

Two policies live side by side:
- Conversion errors are raised at the first structural defect.
- Validation defects are collected as values (see pipeline.validation);
  only the precondition failure RemoteStorageError and the pass/fail
  wrapper TranslationInvalidError are raised.
"""

from __future__ import annotations

import sys
import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

if TYPE_CHECKING:
    from pipeline.validation import ValidationDefect


class ErrorSeverity(Enum):
    """Error severity levels for prioritized handling."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """Structured context for error debugging and tracing."""

    operation: str
    component: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    trace_id: Optional[str] = None
    span_id: Optional[str] = None
    book: Optional[str] = None
    chapter: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    stack_trace: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary for serialization."""
        return {
            "operation": self.operation,
            "component": self.component,
            "timestamp": self.timestamp.isoformat(),
            "trace_id": self.trace_id,
            "span_id": self.span_id,
            "book": self.book,
            "chapter": self.chapter,
            "metadata": self.metadata,
            "stack_trace": self.stack_trace,
        }

    @classmethod
    def from_current_span(
        cls,
        operation: str,
        component: str,
        **kwargs: Any
    ) -> "ErrorContext":
        """Create context from current OpenTelemetry span."""
        span = trace.get_current_span()
        trace_id = None
        span_id = None

        if span and span.is_recording():
            ctx = span.get_span_context()
            if ctx.is_valid:
                trace_id = format(ctx.trace_id, "032x")
                span_id = format(ctx.span_id, "016x")

        return cls(
            operation=operation,
            component=component,
            trace_id=trace_id,
            span_id=span_id,
            stack_trace=traceback.format_exc() if sys.exc_info()[0] else None,
            **kwargs
        )


class ScripturaError(Exception):
    """
    Base exception for all Scriptura-specific errors.

    Provides:
    - Structured error context
    - Severity level
    - Chained exception support
    - OpenTelemetry span recording
    """

    default_severity: ErrorSeverity = ErrorSeverity.ERROR
    error_code: str = "SCRIPTURA_ERROR"

    def __init__(
        self,
        message: str,
        context: Optional[ErrorContext] = None,
        severity: Optional[ErrorSeverity] = None,
        cause: Optional[Exception] = None,
        suggestions: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context
        self.severity = severity or self.default_severity
        self.cause = cause
        self.suggestions = suggestions or []
        self.timestamp = datetime.now(timezone.utc)

        self._record_to_span()

    def _record_to_span(self) -> None:
        """Record exception to current OpenTelemetry span."""
        span = trace.get_current_span()
        if span and span.is_recording():
            span.set_status(Status(StatusCode.ERROR, self.message))
            span.record_exception(self)
            span.set_attribute("error.code", self.error_code)
            span.set_attribute("error.severity", self.severity.value)
            if self.context:
                span.set_attribute("error.component", self.context.component)
                span.set_attribute("error.operation", self.context.operation)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for reports."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "suggestions": self.suggestions,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context.to_dict() if self.context else None,
            "cause": str(self.cause) if self.cause else None,
        }

    def __str__(self) -> str:
        parts = [f"[{self.error_code}] {self.message}"]
        if self.context:
            parts.append(f" (component: {self.context.component})")
        if self.cause:
            parts.append(f" [caused by: {self.cause}]")
        return "".join(parts)


class ScripturaConfigError(ScripturaError):
    """Configuration-related errors."""

    error_code = "CONFIG_ERROR"
    default_severity = ErrorSeverity.CRITICAL

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        actual_value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.config_key = config_key
        self.actual_value = actual_value


# =============================================================================
# CATALOG AND MODEL CONSTRUCTION
# =============================================================================


class UnknownBookNameError(ScripturaError, ValueError):
    """Raised when a book name matches no canonical identifier."""

    error_code = "UNKNOWN_BOOK_NAME"

    def __init__(self, name: str, **kwargs: Any):
        super().__init__(f"Unknown book name: {name}", **kwargs)
        self.name = name


class InvalidVerseNumberError(ScripturaError, ValueError):
    """Raised for verse numbers that are not positive."""

    error_code = "INVALID_VERSE_NUMBER"

    def __init__(self, number: int, **kwargs: Any):
        super().__init__(f"Verse number must be positive, got {number}", **kwargs)
        self.number = number


class ModelIntegrityError(ScripturaError, ValueError):
    """Raised when an ordered mapping of the model is built with bad keys."""

    error_code = "MODEL_INTEGRITY_ERROR"


# =============================================================================
# CONVERSION ERRORS (fail-fast)
# =============================================================================


class BooksConversionError(ScripturaError):
    """Base class for errors raised while converting legacy input."""

    error_code = "CONVERSION_ERROR"


class BookNameParseError(BooksConversionError):
    """A legacy book name could not be resolved through the catalog."""

    error_code = "BOOK_NAME_PARSE"

    def __init__(self, name: str, **kwargs: Any):
        super().__init__(f"Failed to parse book name: Unknown book name: {name}", **kwargs)
        self.name = name


class EmptyBookError(BooksConversionError):
    error_code = "EMPTY_BOOK"

    def __init__(self, book: str, **kwargs: Any):
        super().__init__(f"Book '{book}' has no chapters", **kwargs)
        self.book = book


class EmptyChapterError(BooksConversionError):
    error_code = "EMPTY_CHAPTER"

    def __init__(self, book: str, chapter: int, **kwargs: Any):
        super().__init__(f"Chapter {chapter} in book '{book}' has no verses", **kwargs)
        self.book = book
        self.chapter = chapter


class InvalidVerseRangeError(BooksConversionError, ValueError):
    """
    A verse range whose start exceeds its end.

    Raised by the Range constructor as well as by the conversion pipeline.
    """

    error_code = "INVALID_VERSE_RANGE"

    def __init__(self, start: int, end: int, **kwargs: Any):
        super().__init__(
            f"Invalid verse range: start ({start}) must be less than or equal to end ({end})",
            **kwargs,
        )
        self.start = start
        self.end = end


class DuplicateBookError(BooksConversionError):
    error_code = "DUPLICATE_BOOK"

    def __init__(self, name: str, **kwargs: Any):
        super().__init__(f"Duplicate book found: {name}", **kwargs)
        self.name = name


class DuplicateChapterError(BooksConversionError):
    error_code = "DUPLICATE_CHAPTER"

    def __init__(self, book: str, chapter: int, **kwargs: Any):
        super().__init__(f"Chapter {chapter} appears more than once in book '{book}'", **kwargs)
        self.book = book
        self.chapter = chapter


class InconsistentChapterNumberError(BooksConversionError):
    error_code = "INCONSISTENT_CHAPTER_NUMBER"

    def __init__(
        self,
        book: str,
        chapter: int,
        verse: int,
        expected: int,
        found: int,
        **kwargs: Any,
    ):
        super().__init__(
            f"Verse {verse} in chapter {chapter} of book '{book}' has inconsistent "
            f"chapter number: expected {expected}, found {found}",
            **kwargs,
        )
        self.book = book
        self.chapter = chapter
        self.verse = verse
        self.expected = expected
        self.found = found


# =============================================================================
# INPUT FORMAT ERRORS
# =============================================================================


class LegacyFormatError(ScripturaError):
    """The legacy document does not have the expected shape."""

    error_code = "LEGACY_FORMAT_ERROR"


class SerializationError(ScripturaError):
    """A canonical JSON document could not be decoded."""

    error_code = "SERIALIZATION_ERROR"


# =============================================================================
# VALIDATION OUTCOMES
# =============================================================================


class RemoteStorageError(ScripturaError):
    """Validation was requested for books that are not held locally."""

    error_code = "REMOTE_STORAGE"

    def __init__(self, location: Optional[str] = None, **kwargs: Any):
        super().__init__("Cannot validate remote storage - books data is not local", **kwargs)
        self.location = location


class TranslationInvalidError(ScripturaError):
    """
    Raised by ``check`` when validation found at least one defect.

    ``defect`` is either the single defect found or a MultipleErrors
    wrapper carrying all of them.
    """

    error_code = "TRANSLATION_INVALID"

    def __init__(self, defect: "ValidationDefect", **kwargs: Any):
        super().__init__(defect.message, **kwargs)
        self.defect = defect
