"""
Scriptura - Core Module

Foundational components shared by every other package:
- Unified error handling
- Type definitions for wire shapes

All modules should import errors from core for consistent behavior.

Usage:
    from core import BooksConversionError, RemoteStorageError
"""

from core.errors import (
    ScripturaError,
    ScripturaConfigError,
    ErrorContext,
    ErrorSeverity,
    UnknownBookNameError,
    InvalidVerseNumberError,
    ModelIntegrityError,
    BooksConversionError,
    BookNameParseError,
    EmptyBookError,
    EmptyChapterError,
    InvalidVerseRangeError,
    DuplicateBookError,
    DuplicateChapterError,
    InconsistentChapterNumberError,
    LegacyFormatError,
    SerializationError,
    RemoteStorageError,
    TranslationInvalidError,
)

__all__ = [
    "ScripturaError",
    "ScripturaConfigError",
    "ErrorContext",
    "ErrorSeverity",
    "UnknownBookNameError",
    "InvalidVerseNumberError",
    "ModelIntegrityError",
    "BooksConversionError",
    "BookNameParseError",
    "EmptyBookError",
    "EmptyChapterError",
    "InvalidVerseRangeError",
    "DuplicateBookError",
    "DuplicateChapterError",
    "InconsistentChapterNumberError",
    "LegacyFormatError",
    "SerializationError",
    "RemoteStorageError",
    "TranslationInvalidError",
]
