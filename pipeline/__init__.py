"""
Scriptura - Pipeline Package

Legacy conversion (fail-fast) and structural validation (exhaustive).

Usage:
    from pipeline import convert_books, validate_books, validation_report

    books = convert_books(legacy)
    result = validate_books(books)
    print(validation_report(result))
"""
from pipeline.conversion import convert, convert_books, parse_verse_number
from pipeline.validation import (
    ChapterGap,
    DefectKind,
    DuplicateVerse,
    EmptyBook,
    EmptyChapter,
    InvalidVerseRange,
    MissingChapter,
    MissingVerse,
    MultipleErrors,
    OverlappingRanges,
    ValidationDefect,
    ValidationResult,
    ValidationStatistics,
    VerseGap,
    check,
    is_valid,
    to_single_error,
    validate,
    validate_book,
    validate_books,
    validation_report,
)

__all__ = [
    "convert",
    "convert_books",
    "parse_verse_number",
    "ChapterGap",
    "DefectKind",
    "DuplicateVerse",
    "EmptyBook",
    "EmptyChapter",
    "InvalidVerseRange",
    "MissingChapter",
    "MissingVerse",
    "MultipleErrors",
    "OverlappingRanges",
    "ValidationDefect",
    "ValidationResult",
    "ValidationStatistics",
    "VerseGap",
    "check",
    "is_valid",
    "to_single_error",
    "validate",
    "validate_book",
    "validate_books",
    "validation_report",
]
