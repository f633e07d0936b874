"""
Scriptura - Validation Engine

Audits canonical Books and reports every structural defect in one pass.

Unlike conversion, validation never stops early: defects are collected as
values into a ValidationResult together with free-text warnings and
statistics. The only raised outcomes are RemoteStorageError (there is no
local data to audit) and TranslationInvalidError from ``check``.

Checks per book:
    - a book without chapters is an EmptyBook
    - chapter numbers must form a contiguous run (ChapterGap plus one
      MissingChapter per hole); a first chapter other than 1 is a warning
    - a chapter without verses is an EmptyChapter
    - verse integers, after expanding ranges, must not repeat
      (DuplicateVerse); ranges must be well-formed (InvalidVerseRange)
      and must not overlap (OverlappingRanges)
    - verse integers must form a contiguous run (VerseGap); a first verse
      other than 1 is a warning

Books are independent of each other: each is validated into its own
result and the results are merged.

Usage:
    from pipeline.validation import validate_books, validation_report

    result = validate_books(books)
    if not result.is_valid:
        print(validation_report(result))
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from config import get_config
from core.errors import RemoteStorageError, TranslationInvalidError
from core.types import DefectDict, StatisticsDict, ValidationResultDict
from domain.books import BookIdentifier, canonical_order
from domain.entities import Book, Books, Chapter, Translation, Verse
from domain.storage import Remote
from domain.verse_number import Range
from observability import LogContext, create_span, get_logger

logger = get_logger(__name__)


# =============================================================================
# DEFECTS
# =============================================================================


class DefectKind(str, Enum):
    """Kinds of structural defect the engine can report."""
    MISSING_VERSE = "MissingVerse"
    VERSE_GAP = "VerseGap"
    MISSING_CHAPTER = "MissingChapter"
    CHAPTER_GAP = "ChapterGap"
    EMPTY_CHAPTER = "EmptyChapter"
    EMPTY_BOOK = "EmptyBook"
    DUPLICATE_VERSE = "DuplicateVerse"
    INVALID_VERSE_RANGE = "InvalidVerseRange"
    OVERLAPPING_RANGES = "OverlappingRanges"
    MULTIPLE_ERRORS = "MultipleErrors"


def _plain(value: Any) -> Any:
    if isinstance(value, BookIdentifier):
        return value.code
    if isinstance(value, ValidationDefect):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_plain(item) for item in value]
    return value


@dataclass(frozen=True)
class ValidationDefect:
    """Base class for defect values; subclasses define ``kind`` and ``message``."""

    kind: ClassVar[DefectKind]

    @property
    def message(self) -> str:
        raise NotImplementedError

    def to_dict(self) -> DefectDict:
        data: Dict[str, Any] = {"kind": self.kind.value, "message": self.message}
        for f in fields(self):
            data[f.name] = _plain(getattr(self, f.name))
        return data  # type: ignore[return-value]

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class MissingVerse(ValidationDefect):
    """A single absent verse. Available to consumers; the engine reports VerseGap instead."""
    book: BookIdentifier
    chapter: int
    verse: int

    kind: ClassVar[DefectKind] = DefectKind.MISSING_VERSE

    @property
    def message(self) -> str:
        return f"Missing verse {self.book.display_name} {self.chapter}:{self.verse}"


@dataclass(frozen=True)
class VerseGap(ValidationDefect):
    book: BookIdentifier
    chapter: int
    missing: Tuple[int, ...]

    kind: ClassVar[DefectKind] = DefectKind.VERSE_GAP

    @property
    def message(self) -> str:
        return (
            f"Verse gap detected in {self.book.display_name} chapter {self.chapter}: "
            f"missing verses {list(self.missing)}"
        )


@dataclass(frozen=True)
class MissingChapter(ValidationDefect):
    book: BookIdentifier
    chapter: int

    kind: ClassVar[DefectKind] = DefectKind.MISSING_CHAPTER

    @property
    def message(self) -> str:
        return f"Missing chapter {self.chapter} in {self.book.display_name}"


@dataclass(frozen=True)
class ChapterGap(ValidationDefect):
    book: BookIdentifier
    missing: Tuple[int, ...]

    kind: ClassVar[DefectKind] = DefectKind.CHAPTER_GAP

    @property
    def message(self) -> str:
        return f"Chapter gap detected in {self.book.display_name}: missing chapters {list(self.missing)}"


@dataclass(frozen=True)
class EmptyChapter(ValidationDefect):
    book: BookIdentifier
    chapter: int

    kind: ClassVar[DefectKind] = DefectKind.EMPTY_CHAPTER

    @property
    def message(self) -> str:
        return f"Empty chapter detected: {self.book.display_name} chapter {self.chapter} has no verses"


@dataclass(frozen=True)
class EmptyBook(ValidationDefect):
    book: BookIdentifier

    kind: ClassVar[DefectKind] = DefectKind.EMPTY_BOOK

    @property
    def message(self) -> str:
        return f"Empty book detected: {self.book.display_name} has no chapters"


@dataclass(frozen=True)
class DuplicateVerse(ValidationDefect):
    book: BookIdentifier
    chapter: int
    verse: int

    kind: ClassVar[DefectKind] = DefectKind.DUPLICATE_VERSE

    @property
    def message(self) -> str:
        return f"Duplicate verse {self.verse} in {self.book.display_name} chapter {self.chapter}"


@dataclass(frozen=True)
class InvalidVerseRange(ValidationDefect):
    book: BookIdentifier
    chapter: int
    start: int
    end: int

    kind: ClassVar[DefectKind] = DefectKind.INVALID_VERSE_RANGE

    @property
    def message(self) -> str:
        return (
            f"Invalid verse range in {self.book.display_name} chapter {self.chapter}: "
            f"{self.start}-{self.end} (start must be <= end)"
        )


@dataclass(frozen=True)
class OverlappingRanges(ValidationDefect):
    """``range1`` is the range seen first, ``range2`` the one that overlaps it."""
    book: BookIdentifier
    chapter: int
    range1: Tuple[int, int]
    range2: Tuple[int, int]

    kind: ClassVar[DefectKind] = DefectKind.OVERLAPPING_RANGES

    @property
    def message(self) -> str:
        return (
            f"Overlapping verse ranges in {self.book.display_name} chapter {self.chapter}: "
            f"{self.range1} and {self.range2}"
        )


@dataclass(frozen=True)
class MultipleErrors(ValidationDefect):
    count: int
    errors: Tuple[ValidationDefect, ...]

    kind: ClassVar[DefectKind] = DefectKind.MULTIPLE_ERRORS

    @property
    def message(self) -> str:
        return f"Multiple validation errors found: {self.count} errors"


# =============================================================================
# RESULT
# =============================================================================


@dataclass
class ValidationStatistics:
    """Counters gathered while validating."""
    total_books: int = 0
    total_chapters: int = 0
    total_verses: int = 0
    books_with_errors: int = 0
    chapters_with_errors: int = 0

    def __add__(self, other: "ValidationStatistics") -> "ValidationStatistics":
        if not isinstance(other, ValidationStatistics):
            return NotImplemented
        return ValidationStatistics(
            total_books=self.total_books + other.total_books,
            total_chapters=self.total_chapters + other.total_chapters,
            total_verses=self.total_verses + other.total_verses,
            books_with_errors=self.books_with_errors + other.books_with_errors,
            chapters_with_errors=self.chapters_with_errors + other.chapters_with_errors,
        )

    def to_dict(self) -> StatisticsDict:
        return {
            "total_books": self.total_books,
            "total_chapters": self.total_chapters,
            "total_verses": self.total_verses,
            "books_with_errors": self.books_with_errors,
            "chapters_with_errors": self.chapters_with_errors,
        }


@dataclass
class ValidationResult:
    """All defects, all warnings and the statistics of one validation run."""
    errors: List[ValidationDefect] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    statistics: ValidationStatistics = field(default_factory=ValidationStatistics)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Concatenate defects and warnings and sum the statistics."""
        return ValidationResult(
            errors=self.errors + other.errors,
            warnings=self.warnings + other.warnings,
            statistics=self.statistics + other.statistics,
        )

    @classmethod
    def combine(cls, results: Iterable["ValidationResult"]) -> "ValidationResult":
        """Merge any number of results, in order, into one new result."""
        combined = cls()
        for result in results:
            combined.errors.extend(result.errors)
            combined.warnings.extend(result.warnings)
            combined.statistics += result.statistics
        return combined

    def summary(self) -> str:
        stats = self.statistics
        return (
            "Validation Summary:\n"
            f" - Total books: {stats.total_books}\n"
            f" - Total chapters: {stats.total_chapters}\n"
            f" - Total verses: {stats.total_verses}\n"
            f" - Errors found: {len(self.errors)}\n"
            f" - Warnings: {len(self.warnings)}\n"
            f" - Books with errors: {stats.books_with_errors}\n"
            f" - Chapters with errors: {stats.chapters_with_errors}"
        )

    def to_dict(self) -> ValidationResultDict:
        return {
            "valid": self.is_valid,
            "errors": [error.to_dict() for error in self.errors],
            "warnings": list(self.warnings),
            "statistics": self.statistics.to_dict(),
        }


# =============================================================================
# PER-BOOK CHECKS
# =============================================================================


def _missing_between(present: Iterable[int]) -> Tuple[int, ...]:
    present = set(present)
    return tuple(n for n in range(min(present), max(present) + 1) if n not in present)


def _validate_verses(
    book: BookIdentifier,
    chapter: int,
    verses: Sequence[Verse],
    result: ValidationResult,
) -> None:
    seen: Set[int] = set()
    accepted: List[Range] = []

    for verse in verses:
        result.statistics.total_verses += 1
        number = verse.number

        if isinstance(number, Range):
            # Range() refuses start > end, but a value can still be forged
            if number.start > number.end:
                result.errors.append(InvalidVerseRange(book, chapter, number.start, number.end))
                continue
            for earlier in accepted:
                if earlier.overlaps(number):
                    result.errors.append(
                        OverlappingRanges(book, chapter, earlier.as_tuple(), number.as_tuple())
                    )
            accepted.append(number)

        for n in number.expand():
            if n in seen:
                result.errors.append(DuplicateVerse(book, chapter, n))
            else:
                seen.add(n)

    if not seen:
        return

    first = min(seen)
    if first != 1:
        result.warnings.append(
            f"{book.display_name} chapter {chapter} starts at verse {first} instead of verse 1"
        )

    missing = _missing_between(seen)
    if missing:
        result.errors.append(VerseGap(book, chapter, missing))


def _validate_chapter(
    book: BookIdentifier,
    number: int,
    chapter: Chapter,
    result: ValidationResult,
) -> None:
    result.statistics.total_chapters += 1
    errors_before = len(result.errors)

    if chapter.is_empty():
        result.errors.append(EmptyChapter(book, number))
    else:
        _validate_verses(book, number, chapter.verses, result)

    if len(result.errors) > errors_before:
        result.statistics.chapters_with_errors += 1


def validate_book(identifier: BookIdentifier, book: Book) -> ValidationResult:
    """Validate one book in isolation; reads no state of any other book."""
    result = ValidationResult()
    result.statistics.total_books = 1

    if not book.chapters:
        result.errors.append(EmptyBook(identifier))
    else:
        numbers = list(book.chapters)
        missing = _missing_between(numbers)
        if missing:
            result.errors.append(ChapterGap(identifier, missing))
            result.errors.extend(MissingChapter(identifier, n) for n in missing)

        if numbers[0] != 1:
            result.warnings.append(
                f"Book {identifier.display_name} starts at chapter {numbers[0]} instead of chapter 1"
            )

        for number, chapter in book.chapters.items():
            _validate_chapter(identifier, number, chapter, result)

    if result.errors:
        result.statistics.books_with_errors = 1
        logger.debug("Book has defects", book=identifier.code, errors=len(result.errors))
    return result


# =============================================================================
# ENTRY POINTS
# =============================================================================


def canon_completeness_warnings(books: Books) -> List[str]:
    """One warning per canonical book absent from the collection."""
    return [
        f"Book {identifier.display_name} is missing from the collection"
        for identifier in canonical_order()
        if identifier not in books
    ]


def validate_books(
    books: Books,
    check_canon_completeness: Optional[bool] = None,
) -> ValidationResult:
    """
    Validate every book and merge the per-book results in canonical order.

    Args:
        books: The collection to audit
        check_canon_completeness: Also warn about absent canonical books.
            Defaults to the ``SCRIPTURA_CHECK_CANON_COMPLETENESS`` setting.
    """
    if check_canon_completeness is None:
        check_canon_completeness = get_config().validation.check_canon_completeness

    with create_span("validate_books", attributes={"books.count": len(books)}) as span:
        per_book = []
        for identifier, book in books.items():
            with LogContext(book=identifier.code):
                per_book.append(validate_book(identifier, book))
        result = ValidationResult.combine(per_book)

        if check_canon_completeness:
            result.warnings.extend(canon_completeness_warnings(books))

        span.set_attribute("validation.errors", len(result.errors))
        span.set_attribute("validation.warnings", len(result.warnings))

    logger.info(
        "Validation complete",
        books=result.statistics.total_books,
        errors=len(result.errors),
        warnings=len(result.warnings),
    )
    return result


def validate(translation: Translation) -> ValidationResult:
    """
    Validate the books of a translation.

    Raises:
        RemoteStorageError: If the books are not held locally. Nothing is
            computed in that case.
    """
    storage = translation.books
    if isinstance(storage, Remote):
        raise RemoteStorageError(location=storage.url)
    return validate_books(storage.value)


def is_valid(books: Books) -> bool:
    return validate_books(books).is_valid


def to_single_error(result: ValidationResult) -> Optional[ValidationDefect]:
    """
    Collapse a result into one outcome.

    Returns None when there are no defects, the defect itself when there is
    exactly one, and a MultipleErrors wrapper otherwise.
    """
    if not result.errors:
        return None
    if len(result.errors) == 1:
        return result.errors[0]
    return MultipleErrors(count=len(result.errors), errors=tuple(result.errors))


def check(translation: Translation) -> None:
    """
    Pass/fail validation of a translation.

    Raises:
        RemoteStorageError: If the books are not held locally.
        TranslationInvalidError: If any defect was found; carries the
            ``to_single_error`` outcome as ``defect``.
    """
    defect = to_single_error(validate(translation))
    if defect is not None:
        raise TranslationInvalidError(defect)


def validation_report(result: ValidationResult) -> str:
    """Render the summary followed by numbered errors and warnings."""
    report = result.summary() + "\n\n"

    if result.errors:
        report += "ERRORS:\n"
        for i, error in enumerate(result.errors, 1):
            report += f"  {i}. {error.message}\n"
        report += "\n"

    if result.warnings:
        report += "WARNINGS:\n"
        for i, warning in enumerate(result.warnings, 1):
            report += f"  {i}. {warning}\n"

    if result.is_valid and not result.has_warnings:
        report += "✓ All validation checks passed successfully!"

    return report
