"""
Scriptura - Conversion Pipeline

Turns the legacy representation into canonical Books, failing at the
first structural defect.

Steps, in order:
    1. resolve every legacy book name through the catalog
    2. reject book identifiers that occur more than once
    3-5. per book and chapter: reject empty books, duplicate or empty
       chapters and verses whose chapter number disagrees with their
       chapter
    6. derive each verse number from its text (see parse_verse_number)
    7. keep the legacy display name verbatim

Usage:
    from pipeline.conversion import convert, convert_books

    books = convert_books(load_legacy_file("kjv.json"))
    translation = convert(legacy, meta)
"""
from __future__ import annotations

from collections import Counter
from typing import List, Optional, Tuple

from opentelemetry.trace import SpanKind

from core.errors import (
    BookNameParseError,
    DuplicateBookError,
    DuplicateChapterError,
    EmptyBookError,
    EmptyChapterError,
    ErrorContext,
    InconsistentChapterNumberError,
    InvalidVerseRangeError,
    UnknownBookNameError,
)
from data.legacy import LegacyBook, LegacyChapter, LegacyInput, parse_legacy
from domain.books import BookIdentifier, resolve
from domain.entities import (
    Book,
    Books,
    Chapter,
    Chapters,
    Translation,
    TranslationMetadata,
    Verse,
    build_translation,
)
from domain.verse_number import Range, Single, VerseNumber
from observability import get_logger, get_tracer

tracer = get_tracer(__name__)
logger = get_logger(__name__)

# Largest bound a range prefix may carry; anything beyond is not a range
MAX_VERSE_BOUND = 2**32 - 1


def parse_verse_number(text: str, verse_index: int) -> VerseNumber:
    """
    Derive a verse number from legacy verse text.

    Editions that merge verses prefix the text with the covered range,
    e.g. ``"16-17 And he said..."``. A text that starts with a digit and
    contains a hyphen is read as ``"<start>-<end> "``; anything that does
    not parse, including bounds above MAX_VERSE_BOUND, falls back to
    ``Single(verse_index)``.

    The heuristic cannot tell a range prefix from ordinary text that
    happens to start with a hyphenated number ("3-4 cubits...").

    Raises:
        InvalidVerseRangeError: If a parsed range has start > end.
    """
    if not (text[:1].isdigit() and "-" in text):
        return Single(verse_index)

    head, _, tail = text.partition("-")
    end_text, space, _ = tail.partition(" ")
    start_text = head.strip()
    end_text = end_text.strip()
    if not space or not start_text.isdecimal() or not end_text.isdecimal():
        return Single(verse_index)

    start, end = int(start_text), int(end_text)
    if start > MAX_VERSE_BOUND or end > MAX_VERSE_BOUND:
        return Single(verse_index)
    if start > end:
        raise InvalidVerseRangeError(start, end)
    if start < 1:
        return Single(verse_index)
    return Range(start, end)


def _context(book: str, chapter: Optional[int] = None) -> ErrorContext:
    return ErrorContext.from_current_span(
        "convert_books", "pipeline.conversion", book=book, chapter=chapter
    )


def _resolve_names(books: List[LegacyBook]) -> List[BookIdentifier]:
    identifiers = []
    for legacy_book in books:
        try:
            identifiers.append(resolve(legacy_book.name))
        except UnknownBookNameError as e:
            raise BookNameParseError(e.name, context=_context(legacy_book.name), cause=e) from e
    return identifiers


def _check_duplicates(books: List[LegacyBook], identifiers: List[BookIdentifier]) -> None:
    counts = Counter(identifiers)
    for legacy_book, identifier in zip(books, identifiers):
        if counts[identifier] > 1:
            raise DuplicateBookError(legacy_book.name, context=_context(legacy_book.name))


def _convert_chapter(book_name: str, legacy_chapter: LegacyChapter) -> Chapter:
    number = legacy_chapter.chapter
    if not legacy_chapter.verses:
        raise EmptyChapterError(book_name, number, context=_context(book_name, number))

    verses = []
    for legacy_verse in legacy_chapter.verses:
        if legacy_verse.chapter != number:
            raise InconsistentChapterNumberError(
                book_name,
                number,
                legacy_verse.verse,
                expected=number,
                found=legacy_verse.chapter,
                context=_context(book_name, number),
            )
        verses.append(
            Verse(
                number=parse_verse_number(legacy_verse.text, legacy_verse.verse),
                text=legacy_verse.text,
            )
        )
    return Chapter(verses=verses)


def _convert_book(legacy_book: LegacyBook) -> Book:
    name = legacy_book.name
    if not legacy_book.chapters:
        raise EmptyBookError(name, context=_context(name))

    chapters: List[Tuple[int, Chapter]] = []
    seen = set()
    for legacy_chapter in legacy_book.chapters:
        if legacy_chapter.chapter in seen:
            raise DuplicateChapterError(
                name, legacy_chapter.chapter, context=_context(name, legacy_chapter.chapter)
            )
        seen.add(legacy_chapter.chapter)
        chapters.append((legacy_chapter.chapter, _convert_chapter(name, legacy_chapter)))

    return Book(name=name, chapters=Chapters(chapters))


def convert_books(legacy: LegacyInput) -> Books:
    """
    Convert a legacy document into canonical Books.

    Args:
        legacy: A LegacyTranslation or a raw mapping of the legacy shape

    Raises:
        LegacyFormatError: If a raw mapping does not have the legacy shape.
        BooksConversionError: At the first structural defect found.
    """
    legacy = parse_legacy(legacy)

    with tracer.start_as_current_span("convert_books", kind=SpanKind.INTERNAL) as span:
        span.set_attribute("legacy.books", len(legacy.books))

        identifiers = _resolve_names(legacy.books)
        _check_duplicates(legacy.books, identifiers)

        converted = []
        for identifier, legacy_book in zip(identifiers, legacy.books):
            book = _convert_book(legacy_book)
            logger.debug(
                "Book converted",
                book=identifier.code,
                chapters=len(book.chapters),
            )
            converted.append((identifier, book))

        books = Books(converted)
        span.set_attribute("books.count", len(books))
        span.set_attribute("verses.count", books.verse_count())

    logger.info(
        "Conversion complete",
        books=len(books),
        chapters=books.chapter_count(),
        verses=books.verse_count(),
    )
    return books


def convert(legacy: LegacyInput, meta: TranslationMetadata) -> Translation:
    """Convert legacy input and wrap the books as a local Translation."""
    return build_translation(convert_books(legacy), meta)
