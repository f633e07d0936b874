"""
Scriptura - Centralized Type Definitions

Type aliases and TypedDicts describing the wire shapes the system
reads and writes.

Usage:
    from core.types import LegacyTranslationDict, DefectDict

    def load(raw: LegacyTranslationDict) -> Books:
        ...
"""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, TypedDict, Union

# =============================================================================
# TYPE ALIASES
# =============================================================================

ChapterNumber = int
BookCode = str  # 3-letter code (e.g., "GEN", "1SA")
VerseNumberText = str  # "5" or "5-7"
TestamentLiteral = Literal["OT", "NT"]
DefectKindLiteral = Literal[
    "MissingVerse", "VerseGap", "MissingChapter", "ChapterGap",
    "EmptyChapter", "EmptyBook", "DuplicateVerse", "InvalidVerseRange",
    "OverlappingRanges", "MultipleErrors",
]


# =============================================================================
# LEGACY INPUT
# =============================================================================


class LegacyVerseDict(TypedDict):
    """One verse of the legacy representation."""
    verse: int
    chapter: int
    text: str


class LegacyChapterDict(TypedDict):
    chapter: int
    verses: List[LegacyVerseDict]


class LegacyBookDict(TypedDict):
    name: str
    chapters: List[LegacyChapterDict]


class LegacyTranslationDict(TypedDict):
    books: List[LegacyBookDict]


# =============================================================================
# CANONICAL JSON
# =============================================================================


class VerseDict(TypedDict, total=False):
    number: VerseNumberText
    text: str
    footnote: Optional[str]


class ChapterDict(TypedDict, total=False):
    verses: List[VerseDict]
    sections: List[List[str]]  # [[verse_number, heading], ...]


class BookDict(TypedDict, total=False):
    name: str
    introduction: Optional[str]
    chapters: List[List[Union[int, ChapterDict]]]  # [[number, chapter], ...]


class MetadataDict(TypedDict, total=False):
    name: str
    short_name: str
    release_year: int
    languages: List[str]
    description: str
    link: Optional[str]
    equivalence_level: Optional[int]
    funded_by: Optional[str]
    is_placeholder: bool


class TranslationDict(TypedDict):
    meta: MetadataDict
    books: Dict[str, Any]  # {"local": [[code, book], ...]} or {"remote": url}


# =============================================================================
# REPORTS
# =============================================================================


class DefectDict(TypedDict, total=False):
    """Dictionary representation of a validation defect."""
    kind: DefectKindLiteral
    message: str
    book: BookCode
    chapter: ChapterNumber
    verse: int
    missing: List[int]
    start: int
    end: int
    range1: List[int]
    range2: List[int]
    count: int
    errors: List["DefectDict"]


class StatisticsDict(TypedDict):
    total_books: int
    total_chapters: int
    total_verses: int
    books_with_errors: int
    chapters_with_errors: int


class ValidationResultDict(TypedDict):
    valid: bool
    errors: List[DefectDict]
    warnings: List[str]
    statistics: StatisticsDict
