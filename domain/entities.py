"""
Scriptura - Domain Entities

The canonical corpus model:

    Translation
      meta  : TranslationMetadata
      books : Local(Books) | Remote(url)
        Books    : BookIdentifier -> Book      (canonical order)
        Book     : name, introduction, Chapters
        Chapters : chapter number -> Chapter   (ascending)
        Chapter  : verses (stored order), section headings
        Verse    : VerseNumber, text, footnote

Design Principles:
    - Value objects are immutable; a Translation is never mutated after
      construction
    - Ordered mappings reject duplicate or ill-typed keys when built
    - Structural soundness (gaps, duplicates, overlaps) is NOT enforced
      here; that is the job of pipeline.validation
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import (
    Any,
    Callable,
    ClassVar,
    Iterable,
    Iterator,
    Mapping,
    Optional,
    Tuple,
    TypeVar,
    Union,
)

from core.errors import ModelIntegrityError
from core.types import ChapterNumber
from domain.books import BookIdentifier
from domain.storage import Local, Remote, Storage, local_value
from domain.verse_number import VerseNumber

K = TypeVar("K")
V = TypeVar("V")


# =============================================================================
# ORDERED MAPPINGS
# =============================================================================


class OrderedMap(Mapping[K, V]):
    """
    Read-only mapping kept sorted by key.

    Accepts a mapping or an iterable of (key, value) pairs. Keys must be
    unique across the pairs and pass ``key_check``.
    """

    __slots__ = ("_data",)

    key_check: ClassVar[Optional[Callable[[Any], bool]]] = None
    key_description: ClassVar[str] = "key"

    def __init__(self, items: Union[Mapping[K, V], Iterable[Tuple[K, V]]] = ()):
        pairs = items.items() if isinstance(items, Mapping) else items
        data = {}
        for key, value in pairs:
            check = type(self).key_check
            if check is not None and not check(key):
                raise ModelIntegrityError(f"Invalid {self.key_description}: {key!r}")
            if key in data:
                raise ModelIntegrityError(f"Duplicate {self.key_description}: {key!r}")
            data[key] = value
        self._data = dict(sorted(data.items(), key=lambda pair: pair[0]))

    def __getitem__(self, key: K) -> V:
        return self._data[key]

    def __iter__(self) -> Iterator[K]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._data.items())!r})"


def _is_chapter_number(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool) and key > 0


class Chapters(OrderedMap[ChapterNumber, "Chapter"]):
    """Chapter number -> Chapter, ascending."""

    __slots__ = ()
    key_check = staticmethod(_is_chapter_number)
    key_description = "chapter number"


class Books(OrderedMap[BookIdentifier, "Book"]):
    """BookIdentifier -> Book, in canonical reading order."""

    __slots__ = ()
    key_check = staticmethod(lambda key: isinstance(key, BookIdentifier))
    key_description = "book identifier"

    def chapter_count(self) -> int:
        return sum(len(book.chapters) for book in self.values())

    def verse_count(self) -> int:
        return sum(
            len(chapter.verses)
            for book in self.values()
            for chapter in book.chapters.values()
        )


# =============================================================================
# CORPUS VALUE OBJECTS
# =============================================================================


@dataclass(frozen=True)
class Verse:
    number: VerseNumber
    text: str
    footnote: Optional[str] = None


@dataclass(frozen=True)
class Chapter:
    """
    An ordered sequence of verses.

    ``sections`` maps the verse numbers that open a section to the
    section heading; most verses have none.
    """
    verses: Tuple[Verse, ...] = ()
    sections: Mapping[VerseNumber, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "verses", tuple(self.verses))
        object.__setattr__(self, "sections", MappingProxyType(dict(self.sections)))

    def is_empty(self) -> bool:
        return not self.verses

    def verse_numbers(self) -> Tuple[VerseNumber, ...]:
        return tuple(verse.number for verse in self.verses)


@dataclass(frozen=True)
class Book:
    """
    A book as written in one edition.

    ``name`` keeps the edition's own spelling; the canonical identity is
    the key under which the book is stored in Books.
    """
    name: str
    chapters: Chapters = field(default_factory=Chapters)
    introduction: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.chapters, Chapters):
            object.__setattr__(self, "chapters", Chapters(self.chapters))


# =============================================================================
# TRANSLATION
# =============================================================================


@dataclass(frozen=True)
class TranslationMetadata:
    """
    Descriptive metadata supplied by the caller.

    ``equivalence_level`` ranges from 0 (formal, word for word) to 255
    (functional, meaning for meaning).
    """
    name: str
    short_name: str
    release_year: int
    languages: Tuple[str, ...] = ()
    description: str = ""
    link: Optional[str] = None
    equivalence_level: Optional[int] = None
    funded_by: Optional[str] = None
    is_placeholder: bool = False

    PLACEHOLDER_NAME: ClassVar[str] = "Placeholder"

    def __post_init__(self) -> None:
        object.__setattr__(self, "languages", tuple(self.languages))
        if self.equivalence_level is not None and not 0 <= self.equivalence_level <= 255:
            raise ModelIntegrityError(
                f"Equivalence level must be within 0-255, got {self.equivalence_level}"
            )

    @classmethod
    def placeholder(cls) -> "TranslationMetadata":
        """
        Metadata for intermediate migration output only.

        Flagged with ``is_placeholder`` so it is never mistaken for real
        metadata.
        """
        return cls(
            name=cls.PLACEHOLDER_NAME,
            short_name="PH",
            release_year=2000,
            languages=("en",),
            description="Placeholder metadata - to be replaced during migration",
            equivalence_level=128,
            is_placeholder=True,
        )


@dataclass(frozen=True)
class Translation:
    meta: TranslationMetadata
    books: Storage[Books]

    @property
    def is_local(self) -> bool:
        return isinstance(self.books, Local)

    @property
    def local_books(self) -> Optional[Books]:
        return local_value(self.books)


def build_translation(books: Books, meta: TranslationMetadata) -> Translation:
    """Wrap an already-canonical book collection as a local Translation."""
    return Translation(meta=meta, books=Local(books))


def remote_translation(url: str, meta: TranslationMetadata) -> Translation:
    """Build a Translation whose books are only referenced by URL."""
    return Translation(meta=meta, books=Remote(url))
