"""
Scriptura - Canonical Book Catalog

The fixed, ordered list of the 66 canonical books and the alias table that
maps free-text spellings onto them.

Resolution rules:
    - case-insensitive
    - surrounding and internal whitespace is ignored
    - accepted spellings are the English name, the 3-letter code and, for
      numbered books, arabic ("2"), roman ("ii"), ordinal ("2nd") and word
      ("second") prefixes
    - nothing is guessed: an unknown spelling raises UnknownBookNameError

The table is versioned with the code; changing it changes what counts as a
valid corpus.

Usage:
    from domain.books import resolve, canonical_order

    resolve("  II Samuel ")       # BookIdentifier.SECOND_SAMUEL
    canonical_order()[0]          # BookIdentifier.GENESIS
"""
from __future__ import annotations

from enum import IntEnum
from typing import Dict, Iterable, Mapping, Optional, Tuple

from core.errors import ModelIntegrityError, UnknownBookNameError
from core.types import BookCode, TestamentLiteral


class BookIdentifier(IntEnum):
    """Canonical book, valued by its 1-based position in reading order."""

    # Old Testament
    GENESIS = 1
    EXODUS = 2
    LEVITICUS = 3
    NUMBERS = 4
    DEUTERONOMY = 5
    JOSHUA = 6
    JUDGES = 7
    RUTH = 8
    FIRST_SAMUEL = 9
    SECOND_SAMUEL = 10
    FIRST_KINGS = 11
    SECOND_KINGS = 12
    FIRST_CHRONICLES = 13
    SECOND_CHRONICLES = 14
    EZRA = 15
    NEHEMIAH = 16
    ESTHER = 17
    JOB = 18
    PSALMS = 19
    PROVERBS = 20
    ECCLESIASTES = 21
    SONG_OF_SONGS = 22
    ISAIAH = 23
    JEREMIAH = 24
    LAMENTATIONS = 25
    EZEKIEL = 26
    DANIEL = 27
    HOSEA = 28
    JOEL = 29
    AMOS = 30
    OBADIAH = 31
    JONAH = 32
    MICAH = 33
    NAHUM = 34
    HABAKKUK = 35
    ZEPHANIAH = 36
    HAGGAI = 37
    ZECHARIAH = 38
    MALACHI = 39
    # New Testament
    MATTHEW = 40
    MARK = 41
    LUKE = 42
    JOHN = 43
    ACTS = 44
    ROMANS = 45
    FIRST_CORINTHIANS = 46
    SECOND_CORINTHIANS = 47
    GALATIANS = 48
    EPHESIANS = 49
    PHILIPPIANS = 50
    COLOSSIANS = 51
    FIRST_THESSALONIANS = 52
    SECOND_THESSALONIANS = 53
    FIRST_TIMOTHY = 54
    SECOND_TIMOTHY = 55
    TITUS = 56
    PHILEMON = 57
    HEBREWS = 58
    JAMES = 59
    FIRST_PETER = 60
    SECOND_PETER = 61
    FIRST_JOHN = 62
    SECOND_JOHN = 63
    THIRD_JOHN = 64
    JUDE = 65
    REVELATION = 66

    @property
    def code(self) -> BookCode:
        """3-letter code (e.g. 'GEN', '1SA')."""
        return _BOOK_TABLE[self][0]

    @property
    def display_name(self) -> str:
        """Canonical English name (e.g. '2 Samuel')."""
        return _BOOK_TABLE[self][1]

    @property
    def testament(self) -> TestamentLiteral:
        """Return 'OT' or 'NT'."""
        return "OT" if self <= BookIdentifier.MALACHI else "NT"

    @classmethod
    def from_code(cls, code: str) -> "BookIdentifier":
        """Look up an identifier by its exact 3-letter code."""
        try:
            return _BY_CODE[code.strip().upper()]
        except KeyError:
            raise UnknownBookNameError(code) from None

    def __str__(self) -> str:
        return self.display_name


# member -> (code, English name)
_BOOK_TABLE: Dict[BookIdentifier, Tuple[str, str]] = {
    BookIdentifier.GENESIS: ("GEN", "Genesis"),
    BookIdentifier.EXODUS: ("EXO", "Exodus"),
    BookIdentifier.LEVITICUS: ("LEV", "Leviticus"),
    BookIdentifier.NUMBERS: ("NUM", "Numbers"),
    BookIdentifier.DEUTERONOMY: ("DEU", "Deuteronomy"),
    BookIdentifier.JOSHUA: ("JOS", "Joshua"),
    BookIdentifier.JUDGES: ("JDG", "Judges"),
    BookIdentifier.RUTH: ("RUT", "Ruth"),
    BookIdentifier.FIRST_SAMUEL: ("1SA", "1 Samuel"),
    BookIdentifier.SECOND_SAMUEL: ("2SA", "2 Samuel"),
    BookIdentifier.FIRST_KINGS: ("1KI", "1 Kings"),
    BookIdentifier.SECOND_KINGS: ("2KI", "2 Kings"),
    BookIdentifier.FIRST_CHRONICLES: ("1CH", "1 Chronicles"),
    BookIdentifier.SECOND_CHRONICLES: ("2CH", "2 Chronicles"),
    BookIdentifier.EZRA: ("EZR", "Ezra"),
    BookIdentifier.NEHEMIAH: ("NEH", "Nehemiah"),
    BookIdentifier.ESTHER: ("EST", "Esther"),
    BookIdentifier.JOB: ("JOB", "Job"),
    BookIdentifier.PSALMS: ("PSA", "Psalms"),
    BookIdentifier.PROVERBS: ("PRO", "Proverbs"),
    BookIdentifier.ECCLESIASTES: ("ECC", "Ecclesiastes"),
    BookIdentifier.SONG_OF_SONGS: ("SNG", "Song of Songs"),
    BookIdentifier.ISAIAH: ("ISA", "Isaiah"),
    BookIdentifier.JEREMIAH: ("JER", "Jeremiah"),
    BookIdentifier.LAMENTATIONS: ("LAM", "Lamentations"),
    BookIdentifier.EZEKIEL: ("EZK", "Ezekiel"),
    BookIdentifier.DANIEL: ("DAN", "Daniel"),
    BookIdentifier.HOSEA: ("HOS", "Hosea"),
    BookIdentifier.JOEL: ("JOL", "Joel"),
    BookIdentifier.AMOS: ("AMO", "Amos"),
    BookIdentifier.OBADIAH: ("OBA", "Obadiah"),
    BookIdentifier.JONAH: ("JON", "Jonah"),
    BookIdentifier.MICAH: ("MIC", "Micah"),
    BookIdentifier.NAHUM: ("NAM", "Nahum"),
    BookIdentifier.HABAKKUK: ("HAB", "Habakkuk"),
    BookIdentifier.ZEPHANIAH: ("ZEP", "Zephaniah"),
    BookIdentifier.HAGGAI: ("HAG", "Haggai"),
    BookIdentifier.ZECHARIAH: ("ZEC", "Zechariah"),
    BookIdentifier.MALACHI: ("MAL", "Malachi"),
    BookIdentifier.MATTHEW: ("MAT", "Matthew"),
    BookIdentifier.MARK: ("MRK", "Mark"),
    BookIdentifier.LUKE: ("LUK", "Luke"),
    BookIdentifier.JOHN: ("JHN", "John"),
    BookIdentifier.ACTS: ("ACT", "Acts"),
    BookIdentifier.ROMANS: ("ROM", "Romans"),
    BookIdentifier.FIRST_CORINTHIANS: ("1CO", "1 Corinthians"),
    BookIdentifier.SECOND_CORINTHIANS: ("2CO", "2 Corinthians"),
    BookIdentifier.GALATIANS: ("GAL", "Galatians"),
    BookIdentifier.EPHESIANS: ("EPH", "Ephesians"),
    BookIdentifier.PHILIPPIANS: ("PHP", "Philippians"),
    BookIdentifier.COLOSSIANS: ("COL", "Colossians"),
    BookIdentifier.FIRST_THESSALONIANS: ("1TH", "1 Thessalonians"),
    BookIdentifier.SECOND_THESSALONIANS: ("2TH", "2 Thessalonians"),
    BookIdentifier.FIRST_TIMOTHY: ("1TI", "1 Timothy"),
    BookIdentifier.SECOND_TIMOTHY: ("2TI", "2 Timothy"),
    BookIdentifier.TITUS: ("TIT", "Titus"),
    BookIdentifier.PHILEMON: ("PHM", "Philemon"),
    BookIdentifier.HEBREWS: ("HEB", "Hebrews"),
    BookIdentifier.JAMES: ("JAS", "James"),
    BookIdentifier.FIRST_PETER: ("1PE", "1 Peter"),
    BookIdentifier.SECOND_PETER: ("2PE", "2 Peter"),
    BookIdentifier.FIRST_JOHN: ("1JN", "1 John"),
    BookIdentifier.SECOND_JOHN: ("2JN", "2 John"),
    BookIdentifier.THIRD_JOHN: ("3JN", "3 John"),
    BookIdentifier.JUDE: ("JUD", "Jude"),
    BookIdentifier.REVELATION: ("REV", "Revelation"),
}

_BY_CODE: Dict[str, BookIdentifier] = {code: book for book, (code, _) in _BOOK_TABLE.items()}

# Spellings that cannot be derived from the name or code
EXTRA_ALIASES: Dict[BookIdentifier, Tuple[str, ...]] = {
    BookIdentifier.PSALMS: ("Psalm",),
    BookIdentifier.SONG_OF_SONGS: ("Song of Solomon", "Canticles"),
    BookIdentifier.REVELATION: ("Revelation of John",),
}

NUMBER_PREFIXES: Dict[str, Tuple[str, ...]] = {
    "1": ("1", "i", "1st", "first"),
    "2": ("2", "ii", "2nd", "second"),
    "3": ("3", "iii", "3rd", "third"),
}


def normalize_key(text: str) -> str:
    """Lowercase and drop every whitespace character."""
    return "".join(text.split()).lower()


def _spellings(book: BookIdentifier) -> Iterable[str]:
    code, name = _BOOK_TABLE[book]
    yield code
    yield name
    yield from EXTRA_ALIASES.get(book, ())

    number, _, rest = name.partition(" ")
    if number in NUMBER_PREFIXES and rest:
        for prefix in NUMBER_PREFIXES[number]:
            yield f"{prefix} {rest}"


class BookCatalog:
    """
    Alias table mapping normalized spellings to BookIdentifier.

    Args:
        aliases: Optional extra spellings per book, merged on top of the
            built-in table.

    Raises:
        ModelIntegrityError: If one spelling would map to two books.
    """

    def __init__(self, aliases: Optional[Mapping[BookIdentifier, Iterable[str]]] = None):
        self._lookup: Dict[str, BookIdentifier] = {}

        for book in BookIdentifier:
            for spelling in _spellings(book):
                self._register(spelling, book)

        for book, spellings in (aliases or {}).items():
            for spelling in spellings:
                self._register(spelling, book)

    def _register(self, spelling: str, book: BookIdentifier) -> None:
        key = normalize_key(spelling)
        existing = self._lookup.get(key)
        if existing is not None and existing is not book:
            raise ModelIntegrityError(
                f"Alias '{spelling}' maps to both {existing.display_name} and {book.display_name}"
            )
        self._lookup[key] = book

    def resolve(self, text: str) -> BookIdentifier:
        """
        Resolve a free-text book name.

        Raises:
            UnknownBookNameError: If no canonical book has this spelling.
        """
        try:
            return self._lookup[normalize_key(text)]
        except KeyError:
            raise UnknownBookNameError(text.strip()) from None

    def __contains__(self, text: object) -> bool:
        return isinstance(text, str) and normalize_key(text) in self._lookup

    def __len__(self) -> int:
        return len(self._lookup)


_default_catalog = BookCatalog()


def resolve(text: str) -> BookIdentifier:
    """Resolve a book name through the default catalog."""
    return _default_catalog.resolve(text)


def canonical_order() -> Tuple[BookIdentifier, ...]:
    """All 66 identifiers in reading order."""
    return tuple(BookIdentifier)
