"""
Scriptura - Domain Layer

The canonical corpus model and its building blocks:
    - books: the 66-book catalog and alias resolver
    - verse_number: Single / Range verse identities and their order
    - storage: the Local / Remote location tag
    - entities: Translation, Books, Book, Chapters, Chapter, Verse

Usage:
    from domain import (
        BookIdentifier, resolve, canonical_order,
        Single, Range,
        Books, Book, Chapters, Chapter, Verse,
        Translation, TranslationMetadata, build_translation,
    )
"""

from domain.books import (
    BookCatalog,
    BookIdentifier,
    canonical_order,
    resolve,
)
from domain.entities import (
    Book,
    Books,
    Chapter,
    Chapters,
    Translation,
    TranslationMetadata,
    Verse,
    build_translation,
    remote_translation,
)
from domain.storage import Local, Remote, Storage, local_value
from domain.verse_number import Range, Single, VerseNumber

__all__ = [
    "BookCatalog",
    "BookIdentifier",
    "canonical_order",
    "resolve",
    "Book",
    "Books",
    "Chapter",
    "Chapters",
    "Translation",
    "TranslationMetadata",
    "Verse",
    "build_translation",
    "remote_translation",
    "Local",
    "Remote",
    "Storage",
    "local_value",
    "Range",
    "Single",
    "VerseNumber",
]
