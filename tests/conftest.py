"""
Scriptura - Test Configuration

Pytest fixtures and configuration for all tests.
"""
import json
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Mapping

import pytest

from domain.books import BookIdentifier
from domain.entities import Book, Books, Chapter, Translation, TranslationMetadata, Verse, build_translation
from domain.verse_number import Single, VerseNumber


def make_chapter(*numbers: Any) -> Chapter:
    """Chapter from ints (Single) or ready VerseNumber values, texts generated."""
    verses = []
    for number in numbers:
        if not isinstance(number, VerseNumber):
            number = Single(number)
        verses.append(Verse(number=number, text=f"verse {number}"))
    return Chapter(verses=verses)


def make_books(layout: Mapping[BookIdentifier, Mapping[int, Iterable[Any]]]) -> Books:
    """Books from ``{book: {chapter: [verse numbers]}}``."""
    return Books(
        (
            identifier,
            Book(
                name=identifier.display_name,
                chapters=[(number, make_chapter(*verses)) for number, verses in chapters.items()],
            ),
        )
        for identifier, chapters in layout.items()
    )


@pytest.fixture
def chapter_of() -> Callable[..., Chapter]:
    return make_chapter


@pytest.fixture
def books_of() -> Callable[..., Books]:
    return make_books


@pytest.fixture
def sample_metadata() -> TranslationMetadata:
    """Metadata for a small test edition."""
    return TranslationMetadata(
        name="World English Bible",
        short_name="WEB",
        release_year=2000,
        languages=("en",),
        description="Public domain modern English translation",
        link="https://worldenglish.bible",
        equivalence_level=90,
    )


@pytest.fixture
def sample_legacy() -> Dict[str, Any]:
    """Legacy document with two books, one merged verse range and an ignored field."""
    return {
        "version": "legacy-1",
        "books": [
            {
                "name": "Genesis",
                "abbreviation": "Gen",
                "chapters": [
                    {
                        "chapter": 1,
                        "verses": [
                            {"verse": 1, "chapter": 1, "text": "In the beginning God created the heavens and the earth."},
                            {"verse": 2, "chapter": 1, "text": "The earth was formless and empty."},
                            {"verse": 3, "chapter": 1, "text": "God said, \"Let there be light,\" and there was light."},
                        ],
                    },
                    {
                        "chapter": 2,
                        "verses": [
                            {"verse": 1, "chapter": 2, "text": "The heavens, the earth, and all their vast array were finished."},
                            {"verse": 2, "chapter": 2, "text": "2-3 On the seventh day God finished his work."},
                            {"verse": 4, "chapter": 2, "text": "This is the history of the generations of the heavens."},
                        ],
                    },
                ],
            },
            {
                "name": "II Samuel",
                "chapters": [
                    {
                        "chapter": 1,
                        "verses": [
                            {"verse": 1, "chapter": 1, "text": "After the death of Saul, David returned."},
                            {"verse": 2, "chapter": 1, "text": "On the third day, a man came out of the camp."},
                        ],
                    },
                ],
            },
        ],
    }


@pytest.fixture
def sample_books(sample_legacy) -> Books:
    """The converted sample legacy document."""
    from pipeline.conversion import convert_books

    return convert_books(sample_legacy)


@pytest.fixture
def sample_translation(sample_books, sample_metadata) -> Translation:
    return build_translation(sample_books, sample_metadata)


@pytest.fixture
def legacy_file(tmp_path, sample_legacy) -> Path:
    """Sample legacy document written to disk."""
    path = tmp_path / "legacy.json"
    path.write_text(json.dumps(sample_legacy), encoding="utf-8")
    return path
