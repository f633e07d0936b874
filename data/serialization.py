"""
Scriptura - Canonical JSON Codec

Converts the canonical model to and from plain JSON-compatible values.

Layout:
    - ordered maps (Books, Chapters, sections) become lists of
      ``[key, value]`` pairs so their order survives any JSON tooling
    - books are keyed by their 3-letter code, verse numbers are written
      as "5" or "5-7"
    - storage is either ``{"local": {...}}`` or ``{"remote": "<url>"}``

Usage:
    from data.serialization import dump_translation, load_translation

    dump_translation(translation, "out/web.json")
    translation = load_translation("out/web.json")
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

from core.errors import ScripturaError, SerializationError
from core.types import BookDict, ChapterDict, MetadataDict, TranslationDict, VerseDict
from domain.books import BookIdentifier
from domain.entities import (
    Book,
    Books,
    Chapter,
    Chapters,
    Translation,
    TranslationMetadata,
    Verse,
)
from domain.storage import Local, Remote, Storage
from domain.verse_number import VerseNumber


# =============================================================================
# ENCODING
# =============================================================================


def verse_to_dict(verse: Verse) -> VerseDict:
    data: VerseDict = {"number": str(verse.number), "text": verse.text}
    if verse.footnote is not None:
        data["footnote"] = verse.footnote
    return data


def chapter_to_dict(chapter: Chapter) -> ChapterDict:
    return {
        "verses": [verse_to_dict(verse) for verse in chapter.verses],
        "sections": [[str(number), heading] for number, heading in sorted(chapter.sections.items())],
    }


def book_to_dict(book: Book) -> BookDict:
    return {
        "name": book.name,
        "introduction": book.introduction,
        "chapters": [[number, chapter_to_dict(chapter)] for number, chapter in book.chapters.items()],
    }


def books_to_dict(books: Books) -> List[List[Any]]:
    """Encode Books as ``[[code, book], ...]`` in canonical order."""
    return [[identifier.code, book_to_dict(book)] for identifier, book in books.items()]


def metadata_to_dict(meta: TranslationMetadata) -> MetadataDict:
    return {
        "name": meta.name,
        "short_name": meta.short_name,
        "release_year": meta.release_year,
        "languages": list(meta.languages),
        "description": meta.description,
        "link": meta.link,
        "equivalence_level": meta.equivalence_level,
        "funded_by": meta.funded_by,
        "is_placeholder": meta.is_placeholder,
    }


def storage_to_dict(storage: Storage[Books]) -> Dict[str, Any]:
    if isinstance(storage, Remote):
        return {"remote": storage.url}
    return {"local": books_to_dict(storage.value)}


def translation_to_dict(translation: Translation) -> TranslationDict:
    return {
        "meta": metadata_to_dict(translation.meta),
        "books": storage_to_dict(translation.books),
    }


# =============================================================================
# DECODING
# =============================================================================


def _require(data: Mapping[str, Any], key: str, where: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise SerializationError(f"Missing field '{key}' in {where}") from None
    except TypeError:
        raise SerializationError(f"Expected an object for {where}, got {type(data).__name__}") from None


def _object(data: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise SerializationError(f"Expected an object for {where}, got {type(data).__name__}")
    return data


def _pairs(value: Any, where: str) -> List[List[Any]]:
    if not isinstance(value, list) or not all(
        isinstance(pair, (list, tuple)) and len(pair) == 2 for pair in value
    ):
        raise SerializationError(f"Expected a list of [key, value] pairs for {where}")
    return value


def verse_from_dict(data: Mapping[str, Any]) -> Verse:
    data = _object(data, "verse")
    return Verse(
        number=VerseNumber.parse(str(_require(data, "number", "verse"))),
        text=_require(data, "text", "verse"),
        footnote=data.get("footnote"),
    )


def chapter_from_dict(data: Mapping[str, Any]) -> Chapter:
    data = _object(data, "chapter")
    sections = {
        VerseNumber.parse(str(number)): heading
        for number, heading in _pairs(data.get("sections", []), "sections")
    }
    return Chapter(
        verses=[verse_from_dict(verse) for verse in _require(data, "verses", "chapter")],
        sections=sections,
    )


def book_from_dict(data: Mapping[str, Any]) -> Book:
    data = _object(data, "book")
    name = _require(data, "name", "book")
    chapters = Chapters(
        (int(number), chapter_from_dict(chapter))
        for number, chapter in _pairs(_require(data, "chapters", f"book '{name}'"), "chapters")
    )
    return Book(name=name, chapters=chapters, introduction=data.get("introduction"))


def books_from_dict(pairs: Any) -> Books:
    return Books(
        (BookIdentifier.from_code(code), book_from_dict(book))
        for code, book in _pairs(pairs, "books")
    )


def metadata_from_dict(data: Mapping[str, Any]) -> TranslationMetadata:
    data = _object(data, "meta")
    return TranslationMetadata(
        name=_require(data, "name", "meta"),
        short_name=_require(data, "short_name", "meta"),
        release_year=int(_require(data, "release_year", "meta")),
        languages=tuple(data.get("languages", ())),
        description=data.get("description", ""),
        link=data.get("link"),
        equivalence_level=data.get("equivalence_level"),
        funded_by=data.get("funded_by"),
        is_placeholder=bool(data.get("is_placeholder", False)),
    )


def storage_from_dict(data: Mapping[str, Any]) -> Storage[Books]:
    if not isinstance(data, Mapping) or len(data) != 1:
        raise SerializationError("Storage must be an object with exactly one of 'local' or 'remote'")
    if "remote" in data:
        return Remote(str(data["remote"]))
    if "local" in data:
        return Local(books_from_dict(data["local"]))
    raise SerializationError(f"Unknown storage tag: {next(iter(data))!r}")


def translation_from_dict(data: Mapping[str, Any]) -> Translation:
    """
    Decode a canonical translation document.

    Raises:
        SerializationError: If the document is malformed, including keys
            the model itself rejects (unknown codes, bad verse numbers,
            duplicate chapters).
    """
    data = _object(data, "translation")
    try:
        return Translation(
            meta=metadata_from_dict(_require(data, "meta", "translation")),
            books=storage_from_dict(_require(data, "books", "translation")),
        )
    except SerializationError:
        raise
    except (ScripturaError, ValueError, TypeError) as e:
        raise SerializationError(f"Invalid translation document: {e}", cause=e) from e


# =============================================================================
# FILE HELPERS
# =============================================================================


def dump_translation(translation: Translation, path: Union[str, Path], indent: int = 2) -> Path:
    """Write a translation as canonical JSON; returns the path written."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(translation_to_dict(translation), indent=indent, ensure_ascii=False),
        encoding="utf-8",
    )
    return path


def _read_json(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SerializationError(f"Cannot read {path}: {e}", cause=e) from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise SerializationError(f"{path} is not valid JSON: {e.msg}", cause=e) from e


def load_translation(path: Union[str, Path]) -> Translation:
    """
    Read a canonical JSON translation.

    Raises:
        SerializationError: If the file cannot be read, is not JSON or is
            not a translation.
    """
    raw = _read_json(Path(path))
    return translation_from_dict(raw)


def load_metadata(path: Union[str, Path]) -> TranslationMetadata:
    """
    Read translation metadata from a JSON object file.

    Raises:
        SerializationError: If the file cannot be read, is not JSON or lacks
            required fields.
    """
    raw = _read_json(Path(path))
    try:
        return metadata_from_dict(raw)
    except SerializationError:
        raise
    except (ScripturaError, ValueError, TypeError) as e:
        raise SerializationError(f"Invalid metadata in {path}: {e}", cause=e) from e
