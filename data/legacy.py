"""
Scriptura - Legacy Input Schema

Pydantic models for the loosely-structured legacy representation:

    { "books": [ { "name": str,
                   "chapters": [ { "chapter": int,
                                   "verses": [ { "verse": int,
                                                 "chapter": int,
                                                 "text": str } ] } ] } ] }

Only these fields are consumed; anything else in the document is ignored.
Structural problems beyond field types (unknown names, empty lists,
mismatched chapter numbers) are left to pipeline.conversion.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.errors import LegacyFormatError
from core.types import LegacyTranslationDict


class LegacyVerse(BaseModel):
    """One verse; ``chapter`` repeats the number of the enclosing chapter."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    verse: int = Field(..., ge=1, description="1-based position of the verse in its chapter")
    chapter: int = Field(..., description="Chapter number as recorded on the verse")
    text: str = Field(..., description="Verse text, possibly prefixed by a '<start>-<end> ' range")


class LegacyChapter(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    chapter: int = Field(..., ge=1)
    verses: List[LegacyVerse] = Field(default_factory=list)


class LegacyBook(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(..., description="Free-text book name as written in the edition")
    chapters: List[LegacyChapter] = Field(default_factory=list)


class LegacyTranslation(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    books: List[LegacyBook] = Field(default_factory=list)


# Either a validated document or its raw JSON shape
LegacyInput = Union[LegacyTranslation, LegacyTranslationDict]


def parse_legacy(raw: LegacyInput) -> LegacyTranslation:
    """
    Validate a raw legacy document into the model.

    Raises:
        LegacyFormatError: If the document does not have the legacy shape.
    """
    if isinstance(raw, LegacyTranslation):
        return raw
    try:
        return LegacyTranslation.model_validate(raw)
    except ValidationError as e:
        raise LegacyFormatError(
            f"Legacy document has an invalid structure: {e.error_count()} problem(s)",
            cause=e,
            suggestions=[str(err["loc"]) + ": " + err["msg"] for err in e.errors()],
        ) from e


def load_legacy_file(path: Union[str, Path]) -> LegacyTranslation:
    """
    Read and validate a legacy JSON file.

    Raises:
        LegacyFormatError: If the file cannot be read, is not JSON or has the
            wrong shape.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LegacyFormatError(f"Cannot read {path}: {e}", cause=e) from e
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise LegacyFormatError(f"{path} is not valid JSON: {e.msg}", cause=e) from e
    return parse_legacy(raw)
