"""
Scriptura - Data Package

Input and output formats:
    - legacy: pydantic schema of the legacy JSON representation
    - serialization: canonical model <-> JSON codec
"""
from data.legacy import (
    LegacyBook,
    LegacyChapter,
    LegacyTranslation,
    LegacyVerse,
    load_legacy_file,
    parse_legacy,
)
from data.serialization import (
    books_to_dict,
    dump_translation,
    load_metadata,
    load_translation,
    translation_from_dict,
    translation_to_dict,
)

__all__ = [
    "LegacyBook",
    "LegacyChapter",
    "LegacyTranslation",
    "LegacyVerse",
    "load_legacy_file",
    "parse_legacy",
    "books_to_dict",
    "dump_translation",
    "load_metadata",
    "load_translation",
    "translation_from_dict",
    "translation_to_dict",
]
