"""
Tests for the canonical JSON codec.
"""
import json

import pytest

from core.errors import SerializationError
from data.serialization import (
    books_to_dict,
    dump_translation,
    load_metadata,
    load_translation,
    translation_from_dict,
    translation_to_dict,
)
from domain.books import BookIdentifier
from domain.entities import Book, Books, Chapter, Verse, build_translation, remote_translation
from domain.verse_number import Range, Single


class TestEncoding:
    """Tests for the encoded layout."""

    def test_books_as_pairs(self, sample_books):
        encoded = books_to_dict(sample_books)
        assert [code for code, _ in encoded] == ["GEN", "2SA"]
        genesis = encoded[0][1]
        assert genesis["name"] == "Genesis"
        assert [number for number, _ in genesis["chapters"]] == [1, 2]
        assert [v["number"] for v in genesis["chapters"][1][1]["verses"]] == ["1", "2-3", "4"]

    def test_local_storage_tag(self, sample_translation):
        data = translation_to_dict(sample_translation)
        assert list(data["books"]) == ["local"]
        assert data["meta"]["short_name"] == "WEB"

    def test_remote_storage_tag(self, sample_metadata):
        data = translation_to_dict(remote_translation("https://example.org/web.json", sample_metadata))
        assert data["books"] == {"remote": "https://example.org/web.json"}

    def test_sections_and_footnotes(self):
        chapter = Chapter(
            verses=[Verse(Single(1), "a", footnote="note"), Verse(Range(2, 3), "b")],
            sections={Range(2, 3): "Second", Single(1): "First"},
        )
        books = Books([(BookIdentifier.RUTH, Book(name="Ruth", chapters=[(1, chapter)], introduction="Intro"))])
        encoded = books_to_dict(books)[0][1]
        assert encoded["introduction"] == "Intro"
        chapter_data = encoded["chapters"][0][1]
        assert chapter_data["sections"] == [["1", "First"], ["2-3", "Second"]]
        assert chapter_data["verses"][0]["footnote"] == "note"
        assert "footnote" not in chapter_data["verses"][1]


class TestDecoding:
    """Tests for decoding and file helpers."""

    def test_file_round_trip(self, tmp_path, sample_translation):
        """Test a converted translation survives dump and load."""
        path = dump_translation(sample_translation, tmp_path / "out" / "web.json")
        assert load_translation(path) == sample_translation

    def test_remote_round_trip(self, sample_metadata):
        translation = remote_translation("ipfs://corpus", sample_metadata)
        assert translation_from_dict(translation_to_dict(translation)) == translation

    def test_json_is_plain(self, sample_translation):
        json.dumps(translation_to_dict(sample_translation))

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda d: d.pop("meta"),
            lambda d: d["meta"].pop("name"),
            lambda d: d.update(books={"local": [], "remote": "x"}),
            lambda d: d.update(books={"cloud": "x"}),
            lambda d: d["books"].update(local=[["XYZ", {"name": "?", "chapters": []}]]),
            lambda d: d["books"].update(local=[["GEN", {"name": "Genesis", "chapters": [[0, {"verses": []}]]}]]),
            lambda d: d["books"].update(local=[["GEN", {"name": "Genesis", "chapters": [[1, {"verses": [{"number": "3-1", "text": "x"}]}]]}]]),
            lambda d: d["books"].update(local={"GEN": {}}),
            lambda d: d["books"].update(local=[["GEN", {"name": "Genesis", "chapters": [[1, []]]}]]),
            lambda d: d["books"].update(local=[["GEN", {"name": "Genesis", "chapters": [[1, {"verses": ["x"]}]]}]]),
            lambda d: d["books"].update(local=[["GEN", "Genesis"]]),
            lambda d: d.update(meta=["WEB"]),
        ],
    )
    def test_malformed_documents(self, sample_translation, mutate):
        data = json.loads(json.dumps(translation_to_dict(sample_translation)))
        mutate(data)
        with pytest.raises(SerializationError):
            translation_from_dict(data)

    def test_document_must_be_object(self):
        with pytest.raises(SerializationError) as exc_info:
            translation_from_dict([])
        assert "translation" in exc_info.value.message

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[", encoding="utf-8")
        with pytest.raises(SerializationError):
            load_translation(path)

    def test_load_missing_file(self, tmp_path):
        """Test an unreadable path is reported as a SerializationError."""
        with pytest.raises(SerializationError) as exc_info:
            load_translation(tmp_path / "missing.json")
        assert "Cannot read" in exc_info.value.message
        assert isinstance(exc_info.value.cause, FileNotFoundError)


class TestLoadMetadata:
    """Tests for load_metadata."""

    def test_load(self, tmp_path):
        path = tmp_path / "meta.json"
        path.write_text(json.dumps({
            "name": "King James Version",
            "short_name": "KJV",
            "release_year": 1611,
            "languages": ["en"],
        }), encoding="utf-8")
        meta = load_metadata(path)
        assert meta.short_name == "KJV"
        assert meta.languages == ("en",)
        assert not meta.is_placeholder

    def test_out_of_range_equivalence(self, tmp_path):
        path = tmp_path / "meta.json"
        path.write_text(json.dumps({
            "name": "X", "short_name": "X", "release_year": 2000, "equivalence_level": 300,
        }), encoding="utf-8")
        with pytest.raises(SerializationError):
            load_metadata(path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "meta.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(SerializationError):
            load_metadata(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SerializationError):
            load_metadata(tmp_path / "missing.json")
