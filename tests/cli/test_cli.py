"""
Tests for the command line interface.
"""
import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from cli.main import app, main
from data.serialization import dump_translation, load_translation
from domain.books import BookIdentifier


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def broken_legacy_file(tmp_path):
    """Legacy document whose only chapter has a verse gap."""
    path = tmp_path / "gap.json"
    path.write_text(json.dumps({"books": [{"name": "Ruth", "chapters": [{"chapter": 1, "verses": [
        {"verse": 1, "chapter": 1, "text": "In the days when the judges judged"},
        {"verse": 3, "chapter": 1, "text": "Elimelech, Naomi's husband, died"},
    ]}]}]}), encoding="utf-8")
    return path


class TestBooksCommand:
    """Tests for `scriptura books`."""

    def test_lists_canon(self, runner):
        result = runner.invoke(app, ["books"])
        assert result.exit_code == 0
        assert "GEN" in result.output
        assert "REV" in result.output


class TestResolveCommand:
    """Tests for `scriptura resolve`."""

    def test_known(self, runner):
        result = runner.invoke(app, ["resolve", "II Samuel"])
        assert result.exit_code == 0
        assert "2 Samuel" in result.output
        assert "2SA" in result.output

    def test_unknown(self, runner):
        result = runner.invoke(app, ["resolve", "Gospel of Thomas"])
        assert result.exit_code == 1
        assert "Unknown book name" in result.output


class TestConvertCommand:
    """Tests for `scriptura convert`."""

    def test_writes_output(self, runner, legacy_file, tmp_path):
        output = tmp_path / "canonical.json"
        result = runner.invoke(app, ["convert", str(legacy_file), "--output", str(output)])

        assert result.exit_code == 0
        assert "placeholder" in result.output
        translation = load_translation(output)
        assert translation.meta.is_placeholder
        assert list(translation.local_books) == [BookIdentifier.GENESIS, BookIdentifier.SECOND_SAMUEL]

    def test_with_metadata(self, runner, legacy_file, tmp_path):
        meta = tmp_path / "meta.json"
        meta.write_text(json.dumps({"name": "World English Bible", "short_name": "WEB", "release_year": 2000}))
        output = tmp_path / "canonical.json"
        result = runner.invoke(app, ["convert", str(legacy_file), "--meta", str(meta), "-o", str(output)])

        assert result.exit_code == 0
        assert "placeholder" not in result.output
        assert load_translation(output).meta.short_name == "WEB"

    def test_conversion_error(self, runner, tmp_path):
        path = tmp_path / "unknown.json"
        path.write_text(json.dumps({"books": [{"name": "Gospel of Thomas", "chapters": []}]}))
        result = runner.invoke(app, ["convert", str(path)])

        assert result.exit_code == 1
        assert "Conversion failed" in result.output

    def test_invalid_json(self, runner, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{")
        result = runner.invoke(app, ["convert", str(path)])
        assert result.exit_code == 1

    def test_missing_input_file(self, runner, tmp_path):
        result = runner.invoke(app, ["convert", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert not isinstance(result.exception, FileNotFoundError)
        assert "Conversion failed" in result.output

    def test_missing_meta_file(self, runner, legacy_file, tmp_path):
        result = runner.invoke(app, ["convert", str(legacy_file), "--meta", str(tmp_path / "meta.json")])
        assert result.exit_code == 1
        assert "Conversion failed" in result.output

    def test_unwritable_output(self, runner, legacy_file, tmp_path):
        """Test writing onto a directory fails cleanly."""
        result = runner.invoke(app, ["convert", str(legacy_file), "-o", str(tmp_path)])
        assert result.exit_code == 1
        assert "Cannot write" in result.output


class TestValidateCommand:
    """Tests for `scriptura validate`."""

    def test_valid_canonical_file(self, runner, tmp_path, sample_translation):
        path = dump_translation(sample_translation, tmp_path / "web.json")
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 0
        assert "PASSED" in result.output

    def test_legacy_text_report(self, runner, legacy_file):
        result = runner.invoke(app, ["validate", str(legacy_file), "--legacy", "--format", "text"])
        assert result.exit_code == 0
        assert "All validation checks passed successfully!" in result.output

    def test_defects_exit_nonzero(self, runner, broken_legacy_file):
        result = runner.invoke(app, ["validate", str(broken_legacy_file), "--legacy", "--format", "text"])
        assert result.exit_code == 1
        assert "Verse gap detected in Ruth chapter 1: missing verses [2]" in result.output

    def test_json_report(self, runner, broken_legacy_file):
        result = runner.invoke(app, ["validate", str(broken_legacy_file), "--legacy", "--format", "json"])
        assert result.exit_code == 1
        report = json.loads(result.stdout)
        assert report["valid"] is False
        assert report["errors"][0]["kind"] == "VerseGap"
        assert report["errors"][0]["missing"] == [2]

    def test_table_report_failed(self, runner, broken_legacy_file):
        result = runner.invoke(app, ["validate", str(broken_legacy_file), "--legacy"])
        assert result.exit_code == 1
        assert "FAILED" in result.output

    def test_remote_storage(self, runner, tmp_path):
        path = tmp_path / "remote.json"
        path.write_text(json.dumps({
            "meta": {"name": "Remote", "short_name": "RM", "release_year": 2020},
            "books": {"remote": "https://example.org/corpus.json"},
        }))
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "remote storage" in result.output

    def test_unreadable_file(self, runner, tmp_path):
        path = tmp_path / "nope.json"
        path.write_text("[]")
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1

    def test_missing_file(self, runner, tmp_path):
        """Test a missing path exits 1 with an error line instead of a traceback."""
        result = runner.invoke(app, ["validate", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert not isinstance(result.exception, FileNotFoundError)
        assert "Could not load" in result.output

    def test_missing_legacy_file(self, runner, tmp_path):
        result = runner.invoke(app, ["validate", str(tmp_path / "nope.json"), "--legacy"])
        assert result.exit_code == 1
        assert "Could not load" in result.output


class TestSetupCallback:
    """Tests for the logging setup shared by every command."""

    @pytest.fixture(autouse=True)
    def restore_logging(self):
        yield
        from config import LoggingConfig
        from observability import setup_logging

        setup_logging(LoggingConfig(), force=True)

    def test_debug_setting_enables_debug_logging(self, runner, monkeypatch):
        import logging

        import config

        monkeypatch.setattr(config, "_config", config.Config(debug=True))
        result = runner.invoke(app, ["books"])

        assert result.exit_code == 0
        assert logging.getLogger().level == logging.DEBUG

    def test_verbose_flag(self, runner, monkeypatch):
        import logging

        import config

        monkeypatch.setattr(config, "_config", config.Config(debug=False))
        runner.invoke(app, ["--verbose", "books"])
        assert logging.getLogger().level == logging.DEBUG

    def test_main_flushes_tracing_on_exit(self):
        """Test the entry point shuts tracing down even when the app exits."""
        with patch("cli.main.app", side_effect=SystemExit(0)), \
                patch("cli.main.shutdown_tracing") as shutdown:
            with pytest.raises(SystemExit):
                main()
        shutdown.assert_called_once()
