"""
Tests for the phonics-toolkit command line.
"""

import json
import logging

import pytest

from phonics_toolkit.cli import build_parser, main
from phonics_toolkit.core.errors import ExportError
from phonics_toolkit.core.models.results import AssessmentRecord, WordOutcome
from phonics_toolkit.core.utils.serialization import save_json, serialize_record


@pytest.fixture(autouse=True)
def restore_logging():
    """main() reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def record_path(tmp_path, term_set):
    record = AssessmentRecord.start(
        term_set, student_name="Aroha Ngata", nsn="123456789",
        check_type="20-week", date="2025-03-14",
    )
    record = record.complete([WordOutcome(w, "correct") for w in term_set.words], term_set.words)
    path = tmp_path / "record.json"
    save_json(serialize_record(record), path)
    return path


class TestParser:

    def test_parser_when_no_command_then_exits(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestIngestCommand:
    """Tests for `phonics-toolkit ingest`."""

    def test_ingest_when_valid_file_then_lists_words(self, tmp_path, make_xlsx, make_words, capsys):
        # Arrange
        words = make_words(20)
        path = tmp_path / "Term 1.xlsx"
        path.write_bytes(make_xlsx([["Item"]] + [[w] for w in words]))

        # Act
        code = main(["ingest", str(path)])

        # Assert
        out = capsys.readouterr().out
        assert code == 0
        assert "Term 1 (20 words)" in out
        assert words[0] in out

    def test_ingest_when_output_given_then_json_written(self, tmp_path, make_xlsx, make_words):
        path = tmp_path / "list.xlsx"
        path.write_bytes(make_xlsx([["Word"]] + [[w] for w in make_words(25)]))
        output = tmp_path / "set.json"

        code = main(["ingest", str(path), "--name", "Week 20", "--output", str(output)])

        data = json.loads(output.read_text(encoding="utf-8"))
        assert code == 0
        assert data["name"] == "Week 20"
        assert len(data["words"]) == 25

    def test_ingest_when_too_few_words_then_message_and_exit_1(self, tmp_path, make_xlsx, make_words, capsys):
        path = tmp_path / "short.xlsx"
        path.write_bytes(make_xlsx([["Item"]] + [[w] for w in make_words(5)]))

        code = main(["ingest", str(path)])

        assert code == 1
        assert "between 20 and 40 words, but found 5" in capsys.readouterr().err


class TestExportCommand:
    """Tests for `phonics-toolkit export`."""

    def test_export_when_record_valid_then_workbook_saved(self, tmp_path, record_path, capsys):
        code = main(["export", str(record_path), "--output-dir", str(tmp_path / "out")])

        assert code == 0
        assert (tmp_path / "out" / "Phonics-Check-Marking-Sheet-Aroha_Ngata-2025-03-14.xlsx").exists()

    def test_export_when_export_fails_then_generic_notice(self, tmp_path, record_path, capsys, monkeypatch):
        # Arrange
        def fail(*args, **kwargs):
            raise ExportError()

        monkeypatch.setattr("phonics_toolkit.cli.export_assessment", fail)

        # Act
        code = main(["export", str(record_path), "--output-dir", str(tmp_path)])

        # Assert
        assert code == 1
        assert ExportError.USER_MESSAGE in capsys.readouterr().err

    def test_export_when_record_missing_then_generic_notice(self, tmp_path, capsys):
        code = main(["export", str(tmp_path / "missing.json")])

        assert code == 1
        assert ExportError.USER_MESSAGE in capsys.readouterr().err

    @pytest.mark.parametrize("outcomes", [["pit", "mop"], None, [{"word": ["pit"], "result": "correct"}]])
    def test_export_when_record_has_wrong_json_types_then_generic_notice(self, record_path, outcomes, capsys):
        # Arrange
        data = json.loads(record_path.read_text(encoding="utf-8"))
        data["outcomes"] = outcomes
        record_path.write_text(json.dumps(data), encoding="utf-8")

        # Act
        code = main(["export", str(record_path)])

        # Assert
        assert code == 1
        assert ExportError.USER_MESSAGE in capsys.readouterr().err
