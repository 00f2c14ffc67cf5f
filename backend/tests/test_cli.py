"""Tests for the syllabuscraft-segment command."""
import sys
import os
import json
from unittest.mock import patch

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from syllabuscraft.cli import main
from syllabuscraft.core.errors import InputRejected

SYLLABUS_TEXT = "Unit 1 Arrays and Lists [5 Hours]\nStacks, Queues, Deques.\n"


class TestSegmentCommand:
    def test_text_file(self, tmp_path, capsys):
        path = tmp_path / "syllabus.txt"
        path.write_text(SYLLABUS_TEXT, encoding="utf-8")

        assert main([str(path)]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["syllabus"][0]["label"] == "Unit 1: Arrays and Lists [5 Hours]"
        assert [t["name"] for t in out["syllabus"][0]["topics"]] == ["Stacks.", "Queues.", "Deques."]

    def test_no_units_exit_code(self, tmp_path, capsys):
        path = tmp_path / "notes.txt"
        path.write_text("Nothing that looks like a syllabus", encoding="utf-8")

        assert main([str(path)]) == 2
        captured = capsys.readouterr()
        assert json.loads(captured.out) == {"syllabus": []}
        assert "No syllabus units detected" in captured.err

    def test_writes_checklist_pdf(self, tmp_path):
        path = tmp_path / "syllabus.txt"
        path.write_text(SYLLABUS_TEXT, encoding="utf-8")
        out_pdf = tmp_path / "checklist.pdf"

        assert main([str(path), "--pdf", str(out_pdf)]) == 0
        assert out_pdf.read_bytes().startswith(b"%PDF")

    def test_scanned_pdf_rejected(self, tmp_path, capsys):
        path = tmp_path / "scan.pdf"
        path.write_bytes(b"%PDF-1.4")

        with patch("syllabuscraft.cli.extract_syllabus_text", side_effect=InputRejected("Scanned PDF detected.")):
            assert main([str(path)]) == 1
        assert "Scanned PDF detected." in capsys.readouterr().err

    def test_pdf_goes_through_text_layer(self, tmp_path, capsys):
        path = tmp_path / "syllabus.pdf"
        path.write_bytes(b"%PDF-1.4")

        with patch("syllabuscraft.cli.extract_syllabus_text", return_value=SYLLABUS_TEXT) as extract:
            assert main([str(path)]) == 0
        assert extract.call_args.args[1:] == ("syllabus.pdf", "pdf")
