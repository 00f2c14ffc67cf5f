"""Tests for upload validation — extension, MIME type and size checks."""
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from syllabuscraft.core.config import Settings
from syllabuscraft.core.errors import InputRejected
from syllabuscraft.services.file_validation import file_extension, validate_upload

MB = 1024 * 1024


@pytest.fixture
def settings():
    return Settings(max_upload_mb=2)


class TestAccepted:
    def test_pdf(self, settings):
        assert validate_upload("syllabus.pdf", "application/pdf", 1000, settings) == "pdf"

    def test_image_uppercase_extension(self, settings):
        assert validate_upload("SCAN.JPG", "image/jpeg", 1000, settings) == "image"

    def test_missing_mime_type(self, settings):
        assert validate_upload("syllabus.png", None, 1000, settings) == "image"

    def test_generic_mime_type(self, settings):
        assert validate_upload("syllabus.pdf", "application/octet-stream", 1000, settings) == "pdf"

    def test_mime_parameters_ignored(self, settings):
        assert validate_upload("syllabus.pdf", "application/pdf; charset=binary", 1000, settings) == "pdf"

    def test_exactly_at_limit(self, settings):
        assert validate_upload("syllabus.pdf", "application/pdf", 2 * MB, settings) == "pdf"


class TestRejected:
    def test_no_filename(self, settings):
        with pytest.raises(InputRejected) as exc:
            validate_upload(None, "application/pdf", 1000, settings)
        assert exc.value.message == "No file uploaded"
        assert exc.value.status_code == 400

    def test_empty_file(self, settings):
        with pytest.raises(InputRejected) as exc:
            validate_upload("syllabus.pdf", "application/pdf", 0, settings)
        assert exc.value.message == "No file uploaded"

    def test_docx(self, settings):
        with pytest.raises(InputRejected) as exc:
            validate_upload("syllabus.docx", None, 1000, settings)
        assert exc.value.message.startswith("Invalid file format")
        assert exc.value.status_code == 400

    def test_mime_contradicts_extension(self, settings):
        with pytest.raises(InputRejected) as exc:
            validate_upload("syllabus.pdf", "image/png", 1000, settings)
        assert exc.value.message.startswith("Invalid file type")

    def test_oversized(self, settings):
        with pytest.raises(InputRejected) as exc:
            validate_upload("syllabus.pdf", "application/pdf", 2 * MB + 1, settings)
        assert exc.value.status_code == 413
        assert "max 2 MB" in exc.value.message

    def test_limit_follows_settings(self):
        with pytest.raises(InputRejected) as exc:
            validate_upload("syllabus.pdf", "application/pdf", 2 * MB, Settings(max_upload_mb=1))
        assert "max 1 MB" in exc.value.message


class TestFileExtension:
    def test_last_suffix(self):
        assert file_extension("archive.tar.gz") == ".gz"

    def test_no_suffix(self):
        assert file_extension("README") == ""

    def test_lowercased(self):
        assert file_extension("Syllabus.PDF") == ".pdf"
