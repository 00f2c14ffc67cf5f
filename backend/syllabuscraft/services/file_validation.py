"""Upload checks that run before any text extraction.

Extension is the primary check; MIME type is secondary and tolerant, since
browsers often send an empty or generic type.
"""
from syllabuscraft.core.config import Settings, get_settings
from syllabuscraft.core.errors import InputRejected

_PDF_EXTENSIONS = {".pdf"}
_IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp"}

_ACCEPTED_MIME_TYPES = {
    "pdf": {"application/pdf"},
    "image": {"image/png", "image/jpeg", "image/gif", "image/webp"},
}
_GENERIC_MIME_TYPES = {"", "application/octet-stream"}

DISPLAY_FORMATS = "PDF or image (PNG, JPG, GIF, WEBP)"


def max_upload_bytes(settings: Settings | None = None) -> int:
    if settings is None:
        settings = get_settings()
    return settings.max_upload_mb * 1024 * 1024


def file_extension(filename: str) -> str:
    if "." not in filename:
        return ""
    return "." + filename.lower().rsplit(".", 1)[-1]


def validate_upload(
    filename: str | None,
    content_type: str | None,
    size: int,
    settings: Settings | None = None,
) -> str:
    """Validate an uploaded syllabus and return its kind: "pdf" or "image".

    Raises InputRejected (400, or 413 when oversized).
    """
    if settings is None:
        settings = get_settings()

    if not filename or size <= 0:
        raise InputRejected("No file uploaded")

    ext = file_extension(filename)
    if ext in _PDF_EXTENSIONS:
        kind = "pdf"
    elif ext in _IMAGE_EXTENSIONS:
        kind = "image"
    else:
        raise InputRejected(f"Invalid file format. Please upload a {DISPLAY_FORMATS} file.")

    mime = (content_type or "").split(";")[0].strip().lower()
    if mime not in _GENERIC_MIME_TYPES and mime not in _ACCEPTED_MIME_TYPES[kind]:
        raise InputRejected(f"Invalid file type. Please upload a {DISPLAY_FORMATS} file.")

    if size > max_upload_bytes(settings):
        raise InputRejected(
            f"File too large. Upload syllabus of only one subject (max {settings.max_upload_mb} MB).",
            status_code=413,
        )

    return kind
