"""Raw text for the segmenter: PDF text layer or image OCR.

PDFs are never OCR'd. A PDF whose text layer is (nearly) empty is almost
always a scan, and the user is asked to upload it as an image instead.
"""
import base64
import io
import logging

from PyPDF2 import PdfReader

from syllabuscraft.core.config import Settings, get_settings
from syllabuscraft.core.deps import get_openai_client
from syllabuscraft.core.errors import InputRejected

logger = logging.getLogger("syllabuscraft.text_extraction")

SCANNED_PDF_MESSAGE = "Scanned PDF detected. Please upload a clear image-based syllabus."

_IMAGE_MIME_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
}

_OCR_PROMPT = (
    "Extract all text from this syllabus image. Keep the original line breaks, "
    "unit headings, hour annotations such as [6 Hours] and commas between topics. "
    "Return only the extracted text."
)


def extract_text_from_pdf(file_content: bytes) -> str:
    """Extract the text layer of a PDF, one page per line block."""
    try:
        pdf_reader = PdfReader(io.BytesIO(file_content))
        pages = [page.extract_text() or "" for page in pdf_reader.pages]
    except Exception as e:
        raise InputRejected(f"Failed to read PDF: {str(e)}") from e
    return "\n".join(pages).strip()


def extract_text_from_image(file_content: bytes, filename: str, client=None, settings: Settings | None = None) -> str:
    """OCR an image through the OpenAI vision endpoint. Output is not filtered."""
    if settings is None:
        settings = get_settings()
    if client is None:
        client = get_openai_client()

    ext = filename.lower().rsplit(".", 1)[-1]
    mime_type = _IMAGE_MIME_TYPES.get(ext, "image/jpeg")
    base64_image = base64.b64encode(file_content).decode("utf-8")

    response = client.chat.completions.create(
        model=settings.ocr_model,
        messages=[
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": _OCR_PROMPT},
                    {
                        "type": "image_url",
                        "image_url": {"url": f"data:{mime_type};base64,{base64_image}"},
                    },
                ],
            }
        ],
        max_tokens=4096,
    )
    return response.choices[0].message.content or ""


def looks_like_scanned_pdf(text: str, settings: Settings | None = None) -> bool:
    if settings is None:
        settings = get_settings()
    return len(text.strip()) <= settings.min_pdf_text_chars


def extract_syllabus_text(file_content: bytes, filename: str, kind: str, settings: Settings | None = None) -> str:
    """Return the raw syllabus text for a validated upload.

    Raises InputRejected for unreadable or scanned PDFs.
    """
    if settings is None:
        settings = get_settings()

    if kind == "pdf":
        text = extract_text_from_pdf(file_content)
        if looks_like_scanned_pdf(text, settings):
            logger.info("Rejecting %s: only %d chars of embedded text", filename, len(text.strip()))
            raise InputRejected(SCANNED_PDF_MESSAGE)
        return text

    return extract_text_from_image(file_content, filename, settings=settings)
