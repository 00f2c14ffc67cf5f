"""Syllabus endpoints — upload → checklist units, checklist PDF, progress."""

from fastapi import APIRouter, HTTPException, UploadFile, File, Form
from fastapi.responses import Response
import logging

from syllabuscraft.core.errors import NoUnitsDetected, SyllabusError
from syllabuscraft.models.syllabus import (
    ChecklistProgress,
    ChecklistProgressRequest,
    SyllabusExtractResponse,
    Unit,
)
from syllabuscraft.services.checklist_pdf import ChecklistPDFService, summarize_progress
from syllabuscraft.services.file_validation import max_upload_bytes, validate_upload
from syllabuscraft.services.segmenter import segment
from syllabuscraft.services.telemetry import instrument, record
from syllabuscraft.services.text_extraction import extract_syllabus_text

router = APIRouter(prefix="/api/syllabus", tags=["syllabus"])

logger = logging.getLogger("syllabuscraft.syllabus")

pdf_service = ChecklistPDFService()

CHECKLIST_FILENAME = "syllabus-checklist.pdf"


async def _read_bounded(file: UploadFile) -> tuple[bytes, int]:
    """Read at most one byte past the upload limit.

    When the multipart parser already knows the size and it is over the
    limit, nothing is read. Returns (content, size used for validation).
    """
    limit = max_upload_bytes()
    if file.size is not None and file.size > limit:
        return b"", file.size
    file_content = await file.read(limit + 1)
    return file_content, len(file_content)


async def _units_from_upload(file: UploadFile | None) -> list[Unit]:
    """Validate the upload, pull its text, segment it.

    Raises HTTPException for rejected input, empty results and server errors.
    """
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    filename = file.filename or ""
    try:
        file_content, size = await _read_bounded(file)
        kind = validate_upload(filename, file.content_type, size)
        record(file_kind=kind)
        text = extract_syllabus_text(file_content, filename, kind)

        units = segment(text)
        if not units:
            raise NoUnitsDetected()
    except SyllabusError as e:
        logger.info("Rejected upload %r: %s", filename, e.message)
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error("Extraction failed for %r: %s", filename, e, exc_info=True)
        raise HTTPException(status_code=500, detail="Extraction failed at server")

    record(units=len(units), topics=sum(len(u.topics) for u in units))
    return units


@router.post("/extract", response_model=SyllabusExtractResponse)
@instrument(route="/api/syllabus/extract", version="v1")
async def extract_syllabus(file: UploadFile | None = File(None)):
    """Extract unit → topic checklists from an uploaded PDF or image."""
    units = await _units_from_upload(file)
    return SyllabusExtractResponse(syllabus=units)


@router.post("/checklist")
@instrument(route="/api/syllabus/checklist", version="v1")
async def download_checklist(
    file: UploadFile | None = File(None),
    title: str | None = Form(None),
):
    """Extract units from an upload and return them as a printable checklist PDF."""
    units = await _units_from_upload(file)

    try:
        pdf_bytes = pdf_service.generate_checklist_pdf(units, title=title or "Syllabus Checklist")
    except Exception as e:
        logger.error("Checklist PDF failed: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to generate PDF: {str(e)}")

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{CHECKLIST_FILENAME}"'
        }
    )


@router.post("/progress", response_model=ChecklistProgress)
@instrument(route="/api/syllabus/progress", version="v1")
async def checklist_progress(request: ChecklistProgressRequest):
    """Completed / total topic counts for a checklist the client has been ticking."""
    progress = summarize_progress(request.syllabus)
    record(units=len(request.syllabus), topics=progress.total_topics)
    return progress
