"""Errors raised by the upload → text → units pipeline.

Routes translate these into HTTPException with the carried status code.
The segmenter itself never raises; an empty result is turned into
NoUnitsDetected by the caller.
"""


class SyllabusError(Exception):
    status_code = 400

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InputRejected(SyllabusError):
    """Upload is the wrong type, too large, empty, or a scanned PDF."""


class NoUnitsDetected(SyllabusError):
    def __init__(self, message: str = "No syllabus units detected. Please upload a valid syllabus PDF."):
        super().__init__(message)
