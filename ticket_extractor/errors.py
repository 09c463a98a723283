UNSUPPORTED_FILE_TYPE = "unsupported_file_type"
PDF_PARSE_FAILURE = "pdf_parse_failure"
INSUFFICIENT_TEXT = "insufficient_text"
IMAGE_OCR_UNAVAILABLE = "image_ocr_unavailable"
IMAGE_OCR_FAILURE = "image_ocr_failure"
INTERNAL_ERROR = "internal_error"


class TicketExtractionError(Exception):
    """A ticket that cannot be turned into text; ``message`` is safe to show to the uploader."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message
