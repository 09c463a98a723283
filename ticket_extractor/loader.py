from typing import Any, Callable, Dict, Optional
import io
import logging
from pdfminer.high_level import extract_text

from .errors import (
    IMAGE_OCR_FAILURE, IMAGE_OCR_UNAVAILABLE, INSUFFICIENT_TEXT, PDF_PARSE_FAILURE,
    UNSUPPORTED_FILE_TYPE, TicketExtractionError,
)

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp", ".tif", ".tiff")

TextExtractor = Callable[[bytes, str], Dict[str, Any]]
OcrExtractor = Callable[[bytes, str], Dict[str, Any]]


def is_pdf(filename: str, mime_type: Optional[str] = None) -> bool:
    return mime_type == "application/pdf" or filename.lower().endswith(".pdf")

def is_image(filename: str, mime_type: Optional[str] = None) -> bool:
    return bool(mime_type and mime_type.startswith("image/")) or filename.lower().endswith(IMAGE_EXTENSIONS)


def extract_pdf_text(data: bytes, filename: str = "") -> Dict[str, str]:
    """Text layer of a PDF. Raises on structurally broken files."""
    return {"text": extract_text(io.BytesIO(data)) or ""}


def ocr_extract(data: bytes, filename: str = "", lang: str = "eng") -> Dict[str, Any]:
    """
    OCR an image, or every page of a scanned PDF.
    Returns {"success": bool, "text"?: str, "error"?: str}.
    """
    try:
        import pytesseract
        from PIL import Image
        from pdf2image import convert_from_bytes
        from pdf2image.exceptions import PDFInfoNotInstalledError, PDFPageCountError
    except ImportError as e:
        return {"success": False, "error": f"ocr_error: {e}"}

    try:
        if is_pdf(filename) or data[:5] == b"%PDF-":
            pages = convert_from_bytes(data)
        else:
            pages = [Image.open(io.BytesIO(data))]
        parts = [pytesseract.image_to_string(img, lang=lang) for img in pages]
    except (pytesseract.TesseractError, PDFInfoNotInstalledError, PDFPageCountError, OSError) as e:
        logger.error("OCR failed for %s: %s", filename or "<bytes>", e)
        return {"success": False, "error": f"ocr_error: {e}"}
    return {"success": True, "text": "\n".join(parts)}


def load_ticket_text(
    data: bytes,
    filename: str,
    mime_type: Optional[str] = None,
    text_extractor: Optional[TextExtractor] = None,
    ocr_extractor: Optional[OcrExtractor] = None,
    min_text_length: int = 20,
) -> str:
    """
    Return the ticket's text, falling back to OCR for image-only or broken
    PDFs. ``ocr_extractor=None`` means OCR is not configured.
    Raises TicketExtractionError.
    """
    text_extractor = text_extractor or extract_pdf_text
    text = ""

    if is_pdf(filename, mime_type):
        try:
            text = text_extractor(data, filename).get("text") or ""
        except Exception as e:
            logger.error("PDF parsing error for %s: %s", filename, e)
            if not ocr_extractor:
                raise TicketExtractionError(
                    PDF_PARSE_FAILURE, "Could not parse PDF. Please try uploading an image instead.") from e
            result = ocr_extractor(data, filename)
            if not result.get("success"):
                raise TicketExtractionError(
                    PDF_PARSE_FAILURE, "Could not parse PDF. Please try uploading an image instead.") from e
            text = result.get("text") or ""
        else:
            if len(text.strip()) < min_text_length and ocr_extractor:
                logger.info("PDF %s appears to be image-based, trying OCR", filename)
                result = ocr_extractor(data, filename)
                if result.get("success"):
                    text = result.get("text") or ""

    elif is_image(filename, mime_type):
        if not ocr_extractor:
            raise TicketExtractionError(
                IMAGE_OCR_UNAVAILABLE, "Image OCR is not configured. Please upload a PDF ticket.")
        result = ocr_extractor(data, filename)
        if not result.get("success"):
            raise TicketExtractionError(
                IMAGE_OCR_FAILURE, result.get("error") or "Could not extract text from image.")
        text = result.get("text") or ""

    else:
        raise TicketExtractionError(
            UNSUPPORTED_FILE_TYPE, "Unsupported file type. Please upload a PDF or image (JPG, PNG).")

    if len(text.strip()) < min_text_length:
        raise TicketExtractionError(
            INSUFFICIENT_TEXT,
            "Could not extract text from the ticket. Please ensure the image is clear and readable.")
    return text
