"""
End-to-end ticket check: bytes -> text -> journeys -> (enriched) journeys ->
onward/return match -> confidence. Every call is independent; nothing is kept
between tickets.
"""
import functools
import json
import logging
from typing import Any, Dict, Optional, Union

from .config import apply_defaults, load_settings
from .confidence import calculate_confidence
from .enrichment import FlightEnrichmentClient, enrich_journeys
from .errors import INTERNAL_ERROR, TicketExtractionError
from .journeys import assemble_journeys
from .loader import OcrExtractor, TextExtractor, load_ticket_text, ocr_extract
from .matcher import MatchResult, RequestedLeg, match_itinerary, normalize_category

logger = logging.getLogger(__name__)

LEG_FIELDS = ("departure_city", "arrival_city", "departure_date")


def parse_requested_leg(raw: Union[str, Dict[str, Any], None]) -> Optional[RequestedLeg]:
    """Accepts a dict or its JSON text; anything unusable counts as not supplied."""
    if raw is None or raw == "":
        return None
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring unparsable requested leg: %r", raw[:200])
            return None
    if not isinstance(raw, dict):
        logger.warning("Ignoring requested leg of type %s", type(raw).__name__)
        return None
    return RequestedLeg(**{k: raw.get(k) or None for k in LEG_FIELDS})


def _side(match: MatchResult) -> Optional[Dict[str, Any]]:
    if not match["journey"]:
        return None
    return {**match["journey"], "matched": match["matched"], "discrepancies": match["discrepancies"]}


def process_ticket_text(
    text: str,
    trip_category: str = "one_way",
    requested_onward: Union[str, Dict[str, Any], None] = None,
    requested_return: Union[str, Dict[str, Any], None] = None,
    enricher: Optional[FlightEnrichmentClient] = None,
    raw_text_sample: int = 500,
    default_year: Optional[int] = None,
) -> Dict[str, Any]:
    category = normalize_category(trip_category)
    logger.info("Ticket category: %s, text length: %d", category, len(text))

    journeys = assemble_journeys(text, default_year=default_year)
    if enricher is not None:
        enrich_journeys(journeys, enricher)
    for i, journey in enumerate(journeys, 1):
        logger.debug("Journey %d: %s", i, json.dumps(journey))

    onward, ret = match_itinerary(
        journeys, category, parse_requested_leg(requested_onward), parse_requested_leg(requested_return))

    return {
        "success": True,
        "ticket_category": category,
        "journeys_found": len(journeys),
        "all_journeys": journeys,
        "onward": _side(onward),
        "return": _side(ret),
        "confidence": calculate_confidence(onward, ret, category),
        "raw_text_sample": text[:raw_text_sample],
    }


def extract_ticket(
    data: bytes,
    filename: str,
    mime_type: Optional[str] = None,
    trip_category: str = "one_way",
    requested_onward: Union[str, Dict[str, Any], None] = None,
    requested_return: Union[str, Dict[str, Any], None] = None,
    settings: Optional[Dict[str, Any]] = None,
    text_extractor: Optional[TextExtractor] = None,
    ocr_extractor: Optional[OcrExtractor] = None,
    enricher: Optional[FlightEnrichmentClient] = None,
    default_year: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Read an uploaded ticket and check it against the traveler's requested legs.
    Never raises: failures come back as {"success": False, "error", "error_code"}.
    """
    settings = apply_defaults(settings) if settings else load_settings()
    ocr_cfg, enrich_cfg, extract_cfg = settings["ocr"], settings["enrichment"], settings["extraction"]

    if not ocr_cfg["enabled"]:
        ocr_extractor = None
    elif ocr_extractor is None:
        ocr_extractor = functools.partial(ocr_extract, lang=ocr_cfg["lang"])

    owned_enricher = None
    if enricher is None and enrich_cfg["enabled"]:
        enricher = owned_enricher = FlightEnrichmentClient(
            api_key=enrich_cfg["api_key"],
            base_url=enrich_cfg["base_url"],
            timeout=float(enrich_cfg["timeout"]),
        )

    try:
        text = load_ticket_text(
            data, filename, mime_type,
            text_extractor=text_extractor,
            ocr_extractor=ocr_extractor,
            min_text_length=int(extract_cfg["min_text_length"]),
        )
        logger.debug("Extracted text: %s", text[:1500])
        return process_ticket_text(
            text, trip_category, requested_onward, requested_return,
            enricher=enricher,
            raw_text_sample=int(extract_cfg["raw_text_sample"]),
            default_year=default_year,
        )
    except TicketExtractionError as e:
        logger.info("Ticket %s rejected (%s): %s", filename, e.code, e.message)
        return {"success": False, "error": e.message, "error_code": e.code}
    except Exception:
        logger.exception("Ticket extraction error for %s", filename)
        return {"success": False, "error": "Failed to extract ticket details", "error_code": INTERNAL_ERROR}
    finally:
        if owned_enricher is not None:
            owned_enricher.close()
