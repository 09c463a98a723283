import os, json, click, csv, logging, mimetypes, sys
from typing import Dict, Any, List, Optional
from .config import load_settings
from .enrichment import FlightEnrichmentClient
from .journeys import JOURNEY_FIELDS
from .loader import IMAGE_EXTENSIONS
from .matcher import TRIP_CATEGORIES
from .pipeline import extract_ticket, process_ticket_text

SUPPORTED_EXTENSIONS = (".pdf",) + IMAGE_EXTENSIONS
REPORT_FIELDS = ["path_in", "success", "ticket_category", "leg", "matched", "discrepancies", "confidence"] \
    + list(JOURNEY_FIELDS) + ["error"]


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

def _json_option(ctx, param, value) -> Optional[Dict[str, Any]]:
    if not value:
        return None
    try:
        data = json.loads(value)
    except ValueError as e:
        raise click.BadParameter(f"not valid JSON: {e}")
    if not isinstance(data, dict):
        raise click.BadParameter("expected a JSON object")
    return data

def _collect_files(path: str, recursive: bool) -> List[str]:
    if not os.path.isdir(path):
        return [path]
    files: List[str] = []
    for root, _, names in os.walk(path):
        for n in sorted(names):
            if n.lower().endswith(SUPPORTED_EXTENSIONS):
                files.append(os.path.join(root, n))
        if not recursive:
            break
    return files

def _report_rows(path: str, res: Dict[str, Any]) -> List[Dict[str, Any]]:
    base = {"path_in": path, "success": res["success"], "error": res.get("error")}
    if not res["success"]:
        return [base]
    rows = []
    for leg in ("onward", "return"):
        side = res.get(leg)
        if not side:
            continue
        row = dict(base, ticket_category=res["ticket_category"], leg=leg, matched=side["matched"],
                   confidence=res["confidence"],
                   discrepancies="; ".join(f"{d['field']}: {d['requested']} != {d['extracted']}"
                                           for d in side["discrepancies"]))
        row.update({k: side.get(k) for k in JOURNEY_FIELDS})
        rows.append(row)
    return rows or [dict(base, ticket_category=res["ticket_category"], confidence=res["confidence"])]

def _write_report(report: str, rows: List[Dict[str, Any]]) -> None:
    os.makedirs(os.path.dirname(report) or ".", exist_ok=True)
    with open(report, "w", newline="", encoding="utf-8") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=REPORT_FIELDS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)


@click.group()
def main():
    """Travel ticket extractor & itinerary checker"""

@main.command("extract")
@click.argument("path", type=click.Path(exists=True))
@click.option("--category", default="one_way", show_default=True,
              type=click.Choice(TRIP_CATEGORIES + ("oneway", "roundtrip", "multicity")),
              help="Ticket category")
@click.option("--onward", "onward", default=None, callback=_json_option,
              help='Requested onward leg as JSON, e.g. \'{"departure_city": "Delhi"}\'')
@click.option("--return", "return_leg", default=None, callback=_json_option, help="Requested return leg as JSON")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True), help="Path to settings YAML")
@click.option("--ocr/--no-ocr", default=None, help="Override OCR fallback for scanned tickets and images")
@click.option("--lang", default=None, help="Tesseract language(s), e.g., 'eng+hin'")
@click.option("--enrich/--no-enrich", default=None, help="Override flight schedule lookups")
@click.option("--recursive", is_flag=True, help="Recurse into directories")
@click.option("--report", default=None, type=click.Path(), help="Optional CSV report path")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def extract_cmd(path, category, onward, return_leg, config_path, ocr, lang, enrich, recursive, report, verbose):
    """Extract journeys from a ticket file (or a directory of tickets) and check them."""
    settings = load_settings(config_path)
    if ocr is not None:
        settings["ocr"]["enabled"] = ocr
    if lang:
        settings["ocr"]["lang"] = lang
    if enrich is not None:
        settings["enrichment"]["enabled"] = enrich
    _setup_logging("DEBUG" if verbose else settings["logging"]["level"])

    rows: List[Dict[str, Any]] = []
    for f in _collect_files(path, recursive):
        with open(f, "rb") as fh:
            data = fh.read()
        res = extract_ticket(
            data, os.path.basename(f), mimetypes.guess_type(f)[0],
            trip_category=category,
            requested_onward=onward,
            requested_return=return_leg,
            settings=settings,
        )
        click.echo(json.dumps(dict(res, path_in=f), ensure_ascii=False))
        rows.extend(_report_rows(f, res))

    if report and rows:
        _write_report(report, rows)

@main.command("parse-text")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--category", default="one_way", show_default=True,
              type=click.Choice(TRIP_CATEGORIES + ("oneway", "roundtrip", "multicity")))
@click.option("--onward", "onward", default=None, callback=_json_option, help="Requested onward leg as JSON")
@click.option("--return", "return_leg", default=None, callback=_json_option, help="Requested return leg as JSON")
@click.option("--enrich/--no-enrich", default=False, show_default=True, help="Look flights up in the schedule table")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def parse_text_cmd(path, category, onward, return_leg, enrich, verbose):
    """Run journey extraction on text that was already pulled out of a ticket."""
    _setup_logging("DEBUG" if verbose else "WARNING")
    with open(path, "r", encoding="utf-8") as fh:
        text = fh.read()
    settings = load_settings()
    enricher = None
    if enrich:
        enricher = FlightEnrichmentClient(api_key=settings["enrichment"]["api_key"],
                                          base_url=settings["enrichment"]["base_url"],
                                          timeout=float(settings["enrichment"]["timeout"]))
    try:
        res = process_ticket_text(text, category, onward, return_leg, enricher=enricher)
    finally:
        if enricher is not None:
            enricher.close()
    click.echo(json.dumps(res, ensure_ascii=False, indent=2))

if __name__ == "__main__":
    main()
