from typing import Dict, Any, Optional
import copy
import os
import yaml

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "ocr": {"enabled": True, "lang": "eng"},
    "enrichment": {
        "enabled": True,
        "api_key": None,
        "base_url": "http://api.aviationstack.com/v1",
        "timeout": 6.0,
    },
    "extraction": {"min_text_length": 20, "raw_text_sample": 500},
    "logging": {"level": "INFO"},
}

def apply_defaults(data: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of ``data`` with every section and key present."""
    data = copy.deepcopy(data)
    for section, values in DEFAULTS.items():
        data.setdefault(section, {})
        if data[section] is None:
            data[section] = {}
        for key, value in values.items():
            data[section].setdefault(key, value)
    return data

def load_settings(path: Optional[str] = None) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    if path:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    data = apply_defaults(data)
    if not data["enrichment"]["api_key"]:
        data["enrichment"]["api_key"] = os.environ.get("AVIATIONSTACK_API_KEY") or None
    return data
