from ticket_extractor.config import load_settings

def test_defaults(monkeypatch):
    monkeypatch.delenv("AVIATIONSTACK_API_KEY", raising=False)
    s = load_settings()
    assert s["ocr"] == {"enabled": True, "lang": "eng"}
    assert s["enrichment"]["api_key"] is None
    assert s["extraction"]["min_text_length"] == 20

def test_partial_file_keeps_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("AVIATIONSTACK_API_KEY", raising=False)
    p = tmp_path / "settings.yaml"
    p.write_text("ocr:\n  lang: eng+hin\nenrichment:\nlogging:\n  level: DEBUG\n", encoding="utf-8")
    s = load_settings(str(p))
    assert s["ocr"] == {"enabled": True, "lang": "eng+hin"}
    assert s["enrichment"]["timeout"] == 6.0
    assert s["logging"]["level"] == "DEBUG"

def test_api_key_from_environment(monkeypatch):
    monkeypatch.setenv("AVIATIONSTACK_API_KEY", "secret")
    assert load_settings()["enrichment"]["api_key"] == "secret"

def test_bundled_config_file():
    s = load_settings("config.yaml")
    assert s["enrichment"]["base_url"] == "http://api.aviationstack.com/v1"
