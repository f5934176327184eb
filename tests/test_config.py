# tests/test_config.py
from productapi.config import Settings


def test_defaults(monkeypatch):
    for var in ("PORT", "HOST_URL", "API_PREFIX", "CORS_ORIGINS", "STORE_BACKEND", "PRODUCTS_COLLECTION"):
        monkeypatch.delenv(var, raising=False)
    s = Settings.from_env()
    assert s.port == 8080
    assert s.host_url == "http://localhost:8080"
    assert s.api_prefix == "/api"
    assert s.cors_origins == ["*"]
    assert s.store_backend == "firestore"
    assert s.products_collection == "products"


def test_from_env(monkeypatch):
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.delenv("HOST_URL", raising=False)
    monkeypatch.setenv("API_PREFIX", "/v1/")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.example, http://b.example")
    monkeypatch.setenv("STORE_BACKEND", "MEMORY")
    monkeypatch.setenv("FIRESTORE_PROJECT_ID", "demo-project")
    s = Settings.from_env()
    assert s.port == 9000
    assert s.host_url == "http://localhost:9000"
    assert s.api_prefix == "/v1"
    assert s.cors_origins == ["http://a.example", "http://b.example"]
    assert s.store_backend == "memory"
    assert s.firestore_project_id == "demo-project"
