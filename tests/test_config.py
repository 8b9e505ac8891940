from saferoute.core.config import Settings


def test_allowed_origins_from_comma_separated_env(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.com, http://b.com")
    settings = Settings()
    assert settings.allowed_origins == ["http://a.com", "http://b.com"]


def test_allowed_origins_default_includes_local_frontends(monkeypatch):
    monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)
    assert "http://localhost:5173" in Settings().allowed_origins
