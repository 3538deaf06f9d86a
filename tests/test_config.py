"""Tests for application settings."""

from sqlalchemy.engine import make_url

from app.backend.config import Settings


class TestSettings:
    """Tests for Settings defaults and environment overrides."""

    def test_default_database_url_names_installed_driver(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        url = make_url(Settings(_env_file=None).database_url)

        assert url.get_backend_name() == "postgresql"
        assert url.get_driver_name() == "psycopg2"
        assert url.database == "ai_pdf_management"

    def test_database_url_from_environment(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite:///override.db")

        assert Settings(_env_file=None).database_url == "sqlite:///override.db"
