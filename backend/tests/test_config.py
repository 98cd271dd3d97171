"""Tests for settings validation."""
import pytest

from globetrotter.config import Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.store_backend == "sql"
        assert settings.currency_symbol == "₹"

    def test_prod_rejects_sqlite(self):
        with pytest.raises(ValueError, match="DATABASE_URL"):
            Settings(_env_file=None, env="prod", database_url="sqlite:///./x.db")

    def test_prod_accepts_postgres(self):
        settings = Settings(_env_file=None, env="prod", database_url="postgresql://db/globetrotter")
        assert settings.env == "prod"

    def test_unknown_store_backend(self):
        with pytest.raises(ValueError, match="STORE_BACKEND"):
            Settings(_env_file=None, store_backend="redis")
