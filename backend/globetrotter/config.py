from pydantic_settings import BaseSettings
from functools import lru_cache


STORE_BACKENDS = ("sql", "local")


class Settings(BaseSettings):
    env: str = "dev"
    database_url: str = "sqlite:///./data/globetrotter.db"

    # "sql" talks to the relational store, "local" to the key-value cache
    store_backend: str = "sql"
    local_store_path: str = ""

    base_url: str = "http://localhost:8000"
    currency_symbol: str = "₹"

    log_level: str = "INFO"

    def model_post_init(self, __context):
        if self.env == "prod" and self.database_url.startswith("sqlite"):
            raise ValueError(
                "Production requires explicit DATABASE_URL (not SQLite)"
            )
        if self.store_backend not in STORE_BACKENDS:
            raise ValueError(
                f"STORE_BACKEND must be one of {', '.join(STORE_BACKENDS)}, got {self.store_backend!r}"
            )

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
