from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Cipher Identifier"
    app_env: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    api_v1_prefix: str = "/api/v1"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./cipher_identifier.db"

    # Identification settings
    max_ciphertext_length: int = 100_000
    default_top_n: int = 5
    max_parallel_workers: int = 4

    # Reference data (packaged resources are used when unset)
    profiles_path: Path | None = None
    cipher_types_path: Path | None = None

    # Fallback normalisation for profiles without a spread for a metric
    metric_scales: dict[str, float] = Field(
        default_factory=lambda: {
            "IoC": 10.0,
            "MIC": 10.0,
            "MKA": 12.0,
            "DIC": 2.0,
            "EDI": 3.0,
            "LR": 1.5,
            "ROD": 8.0,
            "LDI": 20_000.0,
            "SDD": 4.0,
        }
    )

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
