from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Environment mode: dev or prod
    ENV: Literal["dev", "prod"] = "dev"

    # Provider credentials (a missing value skips that provider)
    DIGITALOCEAN_API_KEY: str | None = None
    HETZNER_API_KEY: str | None = None
    VULTR_API_KEY: str | None = None
    UPCLOUD_USERNAME: str | None = None
    UPCLOUD_PASSWORD: str | None = None
    SCALEWAY_API_KEY: str | None = None

    # Provider feature flags
    # Only the exact string "true" enables ARM server types
    HETZNER_INCLUDE_ARM: str | None = None

    # Optional pre-normalized plan feed
    VPS_CATALOG_API_URL: str | None = None
    VPS_CATALOG_API_KEY: str | None = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = "logs/vps_catalog.log"

    # HTTP
    HTTP_TIMEOUT_SECONDS: float = 15.0

    # Collection output
    OUTPUT_PATH: str = "data/vps_plans.json"
    STRICT_VALIDATION: bool = False  # abort the build on any invalid plan

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",  # ignore unrelated keys in local .env
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENV == "prod"

    @property
    def hetzner_include_arm(self) -> bool:
        return (self.HETZNER_INCLUDE_ARM or "") == "true"

    @property
    def effective_log_level(self) -> str:
        """Return appropriate log level based on environment."""
        if self.is_production:
            # In production, minimum INFO level (ignore DEBUG)
            return self.LOG_LEVEL if self.LOG_LEVEL.upper() != "DEBUG" else "INFO"
        return self.LOG_LEVEL


settings = Settings()
