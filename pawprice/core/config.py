"""Application configuration."""

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Environment variables will be loaded and validated using Pydantic.
    Field names double as environment variable names.
    """

    app_name: str = "PawPrice"
    version: str = "0.1.0"
    api_prefix: str = "/api"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    ENVIRONMENT: str = "development"

    # CORS Settings (comma separated; empty means reflect any origin)
    ALLOWED_ORIGINS: str = ""
    cors_allow_credentials: bool = True

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True

    # Rate Limiting
    RATE_LIMIT_WINDOW_MS: int = Field(default=3_600_000, gt=0)
    RATE_LIMIT_MAX_REQUESTS: int = Field(default=60, gt=0)
    RATE_LIMIT_MAX_CLIENTS: int = Field(default=10_000, gt=0)

    # LLM Settings
    GROQ_API_KEY: str | None = None
    GROQ_MODEL: str = "llama-3.3-70b-versatile"
    LLM_BASE_URL: str = "https://api.groq.com/openai/v1"
    LLM_TEMPERATURE: float = Field(default=0.7, ge=0, le=1)
    LLM_MAX_TOKENS: int = Field(default=500, gt=0)
    LLM_TIMEOUT: float = Field(default=30.0, gt=0)
    MAX_CONCURRENT_LLM_CALLS: int = Field(default=5, gt=0)
    LLM_SLOT_TIMEOUT_SECONDS: float | None = Field(default=None, gt=0)

    # Geocoding Settings
    GEOCODING_PROVIDER: str = "geocodio"
    GEOCODIO_API_KEY: str | None = None
    GEOCODIO_URL: str = "https://api.geocod.io/v1.7/geocode"
    NOMINATIM_USER_AGENT: str = "pawprice"
    GEOCODING_TIMEOUT: float = Field(default=10.0, gt=0)

    # Groomer Search Settings
    PLACES_PROVIDER: str = "google"
    GOOGLE_PLACES_API_KEY: str | None = None
    GOOGLE_PLACES_URL: str = (
        "https://maps.googleapis.com/maps/api/place/nearbysearch/json"
    )
    OVERPASS_URL: str = "https://overpass-api.de/api/interpreter"
    SEARCH_TIMEOUT: float = Field(default=10.0, gt=0)
    SEARCH_RADII_MILES: list[int] = [10, 20, 30, 40]
    SEARCH_MIN_RESULTS: int = Field(default=10, gt=0)
    SEARCH_MAX_RESULTS: int = Field(default=12, gt=0)
    SEARCH_RADIUS_DELAY_SECONDS: float = Field(default=1.0, ge=0)
    FALLBACK_RADIUS_MILES: int = 20

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",  # Allow extra fields in environment
    )

    @field_validator("GEOCODING_PROVIDER", "PLACES_PROVIDER")
    @classmethod
    def normalize_provider(cls, value: str) -> str:
        """Provider names are matched case-insensitively."""
        return value.strip().lower()

    @model_validator(mode="after")
    def validate_radii(self) -> "Settings":
        """Radii must be positive and searched narrowest first."""
        if not self.SEARCH_RADII_MILES or min(self.SEARCH_RADII_MILES) <= 0:
            raise ValueError("SEARCH_RADII_MILES must contain positive values")
        self.SEARCH_RADII_MILES = sorted(set(self.SEARCH_RADII_MILES))
        return self

    @property
    def cors_origins(self) -> list[str]:
        """Allowed CORS origins parsed from ALLOWED_ORIGINS."""
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def rate_limit_window_seconds(self) -> float:
        return self.RATE_LIMIT_WINDOW_MS / 1000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
