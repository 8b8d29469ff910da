"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from address_proximity.lib.proximity.fields import DEFAULT_SUBFIELDS
from address_proximity.lib.proximity.options import VALID_UNITS


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        description="Async SQLAlchemy connection string (postgresql+asyncpg or mysql+aiomysql)",
    )
    database_echo: bool = Field(
        default=False,
        description="Echo emitted SQL statements",
    )

    # Proximity search defaults
    proximity_default_latitude: float = Field(
        default=0.0,
        description="Latitude used when a search target cannot be resolved",
        ge=-90,
        le=90,
    )
    proximity_default_longitude: float = Field(
        default=0.0,
        description="Longitude used when a search target cannot be resolved",
        ge=-180,
        le=180,
    )
    proximity_default_zoom: int = Field(
        default=11,
        description="Map zoom level stored with addresses saved without one",
        ge=0,
        le=22,
    )
    proximity_default_range: float = Field(
        default=500,
        description="Search radius used when none (or an invalid one) is given",
        gt=0,
    )
    proximity_default_units: str = Field(
        default="mi",
        description="Distance units used when none (or invalid ones) are given",
    )
    proximity_subfields: str = Field(
        default=",".join(DEFAULT_SUBFIELDS),
        description="Comma-separated list of address subfields that may be filtered on",
    )

    @field_validator("proximity_default_units")
    @classmethod
    def validate_units(cls, v: str) -> str:
        if v not in VALID_UNITS:
            msg = f"proximity_default_units must be one of {', '.join(VALID_UNITS)}"
            raise ValueError(msg)
        return v

    @property
    def proximity_subfield_list(self) -> list[str]:
        """Parse the subfield string into a list of subfield handles."""
        if not self.proximity_subfields.strip():
            return []
        return [s.strip() for s in self.proximity_subfields.split(",") if s.strip()]

    # Geocoding (Google Maps)
    geocoder_google_api_key: str | None = Field(
        default=None,
        description="Google Maps Geocoding API key",
    )
    geocoder_google_timeout: float = Field(
        default=10.0,
        description="Google Maps request timeout in seconds",
        gt=0,
    )
    geocoder_google_region: str = Field(
        default="us",
        description="Region bias passed to the Google Maps Geocoding API",
    )
    geocoder_cache_enabled: bool = Field(
        default=True,
        description="Cache geocoding lookups in the geocoder_cache table",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()  # type: ignore[call-arg]
