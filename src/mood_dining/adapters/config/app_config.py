"""12-factor configuration adapter using environment variables."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8000, description="Port to bind the server to")

    # External API credentials
    google_places_api_key: str | None = Field(
        default=None, description="API key for Google Places (station and restaurant search)"
    )
    google_directions_api_key: str | None = Field(
        default=None,
        description="API key for Google Directions (routed station expansion, optional)",
    )
    gemini_api_key: str | None = Field(
        default=None, description="API key for Gemini mood conversion (optional)"
    )
    gemini_model: str = Field(default="gemini-pro", description="Gemini model name")

    # Outgoing request behaviour
    http_timeout_seconds: float = Field(
        default=10.0, description="Timeout for each external API request in seconds"
    )
    retry_max_attempts: int = Field(
        default=3, description="Attempts per external call, including the first"
    )
    retry_base_delay_seconds: float = Field(
        default=1.0, description="Backoff before the first retry; doubles per attempt"
    )
    google_api_min_delay_seconds: float = Field(
        default=0.0, description="Minimum delay between requests to Google APIs"
    )
    gemini_min_delay_seconds: float = Field(
        default=0.0, description="Minimum delay between requests to the Gemini API"
    )

    # Search tuning
    station_search_radius_meters: int = Field(
        default=2000, description="Radius used to find the nearest station"
    )
    station_range_step_meters: int = Field(
        default=2000, description="Search radius added per requested station"
    )
    per_station_radius_meters: int = Field(
        default=500, description="Restaurant search radius around each station"
    )
    max_results: int = Field(default=20, description="Maximum restaurants per response")

    # Rate limiting configuration
    rate_limit_per_minute: int = Field(
        default=100,
        description="Maximum number of requests allowed per IP address per minute",
    )

    use_demo_data: bool = Field(
        default=False,
        description="Use built-in demo collaborators instead of the Google and Gemini APIs",
    )

    @field_validator(
        "http_timeout_seconds",
        "retry_max_attempts",
        "station_search_radius_meters",
        "station_range_step_meters",
        "per_station_radius_meters",
        "max_results",
        "rate_limit_per_minute",
    )
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Validate tuning values are positive."""
        if v <= 0:
            raise ValueError("value must be positive")
        return v

    @field_validator(
        "retry_base_delay_seconds", "google_api_min_delay_seconds", "gemini_min_delay_seconds"
    )
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        """Validate delays are not negative."""
        if v < 0:
            raise ValueError("delay must not be negative")
        return v

    @property
    def demo_mode(self) -> bool:
        """True when demo collaborators should replace the real APIs."""
        return self.use_demo_data or not self.google_places_api_key
