"""Settings - environment-driven configuration with validation"""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    # API
    api_title: str = "Vessel Tracker API"
    api_description: str = "Get vessel position data by IMO number."

    # Server
    host: str = "0.0.0.0"
    port: int = 3005

    # Remote AIS provider
    provider_base_url: str = "https://www.aisfriends.com"
    provider_position_path: str = "/api/vessel/position/imo:{imo}"

    # Cache (5 minutes)
    cache_ttl_seconds: int = 300

    # Fetcher
    # - fetch_attempt_delay_s: pause between two profile attempts, paces the
    #   provider's rate-limit heuristics
    # - api_lookup_timeout_s: hard cap for one lookup at the HTTP layer, kept
    #   above the sum of all profile timeouts plus the pauses
    fetch_attempt_delay_s: float = 2.0
    api_lookup_timeout_s: float = 150.0
    http_max_clients: int = 10

    # Logging
    log_level: str = "INFO"
    logger_name: str = "vessel_tracker"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="VESSEL_TRACKER_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("cache_ttl_seconds")
    @classmethod
    def validate_cache_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("cache_ttl_seconds must be positive")
        return v

    @field_validator("fetch_attempt_delay_s")
    @classmethod
    def validate_attempt_delay(cls, v: float) -> float:
        if v < 0 or v > 2.0:
            raise ValueError("fetch_attempt_delay_s must be between 0 and 2 seconds")
        return v

    @field_validator("api_lookup_timeout_s")
    @classmethod
    def validate_lookup_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("api_lookup_timeout_s must be positive")
        return v

    @field_validator("http_max_clients")
    @classmethod
    def validate_max_clients(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("http_max_clients must be positive")
        return v

    @field_validator("provider_position_path")
    @classmethod
    def validate_position_path(cls, v: str) -> str:
        if "{imo}" not in v:
            raise ValueError("provider_position_path must contain an {imo} placeholder")
        return v

    @property
    def provider_position_template(self) -> str:
        """Full endpoint template, e.g. https://host/api/vessel/position/imo:{imo}"""
        return self.provider_base_url.rstrip("/") + self.provider_position_path


settings = Settings()
