import logging
from typing import List, Optional

from pydantic import Field, HttpUrl, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nhl_player_db.utils.seasons import SeasonRange

VALID_LOG_LEVELS = ["DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Output
    output_path: str = Field(
        "nhl_players.json", description="Output file path for the JSON database."
    )

    # Collection Settings
    delay_ms: int = Field(
        100, ge=0, description="Rate limit delay between requests in milliseconds."
    )
    start_year: int = Field(2015, description="Start year for season data collection.")
    end_year: int = Field(
        2025,
        description="End year for season data collection (current season start year).",
    )
    include_games: bool = Field(
        False, description="Include game-by-game data to find missing players."
    )
    max_games_per_season: int = Field(
        10,
        ge=0,
        description="Games checked per team/season when include_games is enabled.",
    )
    teams: Optional[List[str]] = Field(
        None,
        description="Team codes to sweep. Defaults to all current and historical codes.",
    )

    # NHL API Configuration
    api_base_url: HttpUrl = Field(
        "https://api-web.nhle.com/v1", description="Base URL of the NHL web API."
    )
    request_timeout: float = Field(
        30.0, gt=0, description="Per-request timeout in seconds."
    )
    max_attempts: int = Field(
        1,
        ge=1,
        description="Total attempts per request (1 disables retries).",
    )
    user_agent: str = Field(
        "NHL Player Database Generator 1.0",
        description="User-Agent header sent with every request.",
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_prefix="NHLDB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("teams")
    @classmethod
    def normalize_team_codes(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return None
        codes = [code.strip().upper() for code in value if code and code.strip()]
        return codes or None

    @model_validator(mode="after")
    def check_year_range(self) -> "AppSettings":
        # Raises ConfigurationError (a ValueError) for reversed or out-of-range years
        SeasonRange(self.start_year, self.end_year)
        return self

    @property
    def seasons(self) -> SeasonRange:
        return SeasonRange(self.start_year, self.end_year)

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0


def load_settings(**overrides) -> AppSettings:
    """Loads and validates application settings.

    Keyword overrides (e.g. parsed CLI flags) take precedence over the
    environment; ``None`` values are ignored so unset flags fall through.
    """
    overrides = {key: value for key, value in overrides.items() if value is not None}
    try:
        settings = AppSettings(**overrides)
    except ValidationError as e:
        logging.error(f"Invalid application settings: {e}")
        raise SystemExit(f"Invalid configuration: {e}")

    log_level_upper = settings.log_level.upper()
    # Validate log_level even if loaded from .env
    if log_level_upper not in VALID_LOG_LEVELS:
        logging.warning(
            f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
        )
        settings.log_level = "INFO"
    else:
        settings.log_level = log_level_upper
    return settings


settings: AppSettings = load_settings()
