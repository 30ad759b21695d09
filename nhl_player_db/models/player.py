# nhl_player_db/models/player.py
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _localized(value: Any) -> Optional[str]:
    """Unwraps the API's localized strings (``{"default": "Connor"}``)."""
    if isinstance(value, dict):
        value = value.get("default")
    if isinstance(value, str):
        return value.strip() or None
    return None


def _is_initial(token: str) -> bool:
    return token.endswith(".") and len(token) <= 2


class PlayerName(BaseModel):
    """A player entry from a roster or boxscore, reduced to its name."""

    model_config = ConfigDict(frozen=True)

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)

    @model_validator(mode="before")
    @classmethod
    def from_api_shape(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        first = _localized(data.get("firstName", data.get("first_name")))
        last = _localized(data.get("lastName", data.get("last_name")))
        if first is None and last is None:
            # Some boxscores carry a single `name` field instead
            full = _localized(data.get("name"))
            if full and " " in full:
                first, last = full.split(" ", 1)
                if _is_initial(first):
                    # "C. McDavid" cannot be matched to a roster full name
                    first = last = None
        return {"first_name": first, "last_name": last}

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_whitespace(cls, value: str) -> str:
        return value.strip()

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
