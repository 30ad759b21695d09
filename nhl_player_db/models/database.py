from datetime import datetime, timezone
from typing import Dict, List

from pydantic import BaseModel, Field, computed_field, field_serializer


class PlayerDatabase(BaseModel):
    """The JSON document written at the end of a run."""

    teams: Dict[str, List[str]]
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    seasons_covered: List[str]

    @field_serializer("generated_at")
    def serialize_generated_at(self, value: datetime) -> str:
        return value.isoformat()

    @property
    def total_players(self) -> int:
        return sum(len(players) for players in self.teams.values())


class CollectionReport(BaseModel):
    """Counters for a single collection run. Not part of the output file."""

    total_pairs: int = 0
    completed_pairs: int = 0
    requests_attempted: int = 0
    requests_failed: int = 0
    skipped_entries: int = 0
    game_only_players: int = 0
    unmapped_teams: List[str] = []

    @computed_field  # type: ignore[misc]
    @property
    def progress_percent(self) -> float:
        if not self.total_pairs:
            return 100.0
        return self.completed_pairs / self.total_pairs * 100.0
