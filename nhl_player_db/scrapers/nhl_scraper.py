# nhl_player_db/scrapers/nhl_scraper.py

from typing import Any, List

from loguru import logger

from .base_scraper import BaseScraper, PayloadError, ScraperError

# Schedule endpoints, tried in order until one returns a usable schedule
SCHEDULE_PATHS = (
    "club-schedule-season/{team}/{season}",
    "schedule/{team}/{season}",
)


class NHLScraper(BaseScraper):
    """Client for the public NHL web API (roster, schedule, boxscore)."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.base_url = str(self.config.api_base_url).rstrip("/")
        logger.debug(f"NHLScraper initialized against {self.base_url}")

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path}"

    async def fetch_roster(self, team_code: str, season: str) -> Any:
        """Fetches the raw roster payload for one team and season."""
        return await self._get_json(self._url(f"roster/{team_code}/{season}"))

    async def fetch_team_schedule(self, team_code: str, season: str) -> Any:
        """Fetches a team's season schedule, falling back across known endpoints.

        Raises:
            ScraperError: If no endpoint returned a schedule with a games list.
        """
        errors: List[str] = []
        for path in SCHEDULE_PATHS:
            url = self._url(path.format(team=team_code, season=season))
            try:
                payload = await self._get_json(url)
            except ScraperError as e:
                errors.append(str(e))
                continue
            if isinstance(payload, dict) and isinstance(payload.get("games"), list):
                return payload
            errors.append(f"No games list in response from {url}")

        raise ScraperError(
            f"All schedule API endpoints failed for {team_code}/{season}: "
            + "; ".join(errors)
        )

    async def fetch_game_details(self, game_id: int) -> Any:
        """Fetches the boxscore for a single game."""
        payload = await self._get_json(self._url(f"gamecenter/{game_id}/boxscore"))
        if not isinstance(payload, dict):
            raise PayloadError(f"Unexpected boxscore payload for game {game_id}")
        return payload
