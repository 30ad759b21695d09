import asyncio
from typing import Awaitable, Callable, Iterable, List, Optional, Sequence, Tuple

from loguru import logger

from nhl_player_db.collection.accumulator import RosterAccumulator
from nhl_player_db.config.settings import AppSettings, settings as default_settings
from nhl_player_db.models.database import CollectionReport
from nhl_player_db.normalization.parser import (
    extract_boxscore_names,
    extract_roster_names,
    extract_schedule_games,
)
from nhl_player_db.normalization.teams import all_team_codes, current_team_for
from nhl_player_db.scrapers.base_scraper import ScraperError
from nhl_player_db.scrapers.nhl_scraper import NHLScraper

PROGRESS_EVERY = 20

Sleeper = Callable[[float], Awaitable[None]]


class RosterCollector:
    """Sequential, rate-limited sweep over every (season, team) pair.

    A failed pair is logged and counted; it never stops the sweep.
    """

    def __init__(
        self,
        scraper: NHLScraper,
        config: Optional[AppSettings] = None,
        sleep: Sleeper = asyncio.sleep,
    ):
        self.scraper = scraper
        self.config = config or default_settings
        self._sleep = sleep

    def _resolve_teams(
        self, teams: Optional[Sequence[str]], report: CollectionReport
    ) -> List[Tuple[str, str]]:
        resolved = []
        for code in dict.fromkeys(c.upper() for c in teams or all_team_codes()):
            current = current_team_for(code)
            if current is None:
                logger.warning(f"No mapping found for team code: {code}")
                report.unmapped_teams.append(code)
                continue
            resolved.append((code, current))
        return resolved

    async def _wait(self) -> None:
        await self._sleep(self.config.delay_seconds)

    async def collect(
        self, seasons: Iterable[str], teams: Optional[Sequence[str]] = None
    ) -> Tuple[RosterAccumulator, CollectionReport]:
        """Runs the full sweep and returns the accumulator plus run counters."""
        report = CollectionReport()
        season_ids = list(seasons)
        team_pairs = self._resolve_teams(teams or self.config.teams, report)

        # Every current team in the sweep appears in the output, even if empty
        accumulator = RosterAccumulator(dict.fromkeys(current for _, current in team_pairs))
        report.total_pairs = len(season_ids) * len(team_pairs)

        logger.info(
            f"Collecting data for {len(season_ids)} seasons and {len(team_pairs)} teams "
            f"(including historical)..."
        )

        for season in season_ids:
            for team_code, current_team in team_pairs:
                await self._collect_roster(
                    team_code, season, current_team, accumulator, report
                )
                if self.config.include_games:
                    await self._collect_games(
                        team_code, season, current_team, accumulator, report
                    )

                report.completed_pairs += 1
                if report.completed_pairs % PROGRESS_EVERY == 0:
                    logger.info(
                        f"Progress: {report.completed_pairs}/{report.total_pairs} "
                        f"requests completed ({report.progress_percent:.1f}%)"
                    )

                # Rate limiting - sleep between requests
                await self._wait()

            logger.info(
                f"Completed season {season}: {accumulator.total_players()} unique players so far"
            )

        return accumulator, report

    async def _collect_roster(
        self,
        team_code: str,
        season: str,
        current_team: str,
        accumulator: RosterAccumulator,
        report: CollectionReport,
    ) -> None:
        report.requests_attempted += 1
        try:
            payload = await self.scraper.fetch_roster(team_code, season)
            parsed = extract_roster_names(payload)
        except ScraperError as e:
            report.requests_failed += 1
            logger.warning(f"Failed to fetch roster {team_code}/{season}: {e}")
            return
        except Exception as e:
            report.requests_failed += 1
            logger.exception(
                f"Unexpected error fetching roster {team_code}/{season}: {e}"
            )
            return

        report.skipped_entries += parsed.skipped
        if parsed.skipped:
            logger.debug(
                f"{team_code}/{season}: skipped {parsed.skipped} malformed roster entries"
            )
        added = accumulator.add(current_team, parsed.names)
        if parsed.names:
            suffix = f" -> {current_team}" if current_team != team_code else ""
            logger.info(
                f"✓ {team_code}/{season} - Roster: {len(parsed.names)} players "
                f"({added} new){suffix}"
            )

    async def _collect_games(
        self,
        team_code: str,
        season: str,
        current_team: str,
        accumulator: RosterAccumulator,
        report: CollectionReport,
    ) -> None:
        report.requests_attempted += 1
        try:
            schedule = await self.scraper.fetch_team_schedule(team_code, season)
            game_ids = extract_schedule_games(schedule, team_code)
        except ScraperError as e:
            report.requests_failed += 1
            logger.warning(f"Failed to fetch schedule for {team_code}/{season}: {e}")
            return
        except Exception as e:
            report.requests_failed += 1
            logger.exception(
                f"Unexpected error fetching schedule for {team_code}/{season}: {e}"
            )
            return

        game_ids = game_ids[: self.config.max_games_per_season]
        logger.debug(f"Checking {len(game_ids)} games for {team_code}/{season}")

        new_players = 0
        for game_id in game_ids:
            await self._wait()
            report.requests_attempted += 1
            try:
                boxscore = await self.scraper.fetch_game_details(game_id)
                parsed = extract_boxscore_names(boxscore, team_code)
            except ScraperError as e:
                report.requests_failed += 1
                logger.warning(f"Failed to fetch game {game_id}: {e}")
                continue
            except Exception as e:
                report.requests_failed += 1
                logger.exception(f"Unexpected error fetching game {game_id}: {e}")
                continue

            report.skipped_entries += parsed.skipped
            unseen = [
                name
                for name in dict.fromkeys(parsed.names)
                if not accumulator.contains(current_team, name)
            ]
            if unseen:
                logger.debug(f"Game {game_id} adds {team_code} players: {unseen}")
                new_players += accumulator.add(current_team, unseen)

        report.game_only_players += new_players
        if new_players:
            logger.info(
                f"{team_code}/{season} - Games: {new_players} additional players not in roster"
            )
