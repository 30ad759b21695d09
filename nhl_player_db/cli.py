"""Command-line entry point: sweep NHL rosters and write the player database."""

import argparse
import asyncio
import sys
from typing import Optional, Sequence, Tuple

import httpx
from loguru import logger
from rich import print
from rich.panel import Panel

from nhl_player_db.collection.collector import RosterCollector
from nhl_player_db.config.settings import AppSettings, load_settings
from nhl_player_db.logging.setup import setup_logging
from nhl_player_db.models.database import CollectionReport, PlayerDatabase
from nhl_player_db.models.enums import DataSource
from nhl_player_db.scrapers.nhl_scraper import NHLScraper
from nhl_player_db.storage.json_store import StorageError, build_database, write_database
from nhl_player_db.utils.seasons import ConfigurationError


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="nhl-player-db",
        description="Generate NHL player database from NHL API",
    )
    parser.add_argument(
        "-o",
        "--output",
        dest="output_path",
        default=None,
        help="Output file path for the JSON database (default: nhl_players.json)",
    )
    parser.add_argument(
        "-d",
        "--delay",
        dest="delay_ms",
        type=int,
        default=None,
        help="Rate limit delay between requests in milliseconds (default: 100)",
    )
    parser.add_argument(
        "--start-year",
        type=int,
        default=None,
        help="Start year for season data collection (default: 2015)",
    )
    parser.add_argument(
        "--end-year",
        type=int,
        default=None,
        help="End year for season data collection, the current season start year (default: 2025)",
    )
    parser.add_argument(
        "--include-games",
        action="store_true",
        default=None,
        help="Include game-by-game data to find missing players",
    )
    parser.add_argument(
        "--max-games",
        dest="max_games_per_season",
        type=int,
        default=None,
        help="Games checked per team/season with --include-games (default: 10)",
    )
    parser.add_argument(
        "--team",
        dest="teams",
        action="append",
        default=None,
        help="Team code to sweep; repeat for several (default: all current and historical)",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: INFO)")
    return parser.parse_args(argv)


async def run_collection(
    config: AppSettings,
    client: Optional[httpx.AsyncClient] = None,
    sleep=asyncio.sleep,
) -> Tuple[PlayerDatabase, CollectionReport, int]:
    """Runs the sweep, writes the output file and returns what was written."""
    seasons = config.seasons

    async with NHLScraper(client=client, config=config) as scraper:
        collector = RosterCollector(scraper, config=config, sleep=sleep)
        accumulator, report = await collector.collect(seasons, config.teams)

    database = build_database(accumulator, seasons)
    size_bytes = write_database(database, config.output_path)
    logger.success(f"Database saved to: {config.output_path}")
    return database, report, size_bytes


def print_summary(
    database: PlayerDatabase,
    report: CollectionReport,
    config: AppSettings,
    size_bytes: int,
) -> None:
    sources = [DataSource.ROSTERS.value]
    if config.include_games:
        sources.append(DataSource.GAMES.value)

    lines = [
        f"Teams: {len(database.teams)}",
        f"Total players: {database.total_players}",
        f"Seasons covered: {config.start_year} to {config.end_year}",
        f"Data sources: {' + '.join(sources)}",
        f"Requests: {report.requests_attempted} attempted, {report.requests_failed} failed",
    ]
    if report.skipped_entries:
        lines.append(f"Skipped malformed entries: {report.skipped_entries}")
    if config.include_games:
        lines.append(
            f"Players found only in game data: {report.game_only_players} "
            f"(first {config.max_games_per_season} games per team/season)"
        )
    lines.append(f"File size: {size_bytes / 1024:.2f} KB")

    print(Panel("\n".join(lines), title="Database Summary", expand=False))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the application."""
    args = _parse_args(argv)
    config = load_settings(**vars(args))
    setup_logging(config.log_level)

    logger.info("NHL Player Database Generator")
    logger.info(f"Output file: {config.output_path}")
    logger.info(f"Rate limit delay: {config.delay_ms}ms")
    logger.info(f"Seasons: {config.seasons.describe()}")

    try:
        database, report, size_bytes = asyncio.run(run_collection(config))
    except (ConfigurationError, StorageError) as e:
        logger.error(f"Fatal error: {e}")
        return 1

    if report.requests_failed:
        logger.warning(
            f"{report.requests_failed} of {report.requests_attempted} requests failed; "
            "see log output above"
        )
    print_summary(database, report, config, size_bytes)
    return 0


def run() -> None:
    """Console script wrapper."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)
