from typing import Any, Dict, Iterable, List, NamedTuple

from loguru import logger
from pydantic import ValidationError

from nhl_player_db.models.enums import BoxscoreGroup, PositionGroup
from nhl_player_db.models.player import PlayerName
from nhl_player_db.scrapers.base_scraper import PayloadError


class ParsedNames(NamedTuple):
    """Player names pulled from one response, plus the entries that were unusable."""

    names: List[str]
    skipped: int


def _require_object(payload: Any, what: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise PayloadError(
            f"Expected a JSON object for {what}, got {type(payload).__name__}"
        )
    return payload


def _names_from_entries(entries: Any, context: str) -> ParsedNames:
    # A missing or null section is an empty section
    if entries is None:
        return ParsedNames([], 0)
    if not isinstance(entries, list):
        logger.debug(f"Ignoring non-list player section in {context}: {entries!r}")
        return ParsedNames([], 1)

    names: List[str] = []
    skipped = 0
    for entry in entries:
        try:
            names.append(PlayerName.model_validate(entry).full_name)
        except ValidationError:
            skipped += 1
            logger.debug(f"Skipping player entry without a usable name in {context}")
    return ParsedNames(names, skipped)


def _merge(parts: Iterable[ParsedNames]) -> ParsedNames:
    names: List[str] = []
    skipped = 0
    for part in parts:
        names.extend(part.names)
        skipped += part.skipped
    return ParsedNames(names, skipped)


def extract_roster_names(payload: Any) -> ParsedNames:
    """Extracts full player names from a roster response.

    Sections are read in order (forwards, defensemen, goalies). Entries
    missing a first or last name are counted in ``skipped`` and left out.

    Raises:
        PayloadError: If the payload is not a JSON object.
    """
    roster = _require_object(payload, "roster")
    return _merge(
        _names_from_entries(roster.get(group.value), f"roster {group.value}")
        for group in PositionGroup
    )


def _team_side(game: Dict[str, Any], side: str) -> Dict[str, Any]:
    value = game.get(side)
    return value if isinstance(value, dict) else {}


def extract_boxscore_names(payload: Any, team_code: str) -> ParsedNames:
    """Extracts the names of everyone who dressed for `team_code` in a boxscore.

    Supports both the flat ``awayTeam.skaters`` layout and the nested
    ``playerByGameStats.awayTeam.forwards`` layout.
    """
    game = _require_object(payload, "boxscore")
    team_code = team_code.upper()

    side = None
    for candidate in ("awayTeam", "homeTeam"):
        if str(_team_side(game, candidate).get("abbrev", "")).upper() == team_code:
            side = candidate
            break
    if side is None:
        logger.debug(f"Team {team_code} not found in boxscore {game.get('id')}")
        return ParsedNames([], 0)

    sources = [_team_side(game, side)]
    by_game = game.get("playerByGameStats")
    if isinstance(by_game, dict):
        sources.append(_team_side(by_game, side))

    return _merge(
        _names_from_entries(source.get(group.value), f"boxscore {group.value}")
        for source in sources
        for group in BoxscoreGroup
    )


def extract_schedule_games(payload: Any, team_code: str) -> List[int]:
    """Returns the ids of scheduled games that involve `team_code`, in schedule order."""
    schedule = _require_object(payload, "schedule")
    games = schedule.get("games")
    if not isinstance(games, list):
        raise PayloadError("Schedule response has no 'games' list")

    team_code = team_code.upper()
    game_ids: List[int] = []
    for game in games:
        if not isinstance(game, dict) or not isinstance(game.get("id"), int):
            continue
        away = str(_team_side(game, "awayTeam").get("abbrev", "")).upper()
        home = str(_team_side(game, "homeTeam").get("abbrev", "")).upper()
        if team_code in (away, home):
            game_ids.append(game["id"])
    return game_ids
