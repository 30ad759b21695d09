import pytest

from nhl_player_db.normalization.parser import (
    extract_boxscore_names,
    extract_roster_names,
    extract_schedule_games,
)
from nhl_player_db.scrapers.base_scraper import PayloadError, ScraperError


def test_plain_string_names():
    parsed = extract_roster_names({"forwards": [{"firstName": "A", "lastName": "B"}]})

    assert parsed.names == ["A B"]
    assert parsed.skipped == 0


def test_localized_names_in_section_order():
    payload = {
        "goalies": [{"firstName": {"default": "Jeremy"}, "lastName": {"default": "Swayman"}}],
        "forwards": [{"firstName": {"default": "David"}, "lastName": {"default": "Pastrňák"}}],
        "defensemen": [{"firstName": {"default": "Charlie"}, "lastName": {"default": "McAvoy"}}],
    }

    parsed = extract_roster_names(payload)

    assert parsed.names == ["David Pastrňák", "Charlie McAvoy", "Jeremy Swayman"]


def test_missing_and_null_sections_are_empty():
    parsed = extract_roster_names({"forwards": None})

    assert parsed.names == []
    assert parsed.skipped == 0


def test_entries_without_names_are_skipped_and_counted():
    payload = {
        "forwards": [
            {"firstName": {"default": "Brad"}, "lastName": {"default": "Marchand"}},
            {"firstName": {"default": "NoLast"}},
            {"lastName": {"default": ""}, "firstName": "Blank"},
            "not-a-player",
            {"id": 8470000},
        ],
        "defensemen": [{"firstName": {"fr": "Only"}, "lastName": {"default": "French"}}],
    }

    parsed = extract_roster_names(payload)

    assert parsed.names == ["Brad Marchand"]
    assert parsed.skipped == 5


def test_whitespace_is_trimmed():
    parsed = extract_roster_names(
        {"forwards": [{"firstName": " Auston ", "lastName": {"default": "Matthews  "}}]}
    )

    assert parsed.names == ["Auston Matthews"]


@pytest.mark.parametrize("payload", [[], "roster", None, 42])
def test_non_object_payload_raises(payload):
    with pytest.raises(PayloadError):
        extract_roster_names(payload)


def test_payload_error_is_a_scraper_error():
    assert issubclass(PayloadError, ScraperError)


def test_boxscore_flat_layout_picks_matching_side():
    payload = {
        "id": 2023020001,
        "awayTeam": {
            "abbrev": "TOR",
            "skaters": [{"firstName": {"default": "Mitch"}, "lastName": {"default": "Marner"}}],
            "goalies": [],
        },
        "homeTeam": {
            "abbrev": "BOS",
            "skaters": [{"firstName": {"default": "Brad"}, "lastName": {"default": "Marchand"}}],
            "goalies": [{"firstName": {"default": "Linus"}, "lastName": {"default": "Ullmark"}}],
        },
    }

    assert extract_boxscore_names(payload, "BOS").names == ["Brad Marchand", "Linus Ullmark"]
    assert extract_boxscore_names(payload, "tor").names == ["Mitch Marner"]


def test_boxscore_nested_player_by_game_stats():
    payload = {
        "awayTeam": {"abbrev": "EDM"},
        "homeTeam": {"abbrev": "CGY"},
        "playerByGameStats": {
            "awayTeam": {
                "forwards": [
                    {"firstName": {"default": "Connor"}, "lastName": {"default": "McDavid"}}
                ],
                "defense": [{"name": {"default": "Evan Bouchard"}}],
                "goalies": [{"name": {"default": "J.T. Miller"}}],
            },
            "homeTeam": {"forwards": [{"name": {"default": "Nazem Kadri"}}]},
        },
    }

    parsed = extract_boxscore_names(payload, "EDM")

    assert parsed.names == ["Connor McDavid", "Evan Bouchard", "J.T. Miller"]
    assert parsed.skipped == 0


def test_boxscore_abbreviated_names_are_skipped():
    payload = {
        "awayTeam": {"abbrev": "EDM"},
        "homeTeam": {"abbrev": "CGY"},
        "playerByGameStats": {
            "awayTeam": {
                "forwards": [
                    {"name": {"default": "C. McDavid"}},
                    {"name": {"default": "L. Draisaitl"}},
                ],
                "goalies": [{"name": {"default": "S. Skinner"}}],
            },
        },
    }

    parsed = extract_boxscore_names(payload, "EDM")

    assert parsed.names == []
    assert parsed.skipped == 3


def test_boxscore_without_team_returns_nothing():
    payload = {"awayTeam": {"abbrev": "EDM"}, "homeTeam": {"abbrev": "CGY"}}

    assert extract_boxscore_names(payload, "BOS").names == []


def test_schedule_games_keep_order_and_filter_team():
    payload = {
        "games": [
            {"id": 3, "awayTeam": {"abbrev": "BOS"}, "homeTeam": {"abbrev": "TOR"}},
            {"id": 1, "awayTeam": {"abbrev": "MTL"}, "homeTeam": {"abbrev": "OTT"}},
            {"id": 2, "awayTeam": {"abbrev": "NYR"}, "homeTeam": {"abbrev": "BOS"}},
            {"awayTeam": {"abbrev": "BOS"}, "homeTeam": {"abbrev": "NYR"}},
        ]
    }

    assert extract_schedule_games(payload, "BOS") == [3, 2]


def test_schedule_without_games_raises():
    with pytest.raises(PayloadError):
        extract_schedule_games({"previousSeason": 20222023}, "BOS")
