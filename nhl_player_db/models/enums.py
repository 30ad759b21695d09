from enum import Enum


class PositionGroup(str, Enum):
    """Roster sections returned by the roster endpoint, in response order."""

    FORWARDS = "forwards"
    DEFENSEMEN = "defensemen"
    GOALIES = "goalies"


class BoxscoreGroup(str, Enum):
    """Player lists found on a team side of a boxscore."""

    SKATERS = "skaters"
    FORWARDS = "forwards"
    DEFENSE = "defense"
    GOALIES = "goalies"


class DataSource(str, Enum):
    ROSTERS = "Team rosters"
    GAMES = "Game-by-game player appearances"
