# nhl_player_db/normalization/teams.py
from typing import Dict, List, Optional

# Current NHL team codes
CURRENT_TEAM_CODES = (
    "ANA", "BOS", "BUF", "CGY", "CAR", "CHI", "COL", "CBJ", "DAL", "DET",
    "EDM", "FLA", "LAK", "MIN", "MTL", "NSH", "NJD", "NYI", "NYR", "OTT",
    "PHI", "PIT", "SJS", "SEA", "STL", "TBL", "TOR", "UTA", "VAN", "VGK",
    "WSH", "WPG",
)

# Relocated or renamed franchises, consolidated into the current team
HISTORICAL_TEAM_MAPPING: Dict[str, str] = {
    "ATL": "WPG",  # Atlanta Thrashers (2011)
    "HFD": "CAR",  # Hartford Whalers (1997)
    "QUE": "COL",  # Quebec Nordiques (1995)
    "MNS": "DAL",  # Minnesota North Stars (1993)
    "CLR": "NJD",  # Colorado Rockies (1982)
    "KCS": "NJD",  # Kansas City Scouts, via Colorado (1976)
    "ATF": "CGY",  # Atlanta Flames (1980)
    "WPG1": "UTA",  # Original Winnipeg Jets, via Arizona (1996)
    "PHX": "UTA",  # Phoenix Coyotes (2024)
    "ARI": "UTA",  # Arizona Coyotes (2024)
    "MIG": "ANA",  # Mighty Ducks (2006)
}

HISTORICAL_TEAM_CODES = tuple(HISTORICAL_TEAM_MAPPING)

TEAM_MAPPING: Dict[str, str] = {
    **HISTORICAL_TEAM_MAPPING,
    **{code: code for code in CURRENT_TEAM_CODES},
}


def all_team_codes() -> List[str]:
    """All codes to fetch: current teams first, then historical ones."""
    return [*CURRENT_TEAM_CODES, *HISTORICAL_TEAM_CODES]


def current_team_for(team_code: str) -> Optional[str]:
    return TEAM_MAPPING.get(team_code.upper())
