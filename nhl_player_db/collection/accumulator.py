from typing import Dict, Iterable, List, Set

from nhl_player_db.normalization.teams import CURRENT_TEAM_CODES


class RosterAccumulator:
    """Team code -> set of player full names, deduplicated by exact match.

    Merging is commutative and re-adding a known name is a no-op, so the
    order in which (season, team) batches arrive does not matter.
    """

    def __init__(self, teams: Iterable[str] = CURRENT_TEAM_CODES):
        self._players: Dict[str, Set[str]] = {team: set() for team in teams}

    def add(self, team: str, names: Iterable[str]) -> int:
        """Merges `names` into `team`, returning how many were new."""
        players = self._players.setdefault(team, set())
        before = len(players)
        players.update(names)
        return len(players) - before

    def contains(self, team: str, name: str) -> bool:
        return name in self._players.get(team, ())

    def total_players(self) -> int:
        return sum(len(players) for players in self._players.values())

    def as_sorted_dict(self) -> Dict[str, List[str]]:
        """Players per team, sorted alphabetically for a stable output file."""
        return {team: sorted(players) for team, players in self._players.items()}

    def __len__(self) -> int:
        return len(self._players)
