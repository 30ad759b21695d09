# nhl_player_db/utils/seasons.py
from typing import Iterator

# Keeps every season id at exactly eight digits
MIN_YEAR = 1000
MAX_YEAR = 9998


class ConfigurationError(ValueError):
    """Raised for configuration that cannot produce a valid run."""

    pass


def season_id(year: int) -> str:
    """Builds the 8-digit season identifier for a season starting in `year`."""
    return f"{year}{year + 1}"


class SeasonRange:
    """Inclusive range of seasons, iterable as season identifiers.

    Iteration is lazy and restartable: every call to ``iter()`` starts again
    from the first season. A reversed range is rejected rather than
    silently yielding nothing.
    """

    def __init__(self, start_year: int, end_year: int):
        for label, year in (("start year", start_year), ("end year", end_year)):
            if not isinstance(year, int) or isinstance(year, bool):
                raise ConfigurationError(f"{label} must be an integer, got {year!r}")
            if not MIN_YEAR <= year <= MAX_YEAR:
                raise ConfigurationError(
                    f"{label} {year} is outside the supported range {MIN_YEAR}-{MAX_YEAR}"
                )
        if start_year > end_year:
            raise ConfigurationError(
                f"start year {start_year} is after end year {end_year}"
            )
        self.start_year = start_year
        self.end_year = end_year

    def __iter__(self) -> Iterator[str]:
        for year in range(self.start_year, self.end_year + 1):
            yield season_id(year)

    def __len__(self) -> int:
        return self.end_year - self.start_year + 1

    def __repr__(self) -> str:
        return f"SeasonRange({self.start_year}, {self.end_year})"

    def describe(self) -> str:
        """Human-readable span, e.g. ``2015-2016 to 2025-2026``."""
        return (
            f"{self.start_year}-{self.start_year + 1} to "
            f"{self.end_year}-{self.end_year + 1}"
        )
