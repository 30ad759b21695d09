# nhl_player_db/storage/json_store.py
import json
import os
import stat
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional, Union

from loguru import logger

from nhl_player_db.collection.accumulator import RosterAccumulator
from nhl_player_db.models.database import PlayerDatabase


class StorageError(Exception):
    """Raised when the output database cannot be written."""

    pass


def build_database(
    accumulator: RosterAccumulator,
    seasons: Iterable[str],
    generated_at: Optional[datetime] = None,
) -> PlayerDatabase:
    """Freezes the accumulator into the output document.

    `seasons` is every season enumerated for the run, whether or not its
    requests succeeded.
    """
    return PlayerDatabase(
        teams=accumulator.as_sorted_dict(),
        generated_at=generated_at or datetime.now(timezone.utc),
        seasons_covered=list(seasons),
    )


def _output_mode(path: Path) -> int:
    """Mode for the written file: keep an existing file's, else honour the umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_database(database: PlayerDatabase, path: Union[str, Path]) -> int:
    """Writes the database as pretty JSON, replacing `path` atomically.

    Returns:
        The number of bytes written.

    Raises:
        StorageError: If the file (or its directory) cannot be written.
    """
    path = Path(path)
    payload = json.dumps(
        database.model_dump(mode="json"), indent=2, ensure_ascii=False
    ).encode("utf-8")

    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
        # mkstemp creates 0600 files
        os.chmod(tmp_name, _output_mode(path))
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        logger.error(f"Failed to write player database to {path}: {e}")
        raise StorageError(f"Cannot write output file {path}: {e}") from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)

    logger.debug(f"Wrote {len(payload)} bytes to {path}")
    return len(payload)


def load_database(path: Union[str, Path]) -> PlayerDatabase:
    """Reads a previously written database back into a PlayerDatabase."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return PlayerDatabase.model_validate(json.load(f))
    except (OSError, ValueError) as e:
        raise StorageError(f"Cannot read player database {path}: {e}") from e
