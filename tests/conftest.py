from pathlib import Path
from typing import Any, Callable, Dict, List

import httpx
import pytest

from nhl_player_db.config.settings import AppSettings

API_PREFIX = "/v1"


def roster_payload(*names: str, group: str = "forwards") -> Dict[str, Any]:
    players = []
    for name in names:
        first, last = name.split(" ", 1)
        players.append({"firstName": {"default": first}, "lastName": {"default": last}})
    return {group: players}


def make_client(routes: Dict[str, Any], calls: List[str] = None) -> httpx.AsyncClient:
    """AsyncClient backed by MockTransport.

    `routes` maps an API path (without the /v1 prefix) to a JSON body, an
    httpx.Response, or a callable taking the request. Unknown paths get 404.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.startswith(API_PREFIX):
            path = path[len(API_PREFIX):]
        if calls is not None:
            calls.append(path)
        result = routes.get(path)
        if result is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if callable(result):
            return result(request)
        if isinstance(result, httpx.Response):
            return result
        return httpx.Response(200, json=result)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., AppSettings]:
    def _make(**overrides) -> AppSettings:
        values = {
            "output_path": str(tmp_path / "nhl_players.json"),
            "delay_ms": 0,
            "start_year": 2023,
            "end_year": 2024,
        }
        values.update(overrides)
        return AppSettings(_env_file=None, **values)

    return _make


@pytest.fixture
def no_sleep():
    delays: List[float] = []

    async def _sleep(seconds: float) -> None:
        delays.append(seconds)

    _sleep.delays = delays
    return _sleep
