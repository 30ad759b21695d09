import httpx
import pytest

from nhl_player_db.scrapers.base_scraper import PayloadError, RateLimitError, ScraperError
from nhl_player_db.scrapers.nhl_scraper import NHLScraper

from .conftest import make_client, roster_payload


async def test_fetch_roster_hits_season_team_endpoint(make_config):
    calls = []
    client = make_client({"/roster/BOS/20232024": roster_payload("A B")}, calls)

    async with NHLScraper(client=client, config=make_config()) as scraper:
        payload = await scraper.fetch_roster("BOS", "20232024")

    assert payload == roster_payload("A B")
    assert calls == ["/roster/BOS/20232024"]


async def test_default_client_sends_user_agent_and_timeout(make_config):
    scraper = NHLScraper(config=make_config(request_timeout=12.5))
    try:
        assert scraper.client.headers["User-Agent"] == "NHL Player Database Generator 1.0"
        assert scraper.client.timeout.read == 12.5
    finally:
        await scraper.close()


async def test_non_success_status_raises_with_code(make_config):
    async with NHLScraper(client=make_client({}), config=make_config()) as scraper:
        with pytest.raises(ScraperError) as excinfo:
            await scraper.fetch_roster("HFD", "20232024")

    assert excinfo.value.status_code == 404


async def test_server_error_without_retries_raises_scraper_error(make_config):
    client = make_client({"/roster/BOS/20232024": httpx.Response(503)})

    async with NHLScraper(client=client, config=make_config()) as scraper:
        with pytest.raises(ScraperError) as excinfo:
            await scraper.fetch_roster("BOS", "20232024")

    assert excinfo.value.status_code == 503


async def test_rate_limit_raises_rate_limit_error(make_config):
    client = make_client({"/roster/BOS/20232024": httpx.Response(429)})

    async with NHLScraper(client=client, config=make_config()) as scraper:
        with pytest.raises(RateLimitError):
            await scraper.fetch_roster("BOS", "20232024")


async def test_malformed_json_raises_payload_error(make_config):
    client = make_client({"/roster/BOS/20232024": httpx.Response(200, text="<html>")})

    async with NHLScraper(client=client, config=make_config()) as scraper:
        with pytest.raises(PayloadError):
            await scraper.fetch_roster("BOS", "20232024")


async def test_timeout_raises_scraper_error(make_config):
    def timeout(request):
        raise httpx.ReadTimeout("timed out", request=request)

    client = make_client({"/roster/BOS/20232024": timeout})

    async with NHLScraper(client=client, config=make_config()) as scraper:
        with pytest.raises(ScraperError, match="Timed out"):
            await scraper.fetch_roster("BOS", "20232024")


async def test_retries_when_enabled(make_config):
    responses = [httpx.Response(503), httpx.Response(200, json=roster_payload("A B"))]
    client = make_client({"/roster/BOS/20232024": lambda request: responses.pop(0)})

    async with NHLScraper(client=client, config=make_config(max_attempts=2)) as scraper:
        payload = await scraper.fetch_roster("BOS", "20232024")

    assert payload == roster_payload("A B")
    assert responses == []


async def test_schedule_falls_back_to_second_endpoint(make_config):
    calls = []
    schedule = {"games": [{"id": 1}]}
    client = make_client({"/schedule/BOS/20232024": schedule}, calls)

    async with NHLScraper(client=client, config=make_config()) as scraper:
        payload = await scraper.fetch_team_schedule("BOS", "20232024")

    assert payload == schedule
    assert calls == ["/club-schedule-season/BOS/20232024", "/schedule/BOS/20232024"]


async def test_schedule_without_games_everywhere_fails(make_config):
    client = make_client({"/club-schedule-season/BOS/20232024": {"nope": True}})

    async with NHLScraper(client=client, config=make_config()) as scraper:
        with pytest.raises(ScraperError, match="All schedule API endpoints failed"):
            await scraper.fetch_team_schedule("BOS", "20232024")


async def test_boxscore_must_be_an_object(make_config):
    client = make_client({"/gamecenter/2023020001/boxscore": [1, 2]})

    async with NHLScraper(client=client, config=make_config()) as scraper:
        with pytest.raises(PayloadError):
            await scraper.fetch_game_details(2023020001)
