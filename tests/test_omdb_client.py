import asyncio

import httpx
import pytest

from raz_app.omdb.client import OmdbClient
from raz_app.omdb.errors import OmdbConfigError, ParseError, TransportError
from raz_app.omdb.models import ContentKind


def _run(client, coro):
    async def main():
        try:
            return await coro
        finally:
            await client.close()
    return asyncio.run(main())


def test_search_sends_key_and_query(batman_page):
    seen = []

    def handler(request):
        seen.append(request.url)
        return httpx.Response(200, json=batman_page)

    client = OmdbClient(api_key="secret", transport=httpx.MockTransport(handler))
    body = _run(client, client.search("batman begins"))

    assert body == batman_page
    assert seen[0].params["apikey"] == "secret"
    assert seen[0].params["s"] == "batman begins"
    assert seen[0].host == "www.omdbapi.com"


def test_fetch_detail_sends_id_and_type(batman_begins):
    seen = []

    def handler(request):
        seen.append(request.url.params)
        return httpx.Response(200, json=batman_begins)

    client = OmdbClient(api_key="secret", transport=httpx.MockTransport(handler))
    _run(client, client.fetch_detail("tt0372784", ContentKind.MOVIE))

    assert seen[0]["i"] == "tt0372784"
    assert seen[0]["type"] == "movie"


def test_error_body_is_returned_not_raised(not_found_page):
    client = OmdbClient(
        api_key="secret",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=not_found_page)),
    )

    assert _run(client, client.search("zzzzqx")) == not_found_page


def test_http_error_status_is_transport_error():
    client = OmdbClient(
        api_key="secret",
        transport=httpx.MockTransport(lambda request: httpx.Response(503, text="unavailable")),
    )

    with pytest.raises(TransportError) as excinfo:
        _run(client, client.search("batman"))
    assert excinfo.value.status_code == 503
    assert excinfo.value.code == "transport_error"


def test_network_error_is_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = OmdbClient(api_key="secret", transport=httpx.MockTransport(handler))

    with pytest.raises(TransportError, match="connection refused"):
        _run(client, client.search("batman"))


def test_malformed_json_is_parse_error():
    client = OmdbClient(
        api_key="secret",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>oops</html>")),
    )

    with pytest.raises(ParseError):
        _run(client, client.search("batman"))


def test_non_object_json_is_parse_error():
    client = OmdbClient(
        api_key="secret",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=["batman"])),
    )

    with pytest.raises(ParseError):
        _run(client, client.search("batman"))


def test_missing_api_key_fails_without_network(monkeypatch):
    monkeypatch.delenv("OMDB_API_KEY", raising=False)
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={})

    client = OmdbClient(transport=httpx.MockTransport(handler))

    assert not client.has_api_key
    with pytest.raises(OmdbConfigError):
        _run(client, client.search("batman"))
    assert calls == []


def test_api_key_read_from_environment(monkeypatch):
    monkeypatch.setenv("OMDB_API_KEY", "from-env")

    assert OmdbClient().api_key == "from-env"
