# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio
import logging

import httpx
import pytest

from authprobe.config import ProbeSettings
from authprobe.errors import ConfigurationError, ErrorCategory, NetworkError
from authprobe.http.httpx_client import AsyncHttpxClient
from authprobe.http.models import HttpRequest, HttpResponse
from authprobe.models.probe import ProbeOutcome, ProbeResult, ProbeTarget
from authprobe.probe import AuthProbe

BASE_URL = "https://api.example.com"
TOKEN = "tok_abc123"


class RecordingHandler:
    """MockTransport handler with a per-path response table."""

    def __init__(self, routes):
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, text="missing")
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(request)
        return route


def make_probe(handler, **kwargs) -> AuthProbe:
    settings = ProbeSettings(user_agent="authprobe-tests")
    client = AsyncHttpxClient(settings, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    return AuthProbe.configure(BASE_URL, TOKEN, settings=settings, http_client=client, **kwargs)


@pytest.mark.parametrize(
    "base_url, token",
    [
        ("", TOKEN),
        ("   ", TOKEN),
        ("api.example.com", TOKEN),
        ("/admin", TOKEN),
        ("ftp://api.example.com", TOKEN),
        (BASE_URL, ""),
        (BASE_URL, "   "),
        (BASE_URL, None),
    ],
)
def test_configure_rejects_invalid_settings(base_url, token):
    with pytest.raises(ConfigurationError):
        AuthProbe.configure(base_url, token, http_client=object())


def test_configure_rejects_non_positive_timeout():
    with pytest.raises(ConfigurationError):
        AuthProbe.configure(BASE_URL, TOKEN, timeout=0, http_client=object())


def test_check_sends_one_bearer_request_and_returns_result():
    handler = RecordingHandler({"/admin/stats": httpx.Response(200, text='{"ok":true}')})

    async def scenario():
        async with make_probe(handler) as probe:
            return await probe.check("/admin/stats")

    result = asyncio.run(scenario())

    assert isinstance(result, ProbeResult)
    assert result.status_code == 200
    assert result.text == '{"ok":true}'
    assert result.url == "https://api.example.com/admin/stats"
    assert len(handler.requests) == 1
    sent = handler.requests[0]
    assert sent.method == "GET"
    assert str(sent.url) == "https://api.example.com/admin/stats"
    assert sent.headers["Authorization"] == "Bearer tok_abc123"
    assert sent.content == b""


def test_forbidden_response_is_a_result_not_an_error():
    handler = RecordingHandler(
        {"/admin/admins": httpx.Response(403, headers={"WWW-Authenticate": "Bearer"}, text="forbidden")}
    )

    async def scenario():
        async with make_probe(handler) as probe:
            return await probe.check("/admin/admins")

    result = asyncio.run(scenario())
    assert result.status_code == 403
    assert result.is_auth_failure is True
    assert result.header("www-authenticate") == "Bearer"


def test_unauthorized_and_server_errors_are_results():
    handler = RecordingHandler(
        {
            "/a": httpx.Response(401, text="no"),
            "/b": httpx.Response(500, text="boom"),
        }
    )

    async def scenario():
        async with make_probe(handler) as probe:
            return await probe.check("/a"), await probe.check("/b")

    first, second = asyncio.run(scenario())
    assert (first.status_code, first.is_auth_failure) == (401, True)
    assert (second.status_code, second.is_auth_failure) == (500, False)


def test_check_raises_network_error_on_timeout():
    handler = RecordingHandler({"/slow": httpx.ReadTimeout("read timed out")})

    async def scenario():
        async with make_probe(handler) as probe:
            await probe.check("/slow")

    with pytest.raises(NetworkError) as info:
        asyncio.run(scenario())
    assert info.value.path == "/slow"
    assert info.value.url == "https://api.example.com/slow"
    assert info.value.category is ErrorCategory.TIMEOUT
    assert len(handler.requests) == 1


def test_check_rejects_empty_path_without_sending():
    handler = RecordingHandler({})

    async def scenario():
        async with make_probe(handler) as probe:
            await probe.check("")

    with pytest.raises(ConfigurationError):
        asyncio.run(scenario())
    assert handler.requests == []


def test_check_all_reports_failure_and_continues_in_order():
    handler = RecordingHandler(
        {
            "/a": httpx.ConnectTimeout("connect timed out"),
            "/b": httpx.Response(200, text="fine"),
        }
    )

    async def scenario():
        async with make_probe(handler) as probe:
            return await probe.collect(["/a", "/b"])

    outcomes = asyncio.run(scenario())

    assert [o.path for o in outcomes] == ["/a", "/b"]
    assert outcomes[0].ok is False
    assert isinstance(outcomes[0].error, NetworkError)
    assert outcomes[0].error.category is ErrorCategory.TIMEOUT
    assert outcomes[1].ok is True
    assert outcomes[1].result.status_code == 200
    assert [r.url.path for r in handler.requests] == ["/a", "/b"]


def test_check_all_yields_one_outcome_per_path_even_when_all_fail():
    handler = RecordingHandler({f"/p{i}": httpx.ConnectError("refused") for i in range(5)})

    async def scenario():
        async with make_probe(handler) as probe:
            return await probe.collect([f"/p{i}" for i in range(5)])

    outcomes = asyncio.run(scenario())
    assert len(outcomes) == 5
    assert all(not o.ok for o in outcomes)
    assert [o.path for o in outcomes] == [f"/p{i}" for i in range(5)]


def test_check_all_is_lazy_and_restartable():
    handler = RecordingHandler({"/a": httpx.Response(200), "/b": httpx.Response(204)})

    async def scenario():
        async with make_probe(handler) as probe:
            stream = probe.check_all(["/a", "/b"])
            assert handler.requests == []
            first = await stream.__anext__()
            assert len(handler.requests) == 1
            rest = [o async for o in stream]
            again = await probe.collect(["/a", "/b"])
            return [first, *rest], again

    first_pass, second_pass = asyncio.run(scenario())
    assert [o.result.status_code for o in first_pass] == [200, 204]
    assert [o.result.status_code for o in second_pass] == [200, 204]
    assert len(handler.requests) == 4


def test_check_all_keeps_one_request_in_flight():
    in_flight = 0
    peak = 0

    class SlowClient:
        async def request(self, request: HttpRequest) -> HttpResponse:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return HttpResponse(ok=True, status_code=200, url=request.url)

    async def scenario():
        probe = AuthProbe.configure(BASE_URL, TOKEN, http_client=SlowClient(), settings=ProbeSettings())
        return await probe.collect(["/1", "/2", "/3"])

    outcomes = asyncio.run(scenario())
    assert len(outcomes) == 3
    assert peak == 1


def test_unexpected_client_exception_becomes_network_error():
    class ExplodingClient:
        async def request(self, request: HttpRequest) -> HttpResponse:  # noqa: ARG002
            raise ConnectionResetError("reset by peer")

    async def scenario():
        probe = AuthProbe.configure(BASE_URL, TOKEN, http_client=ExplodingClient(), settings=ProbeSettings())
        return await probe.collect(["/x"])

    (outcome,) = asyncio.run(scenario())
    assert outcome.ok is False
    assert outcome.error.category is ErrorCategory.CONNECTION_ERROR
    assert outcome.error.error_type == "ConnectionResetError"


def test_timeout_is_passed_to_the_client():
    captured = {}

    class Client:
        async def request(self, request: HttpRequest) -> HttpResponse:
            captured["timeout"] = request.timeout
            return HttpResponse(ok=True, status_code=200)

    async def scenario():
        probe = AuthProbe.configure(BASE_URL, TOKEN, timeout=0.25, http_client=Client(), settings=ProbeSettings())
        await probe.check("/t")

    asyncio.run(scenario())
    assert captured["timeout"] == 0.25


def test_token_never_appears_in_logs_or_repr(caplog):
    handler = RecordingHandler({"/a": httpx.Response(200), "/b": httpx.ConnectError("refused")})

    async def scenario():
        async with make_probe(handler) as probe:
            await probe.collect(["/a", "/b"])
            return repr(probe)

    with caplog.at_level(logging.DEBUG, logger="authprobe"):
        text = asyncio.run(scenario())

    assert TOKEN not in text
    assert TOKEN not in caplog.text
    assert "Probe failed for /b" in caplog.text


def test_probe_outcome_requires_exactly_one_variant():
    result = ProbeResult(path="/a", url="https://h/a", status_code=200)
    with pytest.raises(ValueError):
        ProbeOutcome(path="/a")
    with pytest.raises(ValueError):
        ProbeOutcome(path="/a", result=result, error=NetworkError("x"))
    assert ProbeOutcome.success(result).to_dict()["result"]["status_code"] == 200
    failure = ProbeOutcome.failure("/b", NetworkError("refused", path="/b"))
    assert failure.to_dict()["ok"] is False


def test_close_leaves_injected_client_open():
    class Client:
        closed = False

        async def request(self, request):  # noqa: ANN001, ARG002
            return HttpResponse(ok=True, status_code=200)

        async def close(self):
            self.closed = True

    client = Client()

    async def scenario():
        async with AuthProbe.configure(BASE_URL, TOKEN, http_client=client, settings=ProbeSettings()):
            pass

    asyncio.run(scenario())
    assert client.closed is False


def test_probe_target_builds_urls_by_concatenation():
    target = ProbeTarget(base_url="https://api.example.com/v1/", paths=("/admin/admins", "/admin/stats"))
    assert target.urls() == [
        "https://api.example.com/v1/admin/admins",
        "https://api.example.com/v1/admin/stats",
    ]
    probe = AuthProbe.configure("https://api.example.com/v1/", TOKEN, http_client=object(), settings=ProbeSettings())
    assert probe.target.base_url == "https://api.example.com/v1"


def test_body_over_the_cap_is_flagged_as_truncated():
    handler = RecordingHandler({"/big": httpx.Response(200, content=b"x" * 100), "/small": httpx.Response(200, text="ok")})

    async def scenario():
        settings = ProbeSettings(user_agent="authprobe-tests", max_body_bytes=10)
        client = AsyncHttpxClient(settings, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
        async with AuthProbe.configure(BASE_URL, TOKEN, settings=settings, http_client=client) as probe:
            return await probe.check("/big"), await probe.check("/small")

    big, small = asyncio.run(scenario())

    assert big.text == "x" * 10
    assert big.truncated is True
    assert big.to_dict()["truncated"] is True
    assert small.truncated is False
    assert ProbeOutcome.success(small).to_dict()["result"]["truncated"] is False
