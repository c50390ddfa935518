# tests/test_http_client.py

from __future__ import annotations

import json
from types import SimpleNamespace

import httpx
import pytest

from assignly.api.client import HttpSignupApi
from assignly.api.errors import (
    FailureKind,
    SignupHttpError,
    SignupTransportError,
    classify_status,
)


def _api(settings: SimpleNamespace, handler) -> tuple[HttpSignupApi, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def _record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(_record))
    return HttpSignupApi(settings, client=client), seen


@pytest.mark.parametrize(
    ("code", "kind"),
    [(409, FailureKind.CONFLICT), (404, FailureKind.NOT_FOUND), (500, FailureKind.UNCLASSIFIED), (None, FailureKind.UNCLASSIFIED)],
)
def test_classify_status(code, kind) -> None:
    assert classify_status(code) is kind


@pytest.mark.asyncio
async def test_signup_posts_json_body(settings: SimpleNamespace) -> None:
    api, seen = _api(settings, lambda req: httpx.Response(201))

    await api.signup(login="alice", tag="@alice", password="pw", image="")

    assert len(seen) == 1
    req = seen[0]
    assert req.method == "POST"
    assert str(req.url) == "http://backend.test/api/signup"
    assert json.loads(req.content) == {"login": "alice", "tag": "@alice", "password": "pw", "image": ""}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "kind"),
    [(409, FailureKind.CONFLICT), (404, FailureKind.NOT_FOUND), (503, FailureKind.UNCLASSIFIED)],
)
async def test_signup_non_2xx_raises_classified_error(settings: SimpleNamespace, status, kind) -> None:
    api, _ = _api(settings, lambda req: httpx.Response(status, text="nope"))

    with pytest.raises(SignupHttpError) as ei:
        await api.signup(login="alice", tag="", password="pw", image="")

    assert ei.value.status_code == status
    assert ei.value.kind is kind
    assert ei.value.detail == "nope"


@pytest.mark.asyncio
async def test_signup_transport_failure(settings: SimpleNamespace) -> None:
    def _refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    api, _ = _api(settings, _refuse)

    with pytest.raises(SignupTransportError) as ei:
        await api.signup(login="alice", tag="", password="pw", image="")

    assert ei.value.kind is FailureKind.UNCLASSIFIED


@pytest.mark.asyncio
async def test_injected_client_is_not_closed(settings: SimpleNamespace) -> None:
    api, _ = _api(settings, lambda req: httpx.Response(200))
    client = api._get_client()

    await api.aclose()

    assert not client.is_closed
    await client.aclose()


@pytest.mark.asyncio
async def test_own_client_has_no_timeout_by_default(settings: SimpleNamespace) -> None:
    api = HttpSignupApi(settings)
    client = api._get_client()

    assert client.timeout == httpx.Timeout(None)

    await api.aclose()
    assert client.is_closed


def test_signup_url_joins_without_double_slashes() -> None:
    s = SimpleNamespace(api_base_url="http://h/api/", signup_path="/users/signup/", http_timeout_seconds=3.0)
    assert HttpSignupApi(s).signup_url == "http://h/api/users/signup"
