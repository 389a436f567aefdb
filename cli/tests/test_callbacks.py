from __future__ import annotations

import asyncio
import datetime

import httpx
import pytest

from pasty_client import (
    ApiError,
    CallbackPastyClient,
    ClientConfig,
    InvalidUsageError,
    NetworkError,
    PastyClient,
    ProtocolViolationError,
)


class _Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def __call__(self, err, result) -> None:
        self.calls.append((err, result))


def _client(handler) -> tuple[CallbackPastyClient, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def _record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    cfg = ClientConfig(host="pasty.test", port=4444, username="alice", password="secret")
    http = httpx.AsyncClient(transport=httpx.MockTransport(_record))
    return CallbackPastyClient(PastyClient(cfg, http)), seen


def _answer(body: dict):
    return lambda _r: httpx.Response(200, json=body)


def _invoke(client: CallbackPastyClient, name: str, *args) -> _Recorder:
    recorder = _Recorder()

    async def _main() -> None:
        task = getattr(client, name)(*args, recorder)
        assert isinstance(task, asyncio.Task)
        await task

    asyncio.run(_main())
    return recorder


def test_list_items_missing_payload_reports_error_and_none() -> None:
    client, _ = _client(_answer({"code": 200}))

    rec = _invoke(client, "list_items")

    assert len(rec.calls) == 1
    err, result = rec.calls[0]
    assert isinstance(err, ApiError)
    assert err.status_code == 500
    assert err.message == "Did not receive items"
    assert result is None


def test_add_item_yields_new_id() -> None:
    client, _ = _client(_answer({"payload": {"_id": "abc123"}}))

    assert _invoke(client, "add_item", {"text": "hi"}).calls == [(None, "abc123")]


def test_add_item_failure_yields_false() -> None:
    client, _ = _client(_answer({"code": 400, "error": {"message": "empty item"}}))

    [(err, result)] = _invoke(client, "add_item", "").calls

    assert err.message == "empty item"
    assert result is False


def test_delete_item_success_and_failure() -> None:
    client, _ = _client(_answer({"code": 200}))
    assert _invoke(client, "delete_item", "x").calls == [(None, True)]

    client, _ = _client(_answer({"code": 404, "error": {"message": "not found"}}))
    [(err, result)] = _invoke(client, "delete_item", "x").calls
    assert isinstance(err, ApiError)
    assert err.message == "not found"
    assert result is False


def test_check_token_validity_success() -> None:
    client, _ = _client(_answer({"code": 200, "payload": {"expires": 1700000000}}))

    assert _invoke(client, "check_token_validity", "tok").calls == [(None, 1700000000)]


def test_check_token_validity_protocol_violation_is_delivered_once() -> None:
    client, _ = _client(_answer({"code": 200}))

    [(err, result)] = _invoke(client, "check_token_validity", "tok").calls

    assert isinstance(err, ProtocolViolationError)
    assert result is None


def test_transport_failure_is_delivered_once() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client, _ = _client(handler)

    [(err, result)] = _invoke(client, "delete_user", "bob", "pw", "uid1").calls

    assert isinstance(err, NetworkError)
    assert result is False


@pytest.mark.parametrize(
    ("name", "args"),
    [
        ("get_server_version", ()),
        ("list_items", ()),
        ("list_items", ("user", "pw")),
        ("get_item", ("id1",)),
        ("delete_item", ("id1", "token")),
        ("add_item", ("text",)),
        ("request_token", ("user", "pw")),
        ("check_token_validity", ("tok",)),
        ("check_username_available", ("bob",)),
        ("get_user", ()),
        ("update_user_password", ("bob", "uid", "old", "new")),
        ("delete_user", ("bob", "pw", "uid")),
    ],
)
def test_missing_callback_raises_before_any_request(name, args) -> None:
    client, seen = _client(_answer({"code": 200}))

    with pytest.raises(InvalidUsageError):
        getattr(client, name)(*args)

    with pytest.raises(InvalidUsageError):
        getattr(client, name)(*args, "not-a-callback")

    assert seen == []


def test_username_password_args_become_basic_auth() -> None:
    client, seen = _client(_answer({"code": 200, "payload": {"items": []}}))

    rec = _invoke(client, "list_items", "bob", "pw")

    assert rec.calls == [(None, [])]
    assert seen[0].headers["Authorization"] == "Basic Ym9iOnB3"


def test_single_arg_becomes_token() -> None:
    client, seen = _client(_answer({"code": 200, "payload": {"_id": "i1"}}))

    rec = _invoke(client, "get_item", "i1", "tok-5")

    assert rec.calls == [(None, {"_id": "i1"})]
    assert seen[0].headers["X-Pasty-Token"] == "tok-5"
    assert "Authorization" not in seen[0].headers


def test_no_auth_args_use_configured_credentials() -> None:
    client, seen = _client(_answer({"code": 200, "payload": {"username": "alice"}}))

    rec = _invoke(client, "get_user")

    assert rec.calls == [(None, {"username": "alice"})]
    assert seen[0].headers["Authorization"] == "Basic YWxpY2U6c2VjcmV0"


def test_request_token_updates_session_token() -> None:
    client, _ = _client(_answer({"code": 200, "payload": {"token": "t1", "expires": 5}}))

    _invoke(client, "request_token", "bob", "pw")

    assert client.session_token == {"token": "t1", "expires": 5}


def test_token_object_accepted_as_auth_arg() -> None:
    client, seen = _client(_answer({"code": 200, "payload": {"items": [1]}}))

    rec = _invoke(client, "list_items", {"token": "t1", "expires": 5})

    assert rec.calls == [(None, [1])]
    assert seen[0].headers["X-Pasty-Token"] == "t1"


def test_unserializable_item_is_delivered_as_usage_error() -> None:
    client, seen = _client(_answer({"payload": {"_id": "abc123"}}))

    [(err, result)] = _invoke(client, "add_item", datetime.date(2024, 1, 1)).calls

    assert isinstance(err, InvalidUsageError)
    assert result is False
    assert seen == []


def test_unexpected_exception_still_reaches_callback_once() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        raise RuntimeError("transport exploded")

    client, _ = _client(handler)

    [(err, result)] = _invoke(client, "delete_item", "x").calls

    assert isinstance(err, ApiError)
    assert err.status_code == 500
    assert err.code == "UnknownError"
    assert err.message == "transport exploded"
    assert result is False


def test_token_object_without_value_fails_before_dispatch() -> None:
    client, seen = _client(_answer({"code": 200, "payload": {"expires": 1}}))

    with pytest.raises(InvalidUsageError):
        client.check_token_validity({"expires": 1}, lambda err, result: None)
    with pytest.raises(InvalidUsageError):
        client.list_items({"expires": 1}, lambda err, result: None)

    assert seen == []


def test_missing_items_error_info_uses_http_code() -> None:
    client, _ = _client(_answer({"code": 200}))

    [(err, _result)] = _invoke(client, "list_items").calls

    assert err.info == {"httpCode": 500, "message": "Did not receive items"}
