"""Continuation-style wrapper around :class:`PastyClient`.

Each operation takes its arguments followed by a mandatory
``callback(error, result)``. The call returns an :class:`asyncio.Task` right
away and the callback runs exactly once, with either ``(error, failure_value)``
or ``(None, result)``. Authenticated operations accept optional auth values
before the callback: ``(username, password, callback)``, ``(token, callback)``
or just ``(callback)`` for the configured credentials.

Must be called from code running inside an asyncio event loop.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Sequence

from .client import PastyClient
from .credentials import Token, credentials_from_args
from .errors import UNKNOWN_ERROR, ApiError, InvalidUsageError, PastyClientError
from .errors_utils import UNKNOWN_MESSAGE

Callback = Callable[[Any, Any], Any]


def split_callback(args: Sequence[Any], *, leading: int = 0) -> tuple[list[Any], list[Any], Callback]:
    """Split ``args`` into (operation args, auth args, callback)."""
    if not args or not callable(args[-1]):
        raise InvalidUsageError("Last argument is not a callback function.")
    if len(args) - 1 < leading:
        raise InvalidUsageError(f"Expected at least {leading} argument(s) before the callback.")
    return list(args[:leading]), list(args[leading:-1]), args[-1]


class CallbackPastyClient:
    def __init__(self, client: PastyClient):
        self._client = client

    @property
    def client(self) -> PastyClient:
        return self._client

    @property
    def session_token(self) -> Any:
        return self._client.session_token

    def _dispatch(
            self,
            call: Callable[[], Awaitable[Any]],
            callback: Callback,
            failure_value: Any = None,
    ) -> asyncio.Task:
        loop = asyncio.get_running_loop()

        async def _run() -> None:
            try:
                result = await call()
            except PastyClientError as exc:
                callback(exc, failure_value)
                return
            except Exception as exc:
                callback(ApiError(500, str(exc) or UNKNOWN_MESSAGE, repr(exc), code=UNKNOWN_ERROR), failure_value)
                return
            callback(None, result)

        return loop.create_task(_run())

    def _fixed(self, args: Sequence[Any], count: int) -> tuple[list[Any], Callback]:
        if len(args) != count + 1 or not callable(args[-1]):
            raise InvalidUsageError("Last argument is not a callback function.")
        return list(args[:-1]), args[-1]

    def get_server_version(self, *args: Any) -> asyncio.Task:
        _, callback = self._fixed(args, 0)
        return self._dispatch(self._client.get_server_version, callback)

    def check_username_available(self, *args: Any) -> asyncio.Task:
        (username,), callback = self._fixed(args, 1)
        return self._dispatch(lambda: self._client.check_username_available(username), callback)

    def list_items(self, *args: Any) -> asyncio.Task:
        _, auth_args, callback = split_callback(args)
        credentials = credentials_from_args(auth_args)
        return self._dispatch(lambda: self._client.list_items(credentials), callback)

    def get_item(self, *args: Any) -> asyncio.Task:
        (item_id,), auth_args, callback = split_callback(args, leading=1)
        credentials = credentials_from_args(auth_args)
        return self._dispatch(lambda: self._client.get_item(item_id, credentials), callback)

    def delete_item(self, *args: Any) -> asyncio.Task:
        (item_id,), auth_args, callback = split_callback(args, leading=1)
        credentials = credentials_from_args(auth_args)
        return self._dispatch(lambda: self._client.delete_item(item_id, credentials), callback, False)

    def add_item(self, *args: Any) -> asyncio.Task:
        (item,), auth_args, callback = split_callback(args, leading=1)
        credentials = credentials_from_args(auth_args)
        return self._dispatch(lambda: self._client.add_item(item, credentials), callback, False)

    def request_token(self, *args: Any) -> asyncio.Task:
        (username, password), callback = self._fixed(args, 2)
        return self._dispatch(lambda: self._client.request_token(username, password), callback)

    def check_token_validity(self, *args: Any) -> asyncio.Task:
        (token,), callback = self._fixed(args, 1)
        credential = Token.from_payload(token)
        return self._dispatch(lambda: self._client.check_token_validity(credential), callback)

    def get_user(self, *args: Any) -> asyncio.Task:
        _, auth_args, callback = split_callback(args)
        credentials = credentials_from_args(auth_args)
        return self._dispatch(lambda: self._client.get_user(credentials), callback)

    def update_user_password(self, *args: Any) -> asyncio.Task:
        (username, uid, current, new), callback = self._fixed(args, 4)
        return self._dispatch(
            lambda: self._client.update_user_password(username, uid, current, new),
            callback,
            False,
        )

    def delete_user(self, *args: Any) -> asyncio.Task:
        (username, password, uid), callback = self._fixed(args, 3)
        return self._dispatch(lambda: self._client.delete_user(username, password, uid), callback, False)
