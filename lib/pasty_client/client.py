from __future__ import annotations

from typing import Any
from urllib.parse import quote, urlencode

import httpx

from .answer import Answer
from .config_types import ClientConfig
from .credentials import DEFAULT, Credentials, Token, UsernamePassword, resolve_auth
from .errors import ApiError, ProtocolViolationError
from .errors_utils import error_from_answer
from .transport import Transport


def _segment(value: Any) -> str:
    return quote(str(value), safe="")


class PastyClient:
    """Async client for one Pasty API server.

    Every operation performs a single HTTP exchange and either returns its
    result or raises a :class:`~pasty_client.errors.PastyClientError`.
    """

    def __init__(self, cfg: ClientConfig, http_client: httpx.AsyncClient | None = None):
        self._cfg = cfg
        self._t = Transport(cfg, http_client)
        self._session_token: Any = None

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    @property
    def username(self) -> str:
        return self._cfg.username

    @property
    def session_token(self) -> Any:
        """Token object from the last successful :meth:`request_token`."""
        return self._session_token

    def session_credentials(self) -> Token | None:
        if self._session_token is None:
            return None
        return Token.from_payload(self._session_token)

    async def aclose(self) -> None:
        await self._t.aclose()

    async def __aenter__(self) -> PastyClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _get(self, path: str, credentials: Credentials | None) -> Answer:
        return await self._t.request("GET", path, auth=self._auth(credentials))

    async def _post(self, path: str, credentials: Credentials | None, body: dict) -> Answer:
        return await self._t.request("POST", path, auth=self._auth(credentials), json_body=body)

    async def _put(self, path: str, credentials: Credentials | None, body: dict) -> Answer:
        return await self._t.request("PUT", path, auth=self._auth(credentials), json_body=body)

    async def _delete(self, path: str, credentials: Credentials | None) -> Answer:
        return await self._t.request("DELETE", path, auth=self._auth(credentials))

    def _auth(self, credentials: Credentials | None):
        # unauthenticated endpoints still carry the configured credentials
        return resolve_auth(credentials, self._cfg)

    # --- server ---
    async def get_server_version(self) -> Any:
        answer = await self._get("/server/version", DEFAULT)
        return answer.payload if answer.has_payload else {}

    async def check_username_available(self, username: str) -> Any:
        query = urlencode({"username": username})
        answer = await self._get(f"/server/user/available?{query}", DEFAULT)
        return answer.payload if answer.has_payload else {}

    # --- clipboard ---
    async def list_items(self, credentials: Credentials = DEFAULT) -> list[Any]:
        answer = await self._get("/clipboard/list.json", credentials)
        if not answer.has_payload:
            raise ApiError(500, "Did not receive items", answer.raw)
        items = answer.payload.get("items") if isinstance(answer.payload, dict) else None
        return list(items or [])

    async def get_item(self, item_id: str, credentials: Credentials = DEFAULT) -> Any:
        answer = await self._get(f"/clipboard/item/{_segment(item_id)}", credentials)
        if not answer.has_payload:
            raise error_from_answer(answer)
        return answer.payload

    async def delete_item(self, item_id: str, credentials: Credentials = DEFAULT) -> bool:
        answer = await self._delete(f"/clipboard/item/{_segment(item_id)}", credentials)
        if not answer.ok:
            raise error_from_answer(answer)
        return True

    async def add_item(self, item: Any, credentials: Credentials = DEFAULT) -> str:
        answer = await self._post("/clipboard/item", credentials, {"item": item})
        if not answer.has_payload:
            raise error_from_answer(answer)
        item_id = answer.payload.get("_id") if isinstance(answer.payload, dict) else None
        if item_id is None:
            raise ProtocolViolationError("Server did not return the id of the new item")
        return item_id

    # --- tokens ---
    async def request_token(self, username: str, password: str) -> Any:
        answer = await self._get("/user/token", UsernamePassword(username, password))
        if not answer.has_payload:
            raise error_from_answer(answer)
        self._session_token = answer.payload
        return answer.payload

    async def check_token_validity(self, token: Any) -> Any:
        answer = await self._get("/user/token/validity", Token.from_payload(token))
        if answer.ok:
            payload = answer.payload
            if isinstance(payload, dict) and "expires" in payload:
                return payload["expires"]
            raise ProtocolViolationError("Server did not answer according to API")
        raise error_from_answer(answer)

    # --- users ---
    async def get_user(self, credentials: Credentials = DEFAULT) -> Any:
        answer = await self._get("/user", credentials)
        if not answer.ok:
            raise error_from_answer(answer)
        return answer.payload

    async def update_user_password(
            self,
            username: str,
            uid: str,
            current_password: str,
            new_password: str,
    ) -> bool:
        answer = await self._put(
            f"/user/{_segment(uid)}",
            UsernamePassword(username, current_password),
            {"newPassword": new_password},
        )
        if not answer.ok:
            raise error_from_answer(answer)
        return True

    async def delete_user(self, username: str, password: str, uid: str) -> bool:
        answer = await self._delete(f"/user/{_segment(uid)}", UsernamePassword(username, password))
        if not answer.ok:
            raise error_from_answer(answer)
        return True


def create_client(
        host: str,
        port: int,
        *,
        use_tls: bool = False,
        username: str = "",
        password: str = "",
        http_client: httpx.AsyncClient | None = None,
        **options: Any,
) -> PastyClient:
    cfg = ClientConfig(
        host=host,
        port=int(port),
        use_tls=bool(use_tls),
        username=username or "",
        password=password or "",
        **options,
    )
    return PastyClient(cfg, http_client)
