from __future__ import annotations

import base64
import json
import logging
from typing import Any

import httpx

from .answer import Answer
from .config_types import ClientConfig
from .credentials import AuthData
from .errors import UNAUTHORIZED_ERROR, UNKNOWN_ERROR, ApiError, AuthError, InvalidUsageError, NetworkError
from .errors_utils import parse_api_error_detail, unwrap_error_body

logger = logging.getLogger(__name__)

UNKNOWN_FAILURE_MESSAGE = "Unknown error occured"
LOGIN_FAILED_MESSAGE = "Login failed"
INVALID_JSON_MESSAGE = "Invalid JSON received"
STATUS_KEY = "statusCode"


def basic_auth_header(username: str, password: str) -> str:
    raw = f"{username}:{password}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


class Transport:
    def __init__(self, cfg: ClientConfig, client: httpx.AsyncClient | None = None):
        self._cfg = cfg
        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(timeout=cfg.timeout_s, follow_redirects=True)
        self._client = client

    @property
    def user_agent(self) -> str:
        return f"pasty-client/{self._cfg.client_version}"

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def build_url(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return self._cfg.base_url + path

    def build_headers(self, auth: AuthData | None) -> dict[str, str]:
        headers = {
            "Accept-Version": self._cfg.api_version,
            "Content-Type": "application/json; charset=utf-8",
            "User-Agent": self.user_agent,
            "Cache-Control": "no-cache",
        }
        if auth is None:
            return headers
        if auth.username:
            headers["Authorization"] = basic_auth_header(auth.username, auth.password)
        if auth.token and self._cfg.token_header:
            headers[self._cfg.token_header] = auth.token
        return headers

    async def request(
            self,
            method: str,
            path: str,
            *,
            auth: AuthData | None = None,
            json_body: Any | None = None,
    ) -> Answer:
        method = method.upper()
        url = self.build_url(path)
        content = None
        if method in ("POST", "PUT"):
            try:
                content = json.dumps(json_body).encode("utf-8")
            except (TypeError, ValueError) as e:
                raise InvalidUsageError(f"Request body is not JSON serializable: {e}") from e

        logger.debug("%s %s", method, url)
        try:
            r = await self._client.request(method, url, headers=self.build_headers(auth), content=content)
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise NetworkError(
                0, UNKNOWN_FAILURE_MESSAGE, str(e), code=UNKNOWN_ERROR, status_key=STATUS_KEY
            ) from e

        if r.status_code >= 400:
            raise self._error_from_response(r)

        try:
            data = r.json()
        except ValueError:
            logger.debug("%s %s returned a non-JSON body", method, url)
            raise ApiError(
                r.status_code, INVALID_JSON_MESSAGE, r.text[:1000], code=UNKNOWN_ERROR, status_key=STATUS_KEY
            )
        return Answer.from_body(data)

    def _error_from_response(self, r: httpx.Response) -> ApiError:
        error_cls: type[ApiError] = ApiError
        code = UNKNOWN_ERROR
        message = UNKNOWN_FAILURE_MESSAGE
        if r.status_code in (401, 403):
            error_cls = AuthError
        if r.status_code == 401:
            code = UNAUTHORIZED_ERROR
            message = LOGIN_FAILED_MESSAGE

        # a structured body from the server replaces the defaults
        body = parse_api_error_detail(r.text)
        details: Any = r.text[:1000] if r.text else None
        if body is not None:
            error = unwrap_error_body(body)
            details = error
            if isinstance(error.get("code"), str):
                code = error["code"]
            if error.get("message"):
                message = str(error["message"])

        logger.debug("%s %s failed with %s: %s", r.request.method, r.request.url, r.status_code, message)
        return error_cls(r.status_code, message, details, code=code, status_key=STATUS_KEY)
