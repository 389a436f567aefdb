from __future__ import annotations
from dataclasses import dataclass

API_VERSION = "2.1.0"
CLIENT_VERSION = "0.1.0"
TOKEN_HEADER = "X-Pasty-Token"


@dataclass(frozen=True)
class ClientConfig:
    host: str
    port: int
    use_tls: bool = False
    username: str = ""
    password: str = ""
    api_version: str = API_VERSION
    client_version: str = CLIENT_VERSION
    timeout_s: float = 15.0
    token_header: str | None = TOKEN_HEADER

    @property
    def base_url(self) -> str:
        scheme = "https" if self.use_tls else "http"
        return f"{scheme}://{self.host}:{int(self.port)}"
