from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

import httpx
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from dewey.errors import ConfigError
from dewey.result import Failure, Result, Success


@dataclass(frozen=True)
class ClientConfig:
    base_url: str
    api_key: str

    def __repr__(self) -> str:
        return f"ClientConfig(base_url={self.base_url!r}, api_key='***')"


def new_client(url: str, api_key: str) -> Result[ClientConfig, ConfigError]:
    """
    Build the immutable config threaded into every operation constructor.

    Only absolute http(s) URLs with a host and a valid port, and without query or fragment,
    are accepted.
    """
    normalized = (url or "").strip().rstrip("/")
    try:
        parsed = urlparse(normalized)
    except ValueError:
        return Failure(ConfigError("Unparseable base URL", url))
    if parsed.scheme not in {"http", "https"}:
        return Failure(ConfigError("Base URL must use http or https", url))
    if not parsed.hostname:
        return Failure(ConfigError("Base URL has no host", url))
    if parsed.query or parsed.fragment:
        return Failure(ConfigError("Base URL must not carry a query or fragment", url))
    try:
        parsed.port  # raises ValueError for a malformed or out-of-range port
        httpx.URL(normalized)
    except (ValueError, httpx.InvalidURL):
        return Failure(ConfigError("Unparseable base URL", url))
    if not isinstance(api_key, str):
        return Failure(ConfigError("API key must be a string", url))
    return Success(ClientConfig(base_url=normalized, api_key=api_key))


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    url: str = Field(alias="DEWEY_URL")
    api_key: str = Field(default="", alias="DEWEY_API_KEY")


def load_settings() -> Settings:
    return Settings()


def client_from_settings(settings: Settings) -> Result[ClientConfig, ConfigError]:
    return new_client(settings.url, settings.api_key)
