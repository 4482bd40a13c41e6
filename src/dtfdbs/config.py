# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers: transport settings, environments and client credentials."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from .version import __version__

DEFAULT_USER_AGENT = f"dtf-dbs-client/{__version__}"
DEFAULT_AUTH_SCOPE = "dtf:dbs:file:write dtf:dbs:file:read"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """HTTP transport defaults."""

    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("DTFDBS_HTTP_TIMEOUT", cls.timeout)
        return cls(
            timeout=timeout if timeout > 0 else cls.timeout,
            user_agent=os.getenv("DTFDBS_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("DTFDBS_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("DTFDBS_HTTP_VERIFY_SSL", cls.verify_ssl),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


class Environment(str, Enum):
    PROD = "prod"
    CERT = "cert"
    QUAL = "qual"

    @classmethod
    def parse(cls, value: "Environment | str") -> "Environment":
        try:
            return cls(value)
        except ValueError:
            raise ValueError("Invalid environment argument, should be prod|cert|qual") from None


_TOKEN_BASE_URLS: dict[Environment, str] = {
    Environment.QUAL: "https://sso-qual.johndeere.com/oauth2/ausi42oq38DYB06q50h7",
    Environment.CERT: "https://sso-cert.johndeere.com/oauth2/aus97etlxsNTFzHT11t7",
    Environment.PROD: "https://sso.johndeere.com/oauth2/aus9k0fb8kUjG8S5Z1t7",
}

_API_BASE_URLS: dict[Environment, str] = {
    Environment.QUAL: "https://servicesextqual.tal.deere.com/dtfapi",
    Environment.CERT: "https://servicesextcert.deere.com/dtfapi",
    Environment.PROD: "https://servicesext.deere.com/dtfapi",
}


def token_base_url(environment: Environment | str) -> str:
    """OAuth issuer base URL for an environment."""
    return _TOKEN_BASE_URLS[Environment.parse(environment)]


def api_base_url(environment: Environment | str) -> str:
    """DBS API base path for an environment."""
    return _API_BASE_URLS[Environment.parse(environment)]


class ClientConfig:
    """
    Credentials and tenant selection for one DBS dealer.

    The access token is the only field the client mutates; everything else is set by
    the caller. Not safe for concurrent use: a 401-triggered refresh rewrites the token.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        dealer_id: str,
        environment: Environment | str,
        auth_scope: str | None = DEFAULT_AUTH_SCOPE,
        access_token: str | None = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.dealer_id = dealer_id
        self.environment = environment
        self.auth_scope = auth_scope
        self.access_token = access_token

    @property
    def environment(self) -> Environment:
        return self._environment

    @environment.setter
    def environment(self, value: Environment | str) -> None:
        self._environment = Environment.parse(value)

    @property
    def token_url(self) -> str:
        return f"{token_base_url(self.environment)}/v1/token"

    @property
    def api_base_url(self) -> str:
        return api_base_url(self.environment)

    @classmethod
    def from_env(cls, **overrides: str | None) -> "ClientConfig":
        """
        Build a config from ``DTFDBS_*`` environment variables.

        Non-None keyword overrides take precedence over the environment.
        """
        sources = {
            "client_id": "DTFDBS_CLIENT_ID",
            "client_secret": "DTFDBS_CLIENT_SECRET",
            "dealer_id": "DTFDBS_DEALER_ID",
            "environment": "DTFDBS_ENVIRONMENT",
            "auth_scope": "DTFDBS_AUTH_SCOPE",
            "access_token": "DTFDBS_ACCESS_TOKEN",
        }
        values: dict[str, str | None] = {}
        for field_name, env_name in sources.items():
            override = overrides.get(field_name)
            values[field_name] = override if override is not None else os.getenv(env_name)

        for field_name in ("client_id", "client_secret", "dealer_id"):
            if not values[field_name]:
                raise ValueError(f"Missing {field_name}; set {sources[field_name]} or pass it explicitly")

        return cls(
            client_id=values["client_id"] or "",
            client_secret=values["client_secret"] or "",
            dealer_id=values["dealer_id"] or "",
            environment=values["environment"] or Environment.CERT,
            auth_scope=values["auth_scope"] or DEFAULT_AUTH_SCOPE,
            access_token=values["access_token"] or None,
        )

    def __repr__(self) -> str:
        return (
            f"ClientConfig(client_id={self.client_id!r}, dealer_id={self.dealer_id!r}, "
            f"environment={self.environment.value!r}, auth_scope={self.auth_scope!r}, "
            f"has_access_token={bool(self.access_token)})"
        )


__all__ = [
    "DEFAULT_AUTH_SCOPE",
    "DEFAULT_USER_AGENT",
    "ClientConfig",
    "Environment",
    "HttpSettings",
    "api_base_url",
    "load_http_settings",
    "token_base_url",
]
