"""Identity provider adapter.

Authentication itself happens at the identity provider. This module models
what the application needs from it:

- ``CallerIdentity``: the resolved subject id, passed explicitly into every action
- ``IdentityProviderClient``: HTTP client fetching profile details for a subject
  the first time it shows up, so a local user row can be provisioned
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from hobbylink.core.settings import settings

# Configure logger for this module
logger = logging.getLogger(__name__)

HTTP_NOT_FOUND = 404


class IdentityProviderError(RuntimeError):
    """Raised when the identity provider cannot be reached or answers with an error."""


@dataclass(frozen=True)
class CallerIdentity:
    """Subject id of the authenticated caller as issued by the identity provider."""

    subject: str


@dataclass
class IdentityProfile:
    """Profile details the identity provider knows about a subject."""

    email: str | None = None
    name: str | None = None
    image_url: str | None = None


@dataclass
class IdentityConfig:
    """Connection settings for the identity provider backend API."""

    base_url: str | None
    api_key: str | None
    timeout_seconds: float

    @property
    def enabled(self) -> bool:
        return bool(self.base_url)


def load_identity_config() -> IdentityConfig:
    """Build configuration object from global settings."""
    return IdentityConfig(
        base_url=settings.identity_api_url,
        api_key=settings.identity_api_key,
        timeout_seconds=float(settings.identity_http_timeout_seconds),
    )


class IdentityProviderClient:
    """HTTP client wrapper for identity-provider profile lookups."""

    def __init__(
        self,
        config: IdentityConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or load_identity_config()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                headers = {"Accept": "application/json"}
                if self.config.api_key:
                    headers["Authorization"] = f"Bearer {self.config.api_key}"
                self._client = httpx.AsyncClient(
                    base_url=self.config.base_url or "",
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                    headers=headers,
                    transport=self._transport,
                )
        return self._client

    async def fetch_profile(self, subject: str) -> IdentityProfile | None:
        """Return profile details for ``subject``.

        Returns ``None`` when the provider does not know the subject. When no
        provider API is configured an empty profile is returned so callers
        fall back to placeholder values.

        Raises:
            IdentityProviderError: On transport failures or server errors.
        """
        if not self.enabled:
            logger.debug("Identity API not configured; using placeholder profile for %s", subject)
            return IdentityProfile()

        client = await self._ensure_client()
        try:
            response = await client.get(f"/users/{subject}")
        except httpx.HTTPError as exc:
            raise IdentityProviderError(f"Identity provider request failed: {exc}") from exc

        if response.status_code == HTTP_NOT_FOUND:
            return None
        if response.is_error:
            raise IdentityProviderError(
                f"Identity provider responded with {response.status_code}"
            )
        return self._parse_profile(response.json())

    @staticmethod
    def _parse_profile(payload: dict[str, Any]) -> IdentityProfile:
        emails = payload.get("email_addresses") or []
        email = None
        if emails and isinstance(emails[0], dict):
            email = emails[0].get("email_address")
        return IdentityProfile(
            email=email or None,
            name=payload.get("first_name") or None,
            image_url=payload.get("image_url") or None,
        )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


class _IdentityClientSingleton:
    """Singleton holder for the process-wide identity client."""

    _instance: IdentityProviderClient | None = None

    @classmethod
    def get_instance(cls) -> IdentityProviderClient:
        if cls._instance is None:
            cls._instance = IdentityProviderClient()
        return cls._instance


def get_identity_client() -> IdentityProviderClient:
    """Return a singleton identity client instance."""
    return _IdentityClientSingleton.get_instance()
