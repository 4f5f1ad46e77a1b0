"""Blob store client for media uploads.

Media bytes never touch the datastore: they are pushed to an external object
store over HTTP and only the URL it returns is persisted. The client is
authenticated with a short-lived HS256 token and guarded by a circuit breaker
so a failing store does not stall every upload request.
"""

from __future__ import annotations

import asyncio
import logging
import secrets
import time
from dataclasses import dataclass
from enum import Enum

import httpx
from jose import jwt

from mediaroom.core.settings import settings

logger = logging.getLogger(__name__)

HTTP_INTERNAL_SERVER_ERROR = 500


class BlobStoreError(RuntimeError):
    """Base exception raised for blob store failures."""


class BlobStoreDisabledError(BlobStoreError):
    """Raised when an upload is attempted without a configured blob store."""


class BlobStoreTimeoutError(BlobStoreError):
    """Raised when the blob store does not answer within the configured timeout."""


class CircuitState(Enum):
    """Circuit breaker states."""

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


@dataclass
class CircuitBreaker:
    """Circuit breaker for blob store requests."""

    failure_threshold: int = 5
    recovery_timeout: float = 60.0
    success_threshold: int = 3

    _state: CircuitState = CircuitState.CLOSED
    _failure_count: int = 0
    _success_count: int = 0
    _last_failure_time: float = 0.0

    def is_open(self) -> bool:
        """Check if circuit is open, moving to half-open after the recovery timeout."""
        if self._state == CircuitState.OPEN:
            if time.time() - self._last_failure_time > self.recovery_timeout:
                self._state = CircuitState.HALF_OPEN
                self._success_count = 0
            return self._state == CircuitState.OPEN
        return False

    def record_success(self) -> None:
        if self._state == CircuitState.HALF_OPEN:
            self._success_count += 1
            if self._success_count >= self.success_threshold:
                self._state = CircuitState.CLOSED
                self._failure_count = 0
        elif self._state == CircuitState.CLOSED:
            self._failure_count = 0

    def record_failure(self) -> None:
        self._failure_count += 1
        self._last_failure_time = time.time()
        if self._failure_count >= self.failure_threshold:
            self._state = CircuitState.OPEN

    def get_state(self) -> CircuitState:
        return self._state


@dataclass(frozen=True)
class BlobStoreConfig:
    """Immutable configuration for blob store operations."""

    enabled: bool
    base_url: str | None
    shared_secret: str | None
    audience: str
    token_ttl_seconds: int
    timeout_seconds: float


def load_blob_store_config() -> BlobStoreConfig:
    """Build configuration object from global settings."""
    return BlobStoreConfig(
        enabled=settings.blob_store_enabled,
        base_url=settings.blob_store_base_url,
        shared_secret=settings.blob_store_shared_secret,
        audience=settings.blob_store_audience,
        token_ttl_seconds=settings.blob_store_token_ttl_seconds,
        timeout_seconds=float(settings.blob_store_http_timeout_seconds),
    )


class BlobStoreClient:
    """HTTP client wrapper for the media blob store."""

    def __init__(
        self,
        config: BlobStoreConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or load_blob_store_config()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()
        self._circuit_breaker = CircuitBreaker()

    @property
    def enabled(self) -> bool:
        return self.config.enabled and bool(self.config.base_url)

    async def _ensure_client(self) -> httpx.AsyncClient:
        if not self.enabled:
            raise BlobStoreDisabledError("Blob store is not configured")

        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.config.base_url or "",
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                    transport=self._transport,
                )
        return self._client

    def _build_auth_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.config.shared_secret:
            now = int(time.time())
            payload = {
                "aud": self.config.audience,
                "iat": now,
                "exp": now + max(1, self.config.token_ttl_seconds),
                "jti": secrets.token_hex(8),
            }
            token = jwt.encode(payload, self.config.shared_secret, algorithm="HS256")
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def put_object(self, path: str, data: bytes, content_type: str) -> str:
        """Store ``data`` under ``path`` and return the public URL.

        The store answers with JSON carrying a ``url`` field; when it omits
        one, the URL is derived from the base URL and the object path.

        Raises:
            BlobStoreDisabledError: If no blob store is configured.
            BlobStoreTimeoutError: If the request timed out.
            BlobStoreError: For any other transport or HTTP failure.
        """
        if self._circuit_breaker.is_open():
            raise BlobStoreError("Blob store circuit breaker is open - service unavailable")

        client = await self._ensure_client()
        headers = self._build_auth_headers()
        headers["Content-Type"] = content_type
        object_path = "/" + path.lstrip("/")

        try:
            response = await client.put(object_path, content=data, headers=headers)
        except httpx.TimeoutException as exc:
            self._circuit_breaker.record_failure()
            logger.warning("Blob store upload of %s timed out", object_path)
            raise BlobStoreTimeoutError(f"Blob store request timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            self._circuit_breaker.record_failure()
            logger.warning("Blob store upload of %s failed: %s", object_path, exc)
            raise BlobStoreError(f"Blob store request failed: {exc}") from exc

        if response.status_code >= HTTP_INTERNAL_SERVER_ERROR:
            self._circuit_breaker.record_failure()
            logger.warning(
                "Blob store responded with %s for %s", response.status_code, object_path
            )
            raise BlobStoreError(f"Blob store responded with {response.status_code}")
        self._circuit_breaker.record_success()

        if response.is_error:
            raise BlobStoreError(f"Blob store rejected upload ({response.status_code})")

        url = None
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            url = payload.get("url")
        if not url:
            url = f"{(self.config.base_url or '').rstrip('/')}{object_path}"
        return str(url)

    async def close(self) -> None:
        """Clean up underlying HTTP client resources."""
        async with self._client_lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None


class _BlobStoreClientSingleton:
    """Singleton wrapper for BlobStoreClient."""

    _instance: BlobStoreClient | None = None

    @classmethod
    def get_instance(cls) -> BlobStoreClient:
        if cls._instance is None:
            cls._instance = BlobStoreClient()
        return cls._instance


def get_blob_store_client() -> BlobStoreClient:
    """Return a singleton blob store client instance."""
    return _BlobStoreClientSingleton.get_instance()
