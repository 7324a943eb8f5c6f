"""Challengermode access-token handling.

The API hands out short-lived access keys in exchange for a long-lived
refresh key. ``AccessTokenCache`` keeps the current access key and only
goes back to the API when it is about to expire.
"""

from __future__ import annotations

import datetime
import logging
import threading
from typing import Callable, Optional

import requests
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from cs2intel.constants import (
    CHALLENGERMODE_API_URL,
    DEFAULT_UPSTREAM_TIMEOUT,
    TOKEN_REFRESH_BUFFER_SECONDS,
)
from cs2intel.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)


class AccessKeyResponse(BaseModel):
    """Payload returned by ``POST /v1/auth/access_keys``."""

    model_config = ConfigDict(populate_by_name=True)

    value: str
    expires_at: datetime.datetime = Field(alias="expiresAt")


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class AccessTokenCache:
    """Holds one access token and refreshes it shortly before expiry."""

    def __init__(
        self,
        refresh_key: Optional[str] = None,
        api_url: str = CHALLENGERMODE_API_URL,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_UPSTREAM_TIMEOUT,
        clock: Callable[[], datetime.datetime] = _utcnow,
    ) -> None:
        self.refresh_key = refresh_key
        self.api_url = api_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.clock = clock
        self._token: Optional[str] = None
        self._expires_at: Optional[datetime.datetime] = None
        self._lock = threading.Lock()

    def is_valid(self) -> bool:
        """Whether the held token is usable for at least the refresh buffer."""
        if self._token is None or self._expires_at is None:
            return False
        buffer = datetime.timedelta(seconds=TOKEN_REFRESH_BUFFER_SECONDS)
        return self._expires_at - buffer > self.clock()

    def get_token(self) -> str:
        """Return a valid access token, fetching a new one if needed."""
        with self._lock:
            if not self.is_valid():
                self._refresh()
            return self._token  # type: ignore[return-value]

    def clear(self) -> None:
        with self._lock:
            self._token = None
            self._expires_at = None

    def auth_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.get_token()}",
            "Content-Type": "application/json",
        }

    def _refresh(self) -> None:
        if not self.refresh_key:
            raise ConfigurationError("CHALLENGERMODE_REFRESH_KEY not set")

        try:
            response = self.session.post(
                f"{self.api_url}/v1/auth/access_keys",
                json={"refreshKey": self.refresh_key},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UpstreamError(f"Failed to get access token: {e}") from e

        if not response.ok:
            raise UpstreamError(
                f"Failed to get access token: {response.status_code} {response.text}"
            )

        try:
            result = AccessKeyResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            raise UpstreamError(f"Malformed access token response: {e}") from e

        expires_at = result.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=datetime.timezone.utc)

        self._token = result.value
        self._expires_at = expires_at
        logger.info(f"Refreshed Challengermode access token, expires {expires_at}")
