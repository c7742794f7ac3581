"""
Access token sources.

The collector only needs ``await source.get_token()``; how the token is
obtained and cached is up to the implementation.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

import aiohttp

from ..const import DEFAULT_REQUEST_TIMEOUT, DEFAULT_TOKEN_URL, TOKEN_EXPIRY_LEEWAY
from ..logging import get_logger
from .exceptions import AuthError


logger = get_logger("api.auth")


class TokenSource(ABC):
    """Supplies bearer tokens for API calls."""

    @abstractmethod
    async def get_token(self) -> str:
        """
        Return a currently valid access token.

        Raises:
            AuthError: If no token can be obtained
        """
        pass


class ClientCredentialsTokenSource(TokenSource):
    """
    OAuth2 client-credentials token source.

    Tokens are cached until shortly before they expire. Concurrent
    callers wait on the same refresh.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        client_id: str,
        client_secret: str,
        scopes: Sequence[str] = (),
        token_url: str = DEFAULT_TOKEN_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._session = session
        self.client_id = client_id
        self._client_secret = client_secret
        self.scopes = list(scopes)
        self.token_url = token_url
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._clock = clock

        self._access_token: str | None = None
        self._expires_at: float | None = None
        self._lock = asyncio.Lock()

    @property
    def valid(self) -> bool:
        """Check if the cached token can still be used."""
        if self._access_token is None:
            return False
        if self._expires_at is None:
            return True
        return self._clock() < self._expires_at - TOKEN_EXPIRY_LEEWAY

    async def get_token(self) -> str:
        async with self._lock:
            if not self.valid:
                await self._refresh()
            if self._access_token is None:
                raise AuthError("no access token available")
            return self._access_token

    async def _refresh(self) -> None:
        """Request a new token from the token endpoint."""
        form = {"grant_type": "client_credentials"}
        if self.scopes:
            form["scope"] = " ".join(self.scopes)

        headers = {
            "Authorization": aiohttp.BasicAuth(self.client_id, self._client_secret).encode(),
            "Accept": "application/json",
        }

        logger.debug(f"Requesting access token from {self.token_url}")

        try:
            async with self._session.post(
                self.token_url,
                data=form,
                headers=headers,
                timeout=self._timeout,
            ) as response:
                if response.status >= 300:
                    body = await response.text(errors="replace")
                    raise AuthError(f"token endpoint returned {response.status}: {body.strip()[:200]}")
                try:
                    payload = await response.json(content_type=None)
                except ValueError as e:
                    raise AuthError(f"invalid token response: {e}") from e

        except asyncio.TimeoutError as e:
            raise AuthError("timeout requesting access token") from e
        except aiohttp.ClientError as e:
            raise AuthError(f"token request failed: {e}") from e

        if not isinstance(payload, dict) or not payload.get("access_token"):
            raise AuthError("token response has no access_token")

        self._access_token = str(payload["access_token"])

        expires_in = payload.get("expires_in")
        if isinstance(expires_in, (int, float)) and not isinstance(expires_in, bool) and expires_in > 0:
            self._expires_at = self._clock() + float(expires_in)
        else:
            self._expires_at = None

        logger.debug(f"Obtained access token (expires in {expires_in}s)")
