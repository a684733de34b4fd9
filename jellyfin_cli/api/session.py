"""
The authenticated session every catalog and streaming call is made against.
"""

import asyncio
import logging
from typing import Any, Optional

import aiohttp

from jellyfin_cli.exceptions import (
    AuthorizationError,
    DeserializationError,
    JellyfinCliError,
    ServerError,
    TransportError,
)
from jellyfin_cli.models.config import ClientIdentity, Credentials

from .auth import AuthState, JellyfinAuthenticator
from .headers import build_auth_headers
from .transport import Transport

log = logging.getLogger(__name__)


class Session:
    """
    Owns the transport, the credentials and the identity granted by the server.

    Build one with `await Session.create(...)`, which performs the single login
    attempt. `access_token` and `user_id` are either both empty (login failed)
    or both set; they never change after construction. A failed session is
    still usable: its calls simply fail authorization at the server.
    """

    def __init__(
        self,
        base_url: str,
        credentials: Optional[Credentials] = None,
        *,
        transport: Optional[Transport] = None,
        identity: Optional[ClientIdentity] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.credentials = credentials
        self.identity = identity or ClientIdentity()
        self.transport = transport or Transport()
        self.auth_error: Optional[JellyfinCliError] = None

        # State set by the authenticator
        self._state = AuthState.UNAUTHENTICATED
        self._access_token = ""
        self._user_id = ""
        self._authenticator = JellyfinAuthenticator(self)

    @classmethod
    async def create(
        cls,
        base_url: str,
        credentials: Optional[Credentials],
        *,
        transport: Optional[Transport] = None,
        identity: Optional[ClientIdentity] = None,
    ) -> "Session":
        """
        Constructs a session and authenticates it once.

        Raises:
            TransportError: If the server could not be reached. The transport
                is closed before the error propagates.
        """
        session = cls(base_url, credentials, transport=transport, identity=identity)
        try:
            await session._authenticator.authenticate()
        except (JellyfinCliError, asyncio.CancelledError):
            await session.close()
            raise
        return session

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def access_token(self) -> str:
        return self._access_token

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def is_authenticated(self) -> bool:
        return self._state is AuthState.AUTHENTICATED

    def _transition(self, state: AuthState) -> None:
        if self._state.is_terminal:
            raise RuntimeError(f"Session is already {self._state.value}.")
        log.debug(f"Session state: {self._state.value} -> {state.value}")
        self._state = state

    def _authenticated(self, access_token: str, user_id: str) -> None:
        self._transition(AuthState.AUTHENTICATED)
        self._access_token = access_token
        self._user_id = user_id

    def _fail(self, error: JellyfinCliError) -> None:
        self._transition(AuthState.AUTH_FAILED)
        self._access_token = ""
        self._user_id = ""
        self.auth_error = error

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def auth_headers(self) -> dict[str, str]:
        return build_auth_headers(self.identity, self._access_token)

    async def get(
        self, path: str, params: Optional[dict[str, Any]] = None
    ) -> aiohttp.ClientResponse:
        """
        Issues an authorized GET and returns the unread response.

        Raises:
            TransportError: On connection-level failure.
            AuthorizationError: If the server rejects the access token.
        """
        response = await self.transport.request(
            "GET", self.url(path), headers=self.auth_headers(), params=params
        )
        if response.status in (401, 403):
            response.release()
            raise AuthorizationError(
                f"Server rejected the access token for {path} "
                f"(status {response.status}).",
                status=response.status,
            )
        return response

    async def get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        """
        Issues an authorized GET and decodes the JSON body.

        Raises:
            TransportError: On connection-level failure, including while reading.
            AuthorizationError: If the server rejects the access token.
            ServerError: On any other non-2xx status.
            DeserializationError: If the body is not JSON.
        """
        response = await self.get(path, params)
        async with response:
            if not response.ok:
                raise ServerError(response.status)
            try:
                return await response.json(content_type=None)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                raise TransportError(f"Failed to read response for {path}: {e}") from e
            except ValueError as e:
                raise DeserializationError(f"Response for {path} is not JSON: {e}") from e

    async def close(self) -> None:
        await self.transport.close()

    async def __aenter__(self) -> "Session":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __repr__(self) -> str:
        return (
            f"Session(base_url={self.base_url!r}, state={self._state.value}, "
            f"user_id={self._user_id!r})"
        )
