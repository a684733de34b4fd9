"""
Handles authentication with the Jellyfin API.

A session authenticates exactly once, while it is being constructed. The
outcome is terminal: there is no retry, refresh or re-login transition.
"""

import asyncio
import logging
from enum import Enum
from typing import TYPE_CHECKING

import aiohttp
from pydantic import ValidationError

from jellyfin_cli.exceptions import (
    AuthorizationError,
    DeserializationError,
    TransportError,
)
from jellyfin_cli.models.catalog import AuthenticationResult

from .headers import build_login_headers

if TYPE_CHECKING:
    from .session import Session

log = logging.getLogger(__name__)

LOGIN_PATH = "/Users/authenticatebyname"


class AuthState(Enum):
    """States of the session's authentication."""

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"  # Terminal
    AUTH_FAILED = "auth_failed"  # Terminal

    @property
    def is_terminal(self) -> bool:
        return self in (AuthState.AUTHENTICATED, AuthState.AUTH_FAILED)


class JellyfinAuthenticator:
    """
    Manages the authentication flow for a Session.
    """

    def __init__(self, session: "Session"):
        """
        Initializes the authenticator.

        Args:
            session: The Session whose identity this authenticator sets.
        """
        self._session = session

    async def authenticate(self) -> AuthState:
        """
        Performs the single login attempt for the session.

        A rejected login or an unreadable response leaves the session in
        AUTH_FAILED with an empty token and user id; the reason is kept on
        `session.auth_error`. Only network failures are raised.

        Returns:
            The terminal state the session ended up in.

        Raises:
            TransportError: If the server could not be reached.
            RuntimeError: If the session has already attempted to authenticate.
        """
        session = self._session
        if session.state is not AuthState.UNAUTHENTICATED:
            raise RuntimeError(
                f"Session has already authenticated (state: {session.state.value})."
            )
        session._transition(AuthState.AUTHENTICATING)

        credentials = session.credentials
        if credentials is None:
            log.warning("[yellow]No credentials configured; skipping login.[/yellow]")
            session._fail(AuthorizationError("No credentials were provided."))
            return session.state

        log.info(f"Authenticating as: {credentials.username}")
        try:
            result = await self._login()
        except (AuthorizationError, DeserializationError) as e:
            log.error(f"[red]Error authenticating: {e}[/red]")
            session._fail(e)
            return session.state

        session._authenticated(result.access_token, result.user.id)
        log.info(f"Successfully authenticated as: {result.user.name or result.user.id}")
        return session.state

    async def _login(self) -> AuthenticationResult:
        """Sends the login request and parses the token and user id out of it."""
        session = self._session
        response = await session.transport.request(
            "POST",
            session.url(LOGIN_PATH),
            headers=build_login_headers(session.identity),
            json=session.credentials.login_payload(),
        )
        async with response:
            if not response.ok:
                raise AuthorizationError(
                    f"Login rejected. Status: {response.status}",
                    status=response.status,
                )
            try:
                body = await response.json(content_type=None)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                raise TransportError(f"Failed to read login response: {e}") from e
            except ValueError as e:
                raise DeserializationError(f"Login response is not JSON: {e}") from e

        try:
            result = AuthenticationResult.model_validate(body)
        except ValidationError as e:
            raise DeserializationError(f"Unexpected login response: {e}") from e

        if not result.access_token or not result.user.id:
            raise DeserializationError("Login response has an empty token or user id.")
        return result

