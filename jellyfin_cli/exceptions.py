"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class JellyfinCliError(Exception):
    """Base exception for all application-specific errors."""


class TransportError(JellyfinCliError):
    """Raised when a request fails at the network level (DNS, TLS, timeout, reset)."""


class StreamInterruptedError(TransportError):
    """Raised when an audio stream is cut off before the server finished sending it."""


class AuthorizationError(JellyfinCliError):
    """Raised when the server rejects the login or the session's access token."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class ServerError(JellyfinCliError):
    """Raised when an authorized call returns a non-2xx status."""

    def __init__(self, status: int, message: str | None = None):
        super().__init__(message or f"Server responded with status {status}.")
        self.status = status


class DeserializationError(JellyfinCliError):
    """Raised when a response body does not match the expected schema."""


class MetadataIncompleteError(JellyfinCliError):
    """
    Raised when a track's technical metadata lacks the numeric fields needed
    for playback (channels, sample rate, run time or file size).
    """


class ConfigurationError(JellyfinCliError):
    """Raised for issues related to configuration loading or validation."""
