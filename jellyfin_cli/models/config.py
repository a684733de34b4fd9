"""
Pydantic models for application configuration and login credentials.
"""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator


@dataclass(frozen=True)
class ClientIdentity:
    """How this client introduces itself to the server."""

    client: str = "jellyfin-cli"
    device: str = "jellyfin-cli"
    device_id: str = "None"
    version: str = "10.4.3"

    def authorization_value(self) -> str:
        """Formats the value of the client-identification header."""
        return (
            f'MediaBrowser Client="{self.client}", Device="{self.device}", '
            f'DeviceId="{self.device_id}", Version="{self.version}"'
        )


class Credentials(BaseModel):
    """Username and password, serialized with the login endpoint's key names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    username: str = Field(alias="Username")
    password: str = Field(alias="Pw", repr=False)

    def login_payload(self) -> dict[str, str]:
        """Body of the `authenticatebyname` request."""
        return self.model_dump(by_alias=True)


class ServerConfig(BaseModel):
    """A validated configuration model for the application."""

    host: str
    username: str
    password: str = Field("", repr=False)
    device_id: str = "None"

    # Internal fields not loaded from INI file
    config_path: str = Field("", repr=False)

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Requires an absolute http(s) URL and drops any trailing slash."""
        if not v:
            raise ValueError("Host cannot be empty.")
        if not v.startswith(("http://", "https://")):
            raise ValueError(
                f"Host must start with http:// or https://, but got: {v}"
            )
        return v.rstrip("/")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not v:
            raise ValueError("Username cannot be empty.")
        return v

    @property
    def credentials(self) -> Credentials:
        return Credentials(username=self.username, password=self.password)

    @property
    def identity(self) -> ClientIdentity:
        return ClientIdentity(device_id=self.device_id)

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"config_path"}
        return {key for key in cls.model_fields if key not in internal_fields}
