import pytest

from jellyfin_cli.api import AuthState, Session, list_artists
from jellyfin_cli.api.headers import CLIENT_HEADER, TOKEN_HEADER
from jellyfin_cli.exceptions import (
    AuthorizationError,
    DeserializationError,
    TransportError,
)

from .mock_jellyfin import (
    ACCESS_TOKEN,
    LOGIN_PATH,
    USER_ID,
    json_handler,
    status_handler,
)


@pytest.mark.asyncio
async def test_valid_login_authenticates(session):
    assert session.state is AuthState.AUTHENTICATED
    assert session.is_authenticated
    assert session.access_token == ACCESS_TOKEN
    assert session.user_id == USER_ID
    assert session.auth_error is None


@pytest.mark.asyncio
async def test_login_sends_credentials_and_client_identity(jellyfin, session):
    assert jellyfin.login_bodies == [{"Username": "alice", "Pw": "s3cret"}]
    headers = jellyfin.requests_to(LOGIN_PATH)[0]["headers"]
    assert headers[CLIENT_HEADER].startswith('MediaBrowser Client="jellyfin-cli"')
    assert 'DeviceId="None"' in headers[CLIENT_HEADER]
    assert TOKEN_HEADER not in headers


@pytest.mark.asyncio
async def test_rejected_login_fails_without_raising(jellyfin, credentials):
    jellyfin.route("POST", LOGIN_PATH, status_handler(401, "Invalid user"))

    async with await Session.create(jellyfin.base_url, credentials) as session:
        assert session.state is AuthState.AUTH_FAILED
        assert session.access_token == ""
        assert session.user_id == ""
        assert isinstance(session.auth_error, AuthorizationError)
        assert session.auth_error.status == 401


@pytest.mark.asyncio
async def test_login_server_error_fails(jellyfin, credentials):
    jellyfin.route("POST", LOGIN_PATH, status_handler(500))

    async with await Session.create(jellyfin.base_url, credentials) as session:
        assert session.state is AuthState.AUTH_FAILED
        assert session.access_token == ""


@pytest.mark.asyncio
async def test_login_body_without_user_id_fails(jellyfin, credentials):
    jellyfin.route("POST", LOGIN_PATH, json_handler({"AccessToken": ACCESS_TOKEN}))

    async with await Session.create(jellyfin.base_url, credentials) as session:
        assert session.state is AuthState.AUTH_FAILED
        # Never a token without a user id
        assert session.access_token == ""
        assert session.user_id == ""
        assert isinstance(session.auth_error, DeserializationError)


@pytest.mark.asyncio
async def test_login_body_with_empty_token_fails(jellyfin, credentials):
    jellyfin.route(
        "POST", LOGIN_PATH, json_handler({"AccessToken": "", "User": {"Id": USER_ID}})
    )

    async with await Session.create(jellyfin.base_url, credentials) as session:
        assert session.state is AuthState.AUTH_FAILED
        assert session.user_id == ""


@pytest.mark.asyncio
async def test_login_body_not_json_fails(jellyfin, credentials):
    jellyfin.route("POST", LOGIN_PATH, status_handler(200, "<html>down</html>"))

    async with await Session.create(jellyfin.base_url, credentials) as session:
        assert session.state is AuthState.AUTH_FAILED
        assert isinstance(session.auth_error, DeserializationError)


@pytest.mark.asyncio
async def test_missing_credentials_skip_login(jellyfin):
    async with await Session.create(jellyfin.base_url, None) as session:
        assert session.state is AuthState.AUTH_FAILED
        assert isinstance(session.auth_error, AuthorizationError)
    assert jellyfin.requests == []


@pytest.mark.asyncio
async def test_unreachable_server_raises_transport_error(credentials):
    with pytest.raises(TransportError):
        await Session.create("http://127.0.0.1:1", credentials)


@pytest.mark.asyncio
async def test_session_authenticates_only_once(session):
    with pytest.raises(RuntimeError):
        await session._authenticator.authenticate()
    assert session.access_token == ACCESS_TOKEN


@pytest.mark.asyncio
async def test_authorized_calls_carry_token_and_client_headers(jellyfin, session):
    jellyfin.route("GET", "/Artists", json_handler({"Items": []}))

    await list_artists(session)

    headers = jellyfin.requests_to("/Artists")[0]["headers"]
    assert headers[TOKEN_HEADER] == ACCESS_TOKEN
    assert headers[CLIENT_HEADER].startswith("MediaBrowser ")


@pytest.mark.asyncio
async def test_failed_session_still_sends_requests(jellyfin, credentials):
    jellyfin.route("POST", LOGIN_PATH, status_handler(401))
    jellyfin.route("GET", "/Artists", status_handler(401))

    async with await Session.create(jellyfin.base_url, credentials) as session:
        with pytest.raises(AuthorizationError):
            await list_artists(session)

    headers = jellyfin.requests_to("/Artists")[0]["headers"]
    assert headers[TOKEN_HEADER] == ""


def test_base_url_trailing_slash_is_dropped():
    session = Session("http://jellyfin.local:8096/")
    assert session.url("/Artists") == "http://jellyfin.local:8096/Artists"
