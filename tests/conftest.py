"""Pytest configuration and fixtures for oauth-bridge tests."""

from unittest.mock import MagicMock

import pytest

from oauth_bridge.core.config import OwnerFieldMap, ProviderCredentials, ProviderEndpoints
from oauth_bridge.providers.oauth2_adapter import OAuth2Adapter
from oauth_bridge.providers.oauth2_client import OAuth2ProviderClient
from oauth_bridge.providers.twitter import TwitterOAuth1Provider
from oauth_bridge.tokens.temporary_token import TemporaryToken
from oauth_bridge.tokens.token_store import SessionTemporaryTokenStore

TWITTER_API = "https://api.twitter.com"


@pytest.fixture
def credentials() -> ProviderCredentials:
    """Create sample client credentials."""
    return ProviderCredentials(
        client_id="test_client_id",
        client_secret="test_client_secret",  # pragma: allowlist secret
        redirect_uri="https://app.example.com/login/callback",
    )


@pytest.fixture
def session() -> dict:
    """A plain dict standing in for a user session."""
    return {}


@pytest.fixture
def token_store(session: dict) -> SessionTemporaryTokenStore:
    """Create a session-backed temporary token store."""
    return SessionTemporaryTokenStore(session)


@pytest.fixture
def temporary_token() -> TemporaryToken:
    """Create a sample temporary token."""
    return TemporaryToken(token_value="temp_token_T1", token_secret="temp_secret_S1")


@pytest.fixture
def oauth1_client() -> MagicMock:
    """Mock authlib OAuth1Client usable as a context manager."""
    client = MagicMock()
    client.__enter__.return_value = client
    client.__exit__.return_value = False
    client.create_authorization_url.side_effect = (
        lambda url, request_token=None, **kwargs: f"{url}?oauth_token={request_token}"
    )
    return client


@pytest.fixture
def oauth1_factory(oauth1_client: MagicMock) -> MagicMock:
    """Factory returning the mock OAuth1 client."""
    return MagicMock(return_value=oauth1_client)


@pytest.fixture
def twitter_provider(
    credentials: ProviderCredentials,
    token_store: SessionTemporaryTokenStore,
    oauth1_factory: MagicMock,
) -> TwitterOAuth1Provider:
    """Create a Twitter provider wired to the mock OAuth1 client."""
    return TwitterOAuth1Provider(
        credentials,
        token_store,
        api_base=TWITTER_API,
        timeout=5.0,
        client_factory=oauth1_factory,
    )


@pytest.fixture
def endpoints() -> ProviderEndpoints:
    """Create OAuth2 endpoints for a fictional provider."""
    return ProviderEndpoints(
        authorization_endpoint="https://auth.example.com/authorize",
        token_endpoint="https://auth.example.com/token",
        userinfo_endpoint="https://api.example.com/me",
        scopes=["profile", "email"],
        owner_fields=OwnerFieldMap(id="id", name="name", screen_name="login", email="email"),
    )


@pytest.fixture
def oauth2_session() -> MagicMock:
    """Mock authlib OAuth2Client."""
    session = MagicMock()
    session.create_authorization_url.side_effect = lambda url, state=None, **kwargs: (
        f"{url}?response_type=code&state={state}",
        state,
    )
    return session


@pytest.fixture
def oauth2_client(
    credentials: ProviderCredentials, endpoints: ProviderEndpoints, oauth2_session: MagicMock
) -> OAuth2ProviderClient:
    """Create an OAuth2 client over the mock session."""
    return OAuth2ProviderClient(credentials, endpoints, session=oauth2_session)


@pytest.fixture
def oauth2_adapter(oauth2_client: OAuth2ProviderClient) -> OAuth2Adapter:
    """Create an OAuth2 adapter over the mock client."""
    return OAuth2Adapter(oauth2_client)
