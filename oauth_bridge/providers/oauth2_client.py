"""Standards-compliant OAuth2 authorization code client.

Wraps authlib's httpx-based ``OAuth2Client`` with the handful of operations
the login flow needs: state generation, authorization URL, code exchange and
a userinfo call.
"""

import logging
from collections.abc import Mapping
from typing import Any

import httpx
from authlib.common.security import generate_token
from authlib.integrations.base_client import OAuthError
from authlib.integrations.httpx_client import OAuth2Client

from ..core.config import OwnerFieldMap, ProviderCredentials, ProviderEndpoints, settings
from ..tokens.access_token import AccessToken
from ..utils.errors import ConfigurationError, ProviderCommunicationError
from .resource_owner import GenericResourceOwner, ResourceOwner

logger = logging.getLogger(__name__)

# Built-in endpoint presets, selected by provider name
PROVIDER_PRESETS: dict[str, ProviderEndpoints] = {
    "google": ProviderEndpoints(
        authorization_endpoint="https://accounts.google.com/o/oauth2/v2/auth",
        token_endpoint="https://oauth2.googleapis.com/token",
        userinfo_endpoint="https://openidconnect.googleapis.com/v1/userinfo",
        scopes=["openid", "email", "profile"],
        owner_fields=OwnerFieldMap(id="sub", name="name", screen_name=None, email="email"),
    ),
    "github": ProviderEndpoints(
        authorization_endpoint="https://github.com/login/oauth/authorize",
        token_endpoint="https://github.com/login/oauth/access_token",
        userinfo_endpoint="https://api.github.com/user",
        scopes=["read:user", "user:email"],
        owner_fields=OwnerFieldMap(id="id", name="name", screen_name="login", email="email"),
    ),
}


def discover_endpoints(
    issuer: str,
    scopes: list[str] | None = None,
    owner_fields: OwnerFieldMap | None = None,
    timeout: float | None = None,
) -> ProviderEndpoints:
    """Build provider endpoints from an OpenID Connect discovery document.

    Args:
        issuer: Issuer URL (e.g., "https://accounts.example.com")
        scopes: Scopes to request (default: "openid email profile" when supported)
        owner_fields: Userinfo field map (default: standard OIDC claims)
        timeout: Request timeout in seconds (default: settings.http_timeout)

    Returns:
        ProviderEndpoints for the issuer

    Raises:
        ProviderCommunicationError: If the discovery document cannot be fetched
        ConfigurationError: If required endpoints are missing
    """
    discovery_url = f"{issuer.rstrip('/')}/.well-known/openid-configuration"
    logger.debug(f"Fetching OpenID configuration from: {discovery_url}")

    try:
        response = httpx.get(discovery_url, timeout=timeout or settings.http_timeout)
        response.raise_for_status()
        metadata = response.json()
    except httpx.HTTPStatusError as e:
        raise ProviderCommunicationError(
            f"Failed to fetch OpenID configuration: {e}",
            e.response.status_code,
            e.response.text,
        ) from e
    except (httpx.HTTPError, ValueError) as e:
        raise ProviderCommunicationError(f"Failed to fetch OpenID configuration: {e}") from e

    required = ("authorization_endpoint", "token_endpoint", "userinfo_endpoint")
    missing = [name for name in required if not metadata.get(name)]
    if missing:
        raise ConfigurationError(
            f"OpenID configuration for {issuer} missing required endpoints ({', '.join(missing)})"
        )

    if scopes is None:
        supported = metadata.get("scopes_supported") or ["openid", "email", "profile"]
        scopes = [s for s in ("openid", "email", "profile") if s in supported]

    endpoints = ProviderEndpoints(
        authorization_endpoint=metadata["authorization_endpoint"],
        token_endpoint=metadata["token_endpoint"],
        userinfo_endpoint=metadata["userinfo_endpoint"],
        scopes=scopes,
        owner_fields=owner_fields or OwnerFieldMap(id="sub", screen_name="preferred_username"),
    )
    logger.info(f"Discovered OAuth2 endpoints for {issuer}")
    return endpoints


class OAuth2ProviderClient:
    """Authorization code client for one configured OAuth2 provider."""

    def __init__(
        self,
        credentials: ProviderCredentials,
        endpoints: ProviderEndpoints,
        session: OAuth2Client | None = None,
        timeout: float | None = None,
    ):
        """
        Initialize the client.

        Args:
            credentials: Client credentials and redirect URI
            endpoints: Provider endpoints
            session: Preconfigured authlib client (default: built from credentials)
            timeout: Request timeout in seconds (default: settings.http_timeout)
        """
        self.credentials = credentials
        self.endpoints = endpoints
        self.session = session or OAuth2Client(
            client_id=credentials.client_id,
            client_secret=credentials.client_secret,
            scope=" ".join(endpoints.scopes) or None,
            redirect_uri=credentials.redirect_uri,
            timeout=timeout or settings.http_timeout,
        )
        self._state = ""

    def get_state(self) -> str:
        """Return the state generated by the last get_authorization_url() call."""
        return self._state

    def get_authorization_url(self, options: Mapping[str, Any] | None = None) -> str:
        """Build the authorization URL and remember its CSRF state.

        Args:
            options: Extra authorization parameters. ``state`` overrides the
                generated state; everything else (``scope``, ``prompt``...) is
                added to the URL.

        Returns:
            The authorization URL
        """
        params = dict(options or {})
        self._state = params.pop("state", None) or generate_token(32)

        url, _ = self.session.create_authorization_url(
            self.endpoints.authorization_endpoint, state=self._state, **params
        )
        logger.debug(f"Built authorization URL for {self.endpoints.authorization_endpoint}")
        return url

    def get_access_token(self, grant: str, **params: Any) -> AccessToken:
        """Call the token endpoint.

        Args:
            grant: Grant type, e.g. "authorization_code"
            **params: Grant parameters, e.g. ``code``

        Returns:
            The access token

        Raises:
            ProviderCommunicationError: If the token request fails
        """
        try:
            token = self.session.fetch_token(
                self.endpoints.token_endpoint, grant_type=grant, **params
            )
        except OAuthError as e:
            detail = f"{e.error}: {e.description}" if e.description else e.error
            raise ProviderCommunicationError(
                f"Failed to obtain access token: {detail}", 400, e.description
            ) from e
        except httpx.HTTPStatusError as e:
            raise ProviderCommunicationError(
                f"Failed to obtain access token: {e}",
                e.response.status_code,
                e.response.text,
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise ProviderCommunicationError(f"Failed to obtain access token: {e}") from e

        try:
            access_token = AccessToken.from_response(dict(token))
        except ValueError as e:
            raise ProviderCommunicationError(str(e), None, dict(token)) from e

        logger.info(f"Obtained access token from {self.endpoints.token_endpoint}")
        return access_token

    def get_resource_owner(self, access_token: AccessToken) -> ResourceOwner:
        """Fetch the userinfo document with the access token.

        Raises:
            ProviderCommunicationError: If the profile call fails or the profile
                carries no user id
        """
        self.session.token = {
            "access_token": access_token.token,
            "token_type": access_token.values.get("token_type", "Bearer"),
        }

        try:
            response = self.session.get(self.endpoints.userinfo_endpoint)
        except httpx.HTTPError as e:
            raise ProviderCommunicationError(f"Unable to retrieve user profile: {e}") from e

        if not response.is_success:
            raise ProviderCommunicationError(
                "Unable to retrieve user profile", response.status_code, response.text
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ProviderCommunicationError(
                "User profile response is not valid JSON", response.status_code, response.text
            ) from e

        id_field = self.endpoints.owner_fields.id
        if not isinstance(payload, dict) or payload.get(id_field) in (None, ""):
            raise ProviderCommunicationError(
                f"User profile has no '{id_field}' field", response.status_code, response.text
            )

        return GenericResourceOwner(payload, self.endpoints.owner_fields)
