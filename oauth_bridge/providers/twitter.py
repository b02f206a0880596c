"""Twitter login over OAuth1, exposed through the common provider contract.

OAuth1 has no authorization code or state parameter. Instead:

1. a temporary (request) token is fetched from Twitter and saved server side
2. the user authorizes that token on Twitter
3. Twitter redirects back with the token and a verifier
4. token + secret + verifier are exchanged for an access token

The verifier plays the role of the auth code, and the temporary token, whose
secret never reaches the browser, replaces the CSRF state.
"""

import logging
import re
from collections.abc import Callable, Mapping
from typing import Any

import httpx
from authlib.integrations.base_client import OAuthError
from authlib.integrations.httpx_client import OAuth1Client

from ..core.config import ProviderCredentials, settings
from ..tokens.access_token import AccessToken
from ..tokens.field_mapping import TWITTER_ACCESS_TOKEN_FIELDS, remap_fields
from ..tokens.temporary_token import TemporaryToken
from ..tokens.token_store import TemporaryTokenStore
from ..utils.errors import (
    CallbackValidationError,
    ConfigurationError,
    NotFoundError,
    ProviderCommunicationError,
    UserDeniedAccessError,
)
from .callback import check_provider_error, normalize_params, require_param
from .resource_owner import TwitterResourceOwner

logger = logging.getLogger(__name__)

REQUEST_TOKEN_PATH = "/oauth/request_token"
AUTHORIZE_PATH = "/oauth/authorize"
ACCESS_TOKEN_PATH = "/oauth/access_token"
VERIFY_CREDENTIALS_PATH = "/1.1/account/verify_credentials.json"

# authlib reports rejected token calls as "Token request failed with code 401, ..."
_STATUS_IN_DESCRIPTION = re.compile(r"\bcode (\d{3})\b")


def _status_from_oauth_error(error: OAuthError) -> int:
    """Return the HTTP status authlib saw, or 400 when the description omits it."""
    match = _STATUS_IN_DESCRIPTION.search(error.description or "")
    return int(match.group(1)) if match else 400


class TwitterOAuth1Provider:
    """Twitter OAuth1 login with OAuth2-shaped operations."""

    def __init__(
        self,
        credentials: ProviderCredentials,
        token_store: TemporaryTokenStore,
        api_base: str | None = None,
        timeout: float | None = None,
        client_factory: Callable[..., OAuth1Client] = OAuth1Client,
    ):
        """
        Create a Twitter provider.

        Args:
            credentials: Consumer key, consumer secret and callback URL
            token_store: Where the temporary token lives between the redirect
                and the callback. Must be scoped to the user's session.
            api_base: Twitter base URL (default: settings.twitter_api_base)
            timeout: Request timeout in seconds (default: settings.http_timeout)
            client_factory: Builds the signing HTTP client; takes the same
                arguments as authlib's OAuth1Client
        """
        self._client_id = credentials.client_id
        self._client_secret = credentials.client_secret
        self._callback_url = credentials.redirect_uri
        self._token_store = token_store
        self._api_base = (api_base or settings.twitter_api_base).rstrip("/")
        self._timeout = timeout or settings.http_timeout
        self._client_factory = client_factory

    def _client(self, token: str | None = None, token_secret: str | None = None, **kwargs: Any):
        return self._client_factory(
            self._client_id,
            self._client_secret,
            token=token,
            token_secret=token_secret,
            timeout=self._timeout,
            **kwargs,
        )

    def _load_temporary_token(self, params: Mapping[str, str] | None = None) -> TemporaryToken:
        try:
            return self._token_store.load()
        except NotFoundError as e:
            raise CallbackValidationError(
                "No temporary token stored for this login attempt (stale or forged callback)",
                params,
            ) from e

    def get_state(self) -> str:
        """Always empty: OAuth1 relies on the temporary token instead of a state parameter."""
        return ""

    def get_authorization_url(self, options: Mapping[str, Any] | None = None) -> str:
        """Fetch a temporary token from Twitter, store it and build the authorize URL.

        Args:
            options: Extra authorize parameters, e.g. ``force_login`` or ``screen_name``

        Returns:
            The Twitter authorize URL

        Raises:
            ProviderCommunicationError: If the request token cannot be retrieved
        """
        with self._client(redirect_uri=self._callback_url) as client:
            try:
                request_token = client.fetch_request_token(self._api_base + REQUEST_TOKEN_PATH)
            except OAuthError as e:
                raise ProviderCommunicationError(
                    "Unable to retrieve Twitter request_token",
                    _status_from_oauth_error(e),
                    e.description,
                ) from e
            except httpx.HTTPError as e:
                raise ProviderCommunicationError(
                    f"Unable to retrieve Twitter request_token: {e}"
                ) from e

            if not request_token.get("oauth_token") or not request_token.get("oauth_token_secret"):
                raise ProviderCommunicationError(
                    "Twitter request_token response is incomplete", None, dict(request_token)
                )

            temporary_token = TemporaryToken(
                token_value=request_token["oauth_token"],
                token_secret=request_token["oauth_token_secret"],
            )
            self._token_store.save(temporary_token)

            url = client.create_authorization_url(
                self._api_base + AUTHORIZE_PATH,
                request_token=temporary_token.token_value,
                **dict(options or {}),
            )

        logger.debug("Stored Twitter temporary token and built authorize URL")
        return url

    def check_callback(
        self, params: Mapping[str, Any], expected_state: str | None = None
    ) -> None:
        """Check that the callback matches the stored temporary token and has a verifier.

        ``expected_state`` is ignored.

        Raises:
            UserDeniedAccessError: If the user cancelled on Twitter
            ProviderCommunicationError: If the callback carries another error
            CallbackValidationError: If the token is missing, unknown or
                mismatched, or the verifier is missing
        """
        params = normalize_params(params)

        # Twitter signals a cancelled authorization with ?denied=<token>
        if "denied" in params:
            raise UserDeniedAccessError(params)
        check_provider_error(params)

        oauth_token = require_param(params, "oauth_token", "No oauth_token received on callback")
        temporary_token = self._load_temporary_token(params)

        if oauth_token != temporary_token.token_value:
            raise CallbackValidationError(
                f"oauth_token received on callback ({oauth_token}) doesn't match "
                f"the one originally passed to Twitter ({temporary_token.token_value})",
                params,
            )

        require_param(params, "oauth_verifier", "Twitter did not send back an oauth_verifier")

    def get_auth_code_from_callback(self, params: Mapping[str, Any]) -> str:
        """Return the OAuth1 verifier."""
        return normalize_params(params)["oauth_verifier"]

    def get_access_token_from_auth_code(self, auth_code: str) -> AccessToken:
        """Exchange the verifier and the stored temporary token for an access token.

        The stored temporary token is cleared once Twitter accepts the exchange.

        Raises:
            CallbackValidationError: If no temporary token is stored
            ProviderCommunicationError: If the call to Twitter fails
        """
        temporary_token = self._load_temporary_token()

        with self._client(
            token=temporary_token.token_value, token_secret=temporary_token.token_secret
        ) as client:
            try:
                response = client.fetch_access_token(
                    self._api_base + ACCESS_TOKEN_PATH, verifier=auth_code
                )
            except OAuthError as e:
                raise ProviderCommunicationError(
                    "Twitter call to convert auth code to access token failed",
                    _status_from_oauth_error(e),
                    e.description,
                ) from e
            except httpx.HTTPError as e:
                raise ProviderCommunicationError(
                    f"Twitter call to convert auth code to access token failed: {e}"
                ) from e

        self._token_store.clear()

        values = remap_fields(response, TWITTER_ACCESS_TOKEN_FIELDS)
        try:
            access_token = AccessToken.from_response(values)
        except ValueError as e:
            raise ProviderCommunicationError(str(e), None, values) from e

        logger.info(f"Obtained Twitter access token for user {access_token.resource_owner_id}")
        return access_token

    def get_resource_owner(self, access_token: AccessToken) -> TwitterResourceOwner:
        """Fetch the Twitter user's profile.

        Raises:
            ConfigurationError: If the token carries no ``oauth_token_secret``
            ProviderCommunicationError: If Twitter does not answer with 200 or the
                profile carries no user id
        """
        token_secret = access_token.values.get("oauth_token_secret")
        if not token_secret:
            raise ConfigurationError(
                "Access token has no oauth_token_secret; it was not issued by Twitter"
            )

        with self._client(token=access_token.token, token_secret=token_secret) as client:
            try:
                response = client.get(
                    self._api_base + VERIFY_CREDENTIALS_PATH,
                    params={
                        "include_entities": "false",
                        "skip_status": "true",
                        "include_email": "true",
                    },
                )
            except httpx.HTTPError as e:
                raise ProviderCommunicationError(
                    f"Unable to retrieve user profile from Twitter: {e}"
                ) from e

        if response.status_code != 200:
            raise ProviderCommunicationError(
                "Unable to retrieve user profile from Twitter",
                response.status_code,
                response.text,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ProviderCommunicationError(
                "Twitter profile response is not valid JSON", response.status_code, response.text
            ) from e

        owner_id = access_token.resource_owner_id or payload.get("id_str") or payload.get("id")
        if not owner_id:
            raise ProviderCommunicationError(
                "Twitter profile has no user id", response.status_code, response.text
            )
        owner_id = str(owner_id)
        return TwitterResourceOwner(owner_id, payload)
