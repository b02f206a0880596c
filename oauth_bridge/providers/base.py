"""Common contract for OAuth1 and OAuth2 login providers.

Every provider is driven through the same sequence of calls::

    url = provider.get_authorization_url()
    state = provider.get_state()          # keep in the user's session
    # ... redirect the user to ``url``; the provider redirects back ...
    provider.check_callback(params, expected_state=state)
    code = provider.get_auth_code_from_callback(params)
    token = provider.get_access_token_from_auth_code(code)
    owner = provider.get_resource_owner(token)

Call order is the caller's responsibility and is not checked.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from ..tokens.access_token import AccessToken
from .resource_owner import ResourceOwner


class FlowState(str, Enum):
    """Stages of a login attempt, for callers that track progress."""

    START = "start"
    AUTHORIZATION_URL_ISSUED = "authorization_url_issued"
    CALLBACK_RECEIVED = "callback_received"
    CALLBACK_VALIDATED = "callback_validated"
    TOKEN_EXCHANGED = "token_exchanged"
    OWNER_FETCHED = "owner_fetched"
    FAILED = "failed"


@runtime_checkable
class Provider(Protocol):
    """Operations shared by all login providers."""

    def get_state(self) -> str:
        """Return the CSRF state for the current attempt.

        Call get_authorization_url() first so the state exists. Providers
        without a state parameter return an empty string.
        """
        ...

    def get_authorization_url(self, options: Mapping[str, Any] | None = None) -> str:
        """Return the URL to redirect the user to.

        Raises:
            ProviderCommunicationError: If the provider must be called to build
                the URL (OAuth1 request token) and the call fails
        """
        ...

    def check_callback(
        self, params: Mapping[str, Any], expected_state: str | None = None
    ) -> None:
        """Validate the parameters of the redirect back from the provider.

        Raises:
            UserDeniedAccessError: If the user declined
            ProviderCommunicationError: If the provider reported another error
            CallbackValidationError: If required values are missing or do not match
        """
        ...

    def get_auth_code_from_callback(self, params: Mapping[str, Any]) -> str:
        """Return the exchange code. Call check_callback() first."""
        ...

    def get_access_token_from_auth_code(self, auth_code: str) -> AccessToken:
        """Exchange the code for an access token.

        Raises:
            ProviderCommunicationError: If the call to the provider fails
        """
        ...

    def get_resource_owner(self, access_token: AccessToken) -> ResourceOwner:
        """Fetch the authenticated user's profile.

        Raises:
            ProviderCommunicationError: If the profile call fails
        """
        ...
