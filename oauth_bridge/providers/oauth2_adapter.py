"""Provider adapter for standard OAuth2 providers.

Passes almost everything straight through to the underlying
:class:`OAuth2ProviderClient`; its only job is to expose the common provider
contract so OAuth2 providers can be used interchangeably with Twitter.
"""

from collections.abc import Mapping
from typing import Any

from ..tokens.access_token import AccessToken
from .callback import check_provider_error, check_state, normalize_params, require_param
from .oauth2_client import OAuth2ProviderClient
from .resource_owner import ResourceOwner


class OAuth2Adapter:
    """Common provider contract over an OAuth2 authorization code client."""

    def __init__(self, provider: OAuth2ProviderClient):
        """
        Initialize the adapter.

        Args:
            provider: The OAuth2 client, already configured
        """
        self._provider = provider

    def get_state(self) -> str:
        return self._provider.get_state()

    def get_authorization_url(self, options: Mapping[str, Any] | None = None) -> str:
        return self._provider.get_authorization_url(options)

    def check_callback(
        self, params: Mapping[str, Any], expected_state: str | None = None
    ) -> None:
        """Validate error, state and code parameters, in that order.

        Raises:
            UserDeniedAccessError: If the user denied access
            ProviderCommunicationError: If the provider returned another error
            CallbackValidationError: If state is missing/mismatched or code is missing
        """
        params = normalize_params(params)
        check_provider_error(params)
        check_state(params, expected_state)
        require_param(params, "code", "No authorization code received from provider")

    def get_auth_code_from_callback(self, params: Mapping[str, Any]) -> str:
        return normalize_params(params)["code"]

    def get_access_token_from_auth_code(self, auth_code: str) -> AccessToken:
        return self._provider.get_access_token("authorization_code", code=auth_code)

    def get_resource_owner(self, access_token: AccessToken) -> ResourceOwner:
        return self._provider.get_resource_owner(access_token)

    def get_provider(self) -> OAuth2ProviderClient:
        """Access the underlying client for further authenticated requests."""
        return self._provider
