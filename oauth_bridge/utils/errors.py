"""Error types for the OAuth bridge."""

import pprint
from collections.abc import Mapping
from typing import Any


class OAuthBridgeError(Exception):
    """Base exception for OAuth bridge errors."""

    pass


class UserDeniedAccessError(OAuthBridgeError):
    """Raised when the user declines the authorization request at the provider.

    This is an expected outcome of the flow, not a fault: the host application
    normally just shows the user a message. The raw callback parameters are
    kept for diagnostics.
    """

    status_code = 400

    def __init__(self, params: Mapping[str, Any] | None = None):
        super().__init__("OAuth user denied access")
        self.request_params: dict[str, Any] = dict(params or {})

    def request_params_as_string(self) -> str:
        """Render the callback parameters for log or debug output."""
        return pprint.pformat(self.request_params)


class ProviderCommunicationError(OAuthBridgeError):
    """Raised when a call to the provider fails or the provider reports an error."""

    def __init__(self, message: str, status_code: int | None = None, response_body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class CallbackValidationError(OAuthBridgeError):
    """Raised when the provider callback is missing values or does not match the attempt."""

    status_code = 400

    def __init__(self, message: str, params: Mapping[str, Any] | None = None):
        super().__init__(message)
        self.request_params: dict[str, Any] = dict(params or {})


class NotFoundError(OAuthBridgeError):
    """Raised when a token store holds no entry for the current attempt."""

    pass


# Configuration errors
class ConfigurationError(OAuthBridgeError):
    """Raised when provider configuration is missing or invalid."""

    pass


class UnsupportedProtocolError(ConfigurationError):
    """Raised when a provider is configured with an unknown protocol."""

    def __init__(self, protocol: str):
        super().__init__(f"Unsupported provider protocol: {protocol}")
        self.protocol = protocol
