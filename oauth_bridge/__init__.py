"""OAuth Bridge - one login contract for OAuth1 and OAuth2 providers."""

from .core.config import ProviderConfig, ProviderCredentials, ProviderEndpoints, Settings
from .providers import (
    FlowState,
    GenericResourceOwner,
    OAuth2Adapter,
    OAuth2ProviderClient,
    Provider,
    ResourceOwner,
    TwitterOAuth1Provider,
    TwitterResourceOwner,
    create_provider,
    parse_callback_url,
)
from .tokens import (
    AccessToken,
    EncryptedTemporaryTokenStore,
    InMemoryTemporaryTokenStore,
    SessionTemporaryTokenStore,
    TemporaryToken,
    TemporaryTokenStore,
)
from .utils.errors import (
    CallbackValidationError,
    ConfigurationError,
    NotFoundError,
    OAuthBridgeError,
    ProviderCommunicationError,
    UnsupportedProtocolError,
    UserDeniedAccessError,
)

__version__ = "0.1.0"

__all__ = [
    # Providers
    "Provider",
    "FlowState",
    "create_provider",
    "parse_callback_url",
    "OAuth2Adapter",
    "OAuth2ProviderClient",
    "TwitterOAuth1Provider",
    "ResourceOwner",
    "TwitterResourceOwner",
    "GenericResourceOwner",
    # Tokens
    "AccessToken",
    "TemporaryToken",
    "TemporaryTokenStore",
    "SessionTemporaryTokenStore",
    "InMemoryTemporaryTokenStore",
    "EncryptedTemporaryTokenStore",
    # Config
    "Settings",
    "ProviderConfig",
    "ProviderCredentials",
    "ProviderEndpoints",
    # Errors
    "OAuthBridgeError",
    "UserDeniedAccessError",
    "ProviderCommunicationError",
    "CallbackValidationError",
    "NotFoundError",
    "ConfigurationError",
    "UnsupportedProtocolError",
]
