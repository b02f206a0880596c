"""Build the right provider adapter from configuration."""

import logging

from ..core.config import ProviderConfig
from ..tokens.token_store import TemporaryTokenStore
from ..utils.errors import ConfigurationError, UnsupportedProtocolError
from .base import Provider
from .oauth2_adapter import OAuth2Adapter
from .oauth2_client import PROVIDER_PRESETS, OAuth2ProviderClient
from .twitter import TwitterOAuth1Provider

logger = logging.getLogger(__name__)


def create_provider(
    config: ProviderConfig,
    token_store: TemporaryTokenStore | None = None,
    timeout: float | None = None,
) -> Provider:
    """Create a provider adapter for the configured protocol.

    Args:
        config: Provider configuration
        token_store: Session-scoped temporary token store (required for OAuth1)
        timeout: Request timeout in seconds (default: settings.http_timeout)

    Returns:
        A provider implementing the common contract

    Raises:
        ConfigurationError: If OAuth1 has no token store or OAuth2 has no endpoints
        UnsupportedProtocolError: If the protocol is unknown
    """
    if config.protocol == "oauth1":
        if token_store is None:
            raise ConfigurationError(f"Provider '{config.name}' uses OAuth1 and needs a token store")
        logger.debug(f"Creating OAuth1 provider '{config.name}'")
        return TwitterOAuth1Provider(config.credentials, token_store, timeout=timeout)

    if config.protocol == "oauth2":
        endpoints = config.endpoints or PROVIDER_PRESETS.get(config.name.lower())
        if endpoints is None:
            raise ConfigurationError(
                f"No endpoints configured for OAuth2 provider '{config.name}' "
                f"and no built-in preset exists"
            )
        logger.debug(f"Creating OAuth2 provider '{config.name}'")
        client = OAuth2ProviderClient(config.credentials, endpoints, timeout=timeout)
        return OAuth2Adapter(client)

    raise UnsupportedProtocolError(config.protocol)
