"""Login providers behind a common OAuth contract.

This package provides:
- The common provider contract (Provider, FlowState)
- An OAuth2 authorization code adapter
- A Twitter OAuth1 adapter with OAuth2-shaped operations
- Normalized resource owners
- Configuration-driven provider creation
"""

from .base import FlowState, Provider
from .callback import normalize_params, parse_callback_url
from .factory import create_provider
from .oauth2_adapter import OAuth2Adapter
from .oauth2_client import PROVIDER_PRESETS, OAuth2ProviderClient, discover_endpoints
from .resource_owner import GenericResourceOwner, ResourceOwner, TwitterResourceOwner
from .twitter import TwitterOAuth1Provider

__all__ = [
    # Contract
    "Provider",
    "FlowState",
    "create_provider",
    # Callback helpers
    "normalize_params",
    "parse_callback_url",
    # OAuth2
    "OAuth2Adapter",
    "OAuth2ProviderClient",
    "PROVIDER_PRESETS",
    "discover_endpoints",
    # OAuth1
    "TwitterOAuth1Provider",
    # Resource owners
    "ResourceOwner",
    "TwitterResourceOwner",
    "GenericResourceOwner",
]
