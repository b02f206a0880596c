"""Core configuration for the OAuth bridge."""

from .config import (
    OwnerFieldMap,
    ProviderConfig,
    ProviderCredentials,
    ProviderEndpoints,
    Settings,
    settings,
)

__all__ = [
    "OwnerFieldMap",
    "ProviderConfig",
    "ProviderCredentials",
    "ProviderEndpoints",
    "Settings",
    "settings",
]
