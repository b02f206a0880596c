"""Utility modules for the OAuth bridge."""

from .errors import (
    CallbackValidationError,
    ConfigurationError,
    NotFoundError,
    OAuthBridgeError,
    ProviderCommunicationError,
    UnsupportedProtocolError,
    UserDeniedAccessError,
)
from .logging_config import setup_logging

__all__ = [
    "OAuthBridgeError",
    "UserDeniedAccessError",
    "ProviderCommunicationError",
    "CallbackValidationError",
    "NotFoundError",
    "ConfigurationError",
    "UnsupportedProtocolError",
    "setup_logging",
]
