"""Token types and temporary token storage."""

from .access_token import AccessToken
from .field_mapping import TWITTER_ACCESS_TOKEN_FIELDS, remap_fields
from .temporary_token import TemporaryToken
from .token_store import (
    EncryptedTemporaryTokenStore,
    InMemoryTemporaryTokenStore,
    SessionTemporaryTokenStore,
    TemporaryTokenStore,
)

__all__ = [
    "AccessToken",
    "TemporaryToken",
    "TemporaryTokenStore",
    "SessionTemporaryTokenStore",
    "InMemoryTemporaryTokenStore",
    "EncryptedTemporaryTokenStore",
    "TWITTER_ACCESS_TOKEN_FIELDS",
    "remap_fields",
]
