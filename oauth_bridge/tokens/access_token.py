"""Provider-neutral access token."""

import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

# Values below this are read as a lifetime in seconds rather than a timestamp
_RELATIVE_EXPIRY_CEILING = 10 * 365 * 24 * 60 * 60

_CANONICAL_FIELDS = ("access_token", "resource_owner_id", "expires", "expires_in", "refresh_token")


def _parse_expires(response: Mapping[str, Any]) -> int | None:
    expires_in = response.get("expires_in")
    if expires_in not in (None, ""):
        return int(time.time()) + int(expires_in)

    expires = response.get("expires")
    if expires in (None, ""):
        return None
    expires = int(expires)
    if expires == 0:
        # Twitter sends x_auth_expires=0 for tokens that never expire
        return None
    if expires < _RELATIVE_EXPIRY_CEILING:
        return int(time.time()) + expires
    return expires


@dataclass(frozen=True)
class AccessToken:
    """Access token returned by a provider after the code/verifier exchange.

    The canonical fields are attributes; everything else the provider sent
    (``oauth_token_secret``, ``screen_name``, ``token_type``, ``scope``...)
    is kept in ``values`` under its original name.
    """

    token: str
    resource_owner_id: str | None = None
    expires: int | None = None  # Unix timestamp
    refresh_token: str | None = None
    values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    @classmethod
    def from_response(cls, response: Mapping[str, Any]) -> "AccessToken":
        """Create from a token endpoint response that already uses canonical names.

        Args:
            response: Token response fields

        Returns:
            AccessToken with extras in ``values``

        Raises:
            ValueError: If ``access_token`` is missing
        """
        if not response.get("access_token"):
            raise ValueError("Token response is missing 'access_token'")

        owner_id = response.get("resource_owner_id")
        return cls(
            token=str(response["access_token"]),
            resource_owner_id=str(owner_id) if owner_id is not None else None,
            expires=_parse_expires(response),
            refresh_token=response.get("refresh_token"),
            values={k: v for k, v in response.items() if k not in _CANONICAL_FIELDS},
        )

    def get_values(self) -> dict[str, Any]:
        """Return the provider-specific extras."""
        return dict(self.values)

    def has_expired(self, buffer_seconds: int = 0) -> bool:
        """Check if the token is expired. Tokens without expiry never expire."""
        if self.expires is None:
            return False
        return time.time() >= (self.expires - buffer_seconds)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a flat dictionary for storage or serialization."""
        data: dict[str, Any] = {"access_token": self.token}
        if self.resource_owner_id is not None:
            data["resource_owner_id"] = self.resource_owner_id
        if self.expires is not None:
            data["expires"] = self.expires
        if self.refresh_token is not None:
            data["refresh_token"] = self.refresh_token
        data.update(self.values)
        return data

    def __str__(self) -> str:
        return self.token
