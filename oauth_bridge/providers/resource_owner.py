"""Normalized views of the authenticated user's profile."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from ..core.config import OwnerFieldMap


class ResourceOwner(ABC):
    """The user that authorized the application, as seen by the provider."""

    @abstractmethod
    def get_id(self) -> str:
        """Return the provider's identifier for the user."""
        pass

    @abstractmethod
    def get_name(self) -> str | None:
        """Return the user's display name."""
        pass

    @abstractmethod
    def get_screen_name(self) -> str | None:
        """Return the user's handle or equivalent."""
        pass

    @abstractmethod
    def get_email(self) -> str | None:
        """Return the user's email, or None when the granted scope does not include it."""
        pass

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Return the raw profile payload exactly as the provider sent it."""
        pass


class TwitterResourceOwner(ResourceOwner):
    """Twitter user from ``account/verify_credentials``.

    Twitter only returns ``email`` when the app has the "Request email address
    from users" permission and ``include_email`` was requested.
    """

    def __init__(self, owner_id: str, values: Mapping[str, Any]):
        self._id = owner_id
        self._values = dict(values)

    def get_id(self) -> str:
        return self._id

    def get_name(self) -> str | None:
        return self._values.get("name")

    def get_screen_name(self) -> str | None:
        return self._values.get("screen_name")

    def get_email(self) -> str | None:
        return self._values.get("email")

    def to_dict(self) -> dict[str, Any]:
        return self._values


class GenericResourceOwner(ResourceOwner):
    """Owner built from an OAuth2 userinfo payload using a field map."""

    def __init__(self, values: Mapping[str, Any], fields: OwnerFieldMap | None = None):
        self._values = dict(values)
        self._fields = fields or OwnerFieldMap()

    def _lookup(self, key: str | None) -> Any:
        if key is None:
            return None
        return self._values.get(key)

    def get_id(self) -> str:
        value = self._lookup(self._fields.id)
        return "" if value is None else str(value)

    def get_name(self) -> str | None:
        return self._lookup(self._fields.name)

    def get_screen_name(self) -> str | None:
        return self._lookup(self._fields.screen_name)

    def get_email(self) -> str | None:
        return self._lookup(self._fields.email)

    def to_dict(self) -> dict[str, Any]:
        return self._values
