"""Storage for OAuth1 temporary tokens between the redirect and the callback.

A temporary token has to survive exactly one browser round trip, so every
store here is scoped to a single authentication attempt (usually a user
session). Any backend works as long as it honours the same three operations:

- ``save`` overwrites whatever was stored for the attempt
- ``load`` raises :class:`NotFoundError` when nothing is stored
- ``clear`` is idempotent

``clear`` is best effort; callers must not rely on it being reached, so
backends with their own expiry (session GC, cache TTL, ``max_age`` on the
encrypted store) are preferable.
"""

import json
import logging
import time
from collections.abc import MutableMapping
from typing import Protocol, runtime_checkable

from cryptography.fernet import Fernet, InvalidToken

from ..core.config import Settings, settings
from ..utils.errors import ConfigurationError, NotFoundError
from .temporary_token import TemporaryToken

logger = logging.getLogger(__name__)

SESSION_TEMPORARY_TOKEN_KEY = "Authenticator.twitter.temporary_token"
SESSION_TEMPORARY_TOKEN_SECRET_KEY = "Authenticator.twitter.temporary_token_secret"
SESSION_SEALED_TOKEN_KEY = "Authenticator.twitter.temporary_token_sealed"


@runtime_checkable
class TemporaryTokenStore(Protocol):
    """Holds at most one temporary token for the current authentication attempt."""

    def save(self, token: TemporaryToken) -> None:
        """Save a token for this attempt, overwriting any previous one."""
        ...

    def load(self) -> TemporaryToken:
        """Return the stored token.

        Raises:
            NotFoundError: If no token is stored
        """
        ...

    def clear(self) -> None:
        """Delete the stored token, if one exists."""
        ...


class SessionTemporaryTokenStore:
    """Store the token in the caller's session under two fixed keys.

    ``session`` is any mutable mapping scoped to the user: a web framework
    session object, or a plain dict owned by the caller.
    """

    def __init__(self, session: MutableMapping[str, str]):
        self.session = session

    def save(self, token: TemporaryToken) -> None:
        self.session[SESSION_TEMPORARY_TOKEN_KEY] = token.token_value
        self.session[SESSION_TEMPORARY_TOKEN_SECRET_KEY] = token.token_secret

    def load(self) -> TemporaryToken:
        value = self.session.get(SESSION_TEMPORARY_TOKEN_KEY)
        secret = self.session.get(SESSION_TEMPORARY_TOKEN_SECRET_KEY)
        # A half-written pair is as good as none
        if value is None or secret is None:
            raise NotFoundError("No temporary token stored in session")
        return TemporaryToken(token_value=value, token_secret=secret)

    def clear(self) -> None:
        self.session.pop(SESSION_TEMPORARY_TOKEN_KEY, None)
        self.session.pop(SESSION_TEMPORARY_TOKEN_SECRET_KEY, None)


_process_tokens: dict[str, tuple[TemporaryToken, float | None]] = {}


class InMemoryTemporaryTokenStore:
    """Process-local storage keyed by session or attempt identifier.

    Stores built with the same backend share one dict but only ever touch
    their own ``attempt_id`` entry when reading. Without an explicit backend a
    module-level dict is used, which only works for single-process deployments.

    Entries expire after ``max_age`` seconds (``temporary_token_max_age`` by
    default) so abandoned attempts do not pile up; each ``save`` prunes
    expired entries from the whole backend.
    """

    def __init__(
        self,
        attempt_id: str,
        backend: dict[str, tuple[TemporaryToken, float | None]] | None = None,
        max_age: float | None = None,
    ):
        if not attempt_id:
            raise ValueError("attempt_id must be a non-empty string")
        self.attempt_id = attempt_id
        self.max_age = settings.temporary_token_max_age if max_age is None else max_age
        self._backend = _process_tokens if backend is None else backend

    def _prune(self, now: float) -> None:
        expired = [
            key
            for key, (_, expiry) in self._backend.items()
            if expiry is not None and now >= expiry
        ]
        for key in expired:
            del self._backend[key]
        if expired:
            logger.debug(f"Pruned {len(expired)} expired temporary tokens")

    def save(self, token: TemporaryToken) -> None:
        now = time.time()
        self._prune(now)
        expiry = now + self.max_age if self.max_age is not None else None
        self._backend[self.attempt_id] = (token, expiry)

    def load(self) -> TemporaryToken:
        entry = self._backend.get(self.attempt_id)
        if entry is None:
            raise NotFoundError(f"No temporary token stored for attempt {self.attempt_id}")

        token, expiry = entry
        if expiry is not None and time.time() >= expiry:
            del self._backend[self.attempt_id]
            raise NotFoundError(f"Temporary token for attempt {self.attempt_id} has expired")
        return token

    def clear(self) -> None:
        self._backend.pop(self.attempt_id, None)


class EncryptedTemporaryTokenStore:
    """Store the token as one Fernet-encrypted value in the session.

    Meant for sessions that live client side (signed cookies), where the
    token secret must not be readable by the browser. Entries older than
    ``max_age`` seconds, or that fail to decrypt, count as absent.
    """

    def __init__(
        self,
        session: MutableMapping[str, str],
        encryption_key: str,
        max_age: int | None = None,
    ):
        """
        Initialize the encrypted store.

        Args:
            session: Session mapping for the current user
            encryption_key: Base64-encoded Fernet key
            max_age: Optional lifetime of a stored token in seconds

        Raises:
            ConfigurationError: If the encryption key is not a valid Fernet key
        """
        self.session = session
        self.max_age = max_age
        try:
            self.cipher = Fernet(encryption_key.encode())
        except ValueError as e:
            raise ConfigurationError(f"Invalid temporary token encryption key: {e}") from e

    @classmethod
    def from_settings(
        cls, session: MutableMapping[str, str], config: Settings | None = None
    ) -> "EncryptedTemporaryTokenStore":
        """Build a store from token_encryption_key and temporary_token_max_age.

        Raises:
            ConfigurationError: If no encryption key is configured
        """
        config = config or settings
        if not config.token_encryption_key:
            raise ConfigurationError("token_encryption_key is not configured")
        return cls(session, config.token_encryption_key, max_age=config.temporary_token_max_age)

    def save(self, token: TemporaryToken) -> None:
        data = json.dumps({"token": token.token_value, "secret": token.token_secret}).encode()
        self.session[SESSION_SEALED_TOKEN_KEY] = self.cipher.encrypt(data).decode()

    def load(self) -> TemporaryToken:
        sealed = self.session.get(SESSION_SEALED_TOKEN_KEY)
        if sealed is None:
            raise NotFoundError("No temporary token stored in session")

        try:
            data = self.cipher.decrypt(sealed.encode(), ttl=self.max_age)
        except InvalidToken as e:
            logger.debug("Stored temporary token expired or was not readable")
            raise NotFoundError("Stored temporary token is expired or invalid") from e

        payload = json.loads(data.decode())
        return TemporaryToken(token_value=payload["token"], token_secret=payload["secret"])

    def clear(self) -> None:
        self.session.pop(SESSION_SEALED_TOKEN_KEY, None)

    @staticmethod
    def generate_encryption_key() -> str:
        """Generate a new Fernet encryption key."""
        return Fernet.generate_key().decode()
