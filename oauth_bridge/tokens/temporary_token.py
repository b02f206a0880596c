"""OAuth1 temporary (request) token."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TemporaryToken:
    """An OAuth1 request token and its secret.

    Issued once per authorization attempt and discarded after the token
    exchange. The secret never leaves the server side.
    """

    token_value: str
    token_secret: str

    def __repr__(self) -> str:
        return f"TemporaryToken(token_value={self.token_value!r}, token_secret='***')"
