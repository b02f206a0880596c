"""Inspection of the provider's redirect back to the application.

Callback parameters are always passed in explicitly as a mapping, taken from
the inbound request's query string and/or form body by the host framework.
"""

import secrets
from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qs, urlsplit

from ..utils.errors import (
    CallbackValidationError,
    ProviderCommunicationError,
    UserDeniedAccessError,
)

ACCESS_DENIED = "access_denied"


def normalize_params(params: Mapping[str, Any]) -> dict[str, str]:
    """Flatten callback parameters to one string per key.

    Accepts plain ``{key: value}`` mappings as well as the ``{key: [values]}``
    shape produced by :func:`urllib.parse.parse_qs`; lists collapse to their
    first element.
    """
    flat: dict[str, str] = {}
    for key, value in params.items():
        if isinstance(value, (list, tuple)):
            value = value[0] if value else ""
        flat[key] = "" if value is None else str(value)
    return flat


def parse_callback_url(url: str) -> dict[str, str]:
    """Extract the callback parameters from a full redirect URL."""
    return normalize_params(parse_qs(urlsplit(url).query, keep_blank_values=True))


def check_provider_error(params: Mapping[str, str]) -> None:
    """Raise if the provider signalled an error on the callback.

    Raises:
        UserDeniedAccessError: If ``error`` is ``access_denied``
        ProviderCommunicationError: For any other non-empty ``error``
    """
    error = params.get("error")
    if not error:
        return
    if error == ACCESS_DENIED:
        raise UserDeniedAccessError(params)
    raise ProviderCommunicationError(error, 400, params.get("error_description", ""))


def check_state(params: Mapping[str, str], expected_state: str | None) -> None:
    """Validate the CSRF state round-tripped through the provider.

    Raises:
        CallbackValidationError: If state is missing or does not match
    """
    if "state" not in params:
        raise CallbackValidationError("State was not included in the callback", params)

    received = params["state"]
    if not expected_state or not secrets.compare_digest(
        received.encode("utf-8"), expected_state.encode("utf-8")
    ):
        raise CallbackValidationError(
            f"State received ({received}) does not match expected ({expected_state})",
            params,
        )


def require_param(params: Mapping[str, str], name: str, message: str) -> str:
    """Return a non-empty callback parameter.

    Raises:
        CallbackValidationError: With ``message`` if the parameter is missing or empty
    """
    value = params.get(name)
    if not value:
        raise CallbackValidationError(message, params)
    return value
