"""Declarative renaming of provider response fields to canonical names."""

from collections.abc import Mapping
from typing import Any

# Twitter's oauth/access_token response -> canonical access token fields.
# oauth_token_secret and screen_name are kept under their own names.
TWITTER_ACCESS_TOKEN_FIELDS: Mapping[str, str] = {
    "oauth_token": "access_token",
    "user_id": "resource_owner_id",
    "x_auth_expires": "expires",
}


def remap_fields(data: Mapping[str, Any], field_map: Mapping[str, str]) -> dict[str, Any]:
    """Return a copy of ``data`` with keys renamed according to ``field_map``.

    Key order is preserved: a renamed key keeps its position and unmapped
    keys are copied untouched. Keys in ``field_map`` that are absent from
    ``data`` are ignored. If a renamed key collides with an existing key, the
    later one in ``data`` wins.

    Args:
        data: Provider response fields
        field_map: Mapping of provider field name to canonical name

    Returns:
        New dict with canonical names
    """
    return {field_map.get(key, key): value for key, value in data.items()}
