"""Shared helpers for provider request builders."""

import logging
from urllib.parse import quote, urlencode

from coinproxy.env_utils import get_first_env
from coinproxy.errors import MissingCredentialError

logger = logging.getLogger("coinproxy.providers")


def require_api_key(*env_names: str) -> str:
    """Resolve the first configured key among *env_names*.

    Raises :class:`MissingCredentialError` naming the primary env var when
    none is set. Only the variable name is ever logged.
    """
    value = get_first_env(*env_names)
    if not value:
        logger.warning("Credential env var %r is not set", env_names[0])
        raise MissingCredentialError(env_names[0])
    return value


def build_url(base_url: str, path: str, params: dict[str, object] | None = None) -> str:
    url = base_url.rstrip("/") + path
    if params:
        url += "?" + urlencode({key: str(value) for key, value in params.items()})
    return url


def path_segment(value: object) -> str:
    return quote(str(value), safe="")
