"""LiveCoinWatch requests for the top coins list and price lookups.

LiveCoinWatch is POST-only and authenticates with the ``x-api-key`` header.
"""

from coinproxy import config
from coinproxy.providers import build_url, require_api_key
from coinproxy.upstream import UpstreamRequest

PROVIDER = "livecoinwatch"


def _request(path: str, body: dict) -> UpstreamRequest:
    api_key = require_api_key(*config.LIVECOINWATCH_API_KEY_ENVS)
    return UpstreamRequest(
        provider=PROVIDER,
        method="POST",
        url=build_url(config.LIVECOINWATCH_BASE_URL, path),
        headers={"Content-Type": "application/json", "x-api-key": api_key},
        json_body=body,
    )


def coins_list_request(limit: int | None = None) -> UpstreamRequest:
    return _request(
        "/coins/list",
        {
            "currency": config.LIVECOINWATCH_CURRENCY,
            "sort": "rank",
            "order": "ascending",
            "offset": 0,
            "limit": config.TOP_COINS_LIMIT if limit is None else limit,
            "meta": True,
        },
    )


def current_price_request(code: str) -> UpstreamRequest:
    return _request(
        "/coins/single",
        {"currency": config.LIVECOINWATCH_CURRENCY, "code": code, "meta": False},
    )


def price_history_request(code: str, timestamp: int) -> UpstreamRequest:
    window = config.PRICE_HISTORY_WINDOW_MS
    return _request(
        "/coins/single/history",
        {
            "currency": config.LIVECOINWATCH_CURRENCY,
            "code": code,
            "start": timestamp - window,
            "end": timestamp + window,
        },
    )


def price_request(code: str, timestamp: int = 0) -> UpstreamRequest:
    """Current price when *timestamp* is 0, otherwise the history around it."""
    if timestamp == 0:
        return current_price_request(code)
    return price_history_request(code, timestamp)
