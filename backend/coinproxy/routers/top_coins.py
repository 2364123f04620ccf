"""Top coins listing with a refresh-ahead cache and stale-on-error fallback.

A payload younger than the freshness window is served without touching
LiveCoinWatch. An older one triggers a refresh; if that refresh fails for any
reason the old payload is still served as a success, and only an empty cache
lets the failure reach the caller.
"""

import json
import logging
from enum import Enum

from fastapi import APIRouter, Depends, Response

from coinproxy.cache import FreshnessCache
from coinproxy.cors import add_preflight_routes, json_response
from coinproxy.deps import get_top_coins_cache, get_upstream_client
from coinproxy.errors import MalformedUpstreamResponse, ProxyError
from coinproxy.providers import livecoinwatch
from coinproxy.upstream import UpstreamClient

logger = logging.getLogger("coinproxy.top_coins")

router = APIRouter(prefix="/api", tags=["top-coins"])

TOP_COINS_PATH = "/top-coins"
CACHE_HEADER = "X-Cache"


class CacheOutcome(str, Enum):
    HIT = "HIT"
    MISS = "MISS"
    STALE = "STALE"


def _ensure_json(body: bytes) -> None:
    try:
        json.loads(body)
    except ValueError as exc:
        raise MalformedUpstreamResponse("livecoinwatch coins/list body is not valid JSON") from exc


async def serve_top_coins(cache: FreshnessCache, upstream: UpstreamClient) -> tuple[bytes, CacheOutcome]:
    cached = cache.read_fresh()
    if cached is not None:
        return cached.body, CacheOutcome.HIT

    try:
        body = await upstream.fetch(livecoinwatch.coins_list_request())
        _ensure_json(body)
    except ProxyError as exc:
        stale = cache.read()
        if stale is None:
            raise exc.with_message("Unable to get top coins")
        logger.warning(
            "Top coins refresh failed (%s: %s); serving cached payload age_s=%.0f",
            exc.kind.value,
            exc.detail,
            stale.age(cache.now()),
        )
        return stale.body, CacheOutcome.STALE

    cache.store(body)
    logger.info("Top coins refreshed bytes=%d", len(body))
    return body, CacheOutcome.MISS


@router.post(TOP_COINS_PATH)
async def get_top_coins(
    cache: FreshnessCache = Depends(get_top_coins_cache),
    upstream: UpstreamClient = Depends(get_upstream_client),
) -> Response:
    body, outcome = await serve_top_coins(cache, upstream)
    return json_response(body, headers={CACHE_HEADER: outcome.value})


add_preflight_routes(router, TOP_COINS_PATH)
