"""FastAPI dependencies resolving the per-application cache and upstream client."""

from fastapi import Request

from coinproxy.cache import FreshnessCache
from coinproxy.upstream import UpstreamClient


def get_top_coins_cache(request: Request) -> FreshnessCache:
    return request.app.state.top_coins_cache


def get_upstream_client(request: Request) -> UpstreamClient:
    return request.app.state.upstream_client
