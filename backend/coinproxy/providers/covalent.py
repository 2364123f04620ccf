"""Covalent requests for wallet balances and single transactions."""

from coinproxy import config
from coinproxy.providers import build_url, path_segment, require_api_key
from coinproxy.upstream import UpstreamRequest

PROVIDER = "covalent"


def balances_request(chain_id: int, address: str) -> UpstreamRequest:
    api_key = require_api_key(config.COVALENT_API_KEY_ENV)
    return UpstreamRequest(
        provider=PROVIDER,
        url=build_url(
            config.COVALENT_BASE_URL,
            f"/v1/{chain_id}/address/{path_segment(address)}/balances_v2/",
            {"key": api_key},
        ),
    )


def transaction_request(chain_id: int, transaction_id: str) -> UpstreamRequest:
    api_key = require_api_key(config.COVALENT_API_KEY_ENV)
    return UpstreamRequest(
        provider=PROVIDER,
        url=build_url(
            config.COVALENT_BASE_URL,
            f"/v1/{chain_id}/transaction_v2/{path_segment(transaction_id)}/",
            {"no-logs": "true", "key": api_key},
        ),
    )
