"""BscScan token-transfer history and response unwrapping."""

import json

from coinproxy import config
from coinproxy.errors import MalformedUpstreamResponse
from coinproxy.providers import build_url, require_api_key
from coinproxy.upstream import UpstreamRequest

PROVIDER = "bscscan"


def token_transfers_request(contract: str, wallet: str) -> UpstreamRequest:
    api_key = require_api_key(config.BSCSCAN_API_KEY_ENV)
    return UpstreamRequest(
        provider=PROVIDER,
        url=build_url(
            config.BSCSCAN_BASE_URL,
            "/api",
            {
                "module": "account",
                "action": "tokentx",
                "address": wallet,
                "contractaddress": contract,
                "startblock": config.BSCSCAN_START_BLOCK,
                "endblock": config.BSCSCAN_END_BLOCK,
                "sort": "asc",
                "apikey": api_key,
            },
        ),
    )


def extract_result(body: bytes) -> bytes:
    """Unwrap ``{"message": ..., "result": [...]}`` into the bare result list.

    BscScan reports errors with a string ``result`` ("Max rate limit
    reached", "Invalid API Key"), which is treated as malformed.
    """
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise MalformedUpstreamResponse("bscscan body is not valid JSON") from exc

    if not isinstance(payload, dict) or "result" not in payload:
        raise MalformedUpstreamResponse("bscscan body has no 'result' field")

    result = payload["result"]
    if not isinstance(result, list):
        raise MalformedUpstreamResponse(f"bscscan 'result' is not a list: {str(result)[:200]}")

    return json.dumps(result, separators=(",", ":")).encode("utf-8")
