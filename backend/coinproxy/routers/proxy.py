"""Pass-through endpoints: one upstream call per request, no caching."""

from typing import Callable

from fastapi import APIRouter, Depends, Request, Response

from coinproxy.cors import add_preflight_routes, json_response
from coinproxy.deps import get_upstream_client
from coinproxy.errors import ProxyError
from coinproxy.models import (
    BalancesRequest,
    CurrentPriceRequest,
    PriceRequest,
    TransactionRequest,
    TransactionsRequest,
    parse_body,
)
from coinproxy.providers import bscscan, covalent, livecoinwatch
from coinproxy.upstream import UpstreamClient, UpstreamRequest

router = APIRouter(prefix="/api", tags=["proxy"])


async def _forward(
    upstream: UpstreamClient,
    build_request: Callable[[], UpstreamRequest],
    failure_message: str,
) -> bytes:
    try:
        return await upstream.fetch(build_request())
    except ProxyError as exc:
        raise exc.with_message(failure_message)


@router.post("/balances")
async def get_balances(request: Request, upstream: UpstreamClient = Depends(get_upstream_client)) -> Response:
    body = parse_body(await request.body(), BalancesRequest)
    content = await _forward(
        upstream,
        lambda: covalent.balances_request(body.chain_id, body.address),
        "Unable to get balances from Covalent",
    )
    return json_response(content)


@router.post("/transaction")
async def get_transaction(request: Request, upstream: UpstreamClient = Depends(get_upstream_client)) -> Response:
    body = parse_body(await request.body(), TransactionRequest)
    content = await _forward(
        upstream,
        lambda: covalent.transaction_request(body.chain_id, body.transaction_id),
        "Unable to get transaction from Covalent",
    )
    return json_response(content)


@router.post("/transactions")
async def get_transactions(request: Request, upstream: UpstreamClient = Depends(get_upstream_client)) -> Response:
    body = parse_body(await request.body(), TransactionsRequest)
    content = await _forward(
        upstream,
        lambda: bscscan.token_transfers_request(body.contract, body.wallet),
        "Unable to get transactions from BscScan",
    )
    try:
        result = bscscan.extract_result(content)
    except ProxyError as exc:
        raise exc.with_message("Unable to parse BscScan response")
    return json_response(result)


@router.post("/price")
async def get_price(request: Request, upstream: UpstreamClient = Depends(get_upstream_client)) -> Response:
    body = parse_body(await request.body(), PriceRequest)
    content = await _forward(
        upstream,
        lambda: livecoinwatch.price_request(body.code, body.timestamp),
        "Unable to get price from LiveCoinWatch",
    )
    return json_response(content)


@router.post("/price/current")
async def get_current_price(request: Request, upstream: UpstreamClient = Depends(get_upstream_client)) -> Response:
    body = parse_body(await request.body(), CurrentPriceRequest)
    content = await _forward(
        upstream,
        lambda: livecoinwatch.current_price_request(body.code),
        "Unable to get price from LiveCoinWatch",
    )
    return json_response(content)


add_preflight_routes(router, "/balances", "/transaction", "/transactions", "/price", "/price/current")
