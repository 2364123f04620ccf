import json

import pytest

from coinproxy.errors import UpstreamRejected, UpstreamUnreachable

BALANCES = b'{"data":{"address":"0xabc","items":[{"contract_ticker_symbol":"BNB","balance":"1000"}]}}'


def test_balances_malformed_body_is_bad_request_without_upstream_call(client, upstream):
    response = client.post(
        "/api/balances",
        content=b'{"chain_id": 56, "address": ',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"detail": "Error parsing request body"}
    assert upstream.calls == 0


@pytest.mark.parametrize(
    "payload",
    [b"", b"[]", b'{"address": "0xabc"}', b'{"chain_id": "bsc", "address": "0xabc"}'],
)
def test_balances_rejects_bodies_outside_schema(client, upstream, payload):
    response = client.post("/api/balances", content=payload)

    assert response.status_code == 400
    assert upstream.calls == 0


def test_balances_streams_covalent_body_verbatim(client, upstream):
    upstream.queue(BALANCES)
    response = client.post("/api/balances", json={"chain_id": 56, "address": "0xabc"})

    assert response.status_code == 200
    assert response.content == BALANCES
    assert response.headers["content-type"] == "application/json"
    assert response.headers["access-control-allow-origin"] == "*"

    request = upstream.requests[0]
    assert request.method == "GET"
    assert request.url == "https://api.covalenthq.com/v1/56/address/0xabc/balances_v2/?key=cov-secret"


def test_balances_upstream_failure_is_generic_500(client, upstream):
    upstream.queue(UpstreamUnreachable("dns failure for api.covalenthq.com"))
    response = client.post("/api/balances", json={"chain_id": 1, "address": "0xabc"})

    assert response.status_code == 500
    assert response.json() == {"detail": "Unable to get balances from Covalent"}


def test_balances_missing_key_fails_before_calling_upstream(client, upstream, monkeypatch):
    monkeypatch.delenv("COVALENT_API_KEY")
    response = client.post("/api/balances", json={"chain_id": 1, "address": "0xabc"})

    assert response.status_code == 500
    assert "COVALENT_API_KEY" not in response.text
    assert upstream.calls == 0


def test_transaction_lookup(client, upstream):
    upstream.queue(b'{"data":{"items":[]}}')
    response = client.post("/api/transaction", json={"chain_id": 56, "transaction_id": "0xdead"})

    assert response.status_code == 200
    assert response.content == b'{"data":{"items":[]}}'
    assert upstream.requests[0].url == (
        "https://api.covalenthq.com/v1/56/transaction_v2/0xdead/?no-logs=true&key=cov-secret"
    )


def test_transaction_rejected_does_not_leak_upstream_body(client, upstream):
    upstream.queue(UpstreamRejected(404, b'{"error_message":"tx 0xdead not found"}'))
    response = client.post("/api/transaction", json={"chain_id": 56, "transaction_id": "0xdead"})

    assert response.status_code == 500
    assert response.json() == {"detail": "Unable to get transaction from Covalent"}


def test_transactions_returns_only_result_list(client, upstream):
    transfers = [
        {"hash": "0x1", "from": "0xa", "to": "0xb", "value": "10", "tokenSymbol": "CAKE"},
        {"hash": "0x2", "from": "0xb", "to": "0xa", "value": "5", "tokenSymbol": "CAKE"},
    ]
    upstream.queue(json.dumps({"status": "1", "message": "OK", "result": transfers}).encode())

    response = client.post("/api/transactions", json={"contract": "0xcake", "wallet": "0xa"})

    assert response.status_code == 200
    assert response.json() == transfers
    url = upstream.requests[0].url
    assert url.startswith("https://api.bscscan.com/api?module=account&action=tokentx")
    assert "address=0xa" in url
    assert "contractaddress=0xcake" in url
    assert "startblock=1000000&endblock=999999999&sort=asc" in url
    assert url.endswith("apikey=bsc-secret")


@pytest.mark.parametrize(
    "body",
    [
        b"<html>oops</html>",
        b'{"status":"1","message":"OK"}',
        b'{"status":"0","message":"NOTOK","result":"Max rate limit reached"}',
    ],
)
def test_transactions_malformed_upstream_payload(client, upstream, body):
    upstream.queue(body)
    response = client.post("/api/transactions", json={"contract": "0xcake", "wallet": "0xa"})

    assert response.status_code == 500
    assert response.json() == {"detail": "Unable to parse BscScan response"}


def test_transactions_rejected_status(client, upstream):
    upstream.queue(UpstreamRejected(502, b"Bad Gateway"))
    response = client.post("/api/transactions", json={"contract": "0xcake", "wallet": "0xa"})

    assert response.status_code == 500
    assert response.json() == {"detail": "Unable to get transactions from BscScan"}


def test_price_without_timestamp_requests_current_price(client, upstream):
    upstream.queue(b'{"rate":67000.12}')
    response = client.post("/api/price", json={"code": "BTC"})

    assert response.status_code == 200
    assert response.content == b'{"rate":67000.12}'
    request = upstream.requests[0]
    assert request.url == "https://api.livecoinwatch.com/coins/single"
    assert request.json_body == {"currency": "USD", "code": "BTC", "meta": False}


def test_price_with_timestamp_requests_history_window(client, upstream):
    upstream.queue(b'{"history":[]}')
    response = client.post("/api/price", json={"code": "ETH", "timestamp": 1700000000000})

    assert response.status_code == 200
    request = upstream.requests[0]
    assert request.url == "https://api.livecoinwatch.com/coins/single/history"
    assert request.json_body == {
        "currency": "USD",
        "code": "ETH",
        "start": 1699999850000,
        "end": 1700000150000,
    }


def test_current_price_endpoint_ignores_timestamp(client, upstream):
    upstream.queue(b'{"rate":1.0}')
    response = client.post("/api/price/current", json={"code": "USDT", "timestamp": 1700000000000})

    assert response.status_code == 200
    assert upstream.requests[0].url == "https://api.livecoinwatch.com/coins/single"


def test_price_requires_code(client, upstream):
    response = client.post("/api/price", json={"timestamp": 1700000000000})

    assert response.status_code == 400
    assert upstream.calls == 0


@pytest.mark.parametrize(
    "path",
    ["/api/balances", "/api/transaction", "/api/transactions", "/api/price", "/api/price/current"],
)
def test_preflight_on_every_endpoint(client, upstream, path):
    response = client.options(path)

    assert response.status_code == 204
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-methods"] == "POST"
    assert response.headers["access-control-allow-headers"] == "Content-Type"
    assert response.headers["access-control-max-age"] == "3600"
    assert upstream.calls == 0


def test_healthz(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
