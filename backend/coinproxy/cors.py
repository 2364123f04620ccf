"""Permissive CORS handling shared by every proxy endpoint."""

from fastapi import APIRouter, Response, status

ALLOW_ORIGIN_HEADERS: dict[str, str] = {"Access-Control-Allow-Origin": "*"}

PREFLIGHT_HEADERS: dict[str, str] = {
    **ALLOW_ORIGIN_HEADERS,
    "Access-Control-Allow-Methods": "POST",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Max-Age": "3600",
}


async def preflight() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers=PREFLIGHT_HEADERS)


def add_preflight_routes(router: APIRouter, *paths: str) -> None:
    for path in paths:
        router.add_api_route(path, preflight, methods=["OPTIONS"], include_in_schema=False)


def json_response(body: bytes, headers: dict[str, str] | None = None) -> Response:
    """Wrap upstream bytes verbatim as an ``application/json`` response."""
    return Response(
        content=body,
        media_type="application/json",
        headers={**ALLOW_ORIGIN_HEADERS, **(headers or {})},
    )
