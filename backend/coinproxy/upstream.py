"""Single-shot authenticated calls to third-party data providers."""

from __future__ import annotations

import logging
from typing import Any, Literal, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field

from coinproxy import config
from coinproxy.errors import MalformedUpstreamResponse, UpstreamRejected, UpstreamUnreachable
from coinproxy.log_redact import httpx_event_hooks, redact_headers, redact_url

logger = logging.getLogger("coinproxy.upstream")


class UpstreamRequest(BaseModel):
    """Description of one outbound call. Built by the provider modules."""

    model_config = ConfigDict(frozen=True)

    provider: str
    method: Literal["GET", "POST"] = "GET"
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    json_body: Optional[dict[str, Any]] = None


class UpstreamClient:
    """Executes an :class:`UpstreamRequest` exactly once, without retries.

    Returns the raw response body on a 2xx status. Raises
    :class:`UpstreamUnreachable` for transport failures and
    :class:`UpstreamRejected` for any other status.
    """

    def __init__(
        self,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = httpx.Timeout(timeout=config.REQUEST_TIMEOUT_SECONDS if timeout is None else timeout)
        self._transport = transport

    async def fetch(self, request: UpstreamRequest) -> bytes:
        safe_url = redact_url(request.url)
        logger.debug(
            "Calling %s method=%s url=%s headers=%s",
            request.provider,
            request.method,
            safe_url,
            redact_headers(request.headers),
        )
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                event_hooks=httpx_event_hooks(),
            ) as client:
                response = await client.request(
                    request.method,
                    request.url,
                    headers=request.headers,
                    json=request.json_body,
                )
        except httpx.DecodingError as exc:
            raise MalformedUpstreamResponse(
                f"{request.provider} sent an undecodable body ({exc.__class__.__name__})"
            ) from exc
        except httpx.TimeoutException as exc:
            raise UpstreamUnreachable(f"Timeout calling {request.provider} at {safe_url}") from exc
        except httpx.RequestError as exc:
            raise UpstreamUnreachable(
                f"Error calling {request.provider} at {safe_url} ({exc.__class__.__name__})"
            ) from exc

        if not response.is_success:
            raise UpstreamRejected(response.status_code, response.content)
        return response.content
