"""Failure taxonomy for proxy handlers and its translation to HTTP status codes."""

from __future__ import annotations

from enum import Enum

from fastapi import status


class ErrorKind(str, Enum):
    BAD_REQUEST = "bad_request"
    UPSTREAM_UNREACHABLE = "upstream_unreachable"
    UPSTREAM_REJECTED = "upstream_rejected"
    MALFORMED_UPSTREAM_RESPONSE = "malformed_upstream_response"
    MISSING_CREDENTIAL = "missing_credential"


_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UPSTREAM_UNREACHABLE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.UPSTREAM_REJECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.MALFORMED_UPSTREAM_RESPONSE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.MISSING_CREDENTIAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(kind: ErrorKind) -> int:
    """Map an error kind to the HTTP status returned to the caller."""
    return _STATUS_BY_KIND[kind]


class ProxyError(Exception):
    """Base class for failures that end a single proxied request.

    ``message`` is safe to show to the caller. ``detail`` is for server-side
    logs only and may contain upstream bodies.
    """

    kind: ErrorKind = ErrorKind.UPSTREAM_UNREACHABLE
    default_message = "Upstream request failed"

    def __init__(self, detail: str = "", *, message: str | None = None) -> None:
        self.detail = detail
        self.message = message or self.default_message
        super().__init__(detail or self.message)

    @property
    def status_code(self) -> int:
        return status_code_for(self.kind)

    def with_message(self, message: str) -> "ProxyError":
        """Replace the caller-facing message, keeping kind and detail."""
        self.message = message
        return self


class BadRequest(ProxyError):
    kind = ErrorKind.BAD_REQUEST
    default_message = "Error parsing request body"


class UpstreamUnreachable(ProxyError):
    """Connection, DNS, timeout or read failure talking to the provider."""

    kind = ErrorKind.UPSTREAM_UNREACHABLE


class UpstreamRejected(ProxyError):
    """The provider answered with a non-success status code."""

    kind = ErrorKind.UPSTREAM_REJECTED

    def __init__(self, status_code: int, body: bytes = b"", *, message: str | None = None) -> None:
        self.upstream_status = status_code
        self.body = body
        preview = body[:512].decode("utf-8", errors="replace")
        super().__init__(f"upstream returned HTTP {status_code}: {preview}", message=message)


class MalformedUpstreamResponse(ProxyError):
    kind = ErrorKind.MALFORMED_UPSTREAM_RESPONSE


class MissingCredentialError(ProxyError):
    """Raised when a required API key env var is not set."""

    kind = ErrorKind.MISSING_CREDENTIAL

    def __init__(self, env_name: str) -> None:
        self.env_name = env_name
        super().__init__(f"Environment variable {env_name!r} is not set")
