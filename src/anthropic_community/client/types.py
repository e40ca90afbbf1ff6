"""Type definitions for the HTTP transport.

This module contains the dataclass describing the raw outcome of one
HTTP exchange with the Messages API, before it is classified.
"""

from dataclasses import dataclass, field


@dataclass
class RawOutcome:
    """Raw result of sending a request.

    Exactly one of `status` and `error` is set: `status` when an HTTP
    response was obtained (whatever its code), `error` when the request
    failed before a response arrived.

    Attributes:
        status: HTTP status code of the response
        body: Raw response body
        headers: Response headers (lower-cased names)
        error: Transport exception when no response was obtained
    """

    status: int | None = None
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)
    error: Exception | None = None

    @property
    def text(self) -> str:
        """The body decoded as UTF-8 (undecodable bytes are replaced)."""
        return self.body.decode("utf-8", errors="replace")

    @property
    def request_id(self) -> str | None:
        """The API request id header, when present."""
        return self.headers.get("request-id")
