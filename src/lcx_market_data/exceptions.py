"""Errors raised by the public REST client."""

from typing import Optional

import aiohttp


class UnexpectedStatusError(aiohttp.ClientResponseError):
    """Raised when an endpoint answers with anything other than HTTP 200.

    The raw transport response is attached unmodified so callers can inspect
    its status, headers and body themselves.
    """

    def __init__(self, response: aiohttp.ClientResponse, body: Optional[str] = None):
        super().__init__(
            request_info=response.request_info,
            history=response.history,
            status=response.status,
            message=response.reason or "",
            headers=response.headers,
        )
        self.response = response
        self.body = body

    def __str__(self) -> str:
        return f"{self.status}, message={self.message!r}, url={str(self.request_info.real_url)!r}"
