"""httpx-based transport adapter."""

from __future__ import annotations

import httpx

from crpt_client.adapters.transport.base import AbstractTransport
from crpt_client.core.errors import TransportError


class HttpxTransport(AbstractTransport):
    """POST JSON payloads with a synchronous ``httpx.Client``.

    The client is safe to share between threads; connection pooling and TLS
    are left to httpx defaults.
    """

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout_seconds: Timeout for each request in seconds.
            client: Preconfigured client (tests inject one with a MockTransport).
        """
        self.client = client or httpx.Client(timeout=timeout_seconds)

    def post_json(self, url: str, payload: str) -> str:
        """POST ``payload`` as application/json and return the body text.

        Raises:
            TransportError: If the request fails or the status is not 2xx.
        """
        try:
            response = self.client.post(
                url,
                content=payload.encode("utf-8"),
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            raise TransportError(
                code="transport_bad_status",
                message=f"Document endpoint responded with HTTP {status_code}",
                details={"http_status": status_code, "url": url},
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(
                code="transport_request_failed",
                message=f"Request to document endpoint failed: {exc}",
                details={"url": url},
            ) from exc

        return response.text

    def close(self) -> None:
        self.client.close()
