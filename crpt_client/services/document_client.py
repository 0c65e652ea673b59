"""Document submission service.

Orchestrates a single submission:
- Validate every product (fail fast, before any permit or network use)
- Serialize to the wire schema
- Wait for a rate limiter permit
- Hand the payload to the transport

Transport failures are logged and re-raised as-is; nothing is retried.
"""

from __future__ import annotations

import logging
import time
from types import TracebackType

from crpt_client.adapters.rate_limit.base import AbstractRateLimiter
from crpt_client.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from crpt_client.adapters.transport.base import AbstractTransport
from crpt_client.adapters.transport.factory import create_transport
from crpt_client.core.config import TimeUnit, settings
from crpt_client.core.errors import AppError, MissingRequiredField, ValidationAppError
from crpt_client.core.logging import document_context
from crpt_client.schemas.document import Document
from crpt_client.services.serialization import serialize_document

logger = logging.getLogger(__name__)


def validate_document(document: Document) -> None:
    """Check that every product carries exactly one uit code.

    Args:
        document: Document about to be submitted.

    Raises:
        MissingRequiredField: If a product has neither ``uit_code`` nor ``uitu_code``.
        ValidationAppError: If a product has both.
    """
    for index, product in enumerate(document.products):
        has_uit = product.uit_code is not None
        has_uitu = product.uitu_code is not None

        if not has_uit and not has_uitu:
            raise MissingRequiredField(
                code="product_missing_uit",
                message="One of uit_code/uitu_code is required for every product",
                details={"field": "uit_code", "product_index": index, "doc_id": document.doc_id},
            )
        if has_uit and has_uitu:
            raise ValidationAppError(
                code="product_ambiguous_uit",
                message="Only one of uit_code/uitu_code may be set on a product",
                details={"field": "uitu_code", "product_index": index, "doc_id": document.doc_id},
            )


class DocumentClient:
    """Rate-limited client for the document creation endpoint.

    Safe to share between threads: the only shared mutable state lives in
    the rate limiter.

    Attributes:
        rate_limiter: Limiter consulted once per submission.
        transport: Adapter that performs the HTTP POST.
        api_url: Fixed endpoint every document is sent to.
    """

    def __init__(
        self,
        rate_limiter: AbstractRateLimiter,
        transport: AbstractTransport,
        *,
        api_url: str,
    ) -> None:
        self.rate_limiter = rate_limiter
        self.transport = transport
        self.api_url = api_url

    def submit(self, document: Document, *, timeout: float | None = None) -> str:
        """Validate, serialize and send ``document``.

        Blocks while the rate limit for the current window is exhausted.

        Args:
            document: Document to create on the remote side.
            timeout: Maximum seconds to wait for a permit; ``None`` waits
                as long as needed.

        Returns:
            Raw response body returned by the transport.

        Raises:
            MissingRequiredField: If a product lacks both uit codes.
            ValidationAppError: If a product sets both uit codes.
            RateLimitTimeout: If no permit became available within ``timeout``.
            TransportError: If the transport fails. Propagated unchanged.
        """
        with document_context(document.doc_id):
            validate_document(document)
            payload = serialize_document(document)

            self.rate_limiter.acquire(timeout=timeout)

            start = time.perf_counter()
            try:
                body = self.transport.post_json(self.api_url, payload)
            except AppError as exc:
                logger.warning(
                    "document.submit_failed",
                    extra={"error_code": exc.code, "doc_type": document.doc_type},
                )
                raise

            logger.info(
                "document.submitted",
                extra={
                    "doc_type": document.doc_type,
                    "products": len(document.products),
                    "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                },
            )
            return body

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> DocumentClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def create_document_client(
    time_unit: TimeUnit | str | None = None,
    request_limit: int | None = None,
    *,
    transport: AbstractTransport | None = None,
) -> DocumentClient:
    """Build a client allowing ``request_limit`` submissions per ``time_unit``.

    Arguments left as ``None`` fall back to ``settings.client``.

    Raises:
        InvalidConfiguration: If ``time_unit`` is unknown or ``request_limit``
            is not a positive integer.
        ValidationAppError: If the configured transport is unknown.
    """
    unit = time_unit if time_unit is not None else settings.client.time_unit
    limit = request_limit if request_limit is not None else settings.client.request_limit

    rate_limiter = InMemoryFixedWindowRateLimiter.from_time_unit(unit, limit)

    return DocumentClient(
        rate_limiter,
        transport or create_transport(),
        api_url=settings.client.api_url,
    )
