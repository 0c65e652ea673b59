"""Factory for creating transport instances."""

from crpt_client.adapters.transport.base import AbstractTransport
from crpt_client.adapters.transport.httpx_transport import HttpxTransport
from crpt_client.core.config import settings
from crpt_client.core.errors import ValidationAppError


def create_transport() -> AbstractTransport:
    """Instantiate the transport named by ``settings.client.transport``.

    Returns:
        AbstractTransport: Configured transport instance.

    Raises:
        ValidationAppError: If the transport name is unknown.
    """
    name = settings.client.transport.lower()

    if name == "httpx":
        return HttpxTransport(timeout_seconds=settings.client.timeout_seconds)

    raise ValidationAppError(
        code="transport_unknown",
        message=f"Unknown transport: '{name}'. Supported transports: httpx",
    )
