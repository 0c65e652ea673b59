"""Transport adapter layer - abstracts over the HTTP client used to POST documents."""

from crpt_client.adapters.transport.base import AbstractTransport
from crpt_client.adapters.transport.factory import create_transport
from crpt_client.adapters.transport.httpx_transport import HttpxTransport

__all__ = [
    "AbstractTransport",
    "HttpxTransport",
    "create_transport",
]
