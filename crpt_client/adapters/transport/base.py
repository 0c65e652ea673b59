from abc import ABC, abstractmethod


class AbstractTransport(ABC):
    """Interface for transports that POST a serialized JSON payload."""

    @abstractmethod
    def post_json(self, url: str, payload: str) -> str:
        """Send ``payload`` to ``url`` and return the raw response body.

        Args:
            url: Target endpoint.
            payload: Serialized JSON document.

        Returns:
            str: Response body as text.

        Raises:
            TransportError: On connection failure, timeout or non-2xx status.
        """
        ...

    def close(self) -> None:
        """Release any connections held by the transport."""
