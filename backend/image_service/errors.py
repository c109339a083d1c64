"""
Error types raised by the image service.

Every error carries the HTTP status and the message the client is allowed
to see. The blueprint error handler in `image_service.routes` turns them
into `{"error": message}` JSON responses.
"""

from typing import Dict, Optional


class RelayError(Exception):
    """Base class for all errors surfaced to the caller of the image service."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> Dict[str, str]:
        return {"error": self.message}


class ConfigurationError(RelayError):
    """The server is missing its upstream credential."""

    status_code = 500


class ClientInputError(RelayError):
    """A required request field is missing."""

    status_code = 400


class UpstreamError(RelayError):
    """The upstream service answered with a non-success status."""

    def __init__(self, label: str, status_code: int, raw_text: str) -> None:
        super().__init__(f"{label}: {raw_text}", status_code)
        self.label = label
        self.raw_text = raw_text


class ExtractionError(RelayError):
    """The upstream call succeeded but its response lacked the expected data."""

    status_code = 500


class TransportError(RelayError):
    """
    Network or serialization failure while talking to the upstream service.

    The message is a fixed generic text; the underlying exception is only
    logged server-side.
    """

    status_code = 500
