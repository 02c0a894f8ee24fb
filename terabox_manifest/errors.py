"""
Error taxonomy for the manifest service.

Every error carries the HTTP status the API layer answers with, so call
sites never have to map exceptions by hand.
"""


class TeraboxError(Exception):
    """Base class for every failure reported to callers."""

    http_status = 500

    def to_dict(self) -> dict:
        return {"status": "error", "message": str(self)}


class InvalidRequestError(TeraboxError):
    """Caller supplied missing or malformed input."""

    http_status = 400


class AuthenticationError(TeraboxError):
    """Login reached the server but no session marker cookie came back."""


class NetworkError(TeraboxError):
    """Transport failure, timeout or 5xx on an outbound call."""


class TokenNotFoundError(TeraboxError):
    """The share page carries no jsToken assignment."""

    http_status = 400


class ShortLinkNotFoundError(TeraboxError):
    """Neither the resolved URL nor the page body yields a short-link id."""

    http_status = 400


class UpstreamError(TeraboxError):
    """The listing endpoint answered with a non-zero in-body errno."""

    http_status = 400

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
