"""Errors raised while talking to the OV API.

None of these cross the transport client boundary: they are caught there and
turned into empty or last-known-good results.
"""


class OvApiError(Exception):
    """Base class for OV API failures."""


class NetworkTimeoutError(OvApiError):
    """The upstream did not answer within the request timeout."""


class MalformedResponseError(OvApiError):
    """The upstream answered with invalid JSON or an unexpected shape."""


class UpstreamStatusError(OvApiError):
    """The upstream answered with a non-200 HTTP status."""

    def __init__(self, status: int, url: str) -> None:
        self.status = status
        self.url = url
        super().__init__(f"OV API returned status {status} for {url}")


class InvalidInputError(OvApiError):
    """The caller passed unusable input, such as an empty station id."""
