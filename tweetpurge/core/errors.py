"""
Error types raised by the Twitter client and the OAuth2 handshake.

Every error carries the HTTP status the web layer should answer with, so
routes can turn any of them into a response without knowing the subclass.
"""


class TwitterAPIError(Exception):
    """Base class for every failure surfaced to the request handlers"""

    http_status = 500


class AuthError(TwitterAPIError):
    """Credential missing, empty, or rejected by the platform (401/403)"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def http_status(self):
        if self.status_code in (401, 403):
            return self.status_code
        return 401


class UpstreamError(TwitterAPIError):
    """The platform answered with an unexpected status, or could not be reached"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(UpstreamError):
    """User lookup failed for an unknown handle"""


class DecodeError(TwitterAPIError):
    """Response body did not match the expected JSON shape"""


class CsrfMismatchError(TwitterAPIError):
    """OAuth2 callback state does not match the one this process issued"""

    http_status = 400


class TokenExchangeError(TwitterAPIError):
    """Authorization code could not be exchanged for an access token"""

    http_status = 400


class ValidationError(TwitterAPIError):
    """A required input was missing or empty"""

    http_status = 400
