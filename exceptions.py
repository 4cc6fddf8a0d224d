# storefront/exceptions.py

class TrackingError(Exception):
    """
    Raised when an order lookup cannot produce a TrackedOrder.
    The message is what the shopper sees; the api_* fields are for the log.
    """
    def __init__(
        self,
        message: str,
        *,
        api_url: str | None = None,
        api_status: int | None = None,
        raw_response_text: str | None = None,
    ):
        super().__init__(message)
        self.api_url = api_url
        self.api_status = api_status
        self.raw_response_text = raw_response_text


class TransportError(TrackingError):
    """The tracking API could not be reached at all."""


class NotFoundOrHttpError(TrackingError):
    """The tracking API answered with a non-2xx status."""


class BusinessFailure(TrackingError):
    """2xx response whose envelope says success is false (or has no order)."""


class MalformedContent(Exception):
    """Settings payload carries about_us in neither supported shape."""
    def __init__(self, message: str, payload=None):
        super().__init__(message)
        self.payload = payload
