"""Error taxonomy for remote calls made while resolving product metadata."""


class MetadataError(Exception):
    """Base class for failures inside the resolution pipeline."""


class ConfigError(MetadataError):
    """Required configuration is missing or unreadable."""


class TransportError(MetadataError):
    """Connection failure or timeout."""


class RequestTimeout(TransportError):
    """Request exceeded its timeout."""


class HttpStatusError(MetadataError):
    """Remote service answered with a non-2xx status."""

    def __init__(self, status_code: int, url: str = ""):
        self.status_code = status_code
        self.url = url
        super().__init__(f"{status_code} response from {url}" if url else f"{status_code} response")

    @property
    def retryable(self) -> bool:
        return self.status_code == 429 or self.status_code >= 500


class ParseError(MetadataError):
    """Malformed HTML or JSON."""


class NoResultError(MetadataError):
    """Well-formed response without usable data."""


class RetryExhausted(MetadataError):
    """An operation kept failing after every allowed attempt."""

    def __init__(self, operation_name: str, attempts: int, last_error: BaseException):
        self.operation_name = operation_name
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"{operation_name} failed after {attempts} attempts: {last_error}")
