from typing import Optional


class RestError(Exception):
    """Base class for every error produced by the request/response core."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class CredentialError(RestError):
    """Raised by an authentication strategy that cannot authenticate a request."""


class TransportError(RestError):
    """The network layer failed (DNS, TLS, connection reset, timeout)."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(str(cause) or type(cause).__name__)


class NoResponseError(RestError):
    def __init__(self, message="No valid HTTP response was received."):
        super().__init__(message)


class HTTPStatusError(RestError):
    """A response arrived with a status code outside [200, 300)."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"


class ServiceError(RestError):
    """A service-specific error parsed from a non-2xx response body."""

    def __init__(
        self,
        status_code: int,
        message: str,
        code: Optional[int] = None,
        description: Optional[str] = None,
    ):
        self.status_code = status_code
        self.code = code
        self.description = description
        super().__init__(message)


class NoDataError(RestError):
    def __init__(self, message="The response contained no data."):
        super().__init__(message)


class DecodeError(RestError):
    """The response body could not be decoded into the requested shape."""


class JSONParseError(DecodeError):
    pass


class KeyNotFoundError(DecodeError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Key not found: {key!r}")


class TypeMismatchError(DecodeError):
    def __init__(self, expected: str, actual: str, message: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        super().__init__(message or f"Expected {expected}, found {actual}")


class SerializationError(DecodeError):
    def __init__(self, message="The response body is not valid UTF-8 text."):
        super().__init__(message)


class InvalidFileError(RestError):
    def __init__(self, message="The downloaded file could not be found."):
        super().__init__(message)


class FileSystemError(RestError):
    """Moving a downloaded file to its destination failed."""


class InvalidURLError(RestError):
    def __init__(self, url: str, reason: str):
        self.url = url
        super().__init__(f"Invalid URL {url!r}: {reason}")
