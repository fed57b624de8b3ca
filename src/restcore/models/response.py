from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

import httpx

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def error(self) -> None:
        return None

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    error: Exception

    @property
    def is_success(self) -> bool:
        return False

    @property
    def value(self) -> None:
        return None

    def unwrap(self):
        """Raise the stored error."""
        raise self.error


RestResult = Union[Success[T], Failure]


@dataclass(frozen=True)
class RawResponse:
    """Outcome of the transport step, before any decoding.

    Exactly one of two states: ``error`` is set, or the status code is in
    [200, 300) and ``data`` holds the (possibly empty) body.
    """

    data: Optional[bytes] = None
    response: Optional[httpx.Response] = None
    error: Optional[Exception] = None


@dataclass(frozen=True)
class RestResponse(Generic[T]):
    """Decoded result bundled with the raw HTTP response and body.

    ``response`` and ``data`` are populated whenever they were received, so
    callers can inspect headers and status regardless of the decode outcome.
    """

    response: Optional[httpx.Response]
    data: Optional[bytes]
    result: RestResult[T]

    @property
    def status_code(self) -> Optional[int]:
        return self.response.status_code if self.response is not None else None


@dataclass(frozen=True)
class DownloadResponse:
    response: Optional[httpx.Response] = None
    error: Optional[Exception] = None

    @property
    def is_success(self) -> bool:
        return self.error is None
