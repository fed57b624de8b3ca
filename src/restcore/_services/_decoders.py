"""Decode strategies turning a successful response body into a typed value.

Each strategy is a small object with a ``requires_body`` flag and a
``decode(data)`` method. The executor in :mod:`._rest_client` owns the
shared control flow and delegates only the final bytes-to-shape step here.
"""

from typing import Any, Generic, Optional, Protocol, Sequence, TypeVar

from pydantic import ValidationError

from .._utils.constants import DEFAULT_MAX_JSON_PATH_DEPTH, EXHAUSTED_PATH_SENTINEL
from ..models.errors import (
    JSONParseError,
    KeyNotFoundError,
    SerializationError,
    TypeMismatchError,
)
from ..models.json_wrapper import (
    JSONPathType,
    JSONWrapper,
    decode_json,
    type_adapter,
)

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class ResponseDecoder(Protocol[T_co]):
    requires_body: bool

    def decode(self, data: bytes) -> T_co: ...


def navigate(
    json: JSONWrapper,
    path: Optional[Sequence[JSONPathType]],
    max_depth: Optional[int] = DEFAULT_MAX_JSON_PATH_DEPTH,
) -> JSONWrapper:
    """Follow ``path`` into ``json``, enforcing the configured depth limit."""
    if not path:
        return json
    if max_depth is not None and len(path) > max_depth:
        raise KeyNotFoundError(EXHAUSTED_PATH_SENTINEL)
    return json.at(*path)


class DataDecoder:
    requires_body = True

    def decode(self, data: bytes) -> bytes:
        return data


class StringDecoder:
    requires_body = True

    def decode(self, data: bytes) -> str:
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SerializationError() from e


class VoidDecoder:
    requires_body = False

    def decode(self, data: bytes) -> None:
        return None


class JSONObjectDecoder(Generic[T]):
    """Parse a JSON document, walk ``path`` and decode the node found there."""

    requires_body = True

    def __init__(
        self,
        shape: type[T],
        path: Optional[Sequence[JSONPathType]] = None,
        max_path_depth: Optional[int] = DEFAULT_MAX_JSON_PATH_DEPTH,
    ):
        self.shape = shape
        self.path = path
        self.max_path_depth = max_path_depth

    def decode(self, data: bytes) -> T:
        json = JSONWrapper.from_bytes(data)
        return decode_json(self.shape, navigate(json, self.path, self.max_path_depth))


class JSONArrayDecoder(Generic[T]):
    """Locate an array at ``path`` and decode each element independently.

    A failure on any element fails the whole decode.
    """

    requires_body = True

    def __init__(
        self,
        shape: type[T],
        path: Optional[Sequence[JSONPathType]] = None,
        max_path_depth: Optional[int] = DEFAULT_MAX_JSON_PATH_DEPTH,
    ):
        self.shape = shape
        self.path = path
        self.max_path_depth = max_path_depth

    def decode(self, data: bytes) -> list[T]:
        json = JSONWrapper.from_bytes(data)
        elements = navigate(json, self.path, self.max_path_depth).get_array()
        return [decode_json(self.shape, element) for element in elements]


class ModelDecoder(Generic[T]):
    """Validate the whole body against ``shape`` with pydantic."""

    requires_body = True

    def __init__(self, shape: Any):
        self.shape = shape

    def decode(self, data: bytes) -> T:
        try:
            return type_adapter(self.shape).validate_json(data)
        except ValidationError as e:
            if any(error["type"] == "json_invalid" for error in e.errors()):
                raise JSONParseError(f"Invalid JSON: {e}") from e
            raise TypeMismatchError(
                getattr(self.shape, "__name__", str(self.shape)), "object", str(e)
            ) from e
