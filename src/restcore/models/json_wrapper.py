import json
from functools import lru_cache
from typing import Any, Protocol, Sequence, TypeVar, Union, runtime_checkable

from pydantic import TypeAdapter, ValidationError

from .errors import JSONParseError, KeyNotFoundError, TypeMismatchError

T = TypeVar("T")

JSONPathType = Union[str, int]

_JSON_TYPE_NAMES = {
    dict: "object",
    list: "array",
    str: "string",
    bool: "boolean",
    int: "number",
    float: "number",
    type(None): "null",
}


def json_type_name(value: Any) -> str:
    return _JSON_TYPE_NAMES.get(type(value), type(value).__name__)


@runtime_checkable
class JSONDecodable(Protocol):
    """A type that knows how to build itself from a JSON node."""

    @classmethod
    def from_json(cls, json: "JSONWrapper") -> Any: ...


@lru_cache(maxsize=256)
def type_adapter(shape: Any) -> TypeAdapter:
    return TypeAdapter(shape)


class JSONWrapper:
    """A node in a parsed JSON document.

    Wraps one of the JSON value kinds (object, array, string, number,
    boolean, null) and supports navigating into children by a path of
    object keys and array indices.
    """

    def __init__(self, value: Any = None):
        self.value = value

    @classmethod
    def from_bytes(cls, data: bytes) -> "JSONWrapper":
        try:
            return cls(json.loads(data))
        except (ValueError, UnicodeDecodeError) as e:
            raise JSONParseError(f"Invalid JSON: {e}") from e

    def __repr__(self) -> str:
        return f"JSONWrapper({self.value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, JSONWrapper):
            return self.value == other.value
        return NotImplemented

    def at(self, *path: JSONPathType) -> "JSONWrapper":
        """Return the node found by following ``path`` from this node.

        Raises:
            KeyNotFoundError: A key or index along the path does not exist.
            TypeMismatchError: A segment tries to step into a scalar, or an
                index is applied to an object (or a key to an array).
        """
        node = self.value
        for segment in path:
            if isinstance(segment, int) and not isinstance(segment, bool):
                if not isinstance(node, list):
                    raise TypeMismatchError("array", json_type_name(node))
                if not -len(node) <= segment < len(node):
                    raise KeyNotFoundError(str(segment))
                node = node[segment]
            else:
                if not isinstance(node, dict):
                    raise TypeMismatchError("object", json_type_name(node))
                if segment not in node:
                    raise KeyNotFoundError(segment)
                node = node[segment]
        return JSONWrapper(node)

    def _get(self, path: Sequence[JSONPathType], expected: type, name: str) -> Any:
        value = self.at(*path).value
        # bool is an int subclass in Python but not a number in JSON
        if not isinstance(value, expected) or (
            isinstance(value, bool) and expected is not bool
        ):
            raise TypeMismatchError(name, json_type_name(value))
        return value

    def get_string(self, *path: JSONPathType) -> str:
        return self._get(path, str, "string")

    def get_int(self, *path: JSONPathType) -> int:
        return self._get(path, int, "integer")

    def get_float(self, *path: JSONPathType) -> float:
        return float(self._get(path, (int, float), "number"))

    def get_bool(self, *path: JSONPathType) -> bool:
        return self._get(path, bool, "boolean")

    def get_dict(self, *path: JSONPathType) -> dict[str, "JSONWrapper"]:
        return {
            key: JSONWrapper(value)
            for key, value in self._get(path, dict, "object").items()
        }

    def get_array(self, *path: JSONPathType) -> list["JSONWrapper"]:
        return [JSONWrapper(value) for value in self._get(path, list, "array")]

    def is_null(self, *path: JSONPathType) -> bool:
        return self.at(*path).value is None

    def decode(self, shape: type[T], *path: JSONPathType) -> T:
        """Decode the node at ``path`` into ``shape``.

        Types implementing :class:`JSONDecodable` build themselves from the
        node. Any other type (pydantic models, dataclasses, builtins, generic
        aliases) is validated by pydantic.
        """
        return decode_json(shape, self.at(*path))


def decode_json(shape: Any, node: JSONWrapper) -> Any:
    if shape is JSONWrapper:
        return node
    if isinstance(shape, type) and isinstance(shape, JSONDecodable):
        return shape.from_json(node)
    try:
        return type_adapter(shape).validate_python(node.value)
    except ValidationError as e:
        raise TypeMismatchError(
            getattr(shape, "__name__", str(shape)),
            json_type_name(node.value),
            str(e),
        ) from e
