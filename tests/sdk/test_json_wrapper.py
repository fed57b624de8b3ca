from typing import Any

import pytest
from pydantic import BaseModel

from restcore import JSONWrapper
from restcore.models.errors import (
    JSONParseError,
    KeyNotFoundError,
    TypeMismatchError,
)


class Fruit:
    def __init__(self, name: str, score: float):
        self.name = name
        self.score = score

    @classmethod
    def from_json(cls, json: JSONWrapper) -> "Fruit":
        return cls(name=json.get_string("class"), score=json.get_float("score"))


class FruitModel(BaseModel):
    name: str
    score: float


@pytest.fixture
def document() -> JSONWrapper:
    return JSONWrapper.from_bytes(
        b"""{
            "images": [
                {"classes": [{"class": "apple", "score": 0.9}, {"class": "pear", "score": 1}]}
            ],
            "count": 2,
            "ready": true,
            "note": null
        }"""
    )


class TestJSONWrapper:
    def test_invalid_json(self):
        with pytest.raises(JSONParseError):
            JSONWrapper.from_bytes(b"{not json")

    def test_invalid_utf8(self):
        with pytest.raises(JSONParseError):
            JSONWrapper.from_bytes(b'"\xff\xfe"')

    def test_navigate_keys_and_indices(self, document: JSONWrapper):
        node = document.at("images", 0, "classes", -1, "class")

        assert node == JSONWrapper("pear")

    def test_empty_path_returns_same_node(self, document: JSONWrapper):
        assert document.at() == document

    def test_missing_key(self, document: JSONWrapper):
        with pytest.raises(KeyNotFoundError) as exc_info:
            document.at("images", 0, "colors")

        assert exc_info.value.key == "colors"

    def test_index_out_of_range(self, document: JSONWrapper):
        with pytest.raises(KeyNotFoundError) as exc_info:
            document.at("images", 3)

        assert exc_info.value.key == "3"

    def test_key_into_array(self, document: JSONWrapper):
        with pytest.raises(TypeMismatchError) as exc_info:
            document.at("images", "classes")

        assert exc_info.value.expected == "object"
        assert exc_info.value.actual == "array"

    def test_index_into_object(self, document: JSONWrapper):
        with pytest.raises(TypeMismatchError):
            document.at(0)

    def test_typed_getters(self, document: JSONWrapper):
        assert document.get_int("count") == 2
        assert document.get_bool("ready") is True
        assert document.get_float("images", 0, "classes", 1, "score") == 1.0
        assert document.is_null("note")
        assert len(document.get_array("images", 0, "classes")) == 2
        assert set(document.get_dict()) == {"images", "count", "ready", "note"}

    def test_bool_is_not_a_number(self, document: JSONWrapper):
        with pytest.raises(TypeMismatchError):
            document.get_int("ready")

    def test_getter_type_mismatch(self, document: JSONWrapper):
        with pytest.raises(TypeMismatchError) as exc_info:
            document.get_string("count")

        assert exc_info.value.expected == "string"
        assert exc_info.value.actual == "number"


class TestDecode:
    def test_decode_with_from_json(self, document: JSONWrapper):
        fruit = document.decode(Fruit, "images", 0, "classes", 0)

        assert isinstance(fruit, Fruit)
        assert fruit.name == "apple"
        assert fruit.score == 0.9

    def test_decode_with_pydantic(self):
        json = JSONWrapper({"data": {"name": "kiwi", "score": 0.5}})

        assert json.decode(FruitModel, "data") == FruitModel(name="kiwi", score=0.5)

    @pytest.mark.parametrize(
        "shape,path,expected",
        [
            (int, ("count",), 2),
            (bool, ("ready",), True),
            (list[dict[str, Any]], ("images", 0, "classes"), [
                {"class": "apple", "score": 0.9},
                {"class": "pear", "score": 1},
            ]),
        ],
    )
    def test_decode_builtin_shapes(
        self, document: JSONWrapper, shape: Any, path: tuple, expected: Any
    ):
        assert document.decode(shape, *path) == expected

    def test_decode_json_wrapper_returns_node(self, document: JSONWrapper):
        assert document.decode(JSONWrapper, "count") == JSONWrapper(2)

    def test_decode_validation_failure(self):
        json = JSONWrapper({"name": "kiwi"})

        with pytest.raises(TypeMismatchError) as exc_info:
            json.decode(FruitModel)

        assert exc_info.value.expected == "FruitModel"
        assert exc_info.value.actual == "object"
