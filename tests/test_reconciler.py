from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Optional

import pytest
from pydantic import BaseModel, ValidationError
from typing_extensions import TypedDict

from structured_llm.structured.errors import ConversionError, TypeMismatchError
from structured_llm.structured.normalizer import normalize
from structured_llm.structured.reconciler import CONVERSION_ADVICE, reconcile
from structured_llm.structured.types import TypeDescriptor


class Person(BaseModel):
    name: str
    age: int


class Item(BaseModel):
    sku: str
    qty: int


class Movie(TypedDict):
    title: str
    year: int


@dataclass
class Point:
    x: int
    y: int


class Color(str, Enum):
    RED = "red"
    GREEN = "green"


class Node(BaseModel):
    value: int
    children: list[Node] = []


class _FailingDescriptor(TypeDescriptor):
    def __init__(self, target: Any, error: Exception):
        super().__init__(target)
        self.error = error

    def from_json(self, text: str) -> Any:
        raise self.error

    def from_value(self, value: Any) -> Any:
        raise self.error


class _WrongShapeDescriptor(TypeDescriptor):
    def from_value(self, value: Any) -> Any:
        return str(value)


def test_object_round_trip() -> None:
    payload = {"name": "Ada", "age": 36}
    assert TypeDescriptor(Person).json_schema()["type"] == "object"

    result = reconcile(payload, Person, True)

    assert result == Person.model_validate_json(json.dumps(payload))
    assert isinstance(result, Person)


def test_scalar_round_trip() -> None:
    schema_response = normalize(TypeDescriptor(int).json_schema())
    assert schema_response.is_originally_json_object is False

    assert reconcile({"result": 7}, int, schema_response.is_originally_json_object) == 7


def test_wrapped_list_of_models() -> None:
    result = reconcile({"result": [{"sku": "a", "qty": 2}]}, list[Item], False)
    assert result == [Item(sku="a", qty=2)]


def test_wrapped_literal() -> None:
    assert reconcile({"result": "high"}, Literal["low", "high"], False) == "high"


def test_missing_result_is_none() -> None:
    assert reconcile({}, Optional[int], False) is None


@pytest.mark.parametrize(
    ("arguments", "target", "is_object"),
    [
        ({"name": "Ada"}, Person, True),
        ({"name": "Ada", "age": "old"}, Person, True),
        ({"result": "seven"}, int, False),
        ({}, int, False),
        ({"result": "medium"}, Literal["low", "high"], False),
    ],
)
def test_model_output_mismatch_becomes_advisory_conversion_error(
    arguments: dict, target: object, is_object: bool
) -> None:
    with pytest.raises(ConversionError) as e:
        reconcile(arguments, target, is_object)

    assert e.value.message == CONVERSION_ADVICE
    assert "Retrying and/or validating the prompt could fix the response." in str(e.value)
    assert isinstance(e.value.detail, ValidationError)
    assert e.value.__cause__ is e.value.detail


def test_other_errors_pass_through_unchanged() -> None:
    err = RuntimeError("adapter exploded")

    with pytest.raises(RuntimeError) as e:
        reconcile({"name": "Ada", "age": 1}, _FailingDescriptor(Person, err), True)
    assert e.value is err

    with pytest.raises(RuntimeError) as e:
        reconcile({"result": 1}, _FailingDescriptor(int, err), False)
    assert e.value is err


def test_final_narrowing_failure() -> None:
    with pytest.raises(TypeMismatchError) as e:
        reconcile({"result": 5}, _WrongShapeDescriptor(int), False)
    assert "Expected 'int'" in str(e.value)
    assert "found 'str'" in str(e.value)


@pytest.mark.parametrize(
    ("target", "payload", "expected"),
    [
        (Movie, {"title": "Up", "year": 2009}, {"title": "Up", "year": 2009}),
        (Point, {"x": 1, "y": 2}, Point(x=1, y=2)),
        (Color, "green", Color.GREEN),
        (tuple[int, str], [3, "x"], (3, "x")),
        (Node, {"value": 1, "children": [{"value": 2}]}, Node(value=1, children=[Node(value=2)])),
        (dict[str, int], {"a": 1}, {"a": 1}),
    ],
)
def test_reconcile_round_trip_for_target_kinds(target: object, payload: Any, expected: Any) -> None:
    schema_response = normalize(TypeDescriptor(target).json_schema())
    arguments = payload if schema_response.is_originally_json_object else {"result": payload}

    result = reconcile(arguments, target, schema_response.is_originally_json_object)

    assert result == expected
    assert type(result) is type(expected)


def test_typed_dict_mismatch_is_advisory_conversion_error() -> None:
    with pytest.raises(ConversionError) as e:
        reconcile({"title": "Up", "year": "recent"}, Movie, True)
    assert isinstance(e.value.detail, ValidationError)


def test_reconcile_accepts_a_descriptor() -> None:
    descriptor: TypeDescriptor[Person] = TypeDescriptor(Person)
    person: Person = reconcile({"name": "Ada", "age": 36}, descriptor, True)
    assert person == Person(name="Ada", age=36)
