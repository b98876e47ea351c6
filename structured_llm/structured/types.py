"""Type descriptors: the caller's requested result shape.

## Structured Outputs: Late-Bound Target Types

The caller names the type it wants back (a pydantic model, `int`,
`list[Item]`, `Literal[...]`, ...). One descriptor answers the three
questions the pipeline asks about that type:
1. Which JSON Schema describes it (sent as tool parameters)
2. How to convert the model's JSON into it (with validation)
3. Whether a converted value really is an instance of it

## Library Usage

Pydantic v2 TypeAdapter handles any type pydantic understands:
- json_schema() for schema derivation
- validate_json() / validate_python() for conversion
Conversion failures surface as pydantic ValidationError, whose error
types form the closed set the reconciler classifies.
"""

import types
from typing import Any, Generic, Optional, TypeVar, Union, get_origin

from pydantic import PydanticUserError, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from typing_extensions import is_typeddict

from structured_llm.structured.errors import ConversionError, TypeMismatchError

T = TypeVar("T")

_DEFS_KEY = "$defs"
_DEFS_PREFIX = "#/$defs/"


class _RecursiveReference(Exception):
    pass


def _inline_refs(schema: dict[str, Any]) -> dict[str, Any]:
    """Replace local `#/$defs/...` references with the definitions.

    Wrapping a schema moves its `$defs` away from the root, so references
    are resolved up front. Recursive definitions cannot be inlined: they
    keep `$defs` at the root, with a root-level `$ref` resolved one level
    so the schema keeps its own `type`. A recursive schema that is still
    not an object would lose its `$defs` when wrapped, so it is rejected.

    Raises:
        _RecursiveReference: For recursive schemas that are not objects.
    """
    defs = schema.get(_DEFS_KEY)
    if not isinstance(defs, dict) or not defs:
        return schema

    def resolve(node: Any, seen: frozenset[str]) -> Any:
        if isinstance(node, list):
            return [resolve(item, seen) for item in node]
        if not isinstance(node, dict):
            return node

        ref = node.get("$ref")
        if isinstance(ref, str) and ref.startswith(_DEFS_PREFIX):
            name = ref[len(_DEFS_PREFIX):]
            if name in seen:
                raise _RecursiveReference(name)
            target = resolve(defs[name], seen | {name})
            siblings = {k: resolve(v, seen) for k, v in node.items() if k != "$ref"}
            return {**target, **siblings}

        return {k: resolve(v, seen) for k, v in node.items()}

    root = {k: v for k, v in schema.items() if k != _DEFS_KEY}
    try:
        return resolve(root, frozenset())
    except _RecursiveReference:
        pass

    ref = schema.get("$ref")
    if isinstance(ref, str) and ref.startswith(_DEFS_PREFIX):
        siblings = {k: v for k, v in schema.items() if k != "$ref"}
        schema = {**defs[ref[len(_DEFS_PREFIX):]], **siblings}
    if schema.get("type") != "object":
        raise _RecursiveReference(ref or schema.get("type"))
    return schema


def _runtime_class(target: Any) -> Optional[Any]:
    """Class usable with isinstance() for `target`, if there is one."""
    if is_typeddict(target):
        return None
    if target is float:
        # JSON has a single number type; ints are valid floats
        return (int, float)
    if isinstance(target, type) and get_origin(target) is None:
        return target
    origin = get_origin(target)
    if isinstance(origin, type) and origin not in (Union, types.UnionType):
        return origin
    return None


def _shape(value: Any) -> str:
    return type(value).__name__


class TypeDescriptor(Generic[T]):
    """Schema derivation, conversion and narrowing for one target type.

    Args:
        target: Any type pydantic can validate.

    Raises:
        ConversionError: If pydantic cannot build a schema for `target`.

    Example:
        >>> descriptor = TypeDescriptor(list[int])
        >>> descriptor.json_schema()
        {'items': {'type': 'integer'}, 'type': 'array'}
        >>> descriptor.from_value(["1", 2])
        [1, 2]
    """

    def __init__(self, target: Any):
        self.target = target
        try:
            self._adapter: TypeAdapter[T] = TypeAdapter(target)
        except PydanticUserError as exc:
            raise ConversionError(
                f"Unable to build a schema for '{self.name}'", detail=exc
            ) from exc

    @property
    def name(self) -> str:
        name = getattr(self.target, "__name__", None)
        if name and get_origin(self.target) is None:
            return name
        return repr(self.target)

    def json_schema(self) -> dict[str, Any]:
        """JSON Schema of the target type with local references inlined."""
        try:
            schema = self._adapter.json_schema()
        except PydanticUserError as exc:
            raise ConversionError(
                f"Unable to build a JSON schema for '{self.name}'", detail=exc
            ) from exc
        try:
            return _inline_refs(schema)
        except _RecursiveReference as exc:
            raise ConversionError(
                f"Recursive schema for '{self.name}' is not an object and cannot be wrapped",
                detail=exc,
            ) from exc

    def from_json(self, text: str) -> T:
        """Parse and validate JSON text. Raises pydantic ValidationError."""
        return self._adapter.validate_json(text)

    def from_value(self, value: Any) -> T:
        """Validate an already parsed JSON value. Raises pydantic ValidationError."""
        return self._adapter.validate_python(value)

    def ensure_type(self, value: Any) -> T:
        """Check that `value` is an instance of the target type.

        Types without a runtime class (unions, literals, annotated types,
        TypedDicts, non-runtime protocols) are checked by strict
        re-validation instead of isinstance().

        Raises:
            TypeMismatchError: If the check fails.
        """
        if self.target is Any:
            return value

        matches = None
        runtime = _runtime_class(self.target)
        if runtime is not None:
            try:
                matches = isinstance(value, runtime)
            except TypeError:
                # Class refuses instance checks
                matches = None
        if matches is None:
            try:
                self._adapter.validate_python(value, strict=True)
                matches = True
            except PydanticValidationError:
                matches = False

        if not matches:
            raise TypeMismatchError(
                f"Invalid return type found. Expected '{self.name}', found '{_shape(value)}'"
            )
        return value
