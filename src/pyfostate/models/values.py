"""Tagged state values and their checked encode/decode.

A state document stores :data:`StateValue` instances, never bare Python
objects. :func:`encode_value` turns a Python value into the tagged form,
inferring the tag from the Python type when the caller does not name one.
:func:`decode_value` is the checked inverse: it succeeds for an exact tag
match and for the widening conversions ``label -> scalar`` and
``labelList -> scalarList``, and raises
:class:`~pyfostate.exceptions.StateTypeMismatchError` for everything else.
"""

from __future__ import annotations

import numbers
from collections.abc import Iterable, Mapping
from typing import Annotated, Any, Literal

from pydantic import Field, StrictBool, StrictFloat, StrictInt, StrictStr, TypeAdapter, ValidationError

from pyfostate.exceptions import StateTypeMismatchError, StateValueError
from pyfostate.models._base import StateValueBase, ValueType
from pyfostate.models.tensors import SphericalTensor, SymmTensor, Tensor, Vector


class BoolValue(StateValueBase):
    kind: Literal["bool"] = "bool"
    value: StrictBool


class LabelValue(StateValueBase):
    kind: Literal["label"] = "label"
    value: StrictInt


class ScalarValue(StateValueBase):
    kind: Literal["scalar"] = "scalar"
    value: StrictFloat


class WordValue(StateValueBase):
    kind: Literal["word"] = "word"
    value: StrictStr


class VectorValue(StateValueBase):
    kind: Literal["vector"] = "vector"
    value: tuple[StrictFloat, StrictFloat, StrictFloat]

    def to_python(self) -> Vector:
        return Vector(*self.value)


class SphericalTensorValue(StateValueBase):
    kind: Literal["sphericalTensor"] = "sphericalTensor"
    value: tuple[StrictFloat]

    def to_python(self) -> SphericalTensor:
        return SphericalTensor(*self.value)


class SymmTensorValue(StateValueBase):
    kind: Literal["symmTensor"] = "symmTensor"
    value: tuple[StrictFloat, StrictFloat, StrictFloat, StrictFloat, StrictFloat, StrictFloat]

    def to_python(self) -> SymmTensor:
        return SymmTensor(*self.value)


class TensorValue(StateValueBase):
    kind: Literal["tensor"] = "tensor"
    value: tuple[
        StrictFloat,
        StrictFloat,
        StrictFloat,
        StrictFloat,
        StrictFloat,
        StrictFloat,
        StrictFloat,
        StrictFloat,
        StrictFloat,
    ]

    def to_python(self) -> Tensor:
        return Tensor(*self.value)


class ScalarListValue(StateValueBase):
    kind: Literal["scalarList"] = "scalarList"
    value: tuple[StrictFloat, ...]


class LabelListValue(StateValueBase):
    kind: Literal["labelList"] = "labelList"
    value: tuple[StrictInt, ...]


class WordListValue(StateValueBase):
    kind: Literal["wordList"] = "wordList"
    value: tuple[StrictStr, ...]


StateValue = Annotated[
    BoolValue
    | LabelValue
    | ScalarValue
    | WordValue
    | VectorValue
    | SphericalTensorValue
    | SymmTensorValue
    | TensorValue
    | ScalarListValue
    | LabelListValue
    | WordListValue,
    Field(discriminator="kind"),
]
"""Discriminated union of every storable value."""

_STATE_VALUE_ADAPTER: TypeAdapter[StateValue] = TypeAdapter(StateValue)

_MODEL_BY_TYPE: dict[ValueType, type[StateValueBase]] = {
    ValueType.BOOL: BoolValue,
    ValueType.LABEL: LabelValue,
    ValueType.SCALAR: ScalarValue,
    ValueType.WORD: WordValue,
    ValueType.VECTOR: VectorValue,
    ValueType.SPHERICAL_TENSOR: SphericalTensorValue,
    ValueType.SYMM_TENSOR: SymmTensorValue,
    ValueType.TENSOR: TensorValue,
    ValueType.SCALAR_LIST: ScalarListValue,
    ValueType.LABEL_LIST: LabelListValue,
    ValueType.WORD_LIST: WordListValue,
}

# Checked in order; bool must precede int.
_CARRIER_TYPES: tuple[tuple[type, ValueType], ...] = (
    (bool, ValueType.BOOL),
    (int, ValueType.LABEL),
    (float, ValueType.SCALAR),
    (str, ValueType.WORD),
    (Vector, ValueType.VECTOR),
    (SphericalTensor, ValueType.SPHERICAL_TENSOR),
    (SymmTensor, ValueType.SYMM_TENSOR),
    (Tensor, ValueType.TENSOR),
)

_FLOAT_SEQUENCE_TYPES = frozenset(
    {
        ValueType.VECTOR,
        ValueType.SPHERICAL_TENSOR,
        ValueType.SYMM_TENSOR,
        ValueType.TENSOR,
        ValueType.SCALAR_LIST,
    }
)

_WIDENING: frozenset[tuple[ValueType, ValueType]] = frozenset(
    {
        (ValueType.LABEL, ValueType.SCALAR),
        (ValueType.LABEL_LIST, ValueType.SCALAR_LIST),
    }
)


def _is_label(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _is_scalar(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def parse_state_value(data: Any) -> StateValueBase:
    """Validate a ``{"kind": ..., "value": ...}`` mapping into a tagged value."""
    try:
        return _STATE_VALUE_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise StateValueError(f"not a valid state value: {data!r}") from exc


def is_state_value_payload(data: Any) -> bool:
    """Return ``True`` when *data* looks like a serialised tagged value."""
    return isinstance(data, Mapping) and set(data) == {"kind", "value"} and isinstance(data["kind"], str)


def resolve_value_type(requested: Any) -> ValueType | None:
    """Normalise a requested type to a :class:`ValueType`.

    *requested* may be ``None``, a :class:`ValueType`, a tag string such as
    ``"vector"``, or a carrier type such as ``float`` or :class:`Vector`.
    """
    if requested is None:
        return None
    if isinstance(requested, ValueType):
        return requested
    if isinstance(requested, type):
        for carrier, value_type in _CARRIER_TYPES:
            if requested is carrier:
                return value_type
        for carrier, value_type in _CARRIER_TYPES:
            if issubclass(requested, carrier):
                return value_type
        raise StateValueError(f"no state value type for Python type {requested.__name__}")
    if isinstance(requested, str):
        try:
            return ValueType(requested)
        except ValueError:
            raise StateValueError(f"unknown state value type {requested!r}") from None
    raise StateValueError(f"cannot interpret {requested!r} as a state value type")


def infer_value_type(value: Any) -> ValueType | None:
    """Return the tag *value* would be stored under, or ``None`` if unsupported."""
    if isinstance(value, StateValueBase):
        return value.value_type
    if isinstance(value, bool):
        return ValueType.BOOL
    if _is_label(value):
        return ValueType.LABEL
    if _is_scalar(value):
        return ValueType.SCALAR
    if isinstance(value, str):
        return ValueType.WORD
    for carrier, value_type in _CARRIER_TYPES[4:]:
        if isinstance(value, carrier):
            return value_type
    if isinstance(value, (list, tuple)):
        if all(_is_label(item) for item in value) and value:
            return ValueType.LABEL_LIST
        if all(_is_scalar(item) for item in value):
            # Empty sequences land here too.
            return ValueType.SCALAR_LIST
        if all(isinstance(item, str) for item in value):
            return ValueType.WORD_LIST
    return None


def type_of_default(default: Any) -> ValueType | None:
    """Tag implied by a caller-supplied default, ``None`` if it implies none.

    An empty sequence says nothing about its element type, so it implies none
    and the stored list is returned as stored.
    """
    if default is None:
        return None
    if isinstance(default, (list, tuple)) and not default:
        return None
    return infer_value_type(default)


def _prepare(value: Any, value_type: ValueType) -> Any:
    if value_type is ValueType.BOOL:
        if isinstance(value, bool):
            return value
    elif value_type is ValueType.LABEL:
        if _is_label(value):
            return int(value)
    elif value_type is ValueType.SCALAR:
        if _is_scalar(value):
            return float(value)
    elif value_type is ValueType.WORD:
        if isinstance(value, str):
            return value
    elif isinstance(value, Iterable) and not isinstance(value, (str, bytes, Mapping)):
        items = tuple(value)
        if value_type in _FLOAT_SEQUENCE_TYPES and all(_is_scalar(item) for item in items):
            return tuple(float(item) for item in items)
        if value_type is ValueType.LABEL_LIST and all(_is_label(item) for item in items):
            return tuple(int(item) for item in items)
        if value_type is ValueType.WORD_LIST and all(isinstance(item, str) for item in items):
            return items
    raise StateValueError(f"cannot store {type(value).__name__} value as {value_type}")


def encode_value(value: Any, value_type: Any = None) -> StateValueBase:
    """Wrap *value* in its tagged model.

    Raises
    ------
    StateValueError
        If the value cannot be represented (unsupported type, wrong arity).
    """
    requested = resolve_value_type(value_type)
    if isinstance(value, StateValueBase):
        if requested is None or requested is value.value_type:
            return value
        value = value.to_python()

    target = requested if requested is not None else infer_value_type(value)
    if target is None:
        raise StateValueError(f"cannot store value of type {type(value).__name__}")

    model = _MODEL_BY_TYPE[target]
    try:
        return model(value=_prepare(value, target))
    except ValidationError as exc:
        raise StateValueError(f"cannot store {value!r} as {target}") from exc


def decode_value(stored: StateValueBase, value_type: Any = None, *, entry: str = "") -> Any:
    """Decode *stored* as *value_type*.

    With no requested type the value is returned as stored.

    Raises
    ------
    StateTypeMismatchError
        If the stored tag is neither the requested one nor widenable to it.
    """
    requested = resolve_value_type(value_type)
    stored_type = stored.value_type
    if requested is None or requested is stored_type:
        return stored.to_python()

    if (stored_type, requested) in _WIDENING:
        raw = stored.to_python()
        if requested is ValueType.SCALAR:
            return float(raw)
        return tuple(float(item) for item in raw)

    label = f"{entry!r} " if entry else ""
    raise StateTypeMismatchError(
        f"entry {label}holds {stored_type}, cannot read it as {requested}",
        entry=entry,
        stored_type=str(stored_type),
        requested_type=str(requested),
    )
