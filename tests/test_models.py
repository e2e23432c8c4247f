"""Tests for tagged state values and checked decoding."""

from __future__ import annotations

import math
from enum import IntEnum

import pytest

from pyfostate.exceptions import StateTypeMismatchError, StateValueError
from pyfostate.models import (
    BoolValue,
    LabelValue,
    ScalarListValue,
    ScalarValue,
    SphericalTensor,
    SymmTensor,
    Tensor,
    ValueType,
    Vector,
    VectorValue,
    decode_value,
    encode_value,
    infer_value_type,
    parse_state_value,
    resolve_value_type,
    type_of_default,
)

# ------------------------------------------------------------------
# Type inference
# ------------------------------------------------------------------


class TestInferValueType:
    def test_bool_is_not_a_label(self) -> None:
        assert infer_value_type(True) == ValueType.BOOL
        assert infer_value_type(1) == ValueType.LABEL

    def test_scalars_and_words(self) -> None:
        assert infer_value_type(1.5) == ValueType.SCALAR
        assert infer_value_type("Gauss") == ValueType.WORD

    def test_compound_carriers(self) -> None:
        assert infer_value_type(Vector(0, 0, 1)) == ValueType.VECTOR
        assert infer_value_type(SphericalTensor(1.0)) == ValueType.SPHERICAL_TENSOR
        assert infer_value_type(SymmTensor(1, 0, 0, 1, 0, 1)) == ValueType.SYMM_TENSOR
        assert infer_value_type(Tensor(1, 0, 0, 0, 1, 0, 0, 0, 1)) == ValueType.TENSOR

    def test_sequences(self) -> None:
        assert infer_value_type([1, 2]) == ValueType.LABEL_LIST
        assert infer_value_type([1, 2.5]) == ValueType.SCALAR_LIST
        assert infer_value_type(("a", "b")) == ValueType.WORD_LIST
        assert infer_value_type([]) == ValueType.SCALAR_LIST

    def test_unsupported(self) -> None:
        assert infer_value_type({"a": 1}) is None
        assert infer_value_type([1, "a"]) is None
        assert infer_value_type(None) is None

    def test_type_of_default(self) -> None:
        assert type_of_default(None) is None
        assert type_of_default(0.0) == ValueType.SCALAR
        assert type_of_default(object()) is None

    def test_empty_sequence_default_implies_no_type(self) -> None:
        assert type_of_default([]) is None
        assert type_of_default(()) is None
        assert type_of_default([1]) == ValueType.LABEL_LIST


class _Mode(IntEnum):
    STEADY = 0


class TestResolveValueType:
    def test_python_types(self) -> None:
        assert resolve_value_type(bool) == ValueType.BOOL
        assert resolve_value_type(int) == ValueType.LABEL
        assert resolve_value_type(float) == ValueType.SCALAR
        assert resolve_value_type(str) == ValueType.WORD
        assert resolve_value_type(Vector) == ValueType.VECTOR

    def test_subclass_of_carrier(self) -> None:
        assert resolve_value_type(_Mode) == ValueType.LABEL

    def test_tag_strings(self) -> None:
        assert resolve_value_type("symmTensor") == ValueType.SYMM_TENSOR
        assert resolve_value_type(ValueType.TENSOR) == ValueType.TENSOR
        assert resolve_value_type(None) is None

    def test_unknown(self) -> None:
        with pytest.raises(StateValueError):
            resolve_value_type("quaternion")
        with pytest.raises(StateValueError):
            resolve_value_type(dict)


# ------------------------------------------------------------------
# Encoding
# ------------------------------------------------------------------


class TestEncodeValue:
    def test_infers_model(self) -> None:
        assert encode_value(2) == LabelValue(value=2)
        assert encode_value(2.0) == ScalarValue(value=2.0)
        assert encode_value(False) == BoolValue(value=False)

    def test_vector_from_plain_sequence_with_type(self) -> None:
        encoded = encode_value([0, 1, 2], ValueType.VECTOR)
        assert isinstance(encoded, VectorValue)
        assert encoded.to_python() == Vector(0.0, 1.0, 2.0)

    def test_label_widened_on_write_when_requested(self) -> None:
        assert encode_value(3, float) == ScalarValue(value=3.0)

    def test_scalar_not_narrowed_to_label(self) -> None:
        with pytest.raises(StateValueError):
            encode_value(2.5, int)

    def test_bool_not_stored_as_label(self) -> None:
        with pytest.raises(StateValueError):
            encode_value(True, ValueType.LABEL)

    def test_wrong_arity(self) -> None:
        with pytest.raises(StateValueError):
            encode_value([1.0, 2.0], ValueType.VECTOR)

    def test_tagged_value_passes_through(self) -> None:
        stored = ScalarValue(value=1.0)
        assert encode_value(stored) is stored

    def test_tagged_value_is_reencoded_for_other_type(self) -> None:
        assert encode_value(LabelValue(value=4), ValueType.SCALAR) == ScalarValue(value=4.0)

    def test_models_are_frozen(self) -> None:
        stored = ScalarValue(value=1.0)
        with pytest.raises(ValueError):
            stored.value = 2.0  # type: ignore[misc]


# ------------------------------------------------------------------
# Decoding
# ------------------------------------------------------------------


class TestDecodeValue:
    def test_exact_match(self) -> None:
        assert decode_value(ScalarValue(value=1.25), ValueType.SCALAR) == 1.25

    def test_untyped_returns_carrier(self) -> None:
        assert decode_value(VectorValue(value=(1.0, 2.0, 3.0))) == Vector(1.0, 2.0, 3.0)

    def test_widening(self) -> None:
        assert decode_value(LabelValue(value=3), float) == 3.0
        widened = decode_value(encode_value([1, 2]), ValueType.SCALAR_LIST)
        assert widened == (1.0, 2.0)
        assert all(isinstance(item, float) for item in widened)

    def test_mismatch(self) -> None:
        with pytest.raises(StateTypeMismatchError) as exc_info:
            decode_value(ScalarValue(value=1.5), ValueType.LABEL, entry="nIter")
        assert exc_info.value.entry == "nIter"
        assert exc_info.value.stored_type == "scalar"
        assert exc_info.value.requested_type == "label"

    def test_vector_is_not_a_scalar_list(self) -> None:
        with pytest.raises(StateTypeMismatchError):
            decode_value(VectorValue(value=(1.0, 2.0, 3.0)), ValueType.SCALAR_LIST)


# ------------------------------------------------------------------
# Serialised form
# ------------------------------------------------------------------


class TestParseStateValue:
    def test_parse_from_json_payload(self) -> None:
        stored = parse_state_value({"kind": "vector", "value": [1, 2, 3]})
        assert stored.value_type == ValueType.VECTOR
        assert stored.to_python() == Vector(1.0, 2.0, 3.0)

    def test_dump_carries_kind(self) -> None:
        assert ScalarListValue(value=(1.0, 2.0)).model_dump(mode="json") == {
            "kind": "scalarList",
            "value": [1.0, 2.0],
        }

    def test_infinite_scalars_survive(self) -> None:
        dumped = ScalarValue(value=math.inf).model_dump(mode="json")
        assert parse_state_value(dumped).to_python() == math.inf

    def test_rejects_unknown_kind(self) -> None:
        with pytest.raises(StateValueError):
            parse_state_value({"kind": "quaternion", "value": [0, 0, 0, 1]})

    def test_rejects_label_with_fraction(self) -> None:
        with pytest.raises(StateValueError):
            parse_state_value({"kind": "label", "value": 1.5})

    @pytest.mark.parametrize("raw", ["1.5", True, None])
    def test_rejects_non_numeric_scalar(self, raw: object) -> None:
        with pytest.raises(StateValueError):
            parse_state_value({"kind": "scalar", "value": raw})

    def test_rejects_non_numeric_vector_component(self) -> None:
        with pytest.raises(StateValueError):
            parse_state_value({"kind": "vector", "value": [1.0, "2", 3.0]})

    def test_integral_scalar_payload_is_accepted(self) -> None:
        assert parse_state_value({"kind": "scalar", "value": 2}).to_python() == 2.0
