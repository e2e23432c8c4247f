"""Tagged value models stored in state documents."""

from pyfostate.models._base import StateValueBase, ValueType
from pyfostate.models.tensors import SphericalTensor, SymmTensor, Tensor, Vector
from pyfostate.models.values import (
    BoolValue,
    LabelListValue,
    LabelValue,
    ScalarListValue,
    ScalarValue,
    SphericalTensorValue,
    StateValue,
    SymmTensorValue,
    TensorValue,
    VectorValue,
    WordListValue,
    WordValue,
    decode_value,
    encode_value,
    infer_value_type,
    parse_state_value,
    resolve_value_type,
    type_of_default,
)

__all__ = [
    "BoolValue",
    "LabelListValue",
    "LabelValue",
    "ScalarListValue",
    "ScalarValue",
    "SphericalTensor",
    "SphericalTensorValue",
    "StateValue",
    "StateValueBase",
    "SymmTensor",
    "SymmTensorValue",
    "Tensor",
    "TensorValue",
    "ValueType",
    "Vector",
    "VectorValue",
    "WordListValue",
    "WordValue",
    "decode_value",
    "encode_value",
    "infer_value_type",
    "parse_state_value",
    "resolve_value_type",
    "type_of_default",
]
