"""Base model and type tags for stored state values.

Every stored value is a small frozen pydantic model carrying a ``kind``
discriminator (see :class:`ValueType`) next to its payload, so a reader can
ask what a value *is* without knowing how to decode it.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict


class ValueType(StrEnum):
    """Type tag stored with every state value."""

    BOOL = "bool"
    LABEL = "label"
    SCALAR = "scalar"
    WORD = "word"
    VECTOR = "vector"
    SPHERICAL_TENSOR = "sphericalTensor"
    SYMM_TENSOR = "symmTensor"
    TENSOR = "tensor"
    SCALAR_LIST = "scalarList"
    LABEL_LIST = "labelList"
    WORD_LIST = "wordList"


class StateValueBase(BaseModel):
    """Base for tagged state values.

    Subclasses declare ``kind`` as a string literal and a typed ``value``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", ser_json_inf_nan="constants")

    @property
    def value_type(self) -> ValueType:
        return ValueType(getattr(self, "kind"))

    def to_python(self) -> Any:
        """Return the payload as its Python carrier type."""
        return getattr(self, "value")
