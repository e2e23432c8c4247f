"""pyfostate - scoped property and result state for simulation function objects."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyfostate")
except PackageNotFoundError:
    __version__ = "0+local"
from pyfostate._constants import RESULTS_KEY
from pyfostate.config import StateConfig
from pyfostate.document import HierarchicalDocument, StateDictionary
from pyfostate.exceptions import (
    FoStateError,
    RegistryError,
    StateConfigError,
    StateDocumentError,
    StateKeyConflictError,
    StateKeyError,
    StateTypeMismatchError,
    StateValueError,
)
from pyfostate.models import SphericalTensor, SymmTensor, Tensor, ValueType, Vector
from pyfostate.registry import ObjectRegistry, Registry
from pyfostate.state import StateStore, ValueRef

__all__ = [
    "__version__",
    "FoStateError",
    "HierarchicalDocument",
    "ObjectRegistry",
    "RESULTS_KEY",
    "Registry",
    "RegistryError",
    "SphericalTensor",
    "StateConfig",
    "StateConfigError",
    "StateDictionary",
    "StateDocumentError",
    "StateKeyConflictError",
    "StateKeyError",
    "StateStore",
    "StateTypeMismatchError",
    "StateValueError",
    "SymmTensor",
    "Tensor",
    "ValueRef",
    "ValueType",
    "Vector",
]
