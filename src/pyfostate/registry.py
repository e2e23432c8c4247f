"""In-memory object registry.

The registry owns the objects a simulation works on (meshes, fields, ...)
and the shared state document that every state store bound to it reads and
writes.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, TypeVar, overload

from pyfostate.config import StateConfig
from pyfostate.document import HierarchicalDocument, StateDictionary, check_word
from pyfostate.exceptions import RegistryError

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class Registry(Protocol):
    """Structural interface a state store needs from its host registry."""

    @property
    def name(self) -> str:
        ...

    def find_object(self, kind: type[T]) -> T | None:
        ...

    def state_dict(self) -> HierarchicalDocument:
        ...


class ObjectRegistry:
    """Insertion-ordered ``name -> object`` registry with a shared state document."""

    def __init__(
        self,
        name: str = "region0",
        *,
        config: StateConfig | None = None,
        state_dict: StateDictionary | None = None,
    ) -> None:
        self._name = name
        self._config = config or StateConfig()
        self._objects: dict[str, Any] = {}
        self._state_dict = state_dict

    @property
    def name(self) -> str:
        return self._name

    def __len__(self) -> int:
        return len(self._objects)

    def __contains__(self, name: object) -> bool:
        return name in self._objects

    def register(self, name: str, obj: Any, *, replace: bool = False) -> None:
        """Register *obj* under *name*.

        Raises
        ------
        RegistryError
            If *obj* is ``None``, or *name* is taken and ``replace`` is not set.
        """
        check_word(name)
        if obj is None:
            raise RegistryError(f"cannot register None as {name!r}")
        if name in self._objects and not replace:
            raise RegistryError(f"object {name!r} is already registered in {self._name!r}")
        self._objects[name] = obj
        _logger.debug("Registered %s %r in %r", type(obj).__name__, name, self._name)

    def unregister(self, name: str) -> bool:
        removed = self._objects.pop(name, None) is not None
        if removed:
            _logger.debug("Unregistered %r from %r", name, self._name)
        return removed

    def found_object(self, name: str, kind: type | None = None) -> bool:
        obj = self._objects.get(name)
        if obj is None:
            return False
        return kind is None or isinstance(obj, kind)

    @overload
    def lookup_object(self, name: str) -> Any:
        ...

    @overload
    def lookup_object(self, name: str, kind: type[T]) -> T:
        ...

    def lookup_object(self, name: str, kind: type | None = None) -> Any:
        """Return the object registered as *name*.

        Raises
        ------
        RegistryError
            If it is missing or not an instance of *kind*.
        """
        obj = self._objects.get(name)
        if obj is None:
            raise RegistryError(f"object {name!r} not found in {self._name!r}; available: {list(self._objects)}")
        if kind is not None and not isinstance(obj, kind):
            raise RegistryError(f"object {name!r} is a {type(obj).__name__}, not a {kind.__name__}")
        return obj

    def find_object(self, kind: type[T]) -> T | None:
        """First registered object that is an instance of *kind*, else ``None``."""
        for obj in self._objects.values():
            if isinstance(obj, kind):
                return obj
        return None

    def names(self, kind: type | None = None) -> list[str]:
        if kind is None:
            return list(self._objects)
        return [name for name, obj in self._objects.items() if isinstance(obj, kind)]

    def state_dict(self) -> StateDictionary:
        """The shared state document, created empty on first use."""
        if self._state_dict is None:
            self._state_dict = StateDictionary(self._config.state_dict_name)
            _logger.debug("Created state document %r for %r", self._config.state_dict_name, self._name)
        return self._state_dict
