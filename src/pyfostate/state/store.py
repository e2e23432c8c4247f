"""Scoped property/result store for function objects.

One :class:`StateStore` belongs to one function object. It reads and writes
the state document owned by the store's registry through four regions:

* flat properties: value entries at the document root
* object properties: entries under the root subdictionary ``<object>``
* flat results: value entries under ``results``
* object results: entries under ``results/<object>``

Reads of missing entries fall back to the caller's default and never create
anything. Writes overwrite and create the enclosing subdictionaries lazily.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pyfostate._constants import PATH_SEPARATOR, RESULTS_KEY
from pyfostate._logfmt import format_for_log
from pyfostate.config import StateConfig
from pyfostate.document import HierarchicalDocument, check_word
from pyfostate.exceptions import StateTypeMismatchError
from pyfostate.models import StateValueBase, ValueType, decode_value, encode_value, type_of_default
from pyfostate.registry import Registry

_logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ValueRef(Generic[T]):
    """Mutable holder filled in by the ``read_*`` methods.

    When the entry is absent the holder is left exactly as it was, so a
    caller can pre-load it with the value to keep.
    """

    value: T


class StateStore:
    """Property and result access for one function object.

    The store holds a reference to its registry's state document; the
    document belongs to the host and is never copied or released here.
    Stores are not copyable: each one is tied to a single function object.
    """

    def __init__(self, registry: Registry, name: str, *, config: StateConfig | None = None) -> None:
        self._registry = registry
        self._name = check_word(name)
        self._config = config or StateConfig()
        self._active = False
        self._state_dict: HierarchicalDocument = registry.state_dict()

    def __copy__(self) -> StateStore:
        raise TypeError(f"{type(self).__name__} {self._name!r} cannot be copied")

    def __deepcopy__(self, memo: dict[int, Any]) -> StateStore:
        raise TypeError(f"{type(self).__name__} {self._name!r} cannot be copied")

    def __repr__(self) -> str:
        return f"StateStore(name={self._name!r}, active={self._active})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def active(self) -> bool:
        """Result of the most recent :meth:`set_active` call."""
        return self._active

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def state_dict(self) -> HierarchicalDocument:
        return self._state_dict

    def set_active(self, kind: type) -> bool:
        """Set the active flag from whether the registry holds a *kind* object.

        The flag is not re-evaluated on its own; call this again whenever the
        registry contents may have changed. Other operations do not consult
        the flag.
        """
        found = self._registry.find_object(kind) is not None
        if not found and self._config.warn_inactive:
            _logger.warning(
                "No %s available in %r, deactivating %r",
                kind.__name__,
                self._registry.name,
                self._name,
            )
        elif found and not self._active:
            _logger.debug("Activating %r: found %s in %r", self._name, kind.__name__, self._registry.name)
        self._active = found
        return found

    # ------------------------------------------------------------------
    # Region plumbing
    # ------------------------------------------------------------------

    @staticmethod
    def _object_scope(object_name: str, *prefix: str) -> tuple[str, ...]:
        return (*prefix, check_word(object_name))

    def _lookup(self, scope: Sequence[str], entry: str) -> StateValueBase | None:
        stored = self._state_dict.get((*scope, check_word(entry)))
        return stored if isinstance(stored, StateValueBase) else None

    def _mismatch(self, exc: StateTypeMismatchError) -> None:
        if self._config.on_type_mismatch == "raise":
            raise exc
        _logger.warning("%s: %s; using default", self._name, exc)

    def _read(self, scope: Sequence[str], entry: str, default: Any, value_type: Any) -> Any:
        stored = self._lookup(scope, entry)
        path = PATH_SEPARATOR.join((*scope, entry))
        if stored is None:
            _logger.debug("%s: %s not found, using default", self._name, path)
            return default
        requested = value_type if value_type is not None else type_of_default(default)
        try:
            return decode_value(stored, requested, entry=path)
        except StateTypeMismatchError as exc:
            self._mismatch(exc)
            return default

    def _read_into(self, scope: Sequence[str], entry: str, ref: ValueRef[Any], value_type: Any) -> bool:
        stored = self._lookup(scope, entry)
        if stored is None:
            return False
        requested = value_type if value_type is not None else type_of_default(ref.value)
        path = PATH_SEPARATOR.join((*scope, entry))
        try:
            ref.value = decode_value(stored, requested, entry=path)
        except StateTypeMismatchError as exc:
            self._mismatch(exc)
            return False
        return True

    def _write(self, scope: Sequence[str], entry: str, value: Any, value_type: Any) -> None:
        check_word(entry)
        encoded = encode_value(value, value_type)
        self._state_dict.get_or_create_subdict(scope).set(entry, encoded)
        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug(
                "%s: set %s = %r [%s]",
                self._name,
                PATH_SEPARATOR.join((*scope, entry)),
                format_for_log(encoded.to_python(), max_string=self._config.log_max_string),
                encoded.value_type,
            )

    def _entries(self, scope: Sequence[str]) -> list[str]:
        node = self._state_dict.subdict(scope)
        if node is None:
            return []
        return [key for key in node.keys() if isinstance(node.get(key), StateValueBase)]

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    def found_property(self, entry: str) -> bool:
        """Return ``True`` if *entry* is a flat property."""
        return self._lookup((), entry) is not None

    def get_property(self, entry: str, default: Any = None, value_type: Any = None) -> Any:
        """Return flat property *entry*, or *default* if it is absent.

        The stored value is decoded as *value_type* when given, otherwise as
        the type of *default*; with neither it is returned as stored.

        Raises
        ------
        StateTypeMismatchError
            If the stored value cannot be read as the requested type and the
            store is configured with ``on_type_mismatch="raise"``.
        """
        return self._read((), entry, default, value_type)

    def read_property(self, entry: str, ref: ValueRef[Any], value_type: Any = None) -> bool:
        """Load flat property *entry* into *ref*.

        Returns ``False`` and leaves *ref* untouched if the entry is absent.
        """
        return self._read_into((), entry, ref, value_type)

    def set_property(self, entry: str, value: Any, value_type: Any = None) -> None:
        """Insert or overwrite flat property *entry*."""
        self._write((), entry, value, value_type)

    def found_object_property(self, object_name: str, entry: str) -> bool:
        return self._lookup(self._object_scope(object_name), entry) is not None

    def get_object_property(self, object_name: str, entry: str, default: Any = None, value_type: Any = None) -> Any:
        """Return property *entry* of *object_name*, or *default*.

        An unknown object behaves like an absent entry.
        """
        return self._read(self._object_scope(object_name), entry, default, value_type)

    def read_object_property(
        self,
        object_name: str,
        entry: str,
        ref: ValueRef[Any],
        value_type: Any = None,
    ) -> bool:
        return self._read_into(self._object_scope(object_name), entry, ref, value_type)

    def set_object_property(self, object_name: str, entry: str, value: Any, value_type: Any = None) -> None:
        """Insert or overwrite *entry* of *object_name*, creating the object's subdictionary if needed."""
        self._write(self._object_scope(object_name), entry, value, value_type)

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def found_result(self, entry: str) -> bool:
        return self._lookup((RESULTS_KEY,), entry) is not None

    def found_object_result(self, object_name: str, entry: str) -> bool:
        return self._lookup(self._object_scope(object_name, RESULTS_KEY), entry) is not None

    def get_result(self, entry: str, default: Any = None, value_type: Any = None) -> Any:
        return self._read((RESULTS_KEY,), entry, default, value_type)

    def get_object_result(self, object_name: str, entry: str, default: Any = None, value_type: Any = None) -> Any:
        return self._read(self._object_scope(object_name, RESULTS_KEY), entry, default, value_type)

    def set_result(self, entry: str, value: Any, value_type: Any = None) -> None:
        """Publish flat result *entry* for downstream consumers."""
        self._write((RESULTS_KEY,), entry, value, value_type)

    def set_object_result(self, object_name: str, entry: str, value: Any, value_type: Any = None) -> None:
        self._write(self._object_scope(object_name, RESULTS_KEY), entry, value, value_type)

    def result_type(self, entry: str) -> ValueType | None:
        """Stored type tag of flat result *entry*, ``None`` if absent. The value is not decoded."""
        stored = self._lookup((RESULTS_KEY,), entry)
        return stored.value_type if stored is not None else None

    def object_result_type(self, object_name: str, entry: str) -> ValueType | None:
        stored = self._lookup(self._object_scope(object_name, RESULTS_KEY), entry)
        return stored.value_type if stored is not None else None

    def object_result_entries(self, object_name: str | None = None) -> list[str]:
        """Result names in insertion order.

        Without *object_name* the flat results are listed; object
        subdictionaries are not entries. Unknown objects yield ``[]``.
        """
        if object_name is None:
            return self._entries((RESULTS_KEY,))
        return self._entries(self._object_scope(object_name, RESULTS_KEY))

    def all_object_result_entries(self) -> dict[str, list[str]]:
        """Every object in the results region mapped to its result names."""
        results = self._state_dict.subdict(RESULTS_KEY)
        if results is None:
            return {}
        return {
            object_name: self._entries((RESULTS_KEY, object_name))
            for object_name in results.keys()
            if results.subdict(object_name) is not None
        }

    def log_result_entries(self, level: int = logging.INFO) -> None:
        """Log one line per result entry with its type tag."""
        for entry in self.object_result_entries():
            _logger.log(level, "%s: result %s [%s]", self._name, entry, self.result_type(entry))
        for object_name, entries in self.all_object_result_entries().items():
            for entry in entries:
                _logger.log(
                    level,
                    "%s: result %s/%s [%s]",
                    self._name,
                    object_name,
                    entry,
                    self.object_result_type(object_name, entry),
                )
