"""Order-preserving hierarchical state document.

A :class:`StateDictionary` maps words to either a tagged state value or a
nested :class:`StateDictionary`. Paths address nested entries either as a
``/``-separated string (``"probe1/results/max"``) or as a sequence of words.

Stores only depend on the :class:`HierarchicalDocument` protocol. Saving and
loading are pass-throughs the host calls at its own checkpoints; a store
never triggers them.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol, Union

from pyfostate._constants import PATH_SEPARATOR
from pyfostate.exceptions import StateDocumentError, StateKeyConflictError, StateKeyError, StateValueError
from pyfostate.models import StateValueBase, encode_value, parse_state_value
from pyfostate.models.values import is_state_value_payload

_logger = logging.getLogger(__name__)

DocumentPath = Union[str, Sequence[str]]
Entry = Union[StateValueBase, "StateDictionary"]


class HierarchicalDocument(Protocol):
    """Structural interface a state store needs from its backing document."""

    def has(self, path: DocumentPath) -> bool:
        ...

    def get(self, path: DocumentPath) -> Entry | None:
        ...

    def set(self, path: DocumentPath, value: Any) -> Entry:
        ...

    def subdict(self, path: DocumentPath) -> HierarchicalDocument | None:
        ...

    def get_or_create_subdict(self, path: DocumentPath) -> HierarchicalDocument:
        ...

    def keys(self, path: DocumentPath = ()) -> list[str]:
        ...


def check_word(word: Any) -> str:
    """Validate a single entry name.

    Words are non-empty strings without whitespace or path separators.
    """
    if not isinstance(word, str) or not word:
        raise StateKeyError(f"entry name must be a non-empty string, got {word!r}")
    if PATH_SEPARATOR in word or any(ch.isspace() for ch in word):
        raise StateKeyError(f"entry name {word!r} contains whitespace or {PATH_SEPARATOR!r}")
    return word


def split_path(path: DocumentPath) -> tuple[str, ...]:
    """Turn a path into a tuple of validated words. ``""`` and ``()`` are the root."""
    if isinstance(path, str):
        words: tuple[str, ...] = tuple(path.split(PATH_SEPARATOR)) if path else ()
    else:
        words = tuple(path)
    for word in words:
        check_word(word)
    return words


def _join(words: Sequence[str]) -> str:
    return PATH_SEPARATOR.join(words)


class StateDictionary:
    """Mutable, insertion-ordered nested dictionary of tagged values."""

    def __init__(self, name: str = "") -> None:
        self._name = name
        self._entries: dict[str, Entry] = {}

    @property
    def name(self) -> str:
        return self._name

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __contains__(self, word: object) -> bool:
        return word in self._entries

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StateDictionary):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"StateDictionary(name={self._name!r}, keys={list(self._entries)!r})"

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _walk(self, words: Sequence[str], *, create: bool = False) -> StateDictionary | None:
        node = self
        for depth, word in enumerate(words):
            child = node._entries.get(word)
            if isinstance(child, StateDictionary):
                node = child
                continue
            if child is not None:
                if create:
                    raise StateKeyConflictError(
                        f"{_join(words[: depth + 1])!r} holds a value, not a subdictionary",
                        path=_join(words[: depth + 1]),
                    )
                return None
            if not create:
                return None
            created = StateDictionary(word)
            node._entries[word] = created
            node = created
        return node

    def has(self, path: DocumentPath) -> bool:
        """Return ``True`` if *path* names an entry (value or subdictionary)."""
        words = split_path(path)
        if not words:
            return True
        parent = self._walk(words[:-1])
        return parent is not None and words[-1] in parent._entries

    def get(self, path: DocumentPath) -> Entry | None:
        """Return the entry at *path*, or ``None`` when absent."""
        words = split_path(path)
        if not words:
            return self
        parent = self._walk(words[:-1])
        if parent is None:
            return None
        return parent._entries.get(words[-1])

    def value(self, path: DocumentPath) -> StateValueBase | None:
        """Return the value entry at *path*; subdictionaries count as absent."""
        entry = self.get(path)
        return entry if isinstance(entry, StateValueBase) else None

    def subdict(self, path: DocumentPath) -> StateDictionary | None:
        """Return the subdictionary at *path* without creating it."""
        entry = self.get(path)
        return entry if isinstance(entry, StateDictionary) else None

    def get_or_create_subdict(self, path: DocumentPath) -> StateDictionary:
        """Return the subdictionary at *path*, creating missing levels."""
        node = self._walk(split_path(path), create=True)
        assert node is not None
        return node

    def keys(self, path: DocumentPath = ()) -> list[str]:
        """Entry names at *path* in insertion order; ``[]`` if *path* is absent."""
        node = self.subdict(path)
        return list(node._entries) if node is not None else []

    def value_keys(self, path: DocumentPath = ()) -> list[str]:
        node = self.subdict(path)
        if node is None:
            return []
        return [key for key, entry in node._entries.items() if isinstance(entry, StateValueBase)]

    def subdict_keys(self, path: DocumentPath = ()) -> list[str]:
        node = self.subdict(path)
        if node is None:
            return []
        return [key for key, entry in node._entries.items() if isinstance(entry, StateDictionary)]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set(self, path: DocumentPath, value: Any, value_type: Any = None) -> Entry:
        """Insert or overwrite the entry at *path*.

        Plain Python values are encoded with :func:`~pyfostate.models.encode_value`.
        Overwriting keeps the entry's position. Missing intermediate levels
        are created.

        Raises
        ------
        StateKeyConflictError
            If the write would swap a value for a subdictionary or the reverse.
        StateValueError
            If *value* cannot be stored.
        """
        words = split_path(path)
        if not words:
            raise StateKeyError("cannot set the document root")
        parent = self._walk(words[:-1], create=True)
        assert parent is not None
        word = words[-1]
        existing = parent._entries.get(word)

        entry: Entry
        if isinstance(value, StateDictionary):
            if existing is not None and not isinstance(existing, StateDictionary):
                raise StateKeyConflictError(
                    f"{_join(words)!r} holds a value, cannot replace it with a subdictionary",
                    path=_join(words),
                )
            entry = value._copy(word)
        else:
            if isinstance(existing, StateDictionary):
                raise StateKeyConflictError(
                    f"{_join(words)!r} is a subdictionary, cannot replace it with a value",
                    path=_join(words),
                )
            entry = encode_value(value, value_type)

        parent._entries[word] = entry
        return entry

    def remove(self, path: DocumentPath) -> bool:
        """Remove the entry at *path*. Returns ``False`` if it was absent."""
        words = split_path(path)
        if not words:
            raise StateKeyError("cannot remove the document root")
        parent = self._walk(words[:-1])
        if parent is None or words[-1] not in parent._entries:
            return False
        del parent._entries[words[-1]]
        return True

    def merge(self, other: StateDictionary) -> None:
        """Recursively merge *other* into this dictionary; *other* wins."""
        for word, entry in other._entries.items():
            current = self._entries.get(word)
            if isinstance(entry, StateDictionary):
                if isinstance(current, StateDictionary):
                    current.merge(entry)
                else:
                    self._entries[word] = entry._copy(word)
            else:
                self._entries[word] = entry

    def clear(self) -> None:
        self._entries.clear()

    def _copy(self, name: str | None = None) -> StateDictionary:
        # Values are frozen models and can be shared.
        clone = StateDictionary(self._name if name is None else name)
        for word, entry in self._entries.items():
            clone._entries[word] = entry._copy() if isinstance(entry, StateDictionary) else entry
        return clone

    def copy(self) -> StateDictionary:
        return self._copy()

    # ------------------------------------------------------------------
    # Persistence pass-through
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible form; values become ``{"kind": ..., "value": ...}``."""
        out: dict[str, Any] = {}
        for word, entry in self._entries.items():
            if isinstance(entry, StateDictionary):
                out[word] = entry.to_dict()
            else:
                out[word] = entry.model_dump(mode="json")
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], name: str = "") -> StateDictionary:
        """Rebuild a dictionary from :meth:`to_dict` output.

        Raises
        ------
        StateDocumentError
            If *data* contains invalid names or values.
        """
        node = cls(name)
        for word, raw in data.items():
            try:
                check_word(word)
                if is_state_value_payload(raw):
                    node._entries[word] = parse_state_value(raw)
                elif isinstance(raw, Mapping):
                    node._entries[word] = cls.from_dict(raw, name=word)
                else:
                    raise StateDocumentError(f"entry {word!r} is neither a tagged value nor a dictionary")
            except (StateKeyError, StateValueError) as exc:
                raise StateDocumentError(f"invalid entry {word!r} in state document: {exc}") from exc
        return node

    def dumps(self, *, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def loads(cls, text: str, name: str = "") -> StateDictionary:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StateDocumentError(f"state document is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise StateDocumentError(f"state document must be a JSON object, got {type(data).__name__}")
        return cls.from_dict(data, name=name)

    def save(self, path: str | os.PathLike[str]) -> None:
        """Write the document to *path* atomically."""
        target = Path(path)
        tmp = target.with_name(f"{target.name}.tmp")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(self.dumps(), encoding="utf-8")
            os.replace(tmp, target)
        except OSError as exc:
            tmp.unlink(missing_ok=True)
            raise StateDocumentError(f"could not write state document to {target}: {exc}") from exc
        _logger.debug("Saved state document %r to %s (%d top-level entries)", self._name, target, len(self))

    @classmethod
    def load(cls, path: str | os.PathLike[str], name: str | None = None) -> StateDictionary:
        """Read a document previously written by :meth:`save`."""
        source = Path(path)
        try:
            text = source.read_text(encoding="utf-8")
        except OSError as exc:
            raise StateDocumentError(f"could not read state document from {source}: {exc}") from exc
        document = cls.loads(text, name=source.stem if name is None else name)
        _logger.debug("Loaded state document %r from %s", document.name, source)
        return document
