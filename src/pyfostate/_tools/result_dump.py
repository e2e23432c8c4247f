from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from pyfostate._constants import RESULTS_KEY
from pyfostate._logfmt import format_for_log
from pyfostate.document import StateDictionary
from pyfostate.models import StateValueBase


@dataclass(frozen=True)
class ResultRow:
    object_name: str | None
    entry: str
    value_type: str
    value: Any

    @property
    def path(self) -> str:
        if self.object_name is None:
            return self.entry
        return f"{self.object_name}/{self.entry}"


def iter_results(document: StateDictionary, object_name: str | None = None) -> Iterator[ResultRow]:
    """Yield every result in *document*, flat results first.

    With *object_name* only that object's results are yielded.
    """
    results = document.subdict(RESULTS_KEY)
    if results is None:
        return
    if object_name is None:
        for entry in results.value_keys():
            stored = results.value(entry)
            assert stored is not None
            yield ResultRow(None, entry, str(stored.value_type), stored.to_python())
        objects = results.subdict_keys()
    else:
        objects = [object_name]
    for name in objects:
        node = results.subdict(name)
        if node is None:
            continue
        for entry in node.value_keys():
            stored = node.value(entry)
            assert stored is not None
            yield ResultRow(name, entry, str(stored.value_type), stored.to_python())


def iter_properties(document: StateDictionary, prefix: str = "") -> Iterator[tuple[str, StateValueBase]]:
    """Yield ``(path, value)`` for every non-result entry, depth first."""
    for key in document.keys():
        if not prefix and key == RESULTS_KEY:
            continue
        path = f"{prefix}/{key}" if prefix else key
        child = document.subdict(key)
        if child is not None:
            yield from iter_properties(child, path)
        else:
            stored = document.value(key)
            assert stored is not None
            yield path, stored


def format_rows(rows: list[ResultRow], *, max_string: int = 60) -> list[str]:
    """Render rows as aligned ``path  [type]  value`` lines."""
    if not rows:
        return []
    width = max(len(row.path) for row in rows)
    type_width = max(len(row.value_type) for row in rows) + 2
    return [
        f"{row.path:<{width}}  {'[' + row.value_type + ']':<{type_width}}  "
        f"{format_for_log(row.value, max_string=max_string)}"
        for row in rows
    ]
