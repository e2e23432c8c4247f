from __future__ import annotations

from pyfostate import ObjectRegistry, StateStore, Vector
from pyfostate._tools.result_dump import ResultRow, format_rows, iter_properties, iter_results
from pyfostate.document import StateDictionary


def _document() -> StateDictionary:
    registry = ObjectRegistry()
    store = StateStore(registry, "forces1")
    store.set_property("nIter", 2)
    store.set_object_property("forces1", "origin", Vector(0.0, 0.0, 0.0))
    store.set_result("Cd", 0.4)
    store.set_object_result("probe1", "p", 1.0e5)
    store.set_object_result("probe1", "names", ["p"])
    return registry.state_dict()


def test_iter_results_flat_first() -> None:
    rows = list(iter_results(_document()))

    assert [row.path for row in rows] == ["Cd", "probe1/p", "probe1/names"]
    assert rows[2].value_type == "wordList"
    assert rows[2].value == ("p",)


def test_iter_results_for_one_object() -> None:
    rows = list(iter_results(_document(), "probe1"))

    assert [row.entry for row in rows] == ["p", "names"]
    assert list(iter_results(_document(), "probe2")) == []


def test_iter_results_without_results_region() -> None:
    assert list(iter_results(StateDictionary())) == []


def test_iter_properties_skips_results() -> None:
    paths = [path for path, _ in iter_properties(_document())]

    assert paths == ["nIter", "forces1/origin"]


def test_format_rows_aligns_columns() -> None:
    lines = format_rows(
        [
            ResultRow(None, "Cd", "scalar", 0.4),
            ResultRow("probe1", "names", "wordList", ("p",)),
        ]
    )

    assert lines == [
        "Cd" + " " * 12 + "[scalar]" + " " * 4 + "0.4",
        "probe1/names  [wordList]  ['p']",
    ]
    assert format_rows([]) == []
