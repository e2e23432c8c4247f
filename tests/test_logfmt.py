from __future__ import annotations

from pyfostate._logfmt import format_for_log
from pyfostate.models import ScalarValue, Vector


def test_format_for_log_truncates_long_strings() -> None:
    rendered = format_for_log("x" * 300, max_string=10)

    assert rendered.startswith("x" * 10)
    assert "<truncated>" in rendered


def test_format_for_log_truncates_long_sequences() -> None:
    rendered = format_for_log(list(range(20)), max_items=3)

    assert rendered == [0, 1, 2, "<+17 more>"]


def test_format_for_log_handles_models_and_carriers() -> None:
    assert format_for_log(ScalarValue(value=1.5)) == {"kind": "scalar", "value": 1.5}
    assert format_for_log(Vector(1.0, 2.0, 3.0)) == [1.0, 2.0, 3.0]
    assert format_for_log({"a": None, "b": True}) == {"a": None, "b": True}


def test_format_for_log_unknown_objects_use_repr() -> None:
    class Opaque:
        def __repr__(self) -> str:
            return "<opaque>"

    assert format_for_log(Opaque()) == "<opaque>"
