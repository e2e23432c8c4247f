"""State/store layer.

Function objects persist their bookkeeping and publish their outputs only
through :class:`~pyfostate.state.store.StateStore`.
"""

from pyfostate.state.store import StateStore, ValueRef

__all__ = ["StateStore", "ValueRef"]
