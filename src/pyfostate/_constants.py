"""Internal constants shared across the library."""

# Top-level key of the results region. Identical for every store.
RESULTS_KEY = "results"

# Name given to a registry's shared state document.
DEFAULT_STATE_DICT_NAME = "functionObjectProperties"

PATH_SEPARATOR = "/"

TYPE_MISMATCH_POLICIES: frozenset[str] = frozenset({"raise", "default"})
