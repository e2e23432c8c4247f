"""Custom exception hierarchy for pyfostate."""

from __future__ import annotations


class FoStateError(Exception):
    """Base exception for all pyfostate errors."""


class StateConfigError(FoStateError):
    """Invalid or missing configuration."""


class StateKeyError(FoStateError, KeyError):
    """Entry name or document path is not a valid word sequence."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class StateKeyConflictError(FoStateError):
    """A write would replace a subdictionary with a value, or the reverse.

    The flat property region and the object region share the root of the
    document, so an object named ``x`` and a flat property ``x`` cannot
    coexist.
    """

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(message)


class StateValueError(FoStateError, TypeError):
    """Value cannot be stored in a state document."""


class StateTypeMismatchError(FoStateError):
    """Stored value cannot be decoded as the requested type.

    State documents outlive a single run, so a mismatch usually means the
    stored schema drifted. Callers decide whether that is fatal.
    """

    def __init__(
        self,
        message: str,
        *,
        entry: str = "",
        stored_type: str = "",
        requested_type: str = "",
    ) -> None:
        self.entry = entry
        self.stored_type = stored_type
        self.requested_type = requested_type
        super().__init__(message)


class StateDocumentError(FoStateError):
    """State document could not be serialised or parsed."""


class RegistryError(FoStateError):
    """Object registry lookup or registration failure."""
