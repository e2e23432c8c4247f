"""Store configuration for pyfostate."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyfostate._constants import DEFAULT_STATE_DICT_NAME, TYPE_MISMATCH_POLICIES
from pyfostate.exceptions import StateConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class StateConfig:
    """State store configuration.

    Parameters
    ----------
    state_dict_name : str
        Name of the shared state document a registry creates on first use.
    on_type_mismatch : str
        What a typed read does when the stored value cannot be decoded as
        the requested type. ``"raise"`` raises
        :class:`~pyfostate.exceptions.StateTypeMismatchError`; ``"default"``
        logs a warning and substitutes the caller's default.
    warn_inactive : bool
        Log a warning when :meth:`StateStore.set_active` deactivates a store.
    log_max_string : int
        Strings longer than this are truncated in DEBUG logs.
    """

    state_dict_name: str = DEFAULT_STATE_DICT_NAME
    on_type_mismatch: str = "raise"
    warn_inactive: bool = True
    log_max_string: int = 120

    def __post_init__(self) -> None:
        if not self.state_dict_name:
            raise StateConfigError("state_dict_name must be non-empty")
        if self.on_type_mismatch not in TYPE_MISMATCH_POLICIES:
            raise StateConfigError(
                f"on_type_mismatch must be one of {sorted(TYPE_MISMATCH_POLICIES)}, got {self.on_type_mismatch!r}"
            )
        if self.log_max_string <= 0:
            raise StateConfigError(f"log_max_string must be positive, got {self.log_max_string}")

    @classmethod
    def from_env(cls, **overrides: Any) -> StateConfig:
        """Create configuration from environment variables.

        Reads ``FOSTATE_STATE_DICT_NAME``, ``FOSTATE_ON_TYPE_MISMATCH``,
        ``FOSTATE_WARN_INACTIVE`` and ``FOSTATE_LOG_MAX_STRING``. Explicit
        keyword arguments override environment values.

        Raises
        ------
        StateConfigError
            If a variable holds a value of the wrong shape.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        name_env = env.get("FOSTATE_STATE_DICT_NAME")
        if name_env is not None:
            config_kwargs["state_dict_name"] = name_env.strip()

        policy_env = env.get("FOSTATE_ON_TYPE_MISMATCH")
        if policy_env is not None:
            config_kwargs["on_type_mismatch"] = policy_env.strip().lower()

        if "warn_inactive" not in overrides:
            config_kwargs["warn_inactive"] = _env_bool(env.get("FOSTATE_WARN_INACTIVE"), True)

        max_string_env = env.get("FOSTATE_LOG_MAX_STRING")
        if max_string_env is not None and "log_max_string" not in overrides:
            try:
                config_kwargs["log_max_string"] = int(max_string_env)
            except ValueError as exc:
                raise StateConfigError(f"FOSTATE_LOG_MAX_STRING must be an integer, got {max_string_env!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
