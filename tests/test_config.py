from __future__ import annotations

import pytest

from pyfostate.config import StateConfig
from pyfostate.exceptions import StateConfigError


def test_defaults() -> None:
    config = StateConfig()

    assert config.state_dict_name == "functionObjectProperties"
    assert config.on_type_mismatch == "raise"
    assert config.warn_inactive is True


def test_invalid_values_rejected() -> None:
    with pytest.raises(StateConfigError):
        StateConfig(on_type_mismatch="ignore")
    with pytest.raises(StateConfigError):
        StateConfig(state_dict_name="")
    with pytest.raises(StateConfigError):
        StateConfig(log_max_string=0)


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FOSTATE_STATE_DICT_NAME", "foState")
    monkeypatch.setenv("FOSTATE_ON_TYPE_MISMATCH", "Default")
    monkeypatch.setenv("FOSTATE_WARN_INACTIVE", "off")
    monkeypatch.setenv("FOSTATE_LOG_MAX_STRING", "40")

    config = StateConfig.from_env()

    assert config.state_dict_name == "foState"
    assert config.on_type_mismatch == "default"
    assert config.warn_inactive is False
    assert config.log_max_string == 40


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FOSTATE_ON_TYPE_MISMATCH", "default")
    monkeypatch.setenv("FOSTATE_WARN_INACTIVE", "0")

    config = StateConfig.from_env(on_type_mismatch="raise", warn_inactive=True)

    assert config.on_type_mismatch == "raise"
    assert config.warn_inactive is True


def test_from_env_unrecognised_bool_keeps_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FOSTATE_WARN_INACTIVE", "maybe")

    assert StateConfig.from_env().warn_inactive is True


def test_from_env_bad_integer(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FOSTATE_LOG_MAX_STRING", "many")

    with pytest.raises(StateConfigError):
        StateConfig.from_env()
