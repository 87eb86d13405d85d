from __future__ import annotations

import logging

import pytest

from common.env import env_bool, env_float, env_int, env_str
from common.logging import resolve_level
from common.settings import get, reload_from_env


def test_env_helpers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NSP_T_INT", "-3")
    monkeypatch.setenv("NSP_T_BAD", "abc")
    monkeypatch.setenv("NSP_T_FLOAT", "0.25")
    monkeypatch.setenv("NSP_T_BOOL", "yes")
    monkeypatch.setenv("NSP_T_EMPTY", "   ")
    assert env_int("NSP_T_INT") == -3
    assert env_int("NSP_T_INT", min_value=0) == 0
    assert env_int("NSP_T_BAD", 7) == 7
    assert env_int("NSP_T_MISSING") is None
    assert env_float("NSP_T_FLOAT") == 0.25
    assert env_float("NSP_T_BAD", 1.0) == 1.0
    assert env_bool("NSP_T_BOOL") is True
    assert env_bool("NSP_T_BAD", True) is True
    assert env_str("NSP_T_EMPTY", "x") == "x"


def test_settings_defaults() -> None:
    s = get()
    assert s.NODE_COUNT is None
    assert s.FACING is None
    assert s.FPS is None
    assert s.SHOW_HUD is False
    assert s.METRICS_INTERVAL == 0.5


def test_settings_reload(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NSP_NODE_COUNT", "-5")
    monkeypatch.setenv("NSP_FPS", "0")
    monkeypatch.setenv("NSP_FACING", " positive ")
    monkeypatch.setenv("NSP_METRICS_INTERVAL", "-1")
    monkeypatch.setenv("NSP_LOG_LEVEL", "DEBUG")
    reload_from_env()
    s = get()
    assert s.NODE_COUNT == 0
    assert s.FPS == 1
    assert s.FACING == "positive"
    assert s.METRICS_INTERVAL == 0.5
    assert s.LOG_LEVEL == "DEBUG"


def test_resolve_level() -> None:
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level("nope") == logging.INFO
    assert resolve_level(logging.WARNING) == logging.WARNING
