"""Environment-driven configuration tests."""

from __future__ import annotations

import pytest

from budgetflow.config import BaseConfig, DevConfig


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    monkeypatch.setenv("BUDGETFLOW_DATA_DIR", str(tmp_path / "data"))
    for name in (
        "BUDGETFLOW_DEV_MODE",
        "BUDGETFLOW_TOP_CATEGORIES",
        "BUDGETFLOW_INSIGHT_LIMIT",
        "BUDGETFLOW_CATEGORY_MATCH",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults(tmp_path):
    config = BaseConfig()

    assert config.DATA_DIR == (tmp_path / "data").resolve()
    assert config.DATA_DIR.is_dir()
    assert config.TOP_CATEGORIES == 3
    assert config.INSIGHT_LIMIT == 5
    assert config.CATEGORY_MATCH == "name"


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("true", True), ("Yes", True), ("on", True), ("0", False), ("off", False), ("", False)],
)
def test_dev_mode_flag(monkeypatch, raw, expected):
    monkeypatch.setenv("BUDGETFLOW_DEV_MODE", raw)

    assert BaseConfig().DEV_MODE is expected


def test_integer_settings(monkeypatch):
    monkeypatch.setenv("BUDGETFLOW_TOP_CATEGORIES", " 4 ")
    monkeypatch.setenv("BUDGETFLOW_INSIGHT_LIMIT", "2")

    config = BaseConfig()

    assert config.TOP_CATEGORIES == 4
    assert config.INSIGHT_LIMIT == 2


@pytest.mark.parametrize("raw", ["three", "0", "-1"])
def test_invalid_integer_settings(monkeypatch, raw):
    monkeypatch.setenv("BUDGETFLOW_TOP_CATEGORIES", raw)

    with pytest.raises(ValueError, match="BUDGETFLOW_TOP_CATEGORIES"):
        BaseConfig()


def test_category_match_mode(monkeypatch):
    monkeypatch.setenv("BUDGETFLOW_CATEGORY_MATCH", " ID ")
    assert BaseConfig().CATEGORY_MATCH == "id"

    monkeypatch.setenv("BUDGETFLOW_CATEGORY_MATCH", "fuzzy")
    with pytest.raises(ValueError, match="BUDGETFLOW_CATEGORY_MATCH"):
        BaseConfig()


def test_dev_config_flags():
    config = DevConfig()

    assert config.DEBUG is True
    assert config.TESTING is False
