import pytest

from dialectorm.utils.performance import SLOW_QUERY_ENV, resolve_slow_query_ms


def test_override_wins(monkeypatch):
    monkeypatch.setenv(SLOW_QUERY_ENV, "500")
    assert resolve_slow_query_ms(override=5) == 5


def test_environment_value_is_used(monkeypatch):
    monkeypatch.setenv(SLOW_QUERY_ENV, "250")
    assert resolve_slow_query_ms() == 250


@pytest.mark.parametrize("raw", ["fast", "-3", ""])
def test_invalid_environment_values_fall_back(monkeypatch, raw):
    monkeypatch.setenv(SLOW_QUERY_ENV, raw)
    assert resolve_slow_query_ms(default=42) == 42


def test_default_without_environment(monkeypatch):
    monkeypatch.delenv(SLOW_QUERY_ENV, raising=False)
    assert resolve_slow_query_ms() == 100
