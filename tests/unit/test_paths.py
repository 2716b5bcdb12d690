"""Unit tests for optional-path access."""

from lookshift.utils.paths import MISSING, get_path, is_missing


def test_nested_value() -> None:
    obj = {"query": {"vis_config": {"type": "line"}}}
    assert get_path(obj, "query", "vis_config", "type") == "line"


def test_missing_step() -> None:
    assert get_path({"query": {}}, "query", "vis_config") is MISSING


def test_none_counts_as_missing() -> None:
    assert is_missing(get_path({"query": None}, "query"))
    assert is_missing(get_path({"query": {"vis_config": None}}, "query", "vis_config", "type"))


def test_non_mapping_step() -> None:
    assert get_path({"query": "12"}, "query", "vis_config") is MISSING
    assert get_path(None, "query") is MISSING
    assert get_path(["a"], "0") is MISSING


def test_no_keys_returns_object() -> None:
    obj = {"a": 1}
    assert get_path(obj) is obj


def test_falsy_values_are_present() -> None:
    assert get_path({"limit": 0}, "limit") == 0
    assert get_path({"fields": []}, "fields") == []


def test_missing_is_falsy_singleton() -> None:
    assert not MISSING
    assert repr(MISSING) == "MISSING"
    assert type(MISSING)() is MISSING
