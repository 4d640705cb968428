import pytest

from plugin_boilerplate.config.defaults import DEFAULTS, KNOWN_PATHS
from plugin_boilerplate.config.tree import (
    cast_value,
    deep_merge,
    get_value,
    iter_leaf_paths,
    set_value,
)


class TestDeepMerge:
    """Test cases for deep_merge."""

    def test_merging_a_tree_with_itself_is_identity(self):
        assert deep_merge(DEFAULTS, DEFAULTS) == DEFAULTS

    def test_override_leaves_win_and_base_leaves_survive(self):
        merged = deep_merge(DEFAULTS, {"debug": {"log_level": "warning"}})
        assert merged["debug"]["log_level"] == "warning"
        assert merged["debug"]["enabled"] is False
        assert merged["performance"] == DEFAULTS["performance"]

    def test_scalar_replaces_mapping_and_mapping_replaces_scalar(self):
        base = {"a": {"x": 1}, "b": 2}
        merged = deep_merge(base, {"a": 5, "b": {"y": 3}})
        assert merged == {"a": 5, "b": {"y": 3}}

    def test_new_keys_are_added(self):
        assert deep_merge({"a": 1}, {"b": {"c": 2}}) == {"a": 1, "b": {"c": 2}}

    def test_argument_order_matters(self):
        left, right = {"k": 1}, {"k": 2}
        assert deep_merge(left, right) == {"k": 2}
        assert deep_merge(right, left) == {"k": 1}

    def test_arguments_are_not_mutated(self):
        base = {"debug": {"enabled": False}}
        overrides = {"debug": {"enabled": True, "extra": {"n": 1}}}
        merged = deep_merge(base, overrides)
        merged["debug"]["extra"]["n"] = 99
        assert base == {"debug": {"enabled": False}}
        assert overrides["debug"]["extra"]["n"] == 1


class TestGetValue:
    def test_leaf_and_subtree(self):
        assert get_value(DEFAULTS, "debug.log_level") == "error"
        assert get_value(DEFAULTS, "database") == DEFAULTS["database"]

    def test_missing_segment_returns_default(self):
        assert get_value(DEFAULTS, "debug.missing", "fallback") == "fallback"
        assert get_value(DEFAULTS, "nope.log_level") is None

    def test_walking_through_a_scalar_returns_default(self):
        assert get_value(DEFAULTS, "debug.enabled.deeper", "d") == "d"

    def test_falsy_leaf_is_returned_not_default(self):
        assert get_value({"a": {"b": 0}}, "a.b", 7) == 0


class TestSetValue:
    def test_overwrites_existing_leaf(self):
        tree = {"debug": {"enabled": False}}
        set_value(tree, "debug.enabled", True)
        assert tree == {"debug": {"enabled": True}}

    def test_creates_missing_intermediate_mappings(self):
        tree = {}
        set_value(tree, "a.b.c", 1)
        assert tree == {"a": {"b": {"c": 1}}}

    def test_replaces_scalar_intermediate(self):
        tree = {"a": 3}
        set_value(tree, "a.b", "x")
        assert tree == {"a": {"b": "x"}}

    def test_single_segment(self):
        tree = {"a": {"b": 1}}
        set_value(tree, "a", "flat")
        assert tree == {"a": "flat"}


def test_leaf_paths_cover_every_default():
    paths = iter_leaf_paths(DEFAULTS)
    assert paths == list(KNOWN_PATHS)
    assert "debug.enabled" in paths
    assert "database.log_retention_days" in paths
    assert len(paths) == 20


class TestCastValue:
    @pytest.mark.parametrize("raw", ["true", "TRUE", "1", "on", "Yes"])
    def test_truthy_strings(self, raw):
        assert cast_value(raw) is True

    @pytest.mark.parametrize("raw", ["false", "0", "OFF", "no"])
    def test_falsy_strings(self, raw):
        assert cast_value(raw) is False

    def test_decimal_becomes_float(self):
        value = cast_value("3.14")
        assert isinstance(value, float)
        assert value == 3.14

    def test_integer_string_becomes_int(self):
        value = cast_value("42")
        assert type(value) is int
        assert value == 42
        assert cast_value("-7") == -7

    def test_exponent_forms(self):
        assert cast_value("1e3") == 1000
        assert type(cast_value("1e3")) is int
        assert cast_value("1.5e2") == 150.0

    def test_overflowing_exponent_stays_float(self):
        value = cast_value("1e400")
        assert isinstance(value, float)
        assert value == float("inf")

    def test_other_strings_unchanged(self):
        assert cast_value("hello") == "hello"
        assert cast_value("") == ""
        assert cast_value("12abc") == "12abc"
        assert cast_value("0x1A") == "0x1A"
        assert cast_value("١٢") == "١٢"
        assert cast_value("٣.5") == "٣.5"
