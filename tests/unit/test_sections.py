import pytest

from plugin_boilerplate.admin.sections import (
    SECTIONS,
    FieldSpec,
    apply_form,
    get_section,
    resolve_path,
)
from plugin_boilerplate.config import KNOWN_PATHS, OPTION_NAME
from plugin_boilerplate.core.exceptions import InvalidSettingValueError, UnknownSettingError


def test_every_section_field_is_a_known_path():
    for section in SECTIONS.values():
        for spec in section.fields:
            assert spec.path in KNOWN_PATHS
            assert spec.path.startswith(section.name + ".")


def test_resolve_path_whitelist():
    assert resolve_path("debug.enabled") == "debug.enabled"
    with pytest.raises(UnknownSettingError) as excinfo:
        resolve_path("debug.nope")
    assert "debug.nope" in str(excinfo.value)


def test_field_spec_rejects_unknown_path():
    with pytest.raises(UnknownSettingError):
        FieldSpec("features.custom_class")


def test_unknown_tab():
    with pytest.raises(UnknownSettingError):
        get_section("blocks")


class TestDebugSection:
    def test_process(self):
        form = {"debug": {"enabled": "1", "log_level": "info", "log_to_db": "yes", "max_log_files": "500"}}
        updates = get_section("debug").process(form)
        assert updates == {
            "debug.enabled": True,
            "debug.log_level": "info",
            "debug.log_to_file": False,
            "debug.log_to_db": False,
        }

    def test_invalid_log_level_is_left_out(self):
        updates = get_section("debug").process({"debug": {"log_level": "verbose"}})
        assert "debug.log_level" not in updates

    def test_missing_tab_data_unchecks_everything(self):
        updates = get_section("debug").process({})
        assert updates == {
            "debug.enabled": False,
            "debug.log_to_file": False,
            "debug.log_to_db": False,
        }


class TestNumberRanges:
    @pytest.mark.parametrize("raw, accepted", [
        ("59", False), ("60", True), ("86400", True), ("86401", False), ("abc", False),
    ])
    def test_cache_duration(self, raw, accepted):
        updates = get_section("performance").process({"performance": {"cache_duration": raw}})
        assert ("performance.cache_duration" in updates) is accepted

    def test_negative_numbers_use_absolute_value(self):
        updates = get_section("security").process({"security": {"max_requests": "-50"}})
        assert updates["security.max_requests"] == 50

    @pytest.mark.parametrize("path, raw, expected", [
        ("debug.max_log_files", "1.5", 1),
        ("security.max_requests", "12abc", 12),
        ("security.time_window", " 120 ", 120),
    ])
    def test_leading_integer_is_used(self, path, raw, expected):
        section, name = path.split(".")
        updates = get_section(section).process({section: {name: raw}})
        assert updates[path] == expected

    @pytest.mark.parametrize("raw", ["abc", "", "١٢٠"])
    def test_non_numeric_reads_as_zero_and_is_rejected(self, raw):
        updates = get_section("security").process({"security": {"max_requests": raw}})
        assert "security.max_requests" not in updates

    def test_errors_lists_rejected_fields(self):
        form = {"security": {"max_requests": "5", "time_window": "120"}}
        errors = get_section("security").errors(form)
        assert len(errors) == 1
        assert isinstance(errors[0], InvalidSettingValueError)
        assert errors[0].key == "security.max_requests"


def test_features_checkboxes():
    form = {"features": {"blocks_enabled": "1", "cli_enabled": "0"}}
    assert get_section("features").process(form) == {
        "features.blocks_enabled": True,
        "features.rest_api_enabled": False,
        "features.cli_enabled": False,
        "features.admin_dashboard": False,
    }


def test_apply_form_updates_and_saves(config, memory_store):
    form = {"security": {"rate_limit": "1", "max_requests": "250", "time_window": "10"}}

    assert apply_form(config, "security", form) is True

    assert config.get("security.max_requests") == 250
    assert config.get("security.time_window") == 3600
    assert config.get("security.strict_validation") is False
    stored = memory_store.get_option(OPTION_NAME)
    assert stored["security"]["max_requests"] == 250
