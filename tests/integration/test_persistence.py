"""Config instances sharing a YAML option file."""

import pytest
import yaml

from plugin_boilerplate.admin.sections import apply_form
from plugin_boilerplate.config import Config, HostEnvironment, OPTION_NAME
from plugin_boilerplate.config.defaults import DEFAULTS
from plugin_boilerplate.core.option_store import YamlOptionStore

pytestmark = pytest.mark.integration


@pytest.fixture
def options_file(temp_dir):
    return temp_dir / "wp-options.yml"


def new_config(path, **host_kwargs):
    host_kwargs.setdefault("environment_type", "local")
    return Config(store=YamlOptionStore(path), host=HostEnvironment(**host_kwargs))


def test_saved_setting_survives_new_instance(options_file):
    first = new_config(options_file)
    assert first.get("debug.enabled") is False
    first.set("debug.enabled", True)
    assert first.save() is True

    assert new_config(options_file).get("debug.enabled") is True


def test_hand_edited_partial_option_is_merged(options_file):
    options_file.write_text(
        yaml.safe_dump({OPTION_NAME: {"debug": {"log_level": "warning"}}}), encoding="utf-8"
    )
    config = new_config(options_file)
    assert config.get("debug.log_level") == "warning"
    assert config.get("debug.enabled") is False


def test_last_save_wins(options_file):
    a = new_config(options_file)
    b = new_config(options_file)
    a.set("security.max_requests", 200)
    b.set("security.max_requests", 300)
    assert a.save() and b.save()

    assert new_config(options_file).get("security.max_requests") == 300


def test_admin_form_then_reset(options_file):
    config = new_config(options_file)
    form = {"performance": {"cache_blocks": "1", "cache_duration": "120", "lazy_load": "1"}}
    assert apply_form(config, "performance", form) is True

    reloaded = new_config(options_file)
    assert reloaded.get("performance.cache_duration") == 120
    assert reloaded.get("performance.minify_assets") is False

    reloaded.reset()
    assert reloaded.get_config() == DEFAULTS
    assert YamlOptionStore(options_file).get_option(OPTION_NAME) is None


def test_production_host_overrides_saved_debug(options_file):
    dev = new_config(options_file)
    dev.set("debug.enabled", True)
    dev.save()

    prod = new_config(options_file, environment_type="production")
    assert prod.get("debug.enabled") is False
