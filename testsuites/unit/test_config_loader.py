import pytest
import yaml

from uiharness.framework.config_loader import DEFAULT_CONFIG_PATH, ConfigLoader, list_variants, load_run_config
from uiharness.framework.errors import ConfigurationError


def write_config(tmp_path, data):
    config_dir = tmp_path / "config"
    config_dir.mkdir(exist_ok=True)
    config_path = config_dir / "harness.yaml"
    config_path.write_text(yaml.dump(data, allow_unicode=True), encoding="utf-8")
    return config_path


BASE = {
    "session": {"browser": "chromium", "headless": True, "viewport": {"width": 1920, "height": 1080},
                "locale": "th-TH", "launch_args": ["--disable-blink-features=AutomationControlled"]},
    "timeouts": {"locator_ms": 5000, "settle_ms": 500, "initial_settle_ms": 2000, "run_timeout_s": 0},
    "variants": {
        "home": {"target": "index.html", "output_dir": "screenshots", "suite": "home",
                 "viewport": {"width": 1280, "height": 720}},
        "quick": {"target": "index-modern.html", "output_dir": "test-results-quick", "suite": "quick",
                  "wait_until": "domcontentloaded", "locale": None, "launch_args": []},
    },
}


def test_env_override_and_defaults(monkeypatch, tmp_path):
    config_path = write_config(tmp_path, {"session": {"browser": "chromium", "slow_mo_ms": 0}})

    ConfigLoader.reset()
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("session.browser") == "chromium"
    assert loader.get("timeouts.locator_ms", 5000) == 5000

    ConfigLoader.reset()
    monkeypatch.setenv("SESSION_BROWSER", "firefox")
    monkeypatch.setenv("SESSION_HEADLESS", "false")
    monkeypatch.setenv("TIMEOUTS_LOCATOR_MS", "750")
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("session.browser") == "firefox"
    assert loader.get("session.headless", True) is False
    assert loader.get("timeouts.locator_ms", 5000) == 750


def test_reload_updates_values(tmp_path):
    config_path = write_config(tmp_path, {"timeouts": {"settle_ms": 5}})

    ConfigLoader.reset()
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("timeouts.settle_ms") == 5

    write_config(tmp_path, {"timeouts": {"settle_ms": 15}})
    loader.reload()
    assert loader.get("timeouts.settle_ms") == 15


def test_singleton_and_missing_file(tmp_path):
    loader = ConfigLoader(config_path=tmp_path / "absent.yaml")

    assert ConfigLoader() is loader
    assert loader.get_section("variants") == {}


def test_invalid_yaml_is_configuration_error(tmp_path):
    config_path = tmp_path / "broken.yaml"
    config_path.write_text("session: [unclosed", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigLoader(config_path=config_path)


def test_load_run_config_variant(tmp_path):
    loader = ConfigLoader(config_path=write_config(tmp_path, BASE))

    config = load_run_config("home", loader=loader)

    assert config.variant.suite == "home"
    assert config.variant.wait_until == "networkidle"
    assert config.session.viewport_width == 1280
    assert config.session.viewport_height == 720
    assert config.session.locale == "th-TH"
    assert config.timeouts.run_timeout_s is None
    assert config.target_url == (tmp_path / "index.html").resolve().as_uri()
    assert config.output_path == (tmp_path / "screenshots").resolve()


def test_variant_can_clear_session_options(tmp_path):
    loader = ConfigLoader(config_path=write_config(tmp_path, BASE))

    config = load_run_config("quick", loader=loader)

    assert config.session.locale is None
    assert config.session.launch_args == []
    assert config.session.viewport_width == 1920
    assert config.variant.wait_until == "domcontentloaded"


def test_overrides_win(tmp_path):
    loader = ConfigLoader(config_path=write_config(tmp_path, BASE))

    config = load_run_config(
        "home",
        loader=loader,
        overrides={
            "target": "http://localhost:8000/index.html",
            "output_dir": "out",
            "browser": "webkit",
            "headless": False,
            "cases": ["Main elements"],
            "run_timeout_s": 30,
            "json_report": True,
            "case_patterns": None,
        },
    )

    assert config.target_url == "http://localhost:8000/index.html"
    assert config.target_path is None
    assert config.output_path == (tmp_path / "out").resolve()
    assert config.session.browser_type == "webkit"
    assert config.session.headless is False
    assert config.variant.cases == ["Main elements"]
    assert config.timeouts.run_timeout_s == 30.0
    assert config.json_report is True
    assert config.case_patterns == []


def test_unknown_variant_and_bad_values(tmp_path):
    data = dict(BASE, variants=dict(BASE["variants"], bad={"target": "x.html", "output_dir": "o",
                                                           "suite": "quick", "wait_until": "idle"}))
    loader = ConfigLoader(config_path=write_config(tmp_path, data))

    with pytest.raises(ConfigurationError, match="Unknown variant"):
        load_run_config("nope", loader=loader)
    with pytest.raises(ConfigurationError, match="wait_until"):
        load_run_config("bad", loader=loader)
    with pytest.raises(ConfigurationError, match="session.browser"):
        load_run_config("home", loader=loader, overrides={"browser": "opera"})


def test_shipped_configuration_has_four_variants():
    loader = ConfigLoader(config_path=DEFAULT_CONFIG_PATH)

    assert set(list_variants(loader)) == {"home", "complete", "modern", "quick"}
    complete = load_run_config("complete", loader=loader)
    assert complete.variant.error_artifact == "error-state.png"
    assert complete.variant.final_artifact == "final-state"
    assert load_run_config("modern", loader=loader).timeouts.initial_settle_ms == 3000
    assert load_run_config(loader=loader).variant.name == "complete"
