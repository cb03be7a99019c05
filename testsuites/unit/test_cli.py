import sys

import pytest
import yaml
from loguru import logger

from uiharness.cli import HarnessRunner, _overrides, build_parser, main
from uiharness.common.global_config import reset_logger
from uiharness.framework.config_loader import ConfigLoader
from uiharness.framework.harness import RunStatus


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config" / "harness.yaml"
    path.parent.mkdir()
    path.write_text(
        yaml.dump({
            "harness": {"default_variant": "quick"},
            "variants": {
                "quick": {"target": "index-modern.html", "output_dir": "out", "suite": "quick",
                          "description": "Quick smoke run"},
                "broken": {"target": "index.html", "output_dir": "out", "suite": "missing"},
            },
        }),
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def _restore_logger():
    yield
    reset_logger()
    logger.remove()
    logger.add(sys.stderr)


def test_parser_maps_flags_to_overrides():
    args = build_parser().parse_args([
        "--variant", "complete",
        "--target", "http://localhost:8000/index-modern.html",
        "--case", "Calculate ratio",
        "--case", "Quiz interface",
        "--match", "view",
        "--browser", "firefox",
        "--no-headless",
        "--timeout", "90",
        "--json-report",
    ])

    overrides = _overrides(args)

    assert args.variant == "complete"
    assert overrides["target"] == "http://localhost:8000/index-modern.html"
    assert overrides["cases"] == ["Calculate ratio", "Quiz interface"]
    assert overrides["case_patterns"] == ["view"]
    assert overrides["browser"] == "firefox"
    assert overrides["headless"] is False
    assert overrides["run_timeout_s"] == 90.0
    assert overrides["json_report"] is True
    assert "capture_on_failure" not in overrides


def test_parser_defaults_leave_configuration_alone():
    overrides = _overrides(build_parser().parse_args([]))

    assert "headless" not in overrides
    assert all(value is None for value in overrides.values())


def test_parser_rejects_unknown_browser():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--browser", "opera"])


def test_list_variants(config_file, capsys):
    exit_code = main(["--config", str(config_file), "--list-variants"])

    assert exit_code == 0
    err = capsys.readouterr().err
    assert "quick" in err
    assert "Quick smoke run" in err


def test_unknown_variant_exits_with_two(config_file):
    assert main(["--config", str(config_file), "--variant", "nope"]) == int(RunStatus.ABORTED)


def test_unknown_suite_exits_with_two(config_file):
    assert main(["--config", str(config_file), "--variant", "broken"]) == 2


def test_unknown_case_exits_with_two(config_file):
    loader = ConfigLoader(config_file)

    runner = HarnessRunner("quick", {"cases": ["No such case"]}, loader)

    assert runner.run() == 2


def test_invalid_config_file_exits_with_two(tmp_path):
    broken = tmp_path / "broken.yaml"
    broken.write_text("variants: {quick: [", encoding="utf-8")

    assert main(["--config", str(broken)]) == 2
