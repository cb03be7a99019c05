"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management with environment variable override support.

Features:
    - YAML configuration loading (config/harness.yaml)
    - Environment variable override (SESSION_HEADLESS overrides session.headless)
    - Dot notation path access
    - Variant records: target document, output directory, suite, case subset
    - Typed RunConfig assembly for the harness

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import yaml
from loguru import logger

from .browser_manager import BROWSER_TYPES, SessionConfig
from .element_actions import LOAD_STATES
from .errors import ConfigurationError


# Default configuration file path
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "harness.yaml"


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (SESSION_HEADLESS)
        2. YAML configuration file
        3. Default values

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("timeouts.locator_ms", 5000)
        5000
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """Singleton pattern - configuration is loaded once per process."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML configuration file.
                        Uses DEFAULT_CONFIG_PATH if not specified.
        """
        if getattr(self, "_initialized", False):
            return

        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._load_config()
        self._initialized = True

    @property
    def config_path(self) -> Path:
        return self._config_path

    @property
    def project_root(self) -> Path:
        """Directory target documents and output directories are relative to."""
        return self._config_path.resolve().parent.parent

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
            logger.debug(f"Loaded configuration from: {self._config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        Args:
            key: Dot-separated path (e.g., "session.viewport.width")
            default: Value returned when the key is not configured

        Returns:
            Environment override, YAML value or default, in that order
        """
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return self._convert_type(env_value, default)

        value = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get entire configuration section (empty dict if absent)."""
        return self._config.get(section) or {}

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    def _convert_type(self, value: str, reference: Any) -> Any:
        """
        Convert string value to match reference type.

        Used for environment variables which are always strings.
        """
        if reference is None:
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                return value
        if isinstance(reference, float):
            try:
                return float(value)
            except ValueError:
                return value
        if isinstance(reference, list):
            return [item.strip() for item in value.split(",") if item.strip()]

        return value

    @classmethod
    def reset(cls) -> None:
        """Reset singleton instance (used by tests)."""
        cls._instance = None
        cls._config = {}


# =============================================================================
# Typed run configuration
# =============================================================================

@dataclass
class Timeouts:
    """Wait bounds, all in milliseconds except run_timeout_s."""
    locator_ms: int = 5000
    settle_ms: int = 500
    initial_settle_ms: int = 2000
    poll_ms: int = 100
    run_timeout_s: Optional[float] = None


@dataclass
class VariantConfig:
    """
    One harness variant.

    Attributes:
        name: Variant key in the configuration
        target: Document path (relative to the project root) or URL
        output_dir: Artifact directory (relative to the project root)
        suite: Suite name in the suite registry
        wait_until: Load state navigation waits for
        cases: Optional exact case names to run (registration order kept)
        error_artifact: File name of the fatal-error screenshot
        final_artifact: Tag of a full-page capture taken after the last case
    """
    name: str
    target: str
    output_dir: str
    suite: str
    wait_until: str = "networkidle"
    cases: List[str] = field(default_factory=list)
    error_artifact: str = "error.png"
    final_artifact: Optional[str] = None
    description: str = ""


@dataclass
class RunConfig:
    """Everything a HarnessRun needs."""
    variant: VariantConfig
    session: SessionConfig
    timeouts: Timeouts
    project_root: Path
    case_patterns: List[str] = field(default_factory=list)
    capture_on_failure: bool = False
    json_report: bool = False

    @property
    def target_url(self) -> str:
        """file:// URL for local documents; URLs pass through unchanged."""
        if urlparse(self.variant.target).scheme in ("http", "https", "file"):
            return self.variant.target
        return (self.project_root / self.variant.target).resolve().as_uri()

    @property
    def target_path(self) -> Optional[Path]:
        if urlparse(self.variant.target).scheme in ("http", "https", "file"):
            return None
        return (self.project_root / self.variant.target).resolve()

    @property
    def output_path(self) -> Path:
        return (self.project_root / self.variant.output_dir).resolve()


def _int(value: Any, key: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{key} must be an integer, got {value!r}") from e


def list_variants(loader: Optional[ConfigLoader] = None) -> Dict[str, str]:
    """Variant name -> description."""
    loader = loader or ConfigLoader()
    return {
        name: (spec or {}).get("description", "")
        for name, spec in loader.get_section("variants").items()
    }


def load_run_config(
    variant: Optional[str] = None,
    loader: Optional[ConfigLoader] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> RunConfig:
    """
    Assemble a RunConfig for one variant.

    Args:
        variant: Variant name (defaults to harness.default_variant)
        loader: ConfigLoader (defaults to the process singleton)
        overrides: CLI-level overrides; recognised keys are target, output_dir,
            browser, headless, cases, case_patterns, run_timeout_s,
            capture_on_failure, json_report

    Raises:
        ConfigurationError: Unknown variant or invalid value
    """
    loader = loader or ConfigLoader()
    overrides = {k: v for k, v in (overrides or {}).items() if v is not None}

    variant = variant or loader.get("harness.default_variant", "complete")
    variants = loader.get_section("variants")
    if variant not in variants:
        raise ConfigurationError(
            f"Unknown variant '{variant}'. Available: {', '.join(sorted(variants)) or 'none'}"
        )
    spec: Dict[str, Any] = variants[variant] or {}
    prefix = f"variants.{variant}"

    for required in ("target", "output_dir", "suite"):
        if not spec.get(required):
            raise ConfigurationError(f"Variant '{variant}' is missing '{required}'")

    variant_config = VariantConfig(
        name=variant,
        target=overrides.get("target", loader.get(f"{prefix}.target", spec["target"])),
        output_dir=overrides.get("output_dir", loader.get(f"{prefix}.output_dir", spec["output_dir"])),
        suite=loader.get(f"{prefix}.suite", spec["suite"]),
        wait_until=loader.get(f"{prefix}.wait_until", "networkidle"),
        cases=list(overrides.get("cases", spec.get("cases") or [])),
        error_artifact=loader.get(f"{prefix}.error_artifact", "error.png"),
        final_artifact=spec.get("final_artifact"),
        description=spec.get("description", ""),
    )
    if variant_config.wait_until not in LOAD_STATES:
        raise ConfigurationError(
            f"Variant '{variant}': wait_until must be one of {LOAD_STATES}, "
            f"got {variant_config.wait_until!r}"
        )

    browser = overrides.get("browser", loader.get("session.browser", "chromium"))
    if browser not in BROWSER_TYPES:
        raise ConfigurationError(f"session.browser must be one of {BROWSER_TYPES}, got {browser!r}")

    # Variant-level keys win over the session section, so an explicit null
    # in a variant (e.g. locale: null) is honoured.
    locale = spec["locale"] if "locale" in spec else loader.get("session.locale")
    launch_args = (
        spec["launch_args"] if "launch_args" in spec
        else loader.get("session.launch_args", [])
    )
    session = SessionConfig(
        browser_type=browser,
        headless=overrides.get("headless", loader.get("session.headless", True)),
        viewport_width=_int(loader.get("session.viewport.width", 1920), "viewport.width"),
        viewport_height=_int(loader.get("session.viewport.height", 1080), "viewport.height"),
        locale=locale,
        launch_args=list(launch_args or []),
        slow_mo_ms=_int(loader.get("session.slow_mo_ms", 0), "session.slow_mo_ms"),
    )
    viewport = spec.get("viewport") or {}
    if viewport:
        session.viewport_width = _int(viewport.get("width", session.viewport_width), "viewport.width")
        session.viewport_height = _int(viewport.get("height", session.viewport_height), "viewport.height")

    run_timeout = overrides.get("run_timeout_s", loader.get("timeouts.run_timeout_s", 0))
    timeouts = Timeouts(
        locator_ms=_int(loader.get("timeouts.locator_ms", 5000), "timeouts.locator_ms"),
        settle_ms=_int(loader.get("timeouts.settle_ms", 500), "timeouts.settle_ms"),
        initial_settle_ms=_int(
            spec.get("initial_settle_ms", loader.get("timeouts.initial_settle_ms", 2000)),
            "timeouts.initial_settle_ms",
        ),
        poll_ms=_int(loader.get("timeouts.poll_ms", 100), "timeouts.poll_ms"),
        run_timeout_s=float(run_timeout) if run_timeout else None,
    )

    return RunConfig(
        variant=variant_config,
        session=session,
        timeouts=timeouts,
        project_root=loader.project_root,
        case_patterns=list(overrides.get("case_patterns", [])),
        capture_on_failure=overrides.get(
            "capture_on_failure", loader.get("artifacts.capture_on_failure", False)
        ),
        json_report=overrides.get("json_report", loader.get("report.json", False)),
    )


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ConfigLoader",
    "Timeouts",
    "VariantConfig",
    "RunConfig",
    "list_variants",
    "load_run_config",
]
