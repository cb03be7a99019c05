# ================================================================================
# Harness Runner CLI
# ================================================================================
#
# Main entry point for running a harness variant against the learning app.
#
# Features:
#   - Variant selection (home, complete, modern, quick)
#   - Target / output directory / browser overrides
#   - Case subset selection by exact name or substring
#   - Optional whole-run timeout and JSON report
#
# Usage:
#   python run_harness.py
#   python run_harness.py --variant quick --no-headless
#   python run_harness.py --variant complete --case "Calculate ratio" --json-report
#
# Exit codes: 0 all passed, 1 failures, 2 aborted (fatal error or bad config)
#
# ================================================================================

import argparse
import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

from uiharness.common.global_config import init_logger
from uiharness.framework.browser_manager import BROWSER_TYPES
from uiharness.framework.config_loader import ConfigLoader, RunConfig, list_variants, load_run_config
from uiharness.framework.errors import ConfigurationError
from uiharness.framework.harness import HarnessRun, RunResult, RunStatus
from uiharness.suites import build_suite


class HarnessRunner:
    """
    Resolves configuration for one variant and executes it.

    This class handles:
    - Variant and override resolution
    - Suite construction
    - Run execution and the final banner
    """

    def __init__(
        self,
        variant: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
        loader: Optional[ConfigLoader] = None,
    ):
        self.variant = variant
        self.overrides = overrides or {}
        self.loader = loader or ConfigLoader()

    def resolve(self) -> RunConfig:
        """Build the RunConfig (ConfigurationError on bad input)."""
        return load_run_config(self.variant, loader=self.loader, overrides=self.overrides)

    def run(self) -> int:
        """
        Execute the variant.

        Returns:
            Exit code (0 passed, 1 failed, 2 aborted or misconfigured)
        """
        try:
            config = self.resolve()
            suite = build_suite(config.variant.suite)
            harness = HarnessRun(config, suite)
        except (ConfigurationError, KeyError, ValueError) as e:
            logger.error(f"❌ Configuration error: {e}")
            return int(RunStatus.ABORTED)

        self._print_header(config, len(harness.suite))
        result = asyncio.run(harness.execute())
        self._print_summary(result)
        return result.exit_code

    def _print_header(self, config: RunConfig, case_count: int) -> None:
        logger.info("=" * 60)
        logger.info("🧪 Starting Harness Run")
        logger.info("=" * 60)
        logger.info(f"Variant: {config.variant.name}")
        logger.info(f"Target: {config.target_url}")
        logger.info(f"Output: {config.output_path}")
        logger.info(f"Cases: {case_count}")
        logger.info(f"Browser: {config.session.browser_type} (headless={config.session.headless})")
        logger.info("=" * 60)

    def _print_summary(self, result: RunResult) -> None:
        if result.status == RunStatus.PASSED:
            logger.info("✅ HARNESS RUN COMPLETED SUCCESSFULLY")
        elif result.status == RunStatus.FAILED:
            logger.error(f"❌ HARNESS RUN FAILED (exit code: {result.exit_code})")
        else:
            logger.critical(f"💥 HARNESS RUN ABORTED: {result.fatal}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Similar-Triangles UI Harness",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Full functional run (default variant)
  python run_harness.py

  # Quick smoke run with a visible browser
  python run_harness.py --variant quick --no-headless

  # Only the calculator cases, with a JSON report
  python run_harness.py --match calculat --json-report
        """,
    )

    parser.add_argument(
        "--variant",
        default=None,
        help="Variant from config/harness.yaml (default: harness.default_variant)",
    )
    parser.add_argument(
        "--list-variants",
        action="store_true",
        help="List configured variants and exit",
    )
    parser.add_argument("--target", help="Target document path or URL (overrides the variant)")
    parser.add_argument("--output-dir", help="Artifact directory (overrides the variant)")
    parser.add_argument(
        "--case",
        dest="cases",
        action="append",
        default=None,
        help="Run only this case (exact name, repeatable)",
    )
    parser.add_argument(
        "--match",
        dest="case_patterns",
        action="append",
        default=None,
        help="Run cases whose name contains this text (case-insensitive, repeatable)",
    )
    parser.add_argument(
        "--browser",
        choices=list(BROWSER_TYPES),
        default=None,
        help="Browser engine (default: session.browser)",
    )
    parser.add_argument(
        "--no-headless",
        action="store_true",
        help="Run browser in headed mode (visible)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Abort the whole run after this many seconds",
    )
    parser.add_argument(
        "--json-report",
        action="store_true",
        help="Also write report.json into the output directory",
    )
    parser.add_argument(
        "--capture-on-failure",
        action="store_true",
        help="Screenshot the page whenever a case fails",
    )
    parser.add_argument("--config", type=Path, default=None, help="Alternative configuration file")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--log-file", default=None, help="Also log to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Detailed log format")
    return parser


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {
        "target": args.target,
        "output_dir": args.output_dir,
        "browser": args.browser,
        "cases": args.cases,
        "case_patterns": args.case_patterns,
        "run_timeout_s": args.timeout,
    }
    if args.no_headless:
        overrides["headless"] = False
    if args.json_report:
        overrides["json_report"] = True
    if args.capture_on_failure:
        overrides["capture_on_failure"] = True
    return overrides


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.config is not None:
        ConfigLoader.reset()
    try:
        loader = ConfigLoader(args.config)
    except ConfigurationError as e:
        logger.error(f"❌ Configuration error: {e}")
        return int(RunStatus.ABORTED)

    init_logger(level=args.log_level, log_file=args.log_file, verbose=args.verbose, force=True)

    if args.list_variants:
        for name, description in list_variants(loader).items():
            logger.info(f"{name:<10} {description}")
        return 0

    return HarnessRunner(args.variant, _overrides(args), loader).run()
