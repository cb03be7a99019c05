import sys

import pytest
from loguru import logger

from uiharness.common.global_config import init_logger, reset_logger


@pytest.fixture(autouse=True)
def _restore_logger():
    reset_logger()
    yield
    reset_logger()
    logger.remove()
    logger.add(sys.stderr)


def test_log_file_sink(tmp_path):
    log_file = tmp_path / "logs" / "harness.log"

    init_logger(level="debug", log_file=str(log_file))
    logger.info("calculator checked")
    logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "calculator checked" in content
    assert "| INFO |" in content


def test_second_init_is_ignored_unless_forced(tmp_path):
    first = tmp_path / "first.log"
    second = tmp_path / "second.log"

    init_logger(log_file=str(first))
    init_logger(log_file=str(second))
    logger.info("once")
    assert not second.exists()

    init_logger(log_file=str(second), force=True)
    logger.info("twice")
    logger.remove()

    assert "twice" in second.read_text(encoding="utf-8")
    assert "twice" not in first.read_text(encoding="utf-8")
