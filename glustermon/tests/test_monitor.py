# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
from logging.handlers import RotatingFileHandler
from pathlib import Path

from glustermon.monitoring.utils.monitor import init_logger


def test_init_logger_writes_formatted_records(tmp_path: Path) -> None:
    logger, handler = init_logger("monitor_test", str(tmp_path / "logs"), "node.log")

    logger.info("volume gv0 checked")
    handler.flush()

    (line,) = (tmp_path / "logs" / "node.log").read_text().splitlines()
    assert line.endswith("- [INFO] - [monitor_test] - volume gv0 checked")


def test_init_logger_replaces_previous_handler(tmp_path: Path) -> None:
    init_logger("monitor_test_twice", str(tmp_path), "first.log")
    logger, _ = init_logger("monitor_test_twice", str(tmp_path), "second.log")

    logger.info("only once")

    handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(handlers) == 1
    assert (tmp_path / "first.log").read_text() == ""
    assert "only once" in (tmp_path / "second.log").read_text()
