# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
import json
import os
from dataclasses import asdict

from glustermon.exporters import register
from glustermon.monitoring.utils.monitor import init_logger
from glustermon.schemas.log import Log


@register("file")
class File:
    """Append health check records to a file, one JSON object per line.
    The file is rotated like the check logs.
    """

    def __init__(self, *, file_path: str):
        self.logger, _ = init_logger(
            logger_name=f"{__name__}:{file_path}",
            log_dir=os.path.dirname(file_path),
            log_name=os.path.basename(file_path),
            log_formatter=None,
        )
        # records must not end up in the check's own log
        self.logger.propagate = False

    def write(self, data: Log) -> None:
        for record in data.message:
            self.logger.info(json.dumps({"ts": data.ts, **asdict(record)}))
