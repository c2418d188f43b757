# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
import json
from dataclasses import asdict

from glustermon.exporters import register
from glustermon.schemas.log import Log


@register("stdout")
class Stdout:
    """Print health check records to stdout as a JSON list. Empty fields are
    left out.
    """

    def write(self, data: Log) -> None:
        records = [
            {k: v for k, v in asdict(record).items() if v is not None}
            for record in data.message
        ]
        print(json.dumps(records))
