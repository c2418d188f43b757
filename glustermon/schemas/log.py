# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
from dataclasses import dataclass
from typing import List

from glustermon.schemas.health_check.log import HealthCheckLog


@dataclass
class Log:
    """A batch of check records published together."""

    ts: int
    message: List[HealthCheckLog]
