# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
from dataclasses import dataclass
from typing import Optional


@dataclass
class HealthCheckLog:
    node: Optional[str]
    cluster: Optional[str]
    volume: Optional[str]
    health_check: Optional[str]
    type: Optional[str]
    result: Optional[int]
    # `msg` would clash with the LogRecord attribute for a sink that logs
    # records through `extra=`
    _msg: Optional[str]
    perfdata: Optional[str]
    start_time: Optional[float]
    end_time: Optional[float]
