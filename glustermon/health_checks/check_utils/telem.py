# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Publish the result of a health check to a telemetry sink."""

import logging
import time
import types
from dataclasses import dataclass, field
from typing import (
    Callable,
    Collection,
    ContextManager,
    Dict,
    Literal,
    Optional,
    Tuple,
    Type,
)

from glustermon.exporters import registry
from glustermon.health_checks.types import CHECK_TYPE, ExitCode
from glustermon.monitoring.sink.protocol import SinkImpl
from glustermon.monitoring.sink.utils import Factory
from glustermon.schemas.health_check.log import HealthCheckLog
from glustermon.schemas.log import Log
from omegaconf import OmegaConf as oc


def make_sink(
    sink: str,
    sink_opts: Collection[str],
    sinks: Dict[str, Factory[SinkImpl]] = registry,
) -> SinkImpl:
    """Build the sink named `sink`; `sink_opts` are `key=value` constructor
    arguments.
    """
    return sinks[sink](**oc.from_dotlist(list(sink_opts)))


@dataclass
class TelemetryContext(ContextManager["TelemetryContext"]):
    """Time the enclosed check and publish its outcome on exit.

    The outcome is read through `get_exit_code_msg` and `get_perfdata` only
    when the context exits, so the check can update it until the last moment.
    A failing sink is logged and never changes the outcome of the check.
    """

    sink: str
    sink_opts: Collection[str]
    logger: logging.Logger
    cluster: str
    volume: str
    type: CHECK_TYPE
    name: str
    node: str
    get_exit_code_msg: Callable[[], Tuple[ExitCode, str]]
    get_perfdata: Callable[[], str] = lambda: ""
    telem_registry: Dict[str, Factory[SinkImpl]] = field(
        default_factory=lambda: registry
    )
    start_time: float = field(default=0.0, init=False)

    def __enter__(self) -> "TelemetryContext":
        self.start_time = time.time()
        return self

    def record(self, end_time: float) -> HealthCheckLog:
        """The outcome of the check so far, as published."""
        exit_code, msg = self.get_exit_code_msg()
        return HealthCheckLog(
            node=self.node,
            cluster=self.cluster,
            volume=self.volume,
            health_check=self.name,
            type=self.type,
            result=exit_code.value,
            _msg=msg,
            perfdata=self.get_perfdata(),
            start_time=self.start_time,
            end_time=end_time,
        )

    def publish(self, end_time: float) -> None:
        sink_impl = make_sink(self.sink, self.sink_opts, self.telem_registry)
        sink_impl.write(Log(ts=int(end_time), message=[self.record(end_time)]))

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> Literal[False]:
        try:
            self.publish(time.time())
        except Exception:
            self.logger.exception(f"Telemetry to sink '{self.sink}' failed.")
        return False
