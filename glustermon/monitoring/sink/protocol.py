# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
from typing import Protocol, runtime_checkable

from glustermon.schemas.log import Log


@runtime_checkable
class SinkImpl(Protocol):
    """Somewhere check results are published to. Implementations live in
    `glustermon.exporters` and are built from `key=value` sink options.
    """

    def write(self, data: Log) -> None: ...
