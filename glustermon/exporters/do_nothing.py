# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
from glustermon.exporters import register
from glustermon.schemas.log import Log


@register("do_nothing")
class DoNothing:
    """Discard every record. The default when no sink is chosen."""

    def write(self, data: Log) -> None:
        pass
