# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
from dataclasses import dataclass, field
from typing import List, Optional

from glustermon.health_checks.types import ExitCode

# Capacity of a brick whose size line was never seen.
UNKNOWN_CAPACITY = 2**63 - 1


@dataclass
class Fault:
    severity: ExitCode
    description: str


@dataclass
class BrickRecord:
    """A single brick as reported by `gluster volume status <vol> detail`.

    Capacities are in KiB.
    """

    name: str
    online: Optional[bool] = None
    free: int = UNKNOWN_CAPACITY
    total: int = UNKNOWN_CAPACITY


@dataclass
class VolumeStatus:
    """Parsed brick report of one volume.

    `min_free` and `min_total` are the worst-provisioned brick values, which are
    taken as representative of the whole volume.
    """

    bricks: List[BrickRecord] = field(default_factory=list)
    bricks_online: int = 0
    min_free: int = UNKNOWN_CAPACITY
    min_total: int = UNKNOWN_CAPACITY
    faults: List[Fault] = field(default_factory=list)

    @property
    def bricks_found(self) -> int:
        return len(self.bricks)

    @property
    def free_known(self) -> bool:
        return self.min_free != UNKNOWN_CAPACITY

    @property
    def total_known(self) -> bool:
        return self.min_total != UNKNOWN_CAPACITY
