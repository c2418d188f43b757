# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Parsers for the text reports of the `gluster` CLI.

`gluster volume status <vol> detail` prints one block per brick:

    Status of volume: gv0
    ------------------------------------------------------------------------------
    Brick                : Brick server1:/data/brick1/gv0
    TCP Port             : 49152
    Online               : Y
    Pid                  : 1642
    Disk Space Free      : 100.0GB
    Total Disk Space     : 200.0GB

`gluster volume heal <vol> info` prints one paragraph per brick ending with
`Number of entries: <n>`.
"""

import logging
import re
from typing import Callable, Dict, List, Optional, Tuple

from glustermon.health_checks.measurement_units import canonical_multiplier
from glustermon.health_checks.types import ExitCode
from glustermon.schemas.gluster.brick import BrickRecord, Fault, VolumeStatus

logger = logging.getLogger(__name__)

_HEAL_ENTRIES = re.compile(r"^\s*Number of entries\s*:\s*(\d+)\s*$")


def parse_size_kib(s: str) -> int:
    """Given a gluster size string such as `100.0GB`, return the size in KiB.
    Raises `ValueError` if the string could not be parsed.

    Examples:
    >>> parse_size_kib('100.0GB')
    104857600
    >>> parse_size_kib('512.0KB')
    512
    >>> parse_size_kib('2048Bytes')
    2
    """
    s = s.strip()
    if s.endswith("Bytes"):
        return int(float(s[: -len("Bytes")]) / 1024)
    num, suffix = s[:-2], s[-2:]
    if len(suffix) != 2 or suffix[1] != "B":
        raise ValueError("Could not parse {}.".format(s))
    if suffix[0].isdigit():
        return int(float(s[:-1]) / 1024)
    return int(float(num) * canonical_multiplier(suffix[0]))


def _field_value(line: str) -> str:
    _, _, value = line.partition(":")
    return value.strip()


class _StatusScanner:
    """State machine over the lines of a volume status report."""

    def __init__(self) -> None:
        self.status = VolumeStatus()
        self.current: Optional[BrickRecord] = None
        self.handlers: Dict[str, Callable[[List[str], str], None]] = {
            "Brick": self.on_brick,
            "Disk": self.on_disk,
            "Total": self.on_total,
            "Online": self.on_online,
        }

    def feed(self, line: str) -> None:
        tokens = line.split()
        if not tokens:
            return
        handler = self.handlers.get(tokens[0])
        if handler is not None:
            handler(tokens, line)

    def on_brick(self, tokens: List[str], line: str) -> None:
        name = _field_value(line)
        if name.startswith("Brick "):
            name = name[len("Brick ") :].strip()  # noqa: E203
        self.current = BrickRecord(name=name)
        self.status.bricks.append(self.current)

    def on_disk(self, tokens: List[str], line: str) -> None:
        if tokens[:3] != ["Disk", "Space", "Free"]:
            return
        sized = self._size(line)
        if sized is None:
            return
        brick, size = sized
        brick.free = size
        self.status.min_free = min(self.status.min_free, size)

    def on_total(self, tokens: List[str], line: str) -> None:
        if tokens[:3] != ["Total", "Disk", "Space"]:
            return
        sized = self._size(line)
        if sized is None:
            return
        brick, size = sized
        brick.total = size
        self.status.min_total = min(self.status.min_total, size)

    def on_online(self, tokens: List[str], line: str) -> None:
        if self.current is None:
            logger.debug(f"Ignoring line outside of a brick block: '{line}'")
            return
        if self.current.online is not None:
            logger.warning(
                f"Brick {self.current.name} reported online state twice, keeping the first: '{line}'"
            )
            return
        flag = _field_value(line)
        if flag == "Y":
            self.current.online = True
            self.status.bricks_online += 1
        elif flag == "N":
            self.current.online = False
            self.status.faults.append(
                Fault(ExitCode.WARN, f"{self.current.name} offline")
            )
        else:
            logger.warning(f"Unexpected online flag '{flag}' in line: '{line}'")

    def _size(self, line: str) -> Optional[Tuple[BrickRecord, int]]:
        """The current brick and the KiB size of a disk space line, if both are valid."""
        if self.current is None:
            logger.debug(f"Ignoring line outside of a brick block: '{line}'")
            return None
        value = _field_value(line)
        try:
            size = parse_size_kib(value)
        except (ValueError, OverflowError):
            logger.warning(f"Could not parse disk space '{value}' in line: '{line}'")
            return None
        if size < 0:
            logger.warning(f"Negative disk space '{value}' in line: '{line}'")
            return None
        return self.current, size


def parse_volume_status(output: str) -> VolumeStatus:
    """Parse the output of `gluster volume status <vol> detail`.

    Lines the scanner does not know about are ignored, so are fields it fails to
    parse. A brick block starts at its `Brick` line and lasts until the next one.
    """
    scanner = _StatusScanner()
    for line in output.splitlines():
        scanner.feed(line)
    return scanner.status


def parse_heal_info(output: str) -> int:
    """Return the number of entries waiting to be healed across all bricks.

    >>> parse_heal_info("Number of entries: 3\\nNumber of entries: -\\nNumber of entries: 5")
    8
    """
    total = 0
    for line in output.splitlines():
        match = _HEAL_ENTRIES.match(line)
        if match is None:
            continue
        entries = int(match.group(1))
        if entries > 0:
            total += entries
    return total
