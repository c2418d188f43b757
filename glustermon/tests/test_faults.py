# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
from typing import List, Optional

import pytest

from glustermon.health_checks.check_utils.faults import aggregate_volume_health
from glustermon.health_checks.measurement_units import ThresholdError
from glustermon.health_checks.types import ExitCode
from glustermon.monitoring.gluster.parsing import parse_volume_status
from glustermon.schemas.gluster.brick import BrickRecord, Fault, VolumeStatus
from glustermon.tests.fakes import brick_block, volume_status_output


def make_status(
    found: int,
    online: Optional[int] = None,
    free: int = 104857600,
    total: int = 209715200,
    faults: Optional[List[Fault]] = None,
) -> VolumeStatus:
    return VolumeStatus(
        bricks=[
            BrickRecord(name=f"server{i}:/b", online=True, free=free, total=total)
            for i in range(found)
        ],
        bricks_online=found if online is None else online,
        min_free=free if found else VolumeStatus().min_free,
        min_total=total if found else VolumeStatus().min_total,
        faults=faults or [],
    )


def test_healthy_volume() -> None:
    result = aggregate_volume_health("gv0", make_status(2), 0, 2, "G")

    assert result.exit_code == ExitCode.OK
    assert result.faults == []
    assert result.summary == "gv0: 2 bricks; free space 100.000G"
    assert result.perfdata == "bricks:2,freespace:100.000G;;;;"


def test_heal_backlog() -> None:
    result = aggregate_volume_health("gv0", make_status(2), 8, 2, "G")

    assert result.exit_code == ExitCode.WARN
    assert result.faults == ["8 unsynched entries"]
    assert result.summary == "1 fault: 8 unsynched entries"


def test_missing_bricks() -> None:
    result = aggregate_volume_health("gv0", make_status(2), 0, 4, "G")

    assert result.exit_code == ExitCode.WARN
    assert result.faults == ["found 2 bricks, expected 4"]


@pytest.mark.parametrize(
    "heal_backlog, warning, critical",
    [(0, None, None), (42, None, None), (42, "10%", "5%"), (0, "20", "30")],
)
def test_no_bricks_is_critical(
    heal_backlog: int, warning: Optional[str], critical: Optional[str]
) -> None:
    status = make_status(0)

    result = aggregate_volume_health(
        "gv0", status, heal_backlog, 2, "G", warning, critical
    )

    assert result.exit_code == ExitCode.CRITICAL
    assert result.faults == ["no bricks found"]
    assert result.summary == "1 fault: no bricks found"
    assert result.perfdata.startswith("bricks:0,freespace:")


def test_free_space_below_critical() -> None:
    status = make_status(1, free=40, total=1000)

    result = aggregate_volume_health("gv0", status, 0, 1, "%", "10%", "5%")

    assert result.exit_code == ExitCode.CRITICAL
    assert result.faults == ["free space 4.0% below critical threshold 5.0%"]
    assert result.perfdata == "bricks:1,freespace:4.0%;10.0;5.0;0;100.0"


def test_free_space_below_warning() -> None:
    status = make_status(1, free=70, total=1000)

    result = aggregate_volume_health("gv0", status, 0, 1, "K", "10%", "5%")

    assert result.exit_code == ExitCode.WARN
    assert result.faults == ["free space 70K below warning threshold 100K"]
    assert result.perfdata == "bricks:1,freespace:70K;100;50;0;1000"


def test_absolute_thresholds_in_display_unit() -> None:
    status = make_status(2, free=3 * 1024**2, total=100 * 1024**2)

    result = aggregate_volume_health("gv0", status, 0, 2, "G", "10", "5")

    assert result.exit_code == ExitCode.CRITICAL
    assert result.faults == ["free space 3.000G below critical threshold 5.000G"]
    assert result.perfdata == "bricks:2,freespace:3.000G;10.000;5.000;0;100.000"


def test_enough_free_space() -> None:
    status = make_status(2, free=50 * 1024**2, total=100 * 1024**2)

    result = aggregate_volume_health("gv0", status, 0, 2, "g", "10%", "5%")

    assert result.exit_code == ExitCode.OK
    assert result.summary == "gv0: 2 bricks; free space 50.000G"
    assert result.perfdata == "bricks:2,freespace:50.000G;10.000;5.000;0;100.000"


@pytest.mark.parametrize(
    "warning, critical", [("10%", "20%"), ("10%", "10%"), ("1", "1.5")]
)
def test_inverted_thresholds(warning: str, critical: str) -> None:
    with pytest.raises(ThresholdError, match="must be lower"):
        aggregate_volume_health(
            "gv0", make_status(1, total=1000), 8, 1, "G", warning, critical
        )


@pytest.mark.parametrize("warning, critical", [("10%", None), (None, "5%")])
def test_single_threshold(warning: Optional[str], critical: Optional[str]) -> None:
    with pytest.raises(ThresholdError, match="given together"):
        aggregate_volume_health("gv0", make_status(1), 0, 1, "G", warning, critical)


def test_unknown_display_unit() -> None:
    with pytest.raises(ValueError, match="is not one of"):
        aggregate_volume_health("gv0", make_status(1), 0, 1, "GB")


def test_percentage_of_unknown_total() -> None:
    status = make_status(1)
    status.min_total = VolumeStatus().min_total

    result = aggregate_volume_health("gv0", status, 0, 1, "G", "10%", "5%")

    assert result.exit_code == ExitCode.WARN
    assert result.faults == ["total disk space unknown"]
    assert result.perfdata == "bricks:1,freespace:100.000G;;;;"


def test_display_unit_percentage_of_unknown_total() -> None:
    status = parse_volume_status(
        volume_status_output(
            "gv0",
            brick_block("s1", online="N", free=None, total=None),
            brick_block("s2", online="N", free=None, total=None),
        )
    )

    result = aggregate_volume_health("gv0", status, 0, 2, "%", "10", "5")

    assert result.exit_code == ExitCode.WARN
    assert result.faults == ["s1 offline", "s2 offline", "total disk space unknown"]
    assert result.perfdata == "bricks:2,freespace:U;;;;"


@pytest.mark.parametrize(
    "unit, warning, critical",
    [("G", "10%", "20%"), ("G", "5%", "5%"), ("%", "5", "10"), ("%", "5", "10%")],
)
def test_inverted_percentages_of_unknown_total(
    unit: str, warning: str, critical: str
) -> None:
    status = make_status(1)
    status.min_total = VolumeStatus().min_total

    with pytest.raises(ThresholdError, match="must be lower"):
        aggregate_volume_health("gv0", status, 0, 1, unit, warning, critical)


def test_percentages_truncated_to_the_same_size() -> None:
    result = aggregate_volume_health(
        "gv0", make_status(1, free=4, total=5), 0, 1, "%", "10", "9"
    )

    assert result.exit_code == ExitCode.OK
    assert result.faults == []


def test_fault_order_and_severity() -> None:
    status = make_status(
        2,
        online=1,
        free=10,
        total=1000,
        faults=[Fault(ExitCode.WARN, "server1:/b offline")],
    )

    result = aggregate_volume_health("gv0", status, 3, 3, "%", "10%", "5%")

    assert result.exit_code == ExitCode.CRITICAL
    assert result.faults == [
        "3 unsynched entries",
        "server1:/b offline",
        "found 2 bricks, expected 3",
        "free space 1.0% below critical threshold 5.0%",
    ]
    assert result.summary == (
        "4 faults: 3 unsynched entries; server1:/b offline; "
        "found 2 bricks, expected 3; free space 1.0% below critical threshold 5.0%"
    )


def test_unknown_free_space() -> None:
    status = make_status(1)
    status.min_free = VolumeStatus().min_free

    result = aggregate_volume_health("gv0", status, 0, 1, "G", "10%", "5%")

    assert result.exit_code == ExitCode.OK
    assert result.perfdata == "bricks:1,freespace:U;20.000;10.000;0;200.000"
