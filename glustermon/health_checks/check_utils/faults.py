# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Reduce a parsed gluster volume report to a single Nagios verdict."""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from glustermon.health_checks.measurement_units import (
    check_threshold_pair,
    from_canonical,
    is_percentage,
    normalize_unit,
    parse_threshold,
    threshold_number,
    ThresholdError,
)
from glustermon.health_checks.types import ExitCode, worst
from glustermon.schemas.gluster.brick import Fault, VolumeStatus


@dataclass
class VolumeCheckResult:
    exit_code: ExitCode
    faults: List[str]
    perfdata: str
    summary: str


@dataclass
class _Thresholds:
    warning: int
    critical: int


def _summary(volume: str, faults: List[Fault], bricks: int, free: str) -> str:
    if not faults:
        return f"{volume}: {bricks} bricks; free space {free}"
    noun = "fault" if len(faults) == 1 else "faults"
    return f"{len(faults)} {noun}: " + "; ".join(f.description for f in faults)


def _convert_thresholds(
    warning: str, critical: str, unit: str, total: int
) -> Tuple[Optional[_Thresholds], Optional[Fault]]:
    """Convert both thresholds to KiB.

    A threshold is a percentage if it ends in `%` or the display unit is `%`.
    Two percentages are ordered on their own values, so an inverted pair is an
    error even when the total is unknown. Returns no thresholds and a fault
    when a percentage can not be resolved because the total is unknown.
    """
    warn_pct = unit == "%" or is_percentage(warning)
    crit_pct = unit == "%" or is_percentage(critical)
    if warn_pct and crit_pct:
        if threshold_number(critical) >= threshold_number(warning):
            raise _inverted(warning, critical)
    if (warn_pct or crit_pct) and total == 0:
        return None, Fault(ExitCode.WARN, "total disk space unknown")

    warn_kib = parse_threshold(warning, unit, total)
    crit_kib = parse_threshold(critical, unit, total)
    # two valid percentages may truncate to the same KiB on a tiny total
    if not (warn_pct and crit_pct) and crit_kib >= warn_kib:
        raise _inverted(warning, critical)
    return _Thresholds(warning=warn_kib, critical=crit_kib), None


def _inverted(warning: str, critical: str) -> ThresholdError:
    return ThresholdError(
        f"Critical threshold ({critical}) must be lower than the warning threshold ({warning})."
    )


def aggregate_volume_health(
    volume: str,
    status: VolumeStatus,
    heal_backlog: int,
    expected_bricks: int,
    display_unit: str,
    warning: Optional[str] = None,
    critical: Optional[str] = None,
) -> VolumeCheckResult:
    """Combine every fault signal of a volume into one verdict.

    Faults are ordered heal backlog, offline bricks, brick count and free space.
    A volume without bricks is CRITICAL and no other signal is reported.

    Raises `ThresholdError` if the thresholds are inconsistent and `ValueError`
    if the display unit is unknown. Both are configuration errors of the check,
    not of the volume.
    """
    unit = normalize_unit(display_unit)
    check_threshold_pair(warning, critical)

    faults: List[Fault] = []
    if heal_backlog > 0:
        faults.append(Fault(ExitCode.WARN, f"{heal_backlog} unsynched entries"))

    found = status.bricks_found
    if found == 0:
        description = "no bricks found"
        return VolumeCheckResult(
            exit_code=ExitCode.CRITICAL,
            faults=[description],
            perfdata="bricks:0,freespace:U;;;;",
            summary=f"1 fault: {description}",
        )

    faults.extend(status.faults)
    if found < expected_bricks:
        faults.append(
            Fault(ExitCode.WARN, f"found {found} bricks, expected {expected_bricks}")
        )

    total = status.min_total if status.total_known else 0
    thresholds: Optional[_Thresholds] = None
    if warning is not None and critical is not None:
        thresholds, fault = _convert_thresholds(warning, critical, unit, total)
        if fault is not None:
            faults.append(fault)

    def show(kib: int) -> str:
        return from_canonical(unit, kib, total)

    if thresholds is not None and status.free_known:
        free = status.min_free
        if free < thresholds.critical:
            faults.append(
                Fault(
                    ExitCode.CRITICAL,
                    f"free space {show(free)}{unit} below critical threshold {show(thresholds.critical)}{unit}",
                )
            )
        elif free < thresholds.warning:
            faults.append(
                Fault(
                    ExitCode.WARN,
                    f"free space {show(free)}{unit} below warning threshold {show(thresholds.warning)}{unit}",
                )
            )

    free_display = f"{show(status.min_free)}{unit}" if status.free_known else "U"
    perf_warn = perf_crit = perf_min = perf_max = ""
    if thresholds is not None:
        perf_warn = show(thresholds.warning)
        perf_crit = show(thresholds.critical)
        perf_min = "0"
        perf_max = show(total) if status.total_known else ""

    return VolumeCheckResult(
        exit_code=worst(f.severity for f in faults),
        faults=[f.description for f in faults],
        perfdata=f"bricks:{found},freespace:{free_display};{perf_warn};{perf_crit};{perf_min};{perf_max}",
        summary=_summary(volume, faults, found, free_display),
    )
