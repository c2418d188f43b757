# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
import logging
import os
import socket
import sys
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Collection, List, Optional, Protocol

import click

from glustermon.health_checks.check_utils.faults import (
    aggregate_volume_health,
    VolumeCheckResult,
)
from glustermon.health_checks.check_utils.output_context_manager import OutputContext
from glustermon.health_checks.check_utils.telem import TelemetryContext
from glustermon.health_checks.click import (
    common_arguments,
    telemetry_argument,
    timeout_argument,
)
from glustermon.health_checks.measurement_units import (
    check_threshold_pair,
    normalize_unit,
    ThresholdError,
)
from glustermon.health_checks.subprocess import (
    describe_subprocess_exception,
    run_command,
    ShellCommandOut,
)
from glustermon.health_checks.types import CHECK_TYPE, ExitCode, LOG_LEVEL
from glustermon.monitoring.gluster.parsing import parse_heal_info, parse_volume_status
from glustermon.monitoring.utils.monitor import init_logger
from glustermon.schemas.health_check.health_check_name import HealthCheckName
from typeguard import typechecked


@click.group()
def check_gluster() -> None:
    """GlusterFS based checks. i.e. brick availability, heal backlog, free space"""


class GlusterCheck(Protocol):
    def is_glusterd_running(self, timeout_secs: int, logger: logging.Logger) -> bool: ...

    def get_volume_status(
        self, timeout_secs: int, volume: str, logger: logging.Logger
    ) -> ShellCommandOut: ...

    def get_heal_info(
        self, timeout_secs: int, volume: str, logger: logging.Logger
    ) -> ShellCommandOut: ...


@dataclass
class GlusterCheckImpl:
    use_sudo: bool

    def _gluster(self, *args: str) -> List[str]:
        # the gluster CLI needs root to talk to glusterd
        if self.use_sudo and os.geteuid() != 0:
            return ["sudo", "-n", "gluster", *args]
        return ["gluster", *args]

    def _run(
        self, cmd: List[str], timeout_secs: int, logger: logging.Logger
    ) -> ShellCommandOut:
        logger.info(f"Running command '{' '.join(cmd)}'")
        return run_command(cmd, timeout_secs)

    def is_glusterd_running(self, timeout_secs: int, logger: logging.Logger) -> bool:
        """Check the glusterd management daemon is alive."""
        return self._run(["pidof", "glusterd"], timeout_secs, logger).returncode == 0

    def get_volume_status(
        self, timeout_secs: int, volume: str, logger: logging.Logger
    ) -> ShellCommandOut:
        """Invoke gluster to get the per brick status of the volume"""
        cmd = self._gluster("volume", "status", volume, "detail")
        return self._run(cmd, timeout_secs, logger)

    def get_heal_info(
        self, timeout_secs: int, volume: str, logger: logging.Logger
    ) -> ShellCommandOut:
        """Invoke gluster to get the entries waiting to be healed"""
        cmd = self._gluster("volume", "heal", volume, "info")
        return self._run(cmd, timeout_secs, logger)


def process_volume(
    volume: str,
    status_out: ShellCommandOut,
    heal_out: ShellCommandOut,
    bricks: int,
    unit: str,
    warning: Optional[str],
    critical: Optional[str],
    logger: logging.Logger,
) -> VolumeCheckResult:
    """Parse both gluster reports and aggregate them.

    A failing gluster command is not an error by itself: its output is still
    parsed, and a volume without bricks is reported as such.
    """
    if status_out.returncode != 0:
        logger.warning(
            f"volume status command returned {status_out.returncode}: {status_out.stdout}"
        )
    if heal_out.returncode != 0:
        logger.warning(
            f"volume heal info command returned {heal_out.returncode}: {heal_out.stdout}"
        )
    status = parse_volume_status(status_out.stdout)
    heal_backlog = parse_heal_info(heal_out.stdout)
    logger.info(
        f"bricks found: {status.bricks_found}, bricks online: {status.bricks_online}, heal backlog: {heal_backlog}"
    )
    return aggregate_volume_health(
        volume=volume,
        status=status,
        heal_backlog=heal_backlog,
        expected_bricks=bricks,
        display_unit=unit,
        warning=warning,
        critical=critical,
    )


def validate_options(unit: str, warning: Optional[str], critical: Optional[str]) -> str:
    """Return the normalized display unit.

    Raises `ValueError` for an unknown unit and `ThresholdError` when only one
    of the thresholds is given.
    """
    check_threshold_pair(warning, critical)
    return normalize_unit(unit)


@check_gluster.command("volume")
@common_arguments
@timeout_argument
@telemetry_argument
@click.option(
    "--volume",
    "-v",
    type=click.STRING,
    help="Name of the gluster volume to check",
    required=True,
)
@click.option(
    "--bricks",
    "-n",
    type=click.IntRange(min=1),
    help="Number of bricks the volume is expected to have",
    required=True,
)
@click.option(
    "--unit",
    "-u",
    type=click.STRING,
    default="G",
    show_default=True,
    help="Unit of the free space report and of thresholds without '%'. One of %, B, K, M, G, T, P.",
)
@click.option(
    "--warning-threshold",
    "-w",
    type=click.STRING,
    help="Free space below which a WARNING is returned. A number in --unit or a percentage, e.g. 10%",
)
@click.option(
    "--critical-threshold",
    "-c",
    type=click.STRING,
    help="Free space below which a CRITICAL is returned. Must be given with --warning-threshold",
)
@click.option(
    "--sudo/--no-sudo",
    default=True,
    show_default=True,
    help="Run the gluster CLI through 'sudo -n' when not running as root",
)
@click.pass_obj
@typechecked
def volume_health(
    obj: Optional[GlusterCheck],
    cluster: str,
    type: CHECK_TYPE,
    log_level: LOG_LEVEL,
    log_folder: str,
    timeout: int,
    sink: str,
    sink_opts: Collection[str],
    verbose_out: bool,
    volume: str,
    bricks: int,
    unit: str,
    warning_threshold: Optional[str],
    critical_threshold: Optional[str],
    sudo: bool,
) -> None:
    """Check the bricks, heal backlog and free space of a gluster volume"""

    node: str = socket.gethostname()
    logger, _ = init_logger(
        logger_name=type,
        log_dir=os.path.join(log_folder, type + "_logs"),
        log_name=node + ".log",
        log_level=getattr(logging, log_level),
    )
    logger.info(
        f"check-gluster volume: cluster: {cluster}, node: {node}, type: {type}, volume: {volume}, bricks: {bricks}, unit: {unit}, warning threshold: {warning_threshold}, critical threshold: {critical_threshold}."
    )

    if obj is None:
        obj = GlusterCheckImpl(use_sudo=sudo)

    exit_code = ExitCode.UNKNOWN
    msg = ""
    perfdata = ""
    details: List[str] = []
    with ExitStack() as s:
        s.enter_context(
            TelemetryContext(
                sink=sink,
                sink_opts=sink_opts,
                logger=logger,
                cluster=cluster,
                volume=volume,
                type=type,
                name=HealthCheckName.GLUSTER_VOLUME.value,
                node=node,
                get_exit_code_msg=lambda: (exit_code, msg),
                get_perfdata=lambda: perfdata,
            )
        )
        s.enter_context(
            OutputContext(
                HealthCheckName.GLUSTER_VOLUME,
                lambda: (exit_code, msg),
                verbose_out,
                get_perfdata=lambda: perfdata,
                get_details=lambda: details,
            )
        )

        try:
            unit = validate_options(unit, warning_threshold, critical_threshold)
        except ValueError as e:
            exit_code = ExitCode.UNKNOWN
            msg = str(e)
            logger.error(f"configuration error: {msg}")
            sys.exit(exit_code.value)

        try:
            glusterd_running = obj.is_glusterd_running(timeout, logger)
        except Exception as e:
            msg = describe_subprocess_exception(e)
            logger.error(msg)
            exit_code = ExitCode.WARN
            sys.exit(exit_code.value)

        if not glusterd_running:
            exit_code = ExitCode.CRITICAL
            msg = "glusterd management daemon not running"
            logger.info(f"exit code {exit_code}: {msg}")
            sys.exit(exit_code.value)

        try:
            status_out = obj.get_volume_status(timeout, volume, logger)
            heal_out = obj.get_heal_info(timeout, volume, logger)
        except Exception as e:
            msg = describe_subprocess_exception(e)
            logger.error(msg)
            exit_code = ExitCode.WARN
            sys.exit(exit_code.value)

        try:
            result = process_volume(
                volume,
                status_out,
                heal_out,
                bricks,
                unit,
                warning_threshold,
                critical_threshold,
                logger,
            )
        except ThresholdError as e:
            exit_code = ExitCode.UNKNOWN
            msg = str(e)
            logger.error(f"configuration error: {msg}")
            sys.exit(exit_code.value)

        exit_code = result.exit_code
        msg = result.summary
        perfdata = result.perfdata
        details = result.faults
        for fault in result.faults:
            logger.info(f"fault: {fault}")
        logger.info(f"exit code {exit_code}: {msg} | {perfdata}")
        sys.exit(exit_code.value)
