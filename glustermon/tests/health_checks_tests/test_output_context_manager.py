# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
import contextlib
from contextlib import ExitStack

import pytest
from glustermon.health_checks.check_utils.output_context_manager import OutputContext
from glustermon.health_checks.types import ExitCode

from glustermon.schemas.health_check.health_check_name import HealthCheckName
from pytest import CaptureFixture

exit_codes = [
    (ExitCode.OK, "OK"),
    (ExitCode.WARN, "WARNING"),
    (ExitCode.CRITICAL, "CRITICAL"),
    (ExitCode.UNKNOWN, "UNKNOWN"),
]


@pytest.mark.parametrize("exit_code, expected", exit_codes)
def test_output_context_manager(
    capsys: CaptureFixture, exit_code: ExitCode, expected: str
) -> None:
    with ExitStack() as s:
        s.enter_context(
            OutputContext(
                HealthCheckName.GLUSTER_VOLUME,
                lambda: (exit_code, "random msg"),
                False,
                get_perfdata=lambda: "bricks:1,freespace:1G;;;;",
            )
        )

    captured = capsys.readouterr()
    assert (
        captured.out
        == f"{expected} - gluster volume: random msg | bricks:1,freespace:1G;;;;\n"
    )


def test_output_without_perfdata(capsys: CaptureFixture) -> None:
    with OutputContext(
        HealthCheckName.GLUSTER_VOLUME,
        lambda: (ExitCode.OK, ""),
        False,
    ):
        pass

    captured = capsys.readouterr()
    assert captured.out == "OK - gluster volume\n"


@pytest.mark.parametrize("verbose_out", [True, False])
def test_details_only_when_verbose(capsys: CaptureFixture, verbose_out: bool) -> None:
    with OutputContext(
        HealthCheckName.GLUSTER_VOLUME,
        lambda: (ExitCode.WARN, "2 faults: s1 offline; s2 offline"),
        verbose_out,
        get_details=lambda: ["s1 offline", "s2 offline"],
    ):
        pass

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "WARNING - gluster volume: 2 faults: s1 offline; s2 offline"
    assert lines[1:] == (["s1 offline", "s2 offline"] if verbose_out else [])


def test_output_context_manager_exception(capsys: CaptureFixture) -> None:
    with (
        contextlib.suppress(RuntimeError),
        OutputContext(
            HealthCheckName.GLUSTER_VOLUME,
            lambda: (ExitCode.OK, "random msg"),
            True,
            get_details=lambda: ["never printed"],
        ),
    ):
        raise RuntimeError("boom")

    captured = capsys.readouterr()
    assert captured.out == "WARNING - check did not exit normally\n"


def test_output_context_manager_system_exit(capsys: CaptureFixture) -> None:
    with pytest.raises(SystemExit):
        with OutputContext(
            HealthCheckName.GLUSTER_VOLUME,
            lambda: (ExitCode.CRITICAL, "random msg"),
            False,
        ):
            raise SystemExit(ExitCode.CRITICAL.value)

    captured = capsys.readouterr()
    assert captured.out == "CRITICAL - gluster volume: random msg\n"
