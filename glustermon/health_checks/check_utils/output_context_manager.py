# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
import types
from dataclasses import dataclass
from typing import Callable, ContextManager, List, Literal, Optional, Tuple, Type

from glustermon.health_checks.types import ExitCode

from glustermon.schemas.health_check.health_check_name import HealthCheckName


def plugin_output(name: str, exit_code: ExitCode, msg: str, perfdata: str) -> str:
    """Format a Nagios plugin output line.

    >>> plugin_output("gluster volume", ExitCode.WARN, "1 fault: gv0 offline", "bricks:1")
    'WARNING - gluster volume: 1 fault: gv0 offline | bricks:1'
    >>> plugin_output("gluster volume", ExitCode.OK, "", "")
    'OK - gluster volume'
    """
    line = f"{exit_code.label} - {name}"
    if msg:
        line = f"{line}: {msg}"
    if perfdata:
        line = f"{line} | {perfdata}"
    return line


@dataclass
class OutputContext(ContextManager["OutputContext"]):
    """Print the plugin output of a check when it exits.

    The first line is the plugin status line. With `verbose_out`, each line of
    `get_details` follows as Nagios long output. A check that dies with
    anything but `SystemExit` gets a fixed WARNING line instead.
    """

    name: HealthCheckName
    get_exit_code_msg: Callable[[], Tuple[ExitCode, str]]
    verbose_out: bool
    get_perfdata: Callable[[], str] = lambda: ""
    get_details: Callable[[], List[str]] = lambda: []

    def __enter__(self) -> "OutputContext":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> Literal[False]:
        if exc_type is not None and not issubclass(exc_type, SystemExit):
            print("WARNING - check did not exit normally")
            return False

        exit_code, msg = self.get_exit_code_msg()
        print(plugin_output(self.name.value, exit_code, msg, self.get_perfdata()))
        if self.verbose_out:
            for detail in self.get_details():
                print(detail)
        return False
