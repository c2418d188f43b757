# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
from enum import Enum
from functools import total_ordering
from typing import Iterable, Literal

CHECK_TYPE = Literal["nagios", "app"]
LOG_LEVEL = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@total_ordering
class ExitCode(Enum):
    """Plugin return codes as defined by Nagios:
    https://assets.nagios.com/downloads/nagioscore/docs/nagioscore/3/en/pluginapi.html

    Codes are ordered by severity. UNKNOWN sorts below OK, so it never masks a
    real verdict when results are combined.
    """

    OK = 0
    WARN = 1
    CRITICAL = 2
    UNKNOWN = 3

    @property
    def severity(self) -> int:
        return -1 if self is ExitCode.UNKNOWN else self.value

    @property
    def label(self) -> str:
        """Status word printed in front of the plugin output."""
        return "WARNING" if self is ExitCode.WARN else self.name

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ExitCode):
            return NotImplemented
        return self.severity < other.severity


def worst(exit_codes: Iterable[ExitCode], default: ExitCode = ExitCode.OK) -> ExitCode:
    """Return the most severe exit code, or `default` if there are none.

    >>> worst([ExitCode.WARN, ExitCode.CRITICAL, ExitCode.OK])
    <ExitCode.CRITICAL: 2>
    >>> worst([])
    <ExitCode.OK: 0>
    """
    return max([default, *exit_codes], key=lambda code: code.severity)
