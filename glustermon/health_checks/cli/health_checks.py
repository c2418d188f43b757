# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""A single entrypoint into the gluster health check scripts.

This file is intentionally lightweight and should not include any complex logic.
"""

from typing import List

import click
from glustermon._version import __version__
from glustermon.health_checks import checks

from glustermon.monitoring.click import DEFAULT_CONFIG_PATH, toml_config_option


@click.group(epilog=f"health_checks version: {__version__}")
@toml_config_option("health_checks", default_config_path=DEFAULT_CONFIG_PATH)
@click.version_option(__version__)
def health_checks() -> None:
    """glustermon: GlusterFS volume health checks for Nagios style supervisors."""


list_of_checks: List[click.core.Command] = [
    checks.check_gluster,
]

for check in list_of_checks:
    health_checks.add_command(check)

if __name__ == "__main__":
    health_checks()
