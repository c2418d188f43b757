# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Options shared by every health check command"""

import textwrap
from typing import Callable, get_args, TypeVar

import click
from glustermon.exporters import registry
from glustermon.health_checks.types import CHECK_TYPE, LOG_LEVEL
from typing_extensions import ParamSpec

P = ParamSpec("P")
R = TypeVar("R")

OMEGACONF_DOTLIST_DOCS = (
    "https://omegaconf.readthedocs.io/en/2.3_branch/usage.html#from-a-dot-list"
)


def _stack(*decorators: Callable) -> Callable:
    """Apply `decorators` in the order they would be written above a function."""

    def apply(f: Callable[P, R]) -> Callable[P, R]:
        for decorator in reversed(decorators):
            f = decorator(f)
        return f

    return apply


def _sink_help() -> str:
    sinks = textwrap.indent(registry.describe(), prefix="  ")
    return (
        "Where the check result is published.\n\n"
        f"Sinks:\n\n\n\b\n{sinks}\n"
        f"\b\nSink options use the OmegaConf dot-list syntax: {OMEGACONF_DOTLIST_DOCS}"
    )


common_arguments = _stack(
    click.argument("cluster", type=click.STRING),
    click.argument("type", type=click.Choice(get_args(CHECK_TYPE))),
    click.option(
        "--log-level",
        type=click.Choice(get_args(LOG_LEVEL)),
        default="INFO",
        show_default=True,
        help="Logging verbosity level.",
    ),
    click.option(
        "--log-folder",
        type=click.Path(file_okay=False),
        default="healthchecks",
        help="Directory the check logs are written to.",
    ),
)

timeout_argument = click.option(
    "--timeout",
    type=click.INT,
    default=300,
    show_default=True,
    help="Seconds before a gluster command is abandoned",
)

telemetry_argument = _stack(
    click.option(
        "--sink",
        type=click.Choice(list(registry)),
        default="do_nothing",
        show_default=True,
        help=_sink_help(),
    ),
    click.option(
        "--sink-opt",
        "-o",
        "sink_opts",
        multiple=True,
        help="Sink option as key=value, may be repeated.",
    ),
    click.option(
        "--verbose-out",
        is_flag=True,
        help="Print every fault on its own line after the status line",
    ),
)
