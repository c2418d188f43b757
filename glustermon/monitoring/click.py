# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
import logging
from pathlib import Path
from typing import Any, Callable, Dict, TypeVar, Union

import click

import tomli
from typeguard import typechecked
from typing_extensions import ParamSpec

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "/etc/glustermon/config.toml"


class ConfigError(ValueError):
    pass


def _is_empty_config(path: Path) -> bool:
    return path == Path("/dev/null") or not path.exists()


@typechecked
def _as_table(x: Any) -> Dict[str, Any]:
    return x


def load_config_table(path: Path, name: str) -> Dict[str, Any]:
    """Return the top-level table `name` of the TOML file at `path`.

    A missing file and `/dev/null` give an empty table. Raises `ConfigError` if
    the file is not TOML or has no such table.
    """
    if _is_empty_config(path):
        return {}

    logger.info(f"Reading config from {path}...")
    with path.open("rb") as f:
        try:
            conf = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ConfigError(f"{path} does not contain valid TOML.") from e

    if name not in conf:
        raise ConfigError(
            f"'{name}' is not a top-level table name in {path}. Valid names: {list(conf.keys())}"
        )
    logger.info(f"Loaded table '{name}'.")
    return _as_table(conf[name])


_P = ParamSpec("_P")
_R = TypeVar("_R")


def toml_config_option(
    name: str,
    *,
    default_config_path: Union[str, Path] = DEFAULT_CONFIG_PATH,
) -> Callable[[Callable[_P, _R]], Callable[_P, _R]]:
    """Add a `--config PATH` option that fills the command's `default_map` from
    the TOML table `name`.

    Values given on the command line win over the config file, which wins over
    the `default` of each option. On a group, subtables configure the
    subcommands of the same name, e.g. `[health_checks.check-gluster.volume]`.
    """

    def load(ctx: click.Context, param: click.Parameter, path: Path) -> None:
        try:
            table = load_config_table(path, name)
        except ConfigError as e:
            raise click.BadParameter(str(e), ctx=ctx, param=param) from e
        if table:
            ctx.default_map = {**(ctx.default_map or {}), **table}

    def decorator(f: Callable[_P, _R]) -> Callable[_P, _R]:
        return click.option(
            "--config",
            type=click.Path(dir_okay=False, path_type=Path),
            callback=load,
            default=default_config_path,
            show_default=True,
            expose_value=False,
            is_eager=True,
            help=(
                f"TOML file whose '{name}' table holds default option values. "
                "A missing file or '/dev/null' is read as an empty table."
            ),
        )(f)

    return decorator
