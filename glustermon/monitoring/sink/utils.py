# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
"""Registry of sink plugins and their `--help` documentation"""

import importlib
import inspect
import logging
import pkgutil
import textwrap
from types import ModuleType
from typing import Callable, Dict, List, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
Factory = Callable[..., T]


def import_submodules(package: ModuleType) -> List[str]:
    """Import every module of `package` so that their `register` decorators run.

    Returns the names of the imported modules.
    """
    if not hasattr(package, "__path__"):
        raise RuntimeError(f"{package.__name__} is not a package")
    names = [
        name
        for _, name, _ in pkgutil.iter_modules(package.__path__, package.__name__ + ".")
    ]
    for name in names:
        logger.debug(f"Importing plugin module {name}")
        importlib.import_module(name)
    return names


def signature_of(factory: Factory) -> inspect.Signature:
    # a class without its own __init__ takes no arguments
    if isinstance(factory, type) and "__init__" not in vars(factory):
        return inspect.Signature()
    return inspect.signature(factory)


class PluginRegistry(Dict[str, Factory[T]]):
    """Plugins by name.

    >>> sinks = PluginRegistry()
    >>> @sinks.register("null")
    ... class Null:
    ...     pass
    >>> sinks["null"] is Null
    True
    """

    def register(self, name: str) -> Callable[[Type[T]], Type[T]]:
        def decorator(cls: Type[T]) -> Type[T]:
            if name in self:
                raise RuntimeError(f"'{name}' is already registered to {self[name]}")
            self[name] = cls
            logger.debug(f"Registered '{name}' to {cls.__name__}")
            return cls

        return decorator

    def describe(self) -> str:
        """One paragraph per plugin, sorted by name."""
        paragraphs = []
        for name in sorted(self):
            factory = self[name]
            body = "\n".join(
                [
                    f"Signature: {signature_of(factory)}",
                    factory.__doc__ or "No documentation found.",
                ]
            )
            paragraphs.append(
                f"{name} - (from module: '{factory.__module__}')\n"
                + textwrap.indent(body, "  ")
            )
        return "\n\n".join(paragraphs) + "\n"
