# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
import sys

from glustermon.monitoring.sink.protocol import SinkImpl
from glustermon.monitoring.sink.utils import import_submodules, PluginRegistry

registry: PluginRegistry[SinkImpl] = PluginRegistry()
register = registry.register

# every exporter module registers itself on import
import_submodules(sys.modules[__name__])
