# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
from enum import Enum


class HealthCheckName(Enum):
    GLUSTER_VOLUME = "gluster volume"
