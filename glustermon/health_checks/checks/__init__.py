# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
from glustermon.health_checks.checks.check_gluster import check_gluster

__all__ = [
    "check_gluster",
]
