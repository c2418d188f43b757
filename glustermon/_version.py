import os
from importlib import metadata
from pathlib import Path


def get_version() -> str:
    """`version.txt` next to this file, else the installed distribution, else
    `$GLUSTERMON_VERSION`.
    """
    version_file = Path(__file__).with_name("version.txt")
    if version_file.is_file():
        return version_file.read_text().strip()
    try:
        return metadata.version("glustermon")
    except metadata.PackageNotFoundError:
        # do not fail the checks over a missing version
        return os.environ.get("GLUSTERMON_VERSION", "unknown")


__version__ = get_version()
