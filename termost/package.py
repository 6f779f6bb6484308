"""
Package metadata source: the program name and version when they are not configured.

Lookup order
1. The [project] table of pyproject.toml in the working directory.
2. The script name (basename of sys.argv[0], without extension) and the version of
   the installed distribution of that name (None when it is not installed).
"""
import logging
import os.path
import sys
import tomllib
from collections import namedtuple
from importlib import metadata

logger = logging.getLogger(__name__)

PackageMetadata = namedtuple("PackageMetadata", ("name", "version"))
PackageMetadata.__doc__ = "Program identity: name and version (version may be None)."


def _from_pyproject(directory):
    path = os.path.join(directory, "pyproject.toml")
    if not os.path.isfile(path):
        return None
    try:
        with open(path, "rb") as file:
            project = tomllib.load(file).get("project", {})
    except (OSError, tomllib.TOMLDecodeError) as error:
        logger.debug("ignored unreadable %s (%s)", path, error)
        return None
    if not isinstance(name := project.get("name"), str):
        return None
    version = project.get("version")
    return PackageMetadata(name, version if isinstance(version, str) else None)


def _from_script():
    script = sys.argv[0] if sys.argv and sys.argv[0] else "termost"
    name = os.path.splitext(os.path.basename(script))[0] or "termost"
    try:
        version = metadata.version(name)
    except metadata.PackageNotFoundError:
        version = None
    return PackageMetadata(name, version)


def get_package_metadata(directory=None, /):
    """Return the PackageMetadata of the running program (see module docstring)."""
    return _from_pyproject(directory or os.getcwd()) or _from_script()


__all__ = (
    "PackageMetadata",
    "get_package_metadata",
)
