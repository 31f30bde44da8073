"""License file discovery.

Looks for license files in a package directory, then in its parents,
until some are found or the root of the source tree is reached.
"""
from __future__ import annotations

import logging
import os
import posixpath
import re

from license_bom.exceptions import LocatorError
from license_bom.models.package import Package

logger = logging.getLogger(__name__)

LICENSE_NAME_PATTERN = re.compile(
    r"^(?:(?:un)?licen[sc]e(?:\.[^.]+)?|copy(?:ing|right)(?:\.[^.]+)?)$",
    re.IGNORECASE,
)

# Placeholder path for packages without a license file
NO_LICENSE_PATH = ""


def is_license_file_name(name: str) -> bool:
    """Check whether a file name looks like a license file.

    Matches LICENSE, LICENCE, UNLICENSE, UNLICENCE, COPYING and COPYRIGHT,
    case-insensitively, with an optional single extension.
    """
    return LICENSE_NAME_PATTERN.match(name) is not None


def _license_names(directory: str) -> list[str]:
    try:
        with os.scandir(directory) as entries:
            names = [
                entry.name
                for entry in entries
                if entry.is_file(follow_symlinks=False)
                and is_license_file_name(entry.name)
            ]
    except OSError as e:
        raise LocatorError(f"Cannot read directory '{directory}': {e}") from e
    return sorted(names)


def find_license_files(package: Package) -> list[str]:
    """Find the license files applying to a package.

    Every license file of the nearest directory holding any is returned,
    since a package may ship several (dual licensing).

    Args:
        package: Package whose license files to find.

    Returns:
        Root relative paths of the license files, or a single empty path
        when none exist up to the source tree root. The root itself is not
        searched.

    Raises:
        LocatorError: If a directory on the way cannot be read.
    """
    path = package.import_path.strip("/")
    while path not in ("", "."):
        names = _license_names(os.path.join(package.root_dir, path))
        if names:
            found = [posixpath.join(path, name) for name in names]
            logger.debug("License files for %s: %s", package.import_path, found)
            return found
        path = posixpath.dirname(path)

    logger.debug("No license file for %s", package.import_path)
    return [NO_LICENSE_PATH]
