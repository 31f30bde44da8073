"""Package graph collaborators and license file discovery."""

from license_bom.resolvers.base import BasePackageGraph
from license_bom.resolvers.locator import find_license_files, is_license_file_name
from license_bom.resolvers.source_tree import SourceTreeGraph

__all__ = [
    "BasePackageGraph",
    "SourceTreeGraph",
    "find_license_files",
    "is_license_file_name",
]
