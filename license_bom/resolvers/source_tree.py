"""Package graph over a Python source tree.

Import paths are ``/`` separated directories below the tree root, and a
package is a directory holding at least one ``.py`` file. Dependencies are
read from the import statements of each package's modules.
"""
from __future__ import annotations

import ast
import logging
import os
import sys
import sysconfig
from collections import deque
from pathlib import Path
from typing import Optional, Union

from license_bom.models.package import GraphResult, Package
from license_bom.resolvers.base import BasePackageGraph

logger = logging.getLogger(__name__)

# Pattern suffix selecting a package and everything below it
RECURSIVE_SUFFIX = "/..."

STDLIB_NAMES = frozenset(sys.stdlib_module_names) | frozenset(
    sys.builtin_module_names
)

SKIPPED_DIRS = frozenset({"__pycache__"})


def _to_import_path(pattern: str) -> str:
    """Normalize a requested package into a slash separated import path."""
    pattern = pattern.strip().strip("/")
    if "/" not in pattern:
        pattern = pattern.replace(".", "/")
    return pattern


class SourceTreeGraph(BasePackageGraph):
    """Resolves dependency closures of packages under a source tree root."""

    def __init__(self, root: Union[str, Path]) -> None:
        """Initialize with the source tree root.

        Args:
            root: Directory holding the packages.
        """
        self._root = Path(root).resolve()
        self._stdlib_dir = sysconfig.get_paths()["stdlib"]

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, patterns: list[str]) -> GraphResult:
        """Resolve the dependency closure of the requested packages.

        Args:
            patterns: Import paths (``a/b`` or ``a.b``) or recursive
                patterns (``a/...``).

        Returns:
            GraphResult with every package of the closure sorted by import
            path, tagged missing when a requested package is absent or has
            no Python sources.
        """
        requested: list[str] = []
        standard: set[str] = set()

        for pattern in patterns:
            if pattern.strip().endswith(RECURSIVE_SUFFIX):
                matched = self._expand_recursive(pattern)
                if not matched:
                    return GraphResult.missing(
                        f'pattern "{pattern}" matched no packages in {self._root}'
                    )
                requested.extend(matched)
                continue

            import_path = _to_import_path(pattern)
            if not import_path:
                return GraphResult.failed(f'invalid package pattern "{pattern}"')

            directory = self._root / import_path
            if not directory.is_dir():
                if import_path.split("/")[0] in STDLIB_NAMES:
                    standard.add(import_path)
                    continue
                return GraphResult.missing(
                    f'cannot find package "{import_path}" in {self._root}'
                )
            if not self._is_package_dir(import_path):
                return GraphResult.missing(
                    f"no buildable Python source files in {directory}"
                )
            requested.append(import_path)

        packages: dict[str, Package] = {}
        queue = deque(sorted(set(requested)))
        seen = set(queue)

        while queue:
            import_path = queue.popleft()
            package, deps, std = self._load_package(import_path)
            packages[import_path] = package
            standard.update(std)
            for dep in sorted(deps):
                if dep not in seen:
                    seen.add(dep)
                    queue.append(dep)

        for import_path in standard:
            packages.setdefault(
                import_path,
                Package(import_path=import_path, root_dir=self._stdlib_dir),
            )

        logger.debug(
            "Resolved %d packages (%d standard) from %d patterns",
            len(packages),
            len(standard),
            len(patterns),
        )
        return GraphResult(
            packages=[packages[name] for name in sorted(packages)],
            standard=sorted(standard),
        )

    def _is_package_dir(self, import_path: str) -> bool:
        directory = self._root / import_path
        if not directory.is_dir():
            return False
        return any(
            child.suffix == ".py" and child.is_file() for child in directory.iterdir()
        )

    def _expand_recursive(self, pattern: str) -> list[str]:
        """Expand ``prefix/...`` into every package at or below prefix."""
        prefix = _to_import_path(pattern.strip()[: -len(RECURSIVE_SUFFIX)])
        base = self._root / prefix if prefix else self._root
        if not base.is_dir():
            return []

        found: list[str] = []
        for dirpath, dirnames, filenames in os.walk(base):
            dirnames[:] = sorted(
                d for d in dirnames if d not in SKIPPED_DIRS and not d.startswith(".")
            )
            if any(name.endswith(".py") for name in filenames):
                relative = Path(dirpath).relative_to(self._root).as_posix()
                if relative != ".":
                    found.append(relative)
        return sorted(found)

    def _load_package(self, import_path: str) -> tuple[Package, set[str], set[str]]:
        """Read a package and the imports of its modules.

        Returns:
            Tuple of (package, dependency import paths, standard import paths).
        """
        directory = self._root / import_path
        if not directory.is_dir():
            return (
                self._package(
                    import_path, f'cannot find package "{import_path}" in {self._root}'
                ),
                set(),
                set(),
            )

        modules = sorted(
            child
            for child in directory.iterdir()
            if child.suffix == ".py" and child.is_file()
        )
        if not modules:
            return (
                self._package(
                    import_path, f"no buildable Python source files in {directory}"
                ),
                set(),
                set(),
            )

        deps: set[str] = set()
        std: set[str] = set()
        errors: list[str] = []

        for module in modules:
            try:
                tree = ast.parse(module.read_bytes(), filename=str(module))
            except SyntaxError as e:
                errors.append(f"{module}:{e.lineno}: {e.msg}")
                continue
            except (OSError, ValueError) as e:
                errors.append(f"{module}: {e}")
                continue

            for dotted in self._imported_modules(tree, import_path):
                resolved = self._resolve_module(dotted)
                if resolved is None:
                    continue
                target, is_standard = resolved
                if is_standard:
                    std.add(target)
                elif target != import_path:
                    deps.add(target)

        error = "\n".join(errors) if errors else None
        return self._package(import_path, error), deps, std

    def _package(self, import_path: str, error: Optional[str] = None) -> Package:
        return Package(import_path=import_path, root_dir=str(self._root), error=error)

    def _imported_modules(self, tree: ast.AST, import_path: str) -> list[str]:
        """List the dotted module names imported by a module.

        For ``from a import b`` the submodule ``a.b`` is used when it is a
        package of the tree, ``a`` otherwise.
        """
        modules: list[str] = []
        package_parts = import_path.split("/")

        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                modules.extend(alias.name for alias in node.names)
            elif isinstance(node, ast.ImportFrom):
                if node.level:
                    keep = len(package_parts) - (node.level - 1)
                    if keep <= 0:
                        continue
                    base = package_parts[:keep]
                    if node.module:
                        base = base + node.module.split(".")
                    module = ".".join(base)
                else:
                    module = node.module or ""
                if not module:
                    continue
                for alias in node.names:
                    submodule = f"{module}.{alias.name}"
                    if alias.name != "*" and self._is_package_dir(
                        submodule.replace(".", "/")
                    ):
                        modules.append(submodule)
                    else:
                        modules.append(module)
        return modules

    def _resolve_module(self, dotted: str) -> Optional[tuple[str, bool]]:
        """Map a dotted module name to the import path of its package.

        Returns:
            Tuple of (import path, is standard), or None for modules living
            directly in the tree root.
        """
        parts = dotted.split(".")
        for size in range(len(parts), 0, -1):
            candidate = "/".join(parts[:size])
            if self._is_package_dir(candidate):
                return candidate, False
            if (self._root / f"{candidate}.py").is_file():
                parent = "/".join(parts[: size - 1])
                if not parent:
                    return None
                return parent, False

        if parts[0] in STDLIB_NAMES:
            return parts[0], True
        return "/".join(parts), False
