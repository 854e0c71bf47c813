"""
Module repository — builds the report graph from descriptors on disk.

Modules live in one directory per module under a repository root::

    modules/
        build-std/
            module.yml
        build-java/
            module.yml          # imports build-std

An import is located through its ``location`` (relative to the importing
descriptor) when given, else as ``<root>/<module name>/module.yml``.

Reports are built leaves-first and cached by descriptor path, so a
module imported by several others is loaded once and shared.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable

from modreport.core.config.descriptor_loader import (
    MODULE_FILE,
    build_report,
    load_descriptor,
)
from modreport.core.models.descriptor import ImportDeclaration
from modreport.core.models.module_id import ModuleRevisionId
from modreport.core.report.errors import CyclicImport, DescriptorError, ModuleNotFound
from modreport.core.report.module_report import ImportedModuleRef, ModuleReport

logger = logging.getLogger(__name__)

# Environment override for the repository root
REPOSITORY_ENV = "MODREPORT_REPOSITORY"

Resolver = Callable[[ModuleRevisionId], Any]


def default_repository_root(module_file: Path) -> Path:
    """Repository root: MODREPORT_REPOSITORY, else the directory that
    holds the module's own directory (its sibling modules).
    """
    env_root = os.environ.get(REPOSITORY_ENV)
    if env_root:
        return Path(env_root).resolve()
    return module_file.resolve().parent.parent


class ModuleRepository:
    """Locates module descriptors and links them into a report graph.

    Args:
        root: Directory holding one sub-directory per module.
        strict: Raise ModuleNotFound for imports that cannot be located.
            When False they are linked with no report and a warning.
        resolver: Optional dependency resolver. Its result for each
            module id is attached as ``resolve_report`` and never
            interpreted.
    """

    def __init__(
        self,
        root: Path,
        strict: bool = True,
        resolver: Resolver | None = None,
    ) -> None:
        self.root = root
        self.strict = strict
        self.resolver = resolver
        self._reports: dict[Path, ModuleReport] = {}
        self._loading: list[tuple[Path, str]] = []

    @property
    def loaded(self) -> dict[Path, ModuleReport]:
        """Reports loaded so far, keyed by descriptor path."""
        return dict(self._reports)

    def load(self, path: Path) -> ModuleReport:
        """Load a module and, recursively, everything it imports.

        Raises:
            DescriptorError: A descriptor is missing or invalid.
            ModuleNotFound: An import cannot be located (strict mode).
            CyclicImport: The declared imports form a cycle.
        """
        if path.is_dir():
            path = path / MODULE_FILE
        path = path.resolve()

        cached = self._reports.get(path)
        if cached is not None:
            return cached

        for index, (loading_path, _) in enumerate(self._loading):
            if loading_path == path:
                chain = [label for _, label in self._loading[index:]]
                chain.append(self._loading[index][1])
                raise CyclicImport(chain)

        descriptor = load_descriptor(path)
        report = build_report(descriptor)
        if self.resolver is not None:
            report.resolve_report = self.resolver(descriptor.module_revision_id)

        self._loading.append((path, report.label))
        try:
            for declaration in descriptor.imports:
                report.add_imported_module(self._link(path, declaration))
        finally:
            self._loading.pop()

        self._reports[path] = report
        if not self._loading:
            logger.info(
                "Loaded module '%s' with %d modules in its graph",
                report.label,
                len(self._reports),
            )
        return report

    def _link(self, importer: Path, declaration: ImportDeclaration) -> ImportedModuleRef:
        """Build the reference for one import declaration."""
        try:
            module_id = declaration.module_revision_id
        except ValueError as e:
            raise DescriptorError(f"Invalid import in {importer}: {e}") from e
        ref = ImportedModuleRef(module_revision_id=module_id, alias=declaration.alias)

        located = self.locate(importer, declaration)
        if located is None:
            if self.strict:
                raise ModuleNotFound(
                    f"Cannot locate module '{declaration.module}' imported by {importer}"
                )
            logger.warning(
                "Module '%s' imported by %s not found, skipping",
                declaration.module,
                importer,
            )
            return ref

        ref.report = self.load(located)
        return ref

    def locate(self, importer: Path, declaration: ImportDeclaration) -> Path | None:
        """Find the descriptor for an import declaration, or None."""
        if declaration.location:
            candidate = importer.parent / declaration.location
        else:
            candidate = self.root / declaration.module_revision_id.name
        if candidate.is_dir():
            candidate = candidate / MODULE_FILE
        return candidate if candidate.is_file() else None
