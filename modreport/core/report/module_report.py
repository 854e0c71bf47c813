"""
Module report — one module's targets, extension points and properties,
plus the flattened view across everything it imports.

A loader builds one ``ModuleReport`` per module and links imported
modules through ``ImportedModuleRef`` before any query runs. Two kinds
of accessors exist:

    local       get_target_reports(), get_property_descriptors(), ...
                this module only, exactly as declared.
    available   get_available_targets(), get_available_properties(), ...
                this module plus its transitive imports, alias-rewritten
                and merged. Recomputed on every call.

Available results are built from copies, so binding targets to extension
points or filling in property metadata never touches the declared
objects. A child report can be shared by several importers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping

from modreport.core.models.module_id import ModuleRevisionId
from modreport.core.models.property import PropertyDescriptor
from modreport.core.models.target import ExtensionPoint, Parameter, Target
from modreport.core.report.errors import CyclicImport, InvalidArgument

logger = logging.getLogger(__name__)


@dataclass
class ImportedModuleRef:
    """Link from an importing module to an imported module's report.

    The importer does not own ``report``; whoever loaded the graph does.
    ``report`` is None when the import could not be resolved.
    """

    module_revision_id: ModuleRevisionId | None = None
    alias: str | None = None
    report: ModuleReport | None = None

    @property
    def mrid(self) -> str | None:
        """Ivy string form of the imported module id."""
        if self.module_revision_id is None:
            return None
        return str(self.module_revision_id)


# ── Import lookup ───────────────────────────────────────────────

def matches_module_id(ref: ImportedModuleRef, identifier: str) -> bool:
    """The import's full id starts with ``identifier``."""
    return ref.mrid is not None and ref.mrid.startswith(identifier)


def matches_module_name(ref: ImportedModuleRef, identifier: str) -> bool:
    """``identifier`` is the imported module's bare name."""
    return (
        ref.module_revision_id is not None
        and ref.module_revision_id.name == identifier
    )


def matches_alias(ref: ImportedModuleRef, identifier: str) -> bool:
    """``identifier`` is the alias the import was declared with."""
    return ref.alias is not None and ref.alias == identifier


# Evaluated in order for each import; the first hit wins.
IMPORT_MATCHERS: tuple[Callable[[ImportedModuleRef, str], bool], ...] = (
    matches_module_id,
    matches_module_name,
    matches_alias,
)


# ── Property merge ──────────────────────────────────────────────

def fill_missing_description(
    existing: PropertyDescriptor, incoming: PropertyDescriptor
) -> bool:
    """Merge policy for a property seen in more than one module.

    The entry seen first is kept. Only when it has no description and
    the incoming one does are description, required and default value
    all taken from the incoming entry. The first non-empty description
    therefore wins across the whole import graph.

    Returns:
        True if ``existing`` was updated.
    """
    if existing.description or not incoming.description:
        return False
    existing.description = incoming.description
    existing.required = incoming.required
    existing.default_value = incoming.default_value
    return True


class ModuleReport:
    """Report of a single module and access to its import closure.

    Args:
        module_revision_id: Identity of the module, used for labels in
            logs and cycle errors.
    """

    def __init__(self, module_revision_id: ModuleRevisionId | None = None) -> None:
        self.module_revision_id = module_revision_id

        self._targets: list[Target] = []
        self._extension_points: list[ExtensionPoint] = []
        self._parameters: list[Parameter] = []
        self._imports: list[ImportedModuleRef] = []
        self._properties: dict[str, PropertyDescriptor] = {}

        # Opaque provenance handles attached by the loader
        self.resolve_report: Any = None
        self.module_descriptor: Any = None

    @property
    def label(self) -> str:
        if self.module_revision_id is not None:
            return str(self.module_revision_id)
        return f"<module {id(self):#x}>"

    def __repr__(self) -> str:
        return (
            f"ModuleReport({self.label}, targets={len(self._targets)}, "
            f"imports={len(self._imports)})"
        )

    # ── Population ───────────────────────────────────────────────

    def add_target(self, target: Target) -> None:
        if target is None:
            raise InvalidArgument("target cannot be None")
        self._targets.append(target)

    def add_extension_point(self, extension_point: ExtensionPoint) -> None:
        if extension_point is None:
            raise InvalidArgument("extension point cannot be None")
        self._extension_points.append(extension_point)

    def add_parameter(self, parameter: Parameter) -> None:
        if parameter is None:
            raise InvalidArgument("parameter cannot be None")
        self._parameters.append(parameter)

    def add_imported_module(self, imported: ImportedModuleRef) -> None:
        if imported is None:
            raise InvalidArgument("imported module cannot be None")
        self._imports.append(imported)

    def add_property_descriptor(
        self, name: str, descriptor: PropertyDescriptor
    ) -> None:
        """Register a property, replacing any entry with the same name."""
        if not name or descriptor is None:
            raise InvalidArgument("property name and descriptor cannot be empty")
        self._properties[name] = descriptor

    def add_all_property_descriptors(
        self, properties: Mapping[str, PropertyDescriptor]
    ) -> None:
        """Register several properties; later entries replace earlier ones."""
        if properties is None:
            raise InvalidArgument("properties cannot be None")
        self._properties.update(properties)

    # ── Local accessors ──────────────────────────────────────────

    def get_target_reports(self) -> tuple[Target, ...]:
        return tuple(self._targets)

    def get_extension_point_reports(self) -> tuple[ExtensionPoint, ...]:
        return tuple(self._extension_points)

    def get_parameter_reports(self) -> tuple[Parameter, ...]:
        return tuple(self._parameters)

    def get_imported_module_reports(self) -> tuple[ImportedModuleRef, ...]:
        return tuple(self._imports)

    def get_property_descriptors(self) -> Mapping[str, PropertyDescriptor]:
        return MappingProxyType(self._properties)

    # ── Lookups ──────────────────────────────────────────────────

    def get_target(self, name: str, include_imports: bool = False) -> Target | None:
        """Look up a target by name.

        Local targets are searched first. With ``include_imports`` the
        search falls back to the available targets, matching on the
        alias-rewritten name.
        """
        if not name:
            raise InvalidArgument("target name cannot be empty")
        for target in self._targets:
            if target.name == name:
                return target
        if include_imports:
            for target in self.get_available_targets():
                if target.name == name:
                    return target
        return None

    def get_extension_point(
        self, name: str, include_imports: bool = False
    ) -> ExtensionPoint | None:
        """Look up an extension point by name.

        The imported fallback returns the aggregated copy, with its bound
        targets filled in.
        """
        if not name:
            raise InvalidArgument("extension point name cannot be empty")
        for extension_point in self._extension_points:
            if extension_point.name == name:
                return extension_point
        if include_imports:
            for extension_point in self.get_available_extension_points():
                if extension_point.name == name:
                    return extension_point
        return None

    def get_imported_module_report(self, identifier: str) -> ImportedModuleRef | None:
        """Find an import anywhere in the import closure.

        ``identifier`` may be a module id (anything after ``;`` is
        ignored), a bare module name or an import alias. Imports are
        tried in declaration order against ``IMPORT_MATCHERS``; each
        import's own subtree is searched before its next sibling.

        Returns:
            The matching ``ImportedModuleRef``; the imported module's
            report is its ``.report`` (None if the import is unresolved).
        """
        if not identifier:
            raise InvalidArgument("module identifier cannot be empty")
        separator = identifier.find(";")
        if separator > 0:
            identifier = identifier[:separator]
        return self._find_import(identifier, [])

    def _find_import(
        self, identifier: str, path: list[ModuleReport]
    ) -> ImportedModuleRef | None:
        path = self._enter(path)
        for ref in self._imports:
            if any(matches(ref, identifier) for matches in IMPORT_MATCHERS):
                return ref
            if ref.report is not None:
                found = ref.report._find_import(identifier, path)
                if found is not None:
                    return found
        return None

    # ── Aggregation ──────────────────────────────────────────────

    def get_available_properties(self) -> dict[str, PropertyDescriptor]:
        """Properties of this module and all imports, merged.

        Property names are never alias-rewritten. Collisions are settled
        by ``fill_missing_description``.
        """
        properties = self._available_properties([])
        logger.debug("%s: %d available properties", self.label, len(properties))
        return properties

    def _available_properties(
        self, path: list[ModuleReport]
    ) -> dict[str, PropertyDescriptor]:
        path = self._enter(path)
        merged = {name: d.model_copy() for name, d in self._properties.items()}
        for ref in self._imports:
            if ref.report is None:
                continue
            for name, incoming in ref.report._available_properties(path).items():
                existing = merged.get(name)
                if existing is None:
                    merged[name] = incoming
                else:
                    fill_missing_description(existing, incoming)
        return merged

    def get_available_targets(self) -> list[Target]:
        """Targets of this module followed by those of each import.

        Order is depth-first, in declaration order. Targets reached
        through an aliased import are copies renamed ``alias + name``;
        chained aliases stack up, the outermost ending up first.
        """
        targets = self._available_targets([])
        logger.debug("%s: %d available targets", self.label, len(targets))
        return targets

    def _available_targets(self, path: list[ModuleReport]) -> list[Target]:
        path = self._enter(path)
        targets = list(self._targets)
        for ref in self._imports:
            if ref.report is None:
                continue
            for target in ref.report._available_targets(path):
                if ref.alias is None:
                    targets.append(target)
                else:
                    targets.append(
                        target.model_copy(
                            update={"name": ref.alias + target.name}, deep=True
                        )
                    )
        return targets

    def get_unbound_targets(self) -> list[Target]:
        """Available targets that extend no extension point."""
        return [t for t in self.get_available_targets() if t.extension_point is None]

    def get_available_extension_points(self) -> list[ExtensionPoint]:
        """Extension points of this module and all imports, with bound targets.

        Extension points are collected first (not deduplicated, never
        aliased), then every available target is attached to each
        extension point whose name equals the target's
        ``extension_point``.
        """
        extension_points = self._collect_extension_points([])
        targets = self.get_available_targets()
        for extension_point in extension_points:
            for target in targets:
                if target.extension_point == extension_point.name:
                    extension_point.add_target(target)
        logger.debug(
            "%s: %d available extension points", self.label, len(extension_points)
        )
        return extension_points

    def _collect_extension_points(
        self, path: list[ModuleReport]
    ) -> list[ExtensionPoint]:
        path = self._enter(path)
        collected = [
            ep.model_copy(update={"targets": []}, deep=True)
            for ep in self._extension_points
        ]
        for ref in self._imports:
            if ref.report is not None:
                collected.extend(ref.report._collect_extension_points(path))
        return collected

    # ── Cycle guard ──────────────────────────────────────────────

    def _enter(self, path: list[ModuleReport]) -> list[ModuleReport]:
        """Extend the traversal path with this report, rejecting cycles.

        Only the current path is checked, so a report shared by two
        importers is visited once per importer without error.
        """
        for index, visited in enumerate(path):
            if visited is self:
                chain = [r.label for r in path[index:]] + [self.label]
                logger.debug("Import cycle detected: %s", " -> ".join(chain))
                raise CyclicImport(chain)
        return path + [self]
