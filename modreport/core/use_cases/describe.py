"""
Describe use case — load a module graph and summarise what it exposes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from modreport.core.config.descriptor_loader import find_module_file
from modreport.core.config.repository import ModuleRepository, default_repository_root
from modreport.core.report.errors import ReportError
from modreport.core.report.module_report import ModuleReport

logger = logging.getLogger(__name__)


@dataclass
class DescribeResult:
    """Flattened view of a module and its imports."""

    report: ModuleReport | None = None
    module_file: Path | None = None
    error: str | None = None

    targets: list[dict] = field(default_factory=list)
    unbound_targets: list[str] = field(default_factory=list)
    extension_points: list[dict] = field(default_factory=list)
    properties: dict[str, dict] = field(default_factory=dict)
    parameters: list[dict] = field(default_factory=list)
    imports: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        if self.error:
            return {"error": self.error}
        return {
            "module": self.report.label if self.report else None,
            "module_file": str(self.module_file) if self.module_file else None,
            "targets": self.targets,
            "unbound_targets": self.unbound_targets,
            "extension_points": self.extension_points,
            "properties": self.properties,
            "parameters": self.parameters,
            "imports": self.imports,
        }


def load_module(module_file: Path, repository: Path | None = None) -> ModuleReport:
    """Load a module graph rooted at ``module_file``.

    Raises:
        ReportError: If any descriptor in the graph cannot be loaded.
    """
    root = repository.resolve() if repository else default_repository_root(module_file)
    return ModuleRepository(root).load(module_file)


def describe_module(
    module_file: Path | None = None,
    repository: Path | None = None,
) -> DescribeResult:
    """Load a module and collect its available targets, extension points
    and properties.

    Args:
        module_file: Path to module.yml. If None, searches upward from cwd.
        repository: Repository root for imports.

    Returns:
        DescribeResult; ``error`` is set instead of raising.
    """
    result = DescribeResult()

    if module_file is None:
        module_file = find_module_file()
    if module_file is None:
        result.error = "No module.yml found."
        return result
    result.module_file = module_file

    try:
        report = load_module(module_file, repository)
        targets = report.get_available_targets()
        extension_points = report.get_available_extension_points()
        properties = report.get_available_properties()
    except ReportError as e:
        logger.debug("describe failed for %s", module_file, exc_info=True)
        result.error = str(e)
        return result

    result.report = report
    result.targets = [
        {
            "name": t.name,
            "depends": t.depends,
            "extension_point": t.extension_point,
            "description": t.description,
        }
        for t in targets
    ]
    result.unbound_targets = [t.name for t in targets if t.extension_point is None]
    result.extension_points = [
        {"name": ep.name, "description": ep.description, "targets": ep.target_names}
        for ep in extension_points
    ]
    result.properties = {
        name: prop.model_dump(exclude={"name"}) for name, prop in properties.items()
    }
    result.parameters = [p.model_dump() for p in report.get_parameter_reports()]
    result.imports = [
        {
            "module": ref.mrid,
            "alias": ref.alias,
            "resolved": ref.report is not None,
        }
        for ref in report.get_imported_module_reports()
    ]
    return result
