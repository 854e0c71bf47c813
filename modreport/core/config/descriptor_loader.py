"""
Descriptor loader — reads module.yml files into reports.

A module.yml looks like::

    organisation: org.example
    name: build-java
    revision: "1.0"
    targets:
      - name: compile
        depends: [init]
        extension_point: build
    extension_points:
      - name: build
    properties:
      src.dir:
        description: Java sources
        default_value: src/main/java
    imports:
      - module: org.example#build-std;1.0
        as: std.

This module only parses and populates. Linking imports into a graph is
the repository's job.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from modreport.core.models.descriptor import ModuleDescriptor
from modreport.core.report.errors import DescriptorError
from modreport.core.report.module_report import ModuleReport

logger = logging.getLogger(__name__)

# Default descriptor filename
MODULE_FILE = "module.yml"


def find_module_file(start_dir: Path | None = None) -> Path | None:
    """Search for module.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to module.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / MODULE_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_descriptor(path: Path) -> ModuleDescriptor:
    """Load and validate a module descriptor.

    Args:
        path: Path to a module.yml file.

    Returns:
        Validated ModuleDescriptor.

    Raises:
        DescriptorError: If the file is missing, unreadable or invalid.
    """
    if not path.is_file():
        raise DescriptorError(f"Module descriptor not found: {path}")

    logger.debug("Loading module descriptor from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DescriptorError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise DescriptorError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise DescriptorError(
            f"Expected a YAML mapping in {path}, got {type(data).__name__}"
        )

    # The YAML may wrap everything under a "module" key or be flat
    module_data = data["module"] if isinstance(data.get("module"), dict) else data

    try:
        descriptor = ModuleDescriptor.model_validate(module_data)
    except ValidationError as e:
        raise DescriptorError(f"Invalid module descriptor {path}: {e}") from e

    logger.debug(
        "Loaded module '%s' (%d targets, %d imports)",
        descriptor.module_revision_id,
        len(descriptor.targets),
        len(descriptor.imports),
    )
    return descriptor


def build_report(descriptor: ModuleDescriptor) -> ModuleReport:
    """Create a report holding the descriptor's own declarations.

    Imports are not linked here.
    """
    report = ModuleReport(descriptor.module_revision_id)
    for target in descriptor.targets:
        report.add_target(target)
    for extension_point in descriptor.extension_points:
        # bound targets are derived by aggregation, never declared
        report.add_extension_point(extension_point.model_copy(update={"targets": []}))
    for parameter in descriptor.parameters:
        report.add_parameter(parameter)
    for name, prop in descriptor.properties.items():
        if prop.name is None:
            prop = prop.model_copy(update={"name": name})
        report.add_property_descriptor(name, prop)
    report.module_descriptor = descriptor
    return report
