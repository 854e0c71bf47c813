"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from modreport.core.models import ModuleRevisionId, Target
from modreport.core.report import ImportedModuleRef, ModuleReport


@pytest.fixture
def make_report():
    """Build a report with the given local target names."""

    def make(name: str, *targets: str, organisation: str = "org") -> ModuleReport:
        report = ModuleReport(ModuleRevisionId(organisation=organisation, name=name, revision="1.0"))
        for target in targets:
            report.add_target(Target(name=target))
        return report

    return make


@pytest.fixture
def link():
    """Import ``child`` into ``parent``, optionally under an alias."""

    def do_link(parent: ModuleReport, child: ModuleReport, alias: str | None = None) -> ImportedModuleRef:
        ref = ImportedModuleRef(
            module_revision_id=child.module_revision_id,
            alias=alias,
            report=child,
        )
        parent.add_imported_module(ref)
        return ref

    return do_link


@pytest.fixture
def write_module(tmp_path: Path):
    """Write ``<tmp>/<name>/module.yml`` and return its path."""

    def write(name: str, content: str) -> Path:
        module_dir = tmp_path / name
        module_dir.mkdir(parents=True, exist_ok=True)
        path = module_dir / "module.yml"
        path.write_text(textwrap.dedent(content))
        return path

    return write
