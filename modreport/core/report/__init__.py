"""
Report engine — module reports and their aggregated views.

    from modreport.core.report import ModuleReport, ImportedModuleRef
"""

from modreport.core.report.errors import (
    CyclicImport,
    DescriptorError,
    InvalidArgument,
    ModuleNotFound,
    ReportError,
)
from modreport.core.report.module_report import (
    IMPORT_MATCHERS,
    ImportedModuleRef,
    ModuleReport,
    fill_missing_description,
)

__all__ = [
    # errors.py
    "CyclicImport",
    "DescriptorError",
    "InvalidArgument",
    "ModuleNotFound",
    "ReportError",
    # module_report.py
    "IMPORT_MATCHERS",
    "ImportedModuleRef",
    "ModuleReport",
    "fill_missing_description",
]
