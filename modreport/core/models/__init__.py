"""
Domain models — Pydantic types for module reports.

All models are re-exported here for convenient access:

    from modreport.core.models import Target, ExtensionPoint, PropertyDescriptor
"""

from modreport.core.models.descriptor import ImportDeclaration, ModuleDescriptor
from modreport.core.models.module_id import ModuleRevisionId
from modreport.core.models.property import PropertyDescriptor
from modreport.core.models.target import ExtensionPoint, Parameter, Target

__all__ = [
    # descriptor.py
    "ImportDeclaration",
    "ModuleDescriptor",
    # module_id.py
    "ModuleRevisionId",
    # property.py
    "PropertyDescriptor",
    # target.py
    "ExtensionPoint",
    "Parameter",
    "Target",
]
