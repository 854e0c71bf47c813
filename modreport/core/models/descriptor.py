"""
Descriptor model — the parsed content of a module.yml file.

A descriptor declares a module's identity, what it defines locally and
which other modules it imports. It says nothing about where imported
modules live on disk beyond an optional ``location`` hint; the
repository resolves that.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field

from modreport.core.models.module_id import ModuleRevisionId
from modreport.core.models.property import PropertyDescriptor
from modreport.core.models.target import ExtensionPoint, Parameter, Target


class ImportDeclaration(BaseModel):
    """One ``imports:`` entry.

    ``module`` is an Ivy-style id (``org#name;rev``) or a bare name.
    ``alias`` may be written as ``as`` in YAML.
    """

    module: str
    alias: str | None = Field(
        default=None, validation_alias=AliasChoices("alias", "as")
    )
    location: str | None = None  # relative to the importing descriptor

    @property
    def module_revision_id(self) -> ModuleRevisionId:
        return ModuleRevisionId.parse(self.module)


class ModuleDescriptor(BaseModel):
    """A module as declared in module.yml."""

    organisation: str = ""
    name: str
    revision: str | None = None
    description: str = ""

    targets: list[Target] = Field(default_factory=list)
    extension_points: list[ExtensionPoint] = Field(default_factory=list)
    parameters: list[Parameter] = Field(default_factory=list)
    properties: dict[str, PropertyDescriptor] = Field(default_factory=dict)
    imports: list[ImportDeclaration] = Field(default_factory=list)

    @property
    def module_revision_id(self) -> ModuleRevisionId:
        return ModuleRevisionId(
            organisation=self.organisation,
            name=self.name,
            revision=self.revision,
        )
