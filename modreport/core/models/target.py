"""
Target model — named units of work and the extension points they bind to.

Targets and extension points are declared by a module descriptor. A
target may name one extension point in ``extension_point``; the
extension point collects every such target when the import graph is
aggregated (see ``ModuleReport.get_available_extension_points``).
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, BeforeValidator, Field


def _split_depends(value: object) -> object:
    """Accept ``"a, b"`` as well as ``["a", "b"]``."""
    if value is None:
        return []
    if isinstance(value, str):
        return [name.strip() for name in value.split(",") if name.strip()]
    return value


DependsList = Annotated[list[str], BeforeValidator(_split_depends)]


class Target(BaseModel):
    """A target declared by a module.

    ``if_condition`` and ``unless_condition`` name gating properties.
    They are carried along for consumers and never evaluated here.
    """

    name: str
    depends: DependsList = Field(default_factory=list)
    if_condition: str | None = None
    unless_condition: str | None = None
    extension_point: str | None = None  # None = unbound
    description: str | None = None

    @property
    def is_bound(self) -> bool:
        """Whether this target extends an extension point."""
        return self.extension_point is not None


class ExtensionPoint(BaseModel):
    """A named hook other modules' targets can bind to.

    ``targets`` is derived: it stays empty on the objects a module
    declares and is only filled on the copies returned by an
    aggregation query.
    """

    name: str
    depends: DependsList = Field(default_factory=list)
    description: str | None = None
    targets: list[Target] = Field(default_factory=list)

    def add_target(self, target: Target) -> None:
        """Attach a bound target."""
        self.targets.append(target)

    @property
    def target_names(self) -> list[str]:
        return [t.name for t in self.targets]


class Parameter(BaseModel):
    """A documented build parameter (flattened, never merged)."""

    name: str
    description: str | None = None
    required: bool = False
    default: str | None = None
    type: str | None = None
