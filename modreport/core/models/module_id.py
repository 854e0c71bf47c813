"""
Module identity — organisation, name and revision of a module.

The string form follows the Ivy convention ``organisation#name;revision``
so identifiers written in descriptors can be compared by prefix.
"""

from __future__ import annotations

from pydantic import BaseModel


class ModuleRevisionId(BaseModel):
    """Structured module identity."""

    organisation: str = ""
    name: str
    revision: str | None = None

    @classmethod
    def parse(cls, text: str) -> ModuleRevisionId:
        """Parse ``org#name;rev``, ``org#name`` or a bare ``name``."""
        text = text.strip()
        revision: str | None = None
        if ";" in text:
            text, revision = text.split(";", 1)
            revision = revision or None
        if "#" in text:
            organisation, name = text.split("#", 1)
        else:
            organisation, name = "", text
        if not name:
            raise ValueError(f"Module identifier has no name: {text!r}")
        return cls(organisation=organisation, name=name, revision=revision)

    @property
    def module_id(self) -> str:
        """Identity without revision (``org#name``)."""
        return f"{self.organisation}#{self.name}"

    def __str__(self) -> str:
        if self.revision:
            return f"{self.module_id};{self.revision}"
        return self.module_id
