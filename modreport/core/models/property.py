"""
Property model — metadata about a build property.
"""

from __future__ import annotations

from pydantic import BaseModel


class PropertyDescriptor(BaseModel):
    """Description, required flag and default of a property.

    Instances are mutable: the property merge fills description,
    ``required`` and ``default_value`` on its own copies.
    """

    name: str | None = None
    description: str | None = None
    required: bool = False
    default_value: str | None = None
