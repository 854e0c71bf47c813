"""
Report errors — everything the report engine and loader raise.

Lookups that find nothing return None; only misuse and broken graphs
raise.
"""

from __future__ import annotations


class ReportError(Exception):
    """Base class for module report errors."""


class InvalidArgument(ReportError, ValueError):
    """Raised when a required argument is missing or empty."""


class CyclicImport(ReportError):
    """Raised when a module (transitively) imports itself.

    ``chain`` lists the modules along the cycle, starting and ending
    with the module that was re-entered.
    """

    def __init__(self, chain: list[str]) -> None:
        self.chain = chain
        super().__init__("Cyclic module import: " + " -> ".join(chain))


class DescriptorError(ReportError):
    """Raised when a module descriptor is missing or invalid."""


class ModuleNotFound(DescriptorError):
    """Raised when an imported module cannot be located."""
