"""
modreport — module import graphs for build definitions.

Build modules import other modules, optionally under an alias, and
inherit their targets, extension points and properties. ``ModuleReport``
computes the flattened view a module sees across its whole import graph.
"""

__version__ = "0.1.0"
