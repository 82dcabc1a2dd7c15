"""Chimera: a registry of mergeable creature records.

Creatures carry four numeric traits and a rendered SVG portrait. Two
creatures can be merged into one whose traits are derived from both
parents; the parents are retired for good.
"""

__version__ = "0.1.0"
