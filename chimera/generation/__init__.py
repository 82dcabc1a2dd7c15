"""Trait generation and combination.

- attributes.py: Seeded traits for newly minted creatures
- merge.py: Per-trait combination of two parents
"""

from .attributes import generate_attributes, derive_trait
from .merge import combine, combine_attributes

__all__ = [
    "generate_attributes",
    "derive_trait",
    "combine",
    "combine_attributes",
]
