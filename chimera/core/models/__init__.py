"""Data models for Chimera.

This package contains all Pydantic models used across the system:
- creature.py: Traits, attribute sets and records
- events.py: Notifications emitted by the registry
- snapshot.py: Persisted registry layout
"""

from .creature import (
    TRAIT_NAMES,
    TRAIT_MODULUS,
    AttributeSet,
    Record,
)
from .events import (
    RecordsMerged,
    MergeFeeUpdated,
    RegistryEvent,
)
from .snapshot import RegistrySnapshot

__all__ = [
    # Creatures
    "TRAIT_NAMES",
    "TRAIT_MODULUS",
    "AttributeSet",
    "Record",
    # Events
    "RecordsMerged",
    "MergeFeeUpdated",
    "RegistryEvent",
    # Persistence
    "RegistrySnapshot",
]
