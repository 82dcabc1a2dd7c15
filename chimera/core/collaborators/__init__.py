"""External collaborators the registry delegates to.

- base.py: Abstract interfaces (ownership, ledger, access control)
- memory.py: In-memory implementations for single-process hosts and tests
"""

from .base import AccessControl, Ledger, OwnershipRegistry
from .memory import InMemoryLedger, InMemoryOwnershipRegistry, SingleAdministrator

__all__ = [
    # Interfaces
    "OwnershipRegistry",
    "Ledger",
    "AccessControl",
    # In-memory implementations
    "InMemoryOwnershipRegistry",
    "InMemoryLedger",
    "SingleAdministrator",
]
