"""Global fixtures for Chimera tests."""

import pytest

from chimera.core.collaborators import (
    InMemoryLedger,
    InMemoryOwnershipRegistry,
    SingleAdministrator,
)
from chimera.registry import Registry


ADMIN = "admin"
ALICE = "alice"
MERGE_FEE = 10


@pytest.fixture
def ownership():
    return InMemoryOwnershipRegistry()


@pytest.fixture
def ledger():
    return InMemoryLedger()


@pytest.fixture
def access():
    return SingleAdministrator(ADMIN)


@pytest.fixture
def seed_source():
    """Deterministic seed source so every run mints the same creatures."""
    return lambda: b"chimera-test-seed"


@pytest.fixture
def registry(ownership, ledger, access, seed_source):
    """Registry with in-memory collaborators and a non-zero merge fee."""
    return Registry(
        ownership=ownership,
        ledger=ledger,
        access=access,
        merge_fee=MERGE_FEE,
        seed_source=seed_source,
    )


@pytest.fixture
def alice_pair(registry):
    """Two creatures minted by alice, returned as (id_a, id_b)."""
    id_a = registry.mint(ALICE)
    id_b = registry.mint(ALICE)
    return id_a, id_b
