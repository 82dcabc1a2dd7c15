"""In-memory collaborator implementations.

Good enough for a single-process host and for tests. They hold no locks of
their own; the Registry serializes every call it makes into them.
"""

import logging

from ..errors import NotOwnerError, RecordNotFoundError
from .base import AccessControl, Ledger, OwnershipRegistry


logger = logging.getLogger(__name__)


class InMemoryOwnershipRegistry(OwnershipRegistry):
    """Holder table kept in a dict."""

    def __init__(self) -> None:
        self._owners: dict[int, str] = {}
        self._burned: set[int] = set()

    def owner_of(self, record_id: int) -> str:
        try:
            return self._owners[record_id]
        except KeyError:
            raise RecordNotFoundError(record_id) from None

    def create(self, to: str, record_id: int) -> None:
        if not to:
            raise ValueError("Cannot assign a creature to an empty address")
        if record_id in self._owners or record_id in self._burned:
            raise ValueError(f"Creature #{record_id} has already been created")
        self._owners[record_id] = to

    def burn(self, record_id: int) -> None:
        if record_id not in self._owners:
            raise RecordNotFoundError(record_id)
        del self._owners[record_id]
        self._burned.add(record_id)

    def restore(self, owner: str, record_id: int) -> None:
        """Undo a burn. Only used when rolling back a failed merge."""
        self._burned.discard(record_id)
        self._owners[record_id] = owner

    def discard(self, record_id: int) -> None:
        """Undo a create. Only used when rolling back a failed operation."""
        self._owners.pop(record_id, None)

    def transfer(self, sender: str, recipient: str, record_id: int) -> None:
        if not recipient:
            raise ValueError("Cannot transfer a creature to an empty address")
        if self.owner_of(record_id) != sender:
            raise NotOwnerError(sender, record_id)
        self._owners[record_id] = recipient
        logger.info(f"[Ownership] Creature #{record_id} transferred {sender} -> {recipient}")

    def balance_of(self, owner: str) -> int:
        return sum(1 for holder in self._owners.values() if holder == owner)

    def holdings(self, owner: str) -> list[int]:
        """Ids held by owner, ascending."""
        return sorted(rid for rid, holder in self._owners.items() if holder == owner)


class InMemoryLedger(Ledger):
    """Running balance with a history of payouts."""

    def __init__(self) -> None:
        self._balance = 0
        self.payouts: list[tuple[str, int]] = []

    @property
    def balance(self) -> int:
        return self._balance

    def deposit(self, payer: str, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Payment amount must be non-negative, got {amount}")
        self._balance += amount

    def refund(self, payer: str, amount: int) -> None:
        if amount < 0 or amount > self._balance:
            raise ValueError(f"Cannot refund {amount} from balance {self._balance}")
        self._balance -= amount

    def withdraw(self, recipient: str) -> int:
        amount = self._balance
        self._balance = 0
        self.payouts.append((recipient, amount))
        logger.info(f"[Ledger] Paid out {amount} to {recipient}")
        return amount


class SingleAdministrator(AccessControl):
    """Exactly one address may administer the registry."""

    def __init__(self, administrator: str) -> None:
        if not administrator:
            raise ValueError("Administrator address must not be empty")
        self.administrator = administrator

    def is_administrator(self, address: str) -> bool:
        return address == self.administrator
