"""Abstract interfaces for the registry's external collaborators.

The registry only tracks traits and merge counts. Who holds a creature,
where payments go and who may administer the registry are answered by
these injected collaborators, so any holder-tracking or payment scheme can
be plugged in without touching merge logic.
"""

from abc import ABC, abstractmethod

from ..errors import RecordNotFoundError


class OwnershipRegistry(ABC):
    """Tracks the current holder of every live record.

    Implementations must raise RecordNotFoundError from owner_of for ids
    that were never created or have been burned.
    """

    @abstractmethod
    def owner_of(self, record_id: int) -> str:
        """Return the current holder of a record."""
        ...

    @abstractmethod
    def create(self, to: str, record_id: int) -> None:
        """Assign a newly created record to its first holder."""
        ...

    @abstractmethod
    def burn(self, record_id: int) -> None:
        """Permanently remove a record from circulation."""
        ...

    @abstractmethod
    def transfer(self, sender: str, recipient: str, record_id: int) -> None:
        """Move a record from its current holder to someone else."""
        ...

    @abstractmethod
    def balance_of(self, owner: str) -> int:
        """Number of live records held by an address."""
        ...

    @abstractmethod
    def restore(self, owner: str, record_id: int) -> None:
        """Compensate a burn while rolling back a failed operation."""
        ...

    @abstractmethod
    def discard(self, record_id: int) -> None:
        """Compensate a create while rolling back a failed operation."""
        ...

    def exists(self, record_id: int) -> bool:
        """Whether the record currently has a holder."""
        try:
            self.owner_of(record_id)
        except RecordNotFoundError:
            return False
        return True


class Ledger(ABC):
    """Collects payments and pays out the accumulated balance."""

    @property
    @abstractmethod
    def balance(self) -> int:
        """Amount currently held."""
        ...

    @abstractmethod
    def deposit(self, payer: str, amount: int) -> None:
        """Record an incoming payment."""
        ...

    @abstractmethod
    def refund(self, payer: str, amount: int) -> None:
        """Reverse a deposit made during an operation that was rolled back."""
        ...

    @abstractmethod
    def withdraw(self, recipient: str) -> int:
        """Pay the whole balance to recipient and return the amount paid."""
        ...


class AccessControl(ABC):
    """Answers whether an address may run administrator-only operations."""

    @abstractmethod
    def is_administrator(self, address: str) -> bool:
        ...
