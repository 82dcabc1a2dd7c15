"""The creature registry.

Owns the record table, the identifier counter and the merge fee. Holder
tracking, payments and administrator checks are delegated to injected
collaborators (see chimera.core.collaborators).

Every mutating operation runs under one exclusive lock. Preconditions are
all checked before anything changes; commit steps are logged in a
_Transaction and undone in reverse order if a collaborator fails halfway,
so callers never observe a partial merge.
"""

import logging
import threading
import time
from typing import Callable

from ..config import ChimeraConfig
from ..core.collaborators import (
    AccessControl,
    InMemoryLedger,
    InMemoryOwnershipRegistry,
    Ledger,
    OwnershipRegistry,
    SingleAdministrator,
)
from ..core.errors import (
    InsufficientFeeError,
    NotOwnerError,
    RecordNotFoundError,
    RegistryError,
    SameRecordError,
    UnauthorizedError,
)
from ..core.models import (
    MergeFeeUpdated,
    Record,
    RecordsMerged,
    RegistryEvent,
    RegistrySnapshot,
)
from ..generation import combine_attributes, generate_attributes
from ..rendering.metadata import DEFAULT_DESCRIPTION, DEFAULT_NAME_PREFIX, render_metadata


logger = logging.getLogger(__name__)

# Receives every event after the operation that produced it has committed.
EventCallback = Callable[[RegistryEvent], None]

# Produces the seed for a mint when the caller does not supply one.
SeedSource = Callable[[], bytes]


def clock_seed() -> bytes:
    """Default seed source: the wall clock in nanoseconds.

    This is predictable to anyone who can guess when a mint happens. It is
    fine for demos and tests; inject a stronger source where that matters.
    """
    return time.time_ns().to_bytes(16, "big")


class _Transaction:
    """Undo log for one registry operation."""

    def __init__(self) -> None:
        self._undo: list[Callable[[], None]] = []

    def on_rollback(self, action: Callable[[], None]) -> None:
        self._undo.append(action)

    def rollback(self) -> None:
        while self._undo:
            self._undo.pop()()


class Registry:
    """Single authority over creature records.

    Args:
        ownership: Holder tracking collaborator
        ledger: Payment collaborator
        access: Administrator check collaborator
        merge_fee: Minimum payment for a merge
        seed_source: Seed used by mint when none is passed
        name_prefix: Name prefix for metadata documents
        description: Description for metadata documents
    """

    def __init__(
        self,
        ownership: OwnershipRegistry,
        ledger: Ledger,
        access: AccessControl,
        merge_fee: int = 0,
        seed_source: SeedSource = clock_seed,
        name_prefix: str = DEFAULT_NAME_PREFIX,
        description: str = DEFAULT_DESCRIPTION,
    ) -> None:
        if merge_fee < 0:
            raise ValueError(f"merge_fee must be non-negative, got {merge_fee}")

        self._ownership = ownership
        self._ledger = ledger
        self._access = access
        self._seed_source = seed_source
        self._name_prefix = name_prefix
        self._description = description

        self._records: dict[int, Record] = {}
        self._next_id = 0
        self._merge_fee = merge_fee

        self._lock = threading.RLock()
        self._subscribers: list[EventCallback] = []
        self._events: list[RegistryEvent] = []

    @classmethod
    def from_config(
        cls,
        config: ChimeraConfig,
        ownership: OwnershipRegistry | None = None,
        ledger: Ledger | None = None,
        access: AccessControl | None = None,
        seed_source: SeedSource = clock_seed,
    ) -> "Registry":
        """Build a registry from config, defaulting to in-memory collaborators."""
        return cls(
            ownership=ownership or InMemoryOwnershipRegistry(),
            ledger=ledger or InMemoryLedger(),
            access=access or SingleAdministrator(config.registry.administrator),
            merge_fee=config.registry.merge_fee,
            seed_source=seed_source,
            name_prefix=config.rendering.name_prefix,
            description=config.rendering.description,
        )

    @classmethod
    def from_snapshot(
        cls,
        snapshot: RegistrySnapshot,
        ownership: OwnershipRegistry,
        ledger: Ledger,
        access: AccessControl,
        **kwargs,
    ) -> "Registry":
        """Rebuild a registry from persisted state.

        The ownership collaborator is expected to already know the holders
        of the snapshot's records.
        """
        registry = cls(
            ownership=ownership,
            ledger=ledger,
            access=access,
            merge_fee=snapshot.merge_fee,
            **kwargs,
        )
        registry._records = {record.id: record for record in snapshot.records}
        registry._next_id = snapshot.next_id
        logger.info(
            f"[Registry] Restored {len(snapshot.records)} creatures, next id {snapshot.next_id}"
        )
        return registry

    # =========================================================================
    # Read operations
    # =========================================================================

    @property
    def merge_fee(self) -> int:
        with self._lock:
            return self._merge_fee

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id

    @property
    def events(self) -> list[RegistryEvent]:
        """Events emitted so far, oldest first."""
        with self._lock:
            return list(self._events)

    def __len__(self) -> int:
        with self._lock:
            return sum(1 for rid in self._records if self._ownership.exists(rid))

    def exists(self, record_id: int) -> bool:
        """A record is live when both the store and the ownership collaborator hold it."""
        with self._lock:
            return record_id in self._records and self._ownership.exists(record_id)

    def get_record(self, record_id: int) -> Record:
        """Return a live record.

        Raises:
            RecordNotFoundError: Never created, or retired by a merge
        """
        with self._lock:
            if not self.exists(record_id):
                raise RecordNotFoundError(record_id)
            return self._records[record_id]

    def live_ids(self) -> list[int]:
        """Ids of all live records, ascending."""
        with self._lock:
            return sorted(rid for rid in self._records if self._ownership.exists(rid))

    def records_of(self, owner: str) -> list[Record]:
        """Live records currently held by owner, ascending by id."""
        with self._lock:
            return [
                self._records[rid]
                for rid in self.live_ids()
                if self._ownership.owner_of(rid) == owner
            ]

    def token_metadata(self, record_id: int) -> str:
        """Metadata document for a live record, as a JSON data URI."""
        record = self.get_record(record_id)
        return render_metadata(
            record, name_prefix=self._name_prefix, description=self._description
        )

    def snapshot(self) -> RegistrySnapshot:
        """Capture the persisted layout: records, next id and merge fee."""
        with self._lock:
            return RegistrySnapshot(
                records=[self._records[rid] for rid in sorted(self._records)],
                next_id=self._next_id,
                merge_fee=self._merge_fee,
            )

    # =========================================================================
    # Notifications
    # =========================================================================

    def subscribe(self, callback: EventCallback) -> None:
        """Register a callback for every future event."""
        with self._lock:
            self._subscribers.append(callback)

    def _emit(self, event: RegistryEvent) -> None:
        # Runs after commit; subscriber failures are logged, never raised.
        self._events.append(event)
        for callback in self._subscribers:
            try:
                callback(event)
            except Exception:
                logger.exception(f"[Registry] Subscriber failed on {event.type} event")

    # =========================================================================
    # Mutating operations
    # =========================================================================

    def _allocate_id(self, txn: _Transaction) -> int:
        record_id = self._next_id
        self._next_id += 1

        def undo() -> None:
            self._next_id = record_id

        txn.on_rollback(undo)
        return record_id

    def _store(self, record: Record, txn: _Transaction) -> None:
        self._records[record.id] = record
        txn.on_rollback(lambda: self._records.pop(record.id, None))

    def _retire(self, record_id: int, owner: str, txn: _Transaction) -> None:
        record = self._records[record_id]
        self._ownership.burn(record_id)
        txn.on_rollback(lambda: self._ownership.restore(owner, record_id))
        del self._records[record_id]
        txn.on_rollback(lambda: self._records.__setitem__(record_id, record))

    def _assign(self, to: str, record_id: int, txn: _Transaction) -> None:
        self._ownership.create(to, record_id)
        txn.on_rollback(lambda: self._ownership.discard(record_id))

    def _collect(self, payer: str, amount: int, txn: _Transaction) -> None:
        self._ledger.deposit(payer, amount)
        txn.on_rollback(lambda: self._ledger.refund(payer, amount))

    def _run(self, operation: str, commit: Callable[[_Transaction], int]) -> int:
        txn = _Transaction()
        try:
            return commit(txn)
        except Exception:
            logger.warning(f"[Registry] {operation} failed during commit, rolling back")
            txn.rollback()
            raise

    def mint(self, to: str, payment: int = 0, seed: bytes | None = None) -> int:
        """Create a creature with freshly generated traits.

        The payment is collected as-is; there is no minimum mint price.

        Args:
            to: Address that will hold the new creature
            payment: Amount paid with the mint
            seed: Entropy for trait generation (defaults to the seed source)

        Returns:
            Id of the new creature
        """
        if payment < 0:
            raise ValueError(f"payment must be non-negative, got {payment}")

        with self._lock:

            def commit(txn: _Transaction) -> int:
                record_id = self._allocate_id(txn)
                attributes = generate_attributes(
                    seed if seed is not None else self._seed_source(), record_id
                )
                self._store(Record(id=record_id, attributes=attributes, merge_count=0), txn)
                self._assign(to, record_id, txn)
                self._collect(to, payment, txn)
                return record_id

            record_id = self._run("mint", commit)
            logger.info(f"[Registry] Minted creature #{record_id} for {to}")
            return record_id

    def merge(self, id1: int, id2: int, caller: str, payment: int) -> int:
        """Retire two creatures and create their child.

        Args:
            id1: First parent
            id2: Second parent
            caller: Address requesting the merge; must hold both parents
            payment: Amount paid; must cover the merge fee

        Returns:
            Id of the child, now held by caller

        Raises:
            SameRecordError: id1 == id2
            InsufficientFeeError: payment below the merge fee
            NotOwnerError: caller does not hold both parents
            RecordNotFoundError: a parent does not exist
        """
        with self._lock:
            try:
                self._check_merge(id1, id2, caller, payment)
            except RegistryError as e:
                logger.warning(f"[Registry] Merge of #{id1} and #{id2} rejected: {e}")
                raise

            parent1 = self._records[id1]
            parent2 = self._records[id2]

            def commit(txn: _Transaction) -> int:
                self._retire(id1, caller, txn)
                self._retire(id2, caller, txn)
                new_id = self._allocate_id(txn)
                merge_count = parent1.merge_count + parent2.merge_count + 1
                attributes = combine_attributes(
                    parent1.attributes, parent2.attributes, merge_count
                )
                self._store(
                    Record(id=new_id, attributes=attributes, merge_count=merge_count), txn
                )
                self._assign(caller, new_id, txn)
                self._collect(caller, payment, txn)
                return new_id

            new_id = self._run("merge", commit)
            child = self._records[new_id]
            logger.info(
                f"[Registry] Merged #{id1} + #{id2} -> #{new_id} "
                f"(merge_count={child.merge_count})"
            )
            self._emit(RecordsMerged(new_id=new_id, id1=id1, id2=id2, attributes=child.attributes))
            return new_id

    def _check_merge(self, id1: int, id2: int, caller: str, payment: int) -> None:
        if id1 == id2:
            raise SameRecordError(id1)
        if payment < self._merge_fee:
            raise InsufficientFeeError(self._merge_fee, payment)
        for record_id in (id1, id2):
            if self._ownership.owner_of(record_id) != caller:
                raise NotOwnerError(caller, record_id)
        for record_id in (id1, id2):
            if record_id not in self._records:
                raise RecordNotFoundError(record_id)

    # =========================================================================
    # Administration
    # =========================================================================

    def _require_administrator(self, caller: str, action: str) -> None:
        if not self._access.is_administrator(caller):
            logger.warning(f"[Registry] {caller} denied: {action}")
            raise UnauthorizedError(caller, action)

    def set_merge_fee(self, new_fee: int, caller: str) -> None:
        """Change the merge fee. Administrator only."""
        with self._lock:
            self._require_administrator(caller, "set the merge fee")
            if new_fee < 0:
                raise ValueError(f"Merge fee must be non-negative, got {new_fee}")
            self._merge_fee = new_fee
            logger.info(f"[Registry] Merge fee set to {new_fee}")
            self._emit(MergeFeeUpdated(new_fee=new_fee))

    def withdraw(self, caller: str) -> int:
        """Pay the collected balance to the administrator. Returns the amount."""
        with self._lock:
            self._require_administrator(caller, "withdraw")
            return self._ledger.withdraw(caller)
