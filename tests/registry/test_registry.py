"""Tests for minting, merging and metadata."""

import json

import pytest

from chimera.core.errors import (
    InsufficientFeeError,
    NotOwnerError,
    RecordNotFoundError,
    SameRecordError,
)
from chimera.core.models import RecordsMerged
from chimera.generation import combine, generate_attributes
from chimera.rendering import decode_data_uri

ALICE = "alice"
BOB = "bob"
MERGE_FEE = 10


def _state(registry, ownership, ledger):
    """Everything a failed operation must leave untouched."""
    return (
        registry.snapshot(),
        dict(ownership._owners),
        ledger.balance,
        list(registry.events),
    )


class TestMint:
    """Tests for Registry.mint."""

    def test_ids_are_sequential(self, registry):
        assert registry.mint(ALICE) == 0
        assert registry.mint(BOB) == 1
        assert registry.next_id == 2

    def test_fresh_record(self, registry, ownership):
        record_id = registry.mint(ALICE, seed=b"fixed")
        record = registry.get_record(record_id)

        assert record.merge_count == 0
        assert record.attributes == generate_attributes(b"fixed", record_id)
        assert ownership.owner_of(record_id) == ALICE

    def test_uses_seed_source_by_default(self, registry, seed_source):
        record_id = registry.mint(ALICE)

        expected = generate_attributes(seed_source(), record_id)
        assert registry.get_record(record_id).attributes == expected

    def test_payment_collected_without_minimum(self, registry, ledger):
        registry.mint(ALICE, payment=0)
        registry.mint(ALICE, payment=3)

        assert ledger.balance == 3

    def test_negative_payment_rejected(self, registry):
        with pytest.raises(ValueError):
            registry.mint(ALICE, payment=-1)
        assert registry.next_id == 0


class TestMerge:
    """Tests for Registry.merge."""

    def test_successful_merge(self, registry, alice_pair, ownership):
        id_a, id_b = alice_pair
        parent_a = registry.get_record(id_a)
        parent_b = registry.get_record(id_b)

        new_id = registry.merge(id_a, id_b, ALICE, MERGE_FEE)

        assert new_id == 2
        child = registry.get_record(new_id)
        assert child.merge_count == 1
        for name in ("strength", "speed", "intelligence", "rarity"):
            expected = combine(getattr(parent_a.attributes, name), getattr(parent_b.attributes, name))
            assert getattr(child.attributes, name) == expected
        assert ownership.owner_of(new_id) == ALICE

    def test_parents_are_retired(self, registry, alice_pair):
        id_a, id_b = alice_pair
        registry.merge(id_a, id_b, ALICE, MERGE_FEE)

        assert not registry.exists(id_a)
        assert not registry.exists(id_b)
        with pytest.raises(RecordNotFoundError):
            registry.get_record(id_a)
        with pytest.raises(RecordNotFoundError):
            registry.token_metadata(id_b)
        with pytest.raises(RecordNotFoundError):
            registry.merge(id_a, id_b, ALICE, MERGE_FEE)

    def test_retired_parent_cannot_merge_with_live_record(self, registry, alice_pair):
        id_a, id_b = alice_pair
        new_id = registry.merge(id_a, id_b, ALICE, MERGE_FEE)

        with pytest.raises(RecordNotFoundError):
            registry.merge(id_a, new_id, ALICE, MERGE_FEE)
        assert registry.exists(new_id)

    def test_ids_never_reused(self, registry, alice_pair):
        id_a, id_b = alice_pair
        new_id = registry.merge(id_a, id_b, ALICE, MERGE_FEE)

        assert registry.mint(ALICE) == new_id + 1

    def test_merge_count_additivity(self, registry):
        ids = [registry.mint(ALICE) for _ in range(4)]
        left = registry.merge(ids[0], ids[1], ALICE, MERGE_FEE)
        right = registry.merge(ids[2], ids[3], ALICE, MERGE_FEE)

        # Parents are retired by the next merge, so read them first
        assert registry.get_record(left).merge_count == 1
        assert registry.get_record(right).merge_count == 1

        mid = registry.merge(left, right, ALICE, MERGE_FEE)
        assert registry.get_record(mid).merge_count == 1 + 1 + 1

        extra = registry.mint(ALICE)
        assert registry.get_record(extra).merge_count == 0

        top = registry.merge(mid, extra, ALICE, MERGE_FEE)
        assert registry.get_record(top).merge_count == 3 + 0 + 1

    def test_overpayment_is_kept(self, registry, alice_pair, ledger):
        id_a, id_b = alice_pair
        registry.merge(id_a, id_b, ALICE, MERGE_FEE + 5)

        assert ledger.balance == MERGE_FEE + 5

    def test_emits_records_merged(self, registry, alice_pair):
        received = []
        registry.subscribe(received.append)
        id_a, id_b = alice_pair

        new_id = registry.merge(id_a, id_b, ALICE, MERGE_FEE)

        assert len(received) == 1
        event = received[0]
        assert isinstance(event, RecordsMerged)
        assert (event.new_id, event.id1, event.id2) == (new_id, id_a, id_b)
        assert event.attributes == registry.get_record(new_id).attributes
        assert registry.events == received

    def test_live_ids_and_len(self, registry, alice_pair):
        id_a, id_b = alice_pair
        other = registry.mint(BOB)
        new_id = registry.merge(id_a, id_b, ALICE, MERGE_FEE)

        assert registry.live_ids() == [other, new_id]
        assert len(registry) == 2
        assert [r.id for r in registry.records_of(ALICE)] == [new_id]
        assert [r.id for r in registry.records_of(BOB)] == [other]


class TestMergeRejections:
    """Failed merges raise a typed error and change nothing."""

    def test_same_record(self, registry, alice_pair, ownership, ledger):
        id_a, _ = alice_pair
        before = _state(registry, ownership, ledger)

        with pytest.raises(SameRecordError):
            registry.merge(id_a, id_a, ALICE, MERGE_FEE)
        assert _state(registry, ownership, ledger) == before

    def test_same_record_regardless_of_fee_or_owner(self, registry, alice_pair):
        id_a, _ = alice_pair

        with pytest.raises(SameRecordError):
            registry.merge(id_a, id_a, BOB, 0)

    def test_insufficient_fee(self, registry, alice_pair, ownership, ledger):
        id_a, id_b = alice_pair
        before = _state(registry, ownership, ledger)

        with pytest.raises(InsufficientFeeError) as exc_info:
            registry.merge(id_a, id_b, ALICE, MERGE_FEE - 1)

        assert exc_info.value.required == MERGE_FEE
        assert exc_info.value.paid == MERGE_FEE - 1
        assert _state(registry, ownership, ledger) == before
        assert registry.exists(id_a) and registry.exists(id_b)

    def test_not_owner_of_either(self, registry, alice_pair, ownership, ledger):
        id_a, id_b = alice_pair
        before = _state(registry, ownership, ledger)

        with pytest.raises(NotOwnerError) as exc_info:
            registry.merge(id_a, id_b, BOB, MERGE_FEE)

        assert exc_info.value.caller == BOB
        assert _state(registry, ownership, ledger) == before

    def test_not_owner_of_one(self, registry, ownership, ledger):
        mine = registry.mint(ALICE)
        theirs = registry.mint(BOB)
        before = _state(registry, ownership, ledger)

        with pytest.raises(NotOwnerError) as exc_info:
            registry.merge(mine, theirs, ALICE, MERGE_FEE)

        assert exc_info.value.record_id == theirs
        assert _state(registry, ownership, ledger) == before

    def test_never_minted(self, registry, alice_pair):
        id_a, _ = alice_pair

        with pytest.raises(RecordNotFoundError):
            registry.merge(id_a, 99, ALICE, MERGE_FEE)

    def test_missing_from_store(self, registry, ownership, ledger):
        """Ownership knows the id but the store does not."""
        id_a = registry.mint(ALICE)
        ownership.create(ALICE, 50)
        before = _state(registry, ownership, ledger)

        with pytest.raises(RecordNotFoundError):
            registry.merge(id_a, 50, ALICE, MERGE_FEE)
        assert _state(registry, ownership, ledger) == before

    def test_transferred_record_merges_for_new_holder(self, registry, alice_pair, ownership):
        id_a, id_b = alice_pair
        ownership.transfer(ALICE, BOB, id_b)

        with pytest.raises(NotOwnerError):
            registry.merge(id_a, id_b, ALICE, MERGE_FEE)

        ownership.transfer(ALICE, BOB, id_a)
        new_id = registry.merge(id_a, id_b, BOB, MERGE_FEE)
        assert ownership.owner_of(new_id) == BOB


class TestTokenMetadata:
    """Tests for Registry.token_metadata."""

    def test_matches_stored_record(self, registry, alice_pair):
        id_a, id_b = alice_pair
        new_id = registry.merge(id_a, id_b, ALICE, MERGE_FEE)

        assert new_id in registry.live_ids()
        for record_id in registry.live_ids():
            record = registry.get_record(record_id)
            document = json.loads(decode_data_uri(registry.token_metadata(record_id))[1])
            values = {entry["trait_type"]: entry["value"] for entry in document["attributes"]}

            assert values == {
                "Strength": record.attributes.strength,
                "Speed": record.attributes.speed,
                "Intelligence": record.attributes.intelligence,
                "Rarity": record.attributes.rarity,
                "Merge Count": record.merge_count,
            }
            assert document["image"] == record.attributes.visual
            assert document["name"] == f"Creature #{record_id}"

    def test_unknown_record(self, registry):
        with pytest.raises(RecordNotFoundError):
            registry.token_metadata(0)
