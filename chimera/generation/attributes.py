"""Seeded trait generation for newly minted creatures.

Each trait is sha256(seed || id || label) reduced modulo 100. The same
seed and id always give the same creature. The seed is chosen by the
caller; see Registry for the default clock-based source.
"""

import hashlib

from ..core.models import TRAIT_MODULUS, TRAIT_NAMES, AttributeSet
from ..rendering.visual import render_visual


# Label hashed in for each trait, keyed by trait name.
TRAIT_LABELS: dict[str, bytes] = {
    "strength": b"STR",
    "speed": b"SPD",
    "intelligence": b"INT",
    "rarity": b"RAR",
}

ID_BYTES = 32


def derive_trait(seed: bytes, record_id: int, label: bytes) -> int:
    """Derive a single trait value in [0, 100)."""
    digest = hashlib.sha256(
        seed + record_id.to_bytes(ID_BYTES, "big") + label
    ).digest()
    return int.from_bytes(digest, "big") % TRAIT_MODULUS


def generate_attributes(seed: bytes, record_id: int) -> AttributeSet:
    """Generate the traits and portrait of a fresh creature.

    Args:
        seed: Entropy bytes for this mint
        record_id: Identifier the creature will be stored under

    Returns:
        AttributeSet with every trait in [0, 99] and a merge-count-0 visual

    Raises:
        TypeError: seed is not bytes
        ValueError: record_id is negative
    """
    if not isinstance(seed, (bytes, bytearray)):
        raise TypeError(f"seed must be bytes, got {type(seed).__name__}")
    if record_id < 0:
        raise ValueError(f"record_id must be non-negative, got {record_id}")

    seed = bytes(seed)
    traits = {
        name: derive_trait(seed, record_id, TRAIT_LABELS[name])
        for name in TRAIT_NAMES
    }
    return AttributeSet(**traits, visual=render_visual(traits, merge_count=0))
