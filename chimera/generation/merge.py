"""Trait combination used when two creatures are merged.

The arithmetic is integer-only and its order matters: changing where the
floor divisions happen changes the traits of every merged creature.
"""

from ..core.models import TRAIT_NAMES, AttributeSet
from ..rendering.visual import render_visual


# Weight of the stronger parent, out of 10.
DOMINANT_WEIGHT = 6
# Weight of the weaker parent, out of 10.
RECESSIVE_WEIGHT = 4
# Merge bonus, as a percentage of the blended value.
BOOST_PERCENT = 105


def combine(a: int, b: int) -> int:
    """Blend two trait values, favouring the higher one, then apply a 5% boost.

    The result is not clamped: combine(99, 99) == 103.

    Examples:
        >>> combine(80, 50)
        71
        >>> combine(99, 99)
        103
    """
    hi, lo = max(a, b), min(a, b)
    base = (hi * DOMINANT_WEIGHT + lo * RECESSIVE_WEIGHT) // 10
    return base * BOOST_PERCENT // 100


def combine_attributes(
    first: AttributeSet,
    second: AttributeSet,
    merge_count: int,
) -> AttributeSet:
    """Combine two attribute sets trait by trait.

    Args:
        first: Traits of the first parent
        second: Traits of the second parent
        merge_count: Merge count of the child, shown on its portrait

    Returns:
        AttributeSet for the child with a freshly rendered visual
    """
    traits = {
        name: combine(getattr(first, name), getattr(second, name))
        for name in TRAIT_NAMES
    }
    return AttributeSet(**traits, visual=render_visual(traits, merge_count))
