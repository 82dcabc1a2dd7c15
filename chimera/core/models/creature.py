"""Creature record models."""

from pydantic import BaseModel, ConfigDict, Field


# Fixed trait order used by generation, merging and metadata.
TRAIT_NAMES: tuple[str, ...] = ("strength", "speed", "intelligence", "rarity")

# Freshly generated traits fall in [0, TRAIT_MODULUS).
TRAIT_MODULUS = 100


class AttributeSet(BaseModel):
    """The four traits of a creature plus its cached portrait.

    Generated traits are always below 100. Merged traits may exceed that
    bound, so only non-negativity is enforced here.
    """

    model_config = ConfigDict(frozen=True)

    strength: int = Field(ge=0)
    speed: int = Field(ge=0)
    intelligence: int = Field(ge=0)
    rarity: int = Field(ge=0)
    visual: str = Field(description="SVG portrait as a base64 data URI")

    def traits(self) -> dict[str, int]:
        """Return the four traits in canonical order."""
        return {name: getattr(self, name) for name in TRAIT_NAMES}


class Record(BaseModel):
    """A live creature held in the registry."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0)
    attributes: AttributeSet
    merge_count: int = Field(default=0, ge=0)
