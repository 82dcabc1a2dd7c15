"""JSON metadata documents for creatures.

Documents follow the common name/description/image/attributes layout that
marketplaces and wallets expect, and are delivered as a data URI.
"""

from pydantic import BaseModel

from ..core.models import Record
from .data_uri import encode_data_uri


JSON_MEDIA_TYPE = "application/json"

DEFAULT_NAME_PREFIX = "Creature"
DEFAULT_DESCRIPTION = "A mergeable creature. Merge two to create a stronger one."

# (trait_type label, Record accessor) in document order.
METADATA_TRAITS: tuple[tuple[str, str], ...] = (
    ("Strength", "strength"),
    ("Speed", "speed"),
    ("Intelligence", "intelligence"),
    ("Rarity", "rarity"),
)
MERGE_COUNT_TRAIT = "Merge Count"


class TraitEntry(BaseModel):
    trait_type: str
    value: int


class MetadataDocument(BaseModel):
    """Metadata served for a single creature."""

    name: str
    description: str
    image: str
    attributes: list[TraitEntry]


def build_metadata(
    record: Record,
    name_prefix: str = DEFAULT_NAME_PREFIX,
    description: str = DEFAULT_DESCRIPTION,
) -> MetadataDocument:
    """Compose the metadata document for a record."""
    attrs = record.attributes
    entries = [
        TraitEntry(trait_type=label, value=getattr(attrs, field))
        for label, field in METADATA_TRAITS
    ]
    entries.append(TraitEntry(trait_type=MERGE_COUNT_TRAIT, value=record.merge_count))

    return MetadataDocument(
        name=f"{name_prefix} #{record.id}",
        description=description,
        image=attrs.visual,
        attributes=entries,
    )


def render_metadata(
    record: Record,
    name_prefix: str = DEFAULT_NAME_PREFIX,
    description: str = DEFAULT_DESCRIPTION,
) -> str:
    """Render a record's metadata as a base64 JSON data URI.

    The caller is responsible for checking that the record is live; see
    Registry.token_metadata.
    """
    document = build_metadata(record, name_prefix=name_prefix, description=description)
    return encode_data_uri(JSON_MEDIA_TYPE, document.model_dump_json())
