"""Notifications emitted by the registry after a successful operation."""

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .creature import AttributeSet


class RecordsMerged(BaseModel):
    """Two parents were retired and a child was created."""

    model_config = ConfigDict(frozen=True)

    type: Literal["records_merged"] = "records_merged"
    new_id: int
    id1: int
    id2: int
    attributes: AttributeSet


class MergeFeeUpdated(BaseModel):
    """The administrator changed the merge fee."""

    model_config = ConfigDict(frozen=True)

    type: Literal["merge_fee_updated"] = "merge_fee_updated"
    new_fee: int = Field(ge=0)


RegistryEvent = Union[RecordsMerged, MergeFeeUpdated]
