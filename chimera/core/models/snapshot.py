"""Serializable snapshot of the registry's logical layout.

The snapshot is what a hosting process persists between runs: the record
table plus the two scalars. Rendered metadata is derived and never stored.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, model_validator

from .creature import Record


class RegistrySnapshot(BaseModel):
    """Records table, identifier counter and merge fee."""

    records: list[Record] = Field(default_factory=list)
    next_id: int = Field(default=0, ge=0)
    merge_fee: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_counter(self) -> "RegistrySnapshot":
        seen: set[int] = set()
        for record in self.records:
            if record.id in seen:
                raise ValueError(f"Duplicate record id {record.id} in snapshot")
            if record.id >= self.next_id:
                raise ValueError(
                    f"next_id {self.next_id} would reuse existing record id {record.id}"
                )
            seen.add(record.id)
        return self

    def to_yaml(self, path: Path | str) -> None:
        """Write the snapshot to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(self.model_dump(mode="json"), f, sort_keys=False)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "RegistrySnapshot":
        """Load a snapshot previously written by to_yaml."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)
