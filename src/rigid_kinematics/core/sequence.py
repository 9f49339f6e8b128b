"""Ordered, index-addressable collections of records with stable identity.

Transform steps and DH rows are edited as lists: inserted, removed,
reordered and updated in place from the caller's point of view. Each edit
here returns a new RecordSequence; the records keep their `id` across
edits so selection and reordering can follow them.
"""

import logging
import uuid
from typing import Any, Iterator, Optional, Tuple

from flax import struct

logger = logging.getLogger(__name__)


def new_id() -> str:
    """Fresh random record identifier."""
    return uuid.uuid4().hex


@struct.dataclass
class RecordSequence:
    """Immutable ordered collection of records that carry an `id` field."""
    items: Tuple[Any, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Any:
        return self.items[index]

    def index_of(self, record_id: str) -> int:
        """Position of the record with `record_id`, or -1."""
        for i, item in enumerate(self.items):
            if item.id == record_id:
                return i
        return -1

    def find(self, record_id: str) -> Optional[Any]:
        index = self.index_of(record_id)
        return None if index < 0 else self.items[index]

    def append(self, item: Any) -> "RecordSequence":
        logger.debug("Appending record %s at position %d", item.id, len(self.items))
        return self.replace(items=self.items + (item,))

    def insert(self, index: int, item: Any) -> "RecordSequence":
        items = list(self.items)
        items.insert(index, item)
        logger.debug("Inserting record %s at position %d", item.id, index)
        return self.replace(items=tuple(items))

    def remove(self, record_id: str) -> "RecordSequence":
        """Drop the record with `record_id`; unknown ids leave the sequence as is."""
        items = tuple(item for item in self.items if item.id != record_id)
        if len(items) == len(self.items):
            logger.debug("No record %s to remove", record_id)
        return self.replace(items=items)

    def move(self, index: int, direction: int) -> "RecordSequence":
        """
        Swap the record at `index` with its neighbour at `index + direction`.

        Moves past either end are ignored and return the sequence unchanged.
        """
        target = index + direction
        if index < 0 or index >= len(self.items) or target < 0 or target >= len(self.items):
            logger.debug("Ignoring move of position %d by %d", index, direction)
            return self
        items = list(self.items)
        items[index], items[target] = items[target], items[index]
        return self.replace(items=tuple(items))

    def update(self, record_id: str, **changes: Any) -> "RecordSequence":
        """Replace fields of the record with `record_id`."""
        index = self.index_of(record_id)
        if index < 0:
            raise KeyError(f"No record with id '{record_id}'")
        items = list(self.items)
        items[index] = items[index].replace(**changes)
        return self.replace(items=tuple(items))
