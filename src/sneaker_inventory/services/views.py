"""Collection and Wishlist projections over the record store."""

import re
from dataclasses import dataclass

from sneaker_inventory.domain.models import (
    Currency,
    Partition,
    PartitionSummary,
    SneakerRecord,
)
from sneaker_inventory.services.records import RecordStore

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")


@dataclass
class ViewService:
    """Derives sorted and filtered projections from the current store state.

    Nothing is cached: each call reads the committed records again.
    """

    store: RecordStore

    def sorted(self, partition: Partition) -> list[SneakerRecord]:
        """Return a partition ordered by name, then id."""
        return _sort(self.store.list(partition))

    def sorted_all(self) -> list[SneakerRecord]:
        """Return every record ordered by name, then id."""
        return _sort(self.store.list_all())

    def filtered(self, partition: Partition, query: str) -> list[SneakerRecord]:
        """Return records matching the name/brand text or the condition number."""
        records = self.sorted(partition)
        if not query:
            return records
        condition = parse_condition_query(query)
        return [
            record
            for record in records
            if _matches_text(record, query)
            or (condition is not None and record.condition == condition)
        ]

    def total_value(self, partition: Partition) -> float:
        """Sum prices in a partition without currency conversion."""
        return sum((record.price for record in self.store.list(partition)), 0.0)

    def currency_label(self, partition: Partition) -> Currency | None:
        """Return the currency shown next to the partition total.

        The label comes from the first record in sorted order, so a partition
        mixing currencies shows a single arbitrary label beside a raw sum.
        """
        records = self.sorted(partition)
        if not records:
            return None
        return records[0].currency

    def summary(self, partition: Partition) -> PartitionSummary:
        """Return the count, total value and currency label of a partition."""
        records = self.sorted(partition)
        return PartitionSummary(
            partition=partition,
            count=len(records),
            total_value=sum((record.price for record in records), 0.0),
            currency=records[0].currency if records else None,
        )


def parse_condition_query(query: str) -> int | None:
    """Return the integer a search query spells, if it is one."""
    if _INTEGER_PATTERN.fullmatch(query) is None:
        return None
    return int(query)


def _matches_text(record: SneakerRecord, query: str) -> bool:
    needle = query.casefold()
    if needle in record.name.casefold():
        return True
    return record.brand is not None and needle in record.brand.casefold()


def _sort(records: list[SneakerRecord]) -> list[SneakerRecord]:
    return sorted(records, key=lambda record: (record.name, record.id))
