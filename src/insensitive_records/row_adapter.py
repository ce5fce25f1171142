"""Turn rows of tabular data into CaseInsensitiveRecord instances.

A row is anything that exposes its columns by position, see Row. Column
names are used as keys exactly as given, so a row with two columns whose
names differ only in case cannot become a record and raises
DuplicateKeyError.
"""

import logging
from typing import Any, Iterator, Optional, Protocol, Sequence

from insensitive_records.case_insensitive_record import CaseInsensitiveRecord
from insensitive_records.custom_exceptions import DuplicateKeyError
from insensitive_records.record_configuration import RecordConfiguration

logger = logging.getLogger(__name__)


class Row(Protocol):
    def column_count(self) -> int:
        ...

    def column_name(self, index: int) -> str:
        ...

    def value_at(self, index: int) -> Any:
        ...


class SequenceRow:
    """Row over parallel sequences of column names and values."""

    def __init__(self, names: Sequence[str], values: Sequence[Any]):
        if len(names) != len(values):
            raise ValueError(
                f"Row has {len(names)} column names but {len(values)} values"
            )
        self.names = names
        self.values = values

    def column_count(self) -> int:
        return len(self.names)

    def column_name(self, index: int) -> str:
        return self.names[index]

    def value_at(self, index: int) -> Any:
        return self.values[index]


class CursorRow(SequenceRow):
    """Row over a fetched DB-API 2.0 row.

    Args:
        description: The cursor's description. The first item of each column
            description is the column name.
        values: The fetched row.
    """

    def __init__(self, description, values: Sequence[Any]):
        super().__init__([column[0] for column in description], values)


def from_row(
    row: Row, configuration: Optional[RecordConfiguration] = None
) -> CaseInsensitiveRecord:
    """Build a record with one entry per column of the row, in column order.

    Args:
        row: The row to read. It is not modified.
        configuration: Iteration policy of the record and data issue logging.

    Raises:
        DuplicateKeyError: Two column names are equal when case is ignored.

    Returns:
        A new CaseInsensitiveRecord.
    """
    configuration = configuration or RecordConfiguration()
    record = CaseInsensitiveRecord(snapshot_iteration=configuration.snapshot_iteration)
    for index in range(row.column_count()):
        try:
            record.add(row.column_name(index), row.value_at(index))
        except DuplicateKeyError as ee:
            if configuration.log_data_issues:
                ee.log_it(f"column {index}")
            raise
    return record


def records_from_cursor(
    cursor, configuration: Optional[RecordConfiguration] = None
) -> Iterator[CaseInsensitiveRecord]:
    """Fetch the remaining rows of an executed DB-API cursor as records."""
    description = cursor.description
    if description is None:
        raise ValueError("Cursor has no result set. Execute a query first")
    fetched = 0
    for values in cursor:
        yield from_row(CursorRow(description, values), configuration)
        fetched += 1
    logger.debug("Read %s rows from cursor", fetched)
