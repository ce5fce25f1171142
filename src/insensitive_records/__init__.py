import importlib.metadata

from insensitive_records.case_insensitive_record import CaseInsensitiveRecord
from insensitive_records.custom_exceptions import (
    ConcurrentModificationError,
    DuplicateKeyError,
    KeyNotFoundError,
    RecordError,
)
from insensitive_records.record_configuration import RecordConfiguration
from insensitive_records.record_reader import RecordReader
from insensitive_records.row_adapter import (
    CursorRow,
    Row,
    SequenceRow,
    from_row,
    records_from_cursor,
)

__version__ = importlib.metadata.version("insensitive_records")

__all__ = [
    "CaseInsensitiveRecord",
    "ConcurrentModificationError",
    "CursorRow",
    "DuplicateKeyError",
    "KeyNotFoundError",
    "RecordConfiguration",
    "RecordError",
    "RecordReader",
    "Row",
    "SequenceRow",
    "from_row",
    "records_from_cursor",
]
