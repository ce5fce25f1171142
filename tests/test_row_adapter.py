import sqlite3

import pytest

from insensitive_records.case_insensitive_record import CaseInsensitiveRecord
from insensitive_records.custom_exceptions import (
    ConcurrentModificationError,
    DuplicateKeyError,
)
from insensitive_records.logging_config import DATA_ISSUE_LVL_NUM
from insensitive_records.record_configuration import RecordConfiguration
from insensitive_records.row_adapter import (
    CursorRow,
    SequenceRow,
    from_row,
    records_from_cursor,
)


class CountingRow:
    """Row that records which positions were read."""

    def __init__(self, names, values):
        self.names = names
        self.values = values
        self.reads = []

    def column_count(self):
        return len(self.names)

    def column_name(self, index):
        return self.names[index]

    def value_at(self, index):
        self.reads.append(index)
        return self.values[index]


@pytest.fixture
def sqlite_cursor():
    connection = sqlite3.connect(":memory:")
    connection.execute("CREATE TABLE patrons (Id INTEGER, Name TEXT, Email TEXT)")
    connection.executemany(
        "INSERT INTO patrons VALUES (?, ?, ?)",
        [(7, "Ann", "ann@example.com"), (8, "Bob", None)],
    )
    yield connection.cursor()
    connection.close()


def test_from_row():
    row = SequenceRow(["Id", "Name", "Email"], [7, "Ann", "ann@example.com"])
    record = from_row(row)
    assert isinstance(record, CaseInsensitiveRecord)
    assert record["id"] == 7
    assert record["NAME"] == "Ann"
    assert record.email == "ann@example.com"
    assert list(record.keys()) == ["Id", "Name", "Email"]
    assert len(record) == 3


def test_from_row_reads_columns_in_order():
    row = CountingRow(["b", "a", "c"], [2, 1, 3])
    record = from_row(row)
    assert row.reads == [0, 1, 2]
    assert list(record.items()) == [("b", 2), ("a", 1), ("c", 3)]


def test_from_row_empty_row():
    assert len(from_row(SequenceRow([], []))) == 0


def test_from_row_duplicate_columns_raise():
    with pytest.raises(DuplicateKeyError) as exc_info:
        from_row(SequenceRow(["A", "a"], [1, 2]))
    assert exc_info.value.key == "a"
    assert exc_info.value.existing_key == "A"


def test_from_row_duplicate_columns_logged_as_data_issue(caplog):
    caplog.set_level(DATA_ISSUE_LVL_NUM)
    with pytest.raises(DuplicateKeyError):
        from_row(SequenceRow(["Title", "TITLE"], ["x", "y"]))
    data_issues = [r for r in caplog.records if r.levelno == DATA_ISSUE_LVL_NUM]
    assert len(data_issues) == 1
    assert "DUPLICATE KEY" in data_issues[0].getMessage()
    assert "column 1" in data_issues[0].getMessage()


def test_from_row_data_issue_logging_can_be_turned_off(caplog):
    caplog.set_level(DATA_ISSUE_LVL_NUM)
    configuration = RecordConfiguration(log_data_issues=False)
    with pytest.raises(DuplicateKeyError):
        from_row(SequenceRow(["Title", "TITLE"], ["x", "y"]), configuration)
    assert not [r for r in caplog.records if r.levelno == DATA_ISSUE_LVL_NUM]


def test_from_row_iteration_policy():
    row = SequenceRow(["A", "B"], [1, 2])
    fail_fast = from_row(row)
    with pytest.raises(ConcurrentModificationError):
        for key in fail_fast:
            fail_fast.remove(key)

    snapshot = from_row(row, RecordConfiguration(snapshot_iteration=True))
    for key in snapshot:
        snapshot.remove(key)
    assert len(snapshot) == 0


def test_from_row_does_not_touch_row():
    names = ["Id", "Name"]
    values = [1, "Ann"]
    record = from_row(SequenceRow(names, values))
    record["Id"] = 2
    record.add("Extra", True)
    assert names == ["Id", "Name"]
    assert values == [1, "Ann"]


def test_sequence_row_length_mismatch():
    with pytest.raises(ValueError):
        SequenceRow(["A", "B"], [1])


def test_cursor_row(sqlite_cursor):
    sqlite_cursor.execute("SELECT Id, Name FROM patrons ORDER BY Id")
    row = CursorRow(sqlite_cursor.description, sqlite_cursor.fetchone())
    assert row.column_count() == 2
    assert row.column_name(1) == "Name"
    assert row.value_at(0) == 7


def test_records_from_cursor(sqlite_cursor):
    sqlite_cursor.execute("SELECT * FROM patrons ORDER BY Id")
    records = list(records_from_cursor(sqlite_cursor))
    assert len(records) == 2
    assert records[0].NAME == "Ann"
    assert records[1]["email"] is None
    assert records[1].try_get("EMAIL") == (True, None)
    assert list(records[0].keys()) == ["Id", "Name", "Email"]


def test_records_from_cursor_duplicate_columns(sqlite_cursor):
    sqlite_cursor.execute("SELECT Id, Name AS id FROM patrons")
    with pytest.raises(DuplicateKeyError):
        next(records_from_cursor(sqlite_cursor))


def test_records_from_cursor_without_query():
    connection = sqlite3.connect(":memory:")
    with pytest.raises(ValueError):
        next(records_from_cursor(connection.cursor()))
    connection.close()
