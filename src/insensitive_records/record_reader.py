"""CSV reader that yields case-insensitive records.

Provides the RecordReader class. Each data line of a delimited text file
becomes a CaseInsensitiveRecord keyed by the header names, so code reading
the file does not need to know how the header was capitalised.
"""

import csv
import logging
from typing import Optional

from insensitive_records.case_insensitive_record import CaseInsensitiveRecord
from insensitive_records.logging_config import log_data_issue
from insensitive_records.record_configuration import RecordConfiguration
from insensitive_records.row_adapter import SequenceRow, from_row

logger = logging.getLogger(__name__)


class RecordReader(csv.DictReader):
    """csv.DictReader returning CaseInsensitiveRecord instead of dict.

    Field names are stripped of leading and trailing spaces, their casing is
    kept. Short lines are padded with the configured rest value. Surplus
    values are logged as a data issue and dropped.
    """

    def __init__(self, f, configuration: Optional[RecordConfiguration] = None, **kwds):
        self.configuration = configuration or RecordConfiguration()
        kwds.setdefault("delimiter", self.configuration.delimiter)
        super().__init__(f, restval=self.configuration.rest_value, **kwds)

    # This class overrides the csv.fieldnames property, which strips all
    # field names of leading and trailing spaces.
    @property
    def fieldnames(self):
        names = csv.DictReader.fieldnames.fget(self)  # type: ignore
        return None if names is None else [field.strip() for field in names]

    @fieldnames.setter
    def fieldnames(self, value):
        csv.DictReader.fieldnames.fset(self, value)  # type: ignore

    def __next__(self) -> CaseInsensitiveRecord:
        row = super().__next__()
        names = self.fieldnames
        # One value per header name, so repeated names still reach from_row
        values = [row[name] for name in names]
        if self.restkey in row and self.configuration.log_data_issues:
            log_data_issue(
                logger,
                "SURPLUS VALUES\tline %s\t%s",
                self.line_num,
                row[self.restkey],
            )
        logger.debug("Read line %s", self.line_num)
        return from_row(SequenceRow(names, values), self.configuration)
