import logging

import i18n

from insensitive_records.logging_config import DATA_ISSUE_LVL_NUM

logger = logging.getLogger(__name__)


class RecordError(Exception):
    pass


class DuplicateKeyError(RecordError, KeyError):
    """Raised when a strict insert meets a key that is already present,
    compared without regard to letter case. Upserts never raise this."""

    def __init__(self, key, existing_key="", message=""):
        self.key = key
        self.existing_key = existing_key or key
        self.message = message or i18n.t("An entry with the same key already exists")
        super().__init__(self.message)

    def __str__(self):
        return f"{self.message}\t{self.key}\t{self.existing_key}"

    def log_it(self, index_or_id=""):
        logger.log(
            DATA_ISSUE_LVL_NUM,
            "DUPLICATE KEY\t%s\t%s\t%s",
            index_or_id,
            self.key,
            self.existing_key,
        )


class KeyNotFoundError(RecordError, KeyError):
    """Raised by strict lookups when no key matches case-insensitively"""

    def __init__(self, key, message=""):
        self.key = key
        self.message = message or i18n.t("The given key was not present in the record")
        super().__init__(self.message)

    def __str__(self):
        return f"{self.message}\t{self.key}"


class ConcurrentModificationError(RecordError, RuntimeError):
    """Raised when a record is added to or removed from while it is being iterated."""

    def __init__(
        self,
        message="Record was modified during iteration. Take a copy before mutating it",
    ):
        self.message = message
        super().__init__(self.message)

    def __str__(self):
        return i18n.t("Enumeration failed") + f"\t{self.message}"
