class CloneError(Exception):
    """Base exception for dynamodb_clone errors."""


class SourceTableNotFoundError(CloneError):
    def __init__(self, table_name):
        super().__init__(f"Source table '{table_name}' does not exist")
        self.table_name = table_name


class TargetTableNotFoundError(CloneError):
    def __init__(self, table_name):
        super().__init__(f"Target table '{table_name}' does not exist")
        self.table_name = table_name


class UnprocessedItemsError(CloneError):
    """A batch write came back with items the service did not apply."""

    def __init__(self, table_name, count):
        super().__init__(f"{count} item(s) were not processed by table '{table_name}'")
        self.table_name = table_name
        self.count = count


class CloneCancelledError(CloneError):
    """Cancellation was requested before the next remote call."""


class ConfigError(CloneError):
    """Settings file or environment could not be turned into endpoints."""
