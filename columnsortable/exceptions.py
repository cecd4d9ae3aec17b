class ColumnSortableError(Exception):
    """Base error for the columnsortable app"""


class ConfigurationError(ColumnSortableError):
    """Raised when a sort key can't be split into a relation and a column"""

    def __init__(self, sort_key, separator="."):
        self.sort_key = sort_key
        self.separator = separator
        super().__init__(
            f"Invalid sort key '{sort_key}': expected 'column' or "
            f"'relation{separator}column'"
        )
