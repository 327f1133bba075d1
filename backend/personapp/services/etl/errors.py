class BulkImportError(Exception):
    """Base for everything the import pipeline raises."""


class AdmissionError(BulkImportError):
    """Another import holds the gate; the caller may retry later."""

    def __init__(self, message: str = "import already in progress"):
        super().__init__(message)


class RowConstructionError(BulkImportError):
    def __init__(self, message: str, row_num: int | None = None, column: str | None = None):
        super().__init__(message)
        self.message = message
        self.row_num = row_num
        self.column = column

    def __str__(self) -> str:
        where = []
        if self.row_num is not None:
            where.append(f"row {self.row_num}")
        if self.column:
            where.append(f"column '{self.column}'")
        if not where:
            return self.message
        return f"{self.message} ({', '.join(where)})"


class UnknownRowTypeError(RowConstructionError):
    pass


class StreamError(BulkImportError):
    def __init__(self, message: str, row_num: int | None = None):
        super().__init__(message)
        self.row_num = row_num


class PersistenceFailure(BulkImportError):
    pass
