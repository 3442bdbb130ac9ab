"""Exception types raised while reading and decoding reports."""


class OutdatedError(Exception):
    """Base class for all outdated-report errors."""


class InputError(OutdatedError):
    """Reading the report input failed."""


class DecodeError(OutdatedError):
    """The input could not be decoded into a Report."""


class ReportSyntaxError(DecodeError):
    """The input is not valid JSON."""

    def __init__(self, message: str, line: int | None = None,
                 column: int | None = None, offset: int | None = None):
        self.message = message
        self.line = line
        self.column = column
        self.offset = offset
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line is not None:
            return f"invalid JSON at line {self.line} column {self.column}: {self.message}"
        if self.offset is not None:
            return f"invalid input at byte {self.offset}: {self.message}"
        return f"invalid JSON: {self.message}"


class SchemaError(DecodeError):
    """Well-formed JSON that does not have the shape of a report."""

    def __init__(self, path, expected: str, found: str):
        self.path = path
        self.expected = expected
        self.found = found
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"{self.path}: expected {self.expected}, found {self.found}"
