# Error kinds raised by the crime pipeline. Every one of them aborts the run.

from typing import Any, Optional


class CrimePipelineError(Exception):
    """Base class for all pipeline failures."""


class InputFileError(CrimePipelineError, OSError):
    """Input file is missing or unreadable."""


class FormatError(CrimePipelineError, ValueError):
    """Header or row shape is malformed, or a value cannot be coerced."""

    def __init__(self, message: str, row: Optional[int] = None, value: Any = None):
        super().__init__(message)
        self.row = row
        self.value = value


class ParseError(CrimePipelineError, ValueError):
    """Raw timestamp does not match the expected pattern."""

    def __init__(self, message: str, row: Optional[int] = None, value: Any = None, count: int = 0):
        super().__init__(message)
        self.row = row
        self.value = value
        self.count = count


class ConfigError(CrimePipelineError, ValueError):
    """Requested column, aggregation key or year range is invalid."""


__all__ = [
    "CrimePipelineError",
    "InputFileError",
    "FormatError",
    "ParseError",
    "ConfigError",
]
