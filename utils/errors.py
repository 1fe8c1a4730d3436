"""
Error definitions and handling for the turtle Logo interpreter.
"""
from enum import Enum
from dataclasses import dataclass
from typing import Optional, List


class ErrorType(Enum):
    SYNTAX = "syntax"
    RUNTIME = "runtime"
    WARNING = "warning"


class ErrorSeverity(Enum):
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"


class LogoError(Exception):
    """Base class for errors raised by the Logo pipeline."""

    def __init__(self, message: str, line_number: int = 0,
                 char_start: int = 0, char_end: int = 0):
        super().__init__(message)
        self.message = message
        self.line_number = line_number
        self.char_start = char_start
        self.char_end = char_end


class ParseError(LogoError):
    """Raised when a token sequence is not a valid program."""


class DispatchError(LogoError):
    """Raised when the executor receives a command it cannot run."""


class ExpressionError(ValueError):
    """Raised by the expression parser on malformed plot expressions."""


@dataclass
class LogoErrorRecord:
    """Represents an error in Logo processing with position information."""
    line_number: int
    char_start: int
    char_end: int
    message: str
    error_type: ErrorType
    severity: ErrorSeverity = ErrorSeverity.ERROR

    def __str__(self):
        return f"Line {self.line_number}: {self.message}"


class ErrorCollector:
    """Collects and manages errors during Logo processing."""

    def __init__(self):
        self.errors: List[LogoErrorRecord] = []

    def add_error(self, line_number: int, char_start: int, char_end: int,
                  message: str, error_type: ErrorType,
                  severity: ErrorSeverity = ErrorSeverity.ERROR):
        """Add an error to the collection."""
        error = LogoErrorRecord(line_number, char_start, char_end, message,
                                error_type, severity)
        self.errors.append(error)

    def add_exception(self, exc: LogoError, error_type: ErrorType,
                      severity: ErrorSeverity = ErrorSeverity.ERROR):
        """Record a raised LogoError, keeping its source span."""
        self.add_error(exc.line_number, exc.char_start, exc.char_end,
                       exc.message, error_type, severity)

    def get_errors_for_line(self, line_number: int) -> List[LogoErrorRecord]:
        """Get all errors for a specific line."""
        return [error for error in self.errors if error.line_number == line_number]

    def has_fatal_errors(self) -> bool:
        """Check if there are any fatal errors."""
        return any(error.severity == ErrorSeverity.FATAL for error in self.errors)

    def has_errors(self) -> bool:
        """Check if there are any errors (excluding warnings)."""
        return any(error.severity in [ErrorSeverity.ERROR, ErrorSeverity.FATAL]
                   for error in self.errors)

    def first_error(self) -> Optional[LogoErrorRecord]:
        """Return the earliest recorded error, if any."""
        return self.errors[0] if self.errors else None

    def clear(self):
        """Clear all errors."""
        self.errors.clear()

    def get_all_errors(self) -> List[LogoErrorRecord]:
        """Get all errors sorted by line number."""
        return sorted(self.errors, key=lambda e: (e.line_number, e.char_start))
