"""
Custom exceptions for the MRZ engine.

Only structural problems are exceptions. Check digit mismatches are reported
as data on the returned record.
"""

from __future__ import annotations

from mrz_engine.models.mrz_validation import MRZErrorCode, MRZPosition, MRZValidationError


class MRZParseError(Exception):
    """Base exception for structural MRZ parse failures."""

    error_code: MRZErrorCode = MRZErrorCode.UNRECOGNIZED_FORMAT

    def __init__(
        self,
        message: str,
        position: MRZPosition | None = None,
        value: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.position = position
        self.value = value
        self.suggestion = suggestion

    def to_validation_error(self) -> MRZValidationError:
        """Convert to the serializable validation error model."""
        return MRZValidationError(
            code=self.error_code,
            message=self.message,
            position=self.position,
            actual_value=self.value,
            suggestion=self.suggestion,
        )


class InvalidLineCount(MRZParseError):
    """Raised when the MRZ block does not have 2 or 3 lines."""

    error_code = MRZErrorCode.INVALID_LINE_COUNT

    def __init__(self, line_count: int) -> None:
        super().__init__(
            f"MRZ must have 2 or 3 lines, got {line_count}",
            value=str(line_count),
            suggestion="Provide the complete MRZ block",
        )
        self.line_count = line_count


class InconsistentLineLength(MRZParseError):
    """Raised when the lines of one MRZ block disagree in length."""

    error_code = MRZErrorCode.INCONSISTENT_LINE_LENGTH

    def __init__(self, line: int, expected_length: int, actual_length: int) -> None:
        super().__init__(
            f"Line {line + 1} has {actual_length} characters, expected {expected_length}",
            position=MRZPosition(line=line, column=0, length=actual_length),
            value=str(actual_length),
            suggestion="Check for truncated or padded lines",
        )
        self.line = line
        self.expected_length = expected_length
        self.actual_length = actual_length


class UnrecognizedFormat(MRZParseError):
    """Raised when no known layout matches the line geometry."""

    error_code = MRZErrorCode.UNRECOGNIZED_FORMAT

    def __init__(self, line_count: int, line_length: int) -> None:
        super().__init__(
            f"No MRZ format matches {line_count} lines of {line_length} characters",
            value=f"{line_count}x{line_length}",
            suggestion="Use TD1 (3x30), TD2 (2x36), TD3 (2x44), MRV-A (2x44) or MRV-B (2x36)",
        )
        self.line_count = line_count
        self.line_length = line_length


class InvalidCharacter(MRZParseError):
    """Raised when a character outside A-Z, 0-9 and '<' is found."""

    error_code = MRZErrorCode.INVALID_CHARACTER

    def __init__(self, line: int, column: int, char: str) -> None:
        super().__init__(
            f"Invalid character {char!r} at line {line + 1}, column {column + 1}",
            position=MRZPosition(line=line, column=column),
            value=char,
            suggestion="Replace with A-Z, 0-9 or '<' filler",
        )
        self.line = line
        self.column = column
        self.char = char


class FieldOutOfBounds(MRZParseError):
    """Raised when a field specification does not fit its line.

    This signals an inconsistent layout table, not bad user input.
    """

    error_code = MRZErrorCode.FIELD_OUT_OF_BOUNDS

    def __init__(self, field_name: str, position: MRZPosition, line_length: int) -> None:
        super().__init__(
            f"Field {field_name!r} spans columns {position.column}-"
            f"{position.column + position.length - 1} of line {position.line + 1}, "
            f"which has {line_length} characters",
            position=position,
            value=field_name,
        )
        self.field_name = field_name
        self.line_length = line_length


class InvalidDateDigits(MRZParseError):
    """Raised when a YYMMDD field contains non-digit characters."""

    error_code = MRZErrorCode.INVALID_DATE_DIGITS

    def __init__(self, value: str, field_name: str = "date", position: MRZPosition | None = None) -> None:
        super().__init__(
            f"Invalid {field_name}: {value!r} (expected YYMMDD digits)",
            position=position,
            value=value,
            suggestion="Use YYMMDD format with 6 digits",
        )
        self.field_name = field_name


class InvalidCalendarDate(MRZParseError):
    """Raised when a YYMMDD field names a month or day that does not exist."""

    error_code = MRZErrorCode.INVALID_CALENDAR_DATE

    def __init__(
        self,
        value: str,
        reason: str,
        field_name: str = "date",
        position: MRZPosition | None = None,
    ) -> None:
        super().__init__(
            f"Invalid {field_name}: {value!r} ({reason})",
            position=position,
            value=value,
            suggestion=f"Check month and day values in {value}",
        )
        self.field_name = field_name


class ConfigurationError(Exception):
    """Raised when engine settings cannot be loaded or are invalid."""
