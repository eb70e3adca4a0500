"""
MRZ validation models for structured error and check digit reporting.

This module provides the data models shared by every stage of the engine:
- Error codes and line/column positions for structural failures
- MRZ layout variants (TD1, TD2, TD3, MRV-A, MRV-B)
- Check digit outcomes (pass, fail, not applicable)
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MRZErrorCode(str, Enum):
    """Standardized error codes for MRZ parse failures."""

    # Format errors
    INVALID_LINE_COUNT = "INVALID_LINE_COUNT"
    INCONSISTENT_LINE_LENGTH = "INCONSISTENT_LINE_LENGTH"
    UNRECOGNIZED_FORMAT = "UNRECOGNIZED_FORMAT"
    INVALID_CHARACTER = "INVALID_CHARACTER"

    # Structure errors
    FIELD_OUT_OF_BOUNDS = "FIELD_OUT_OF_BOUNDS"

    # Date errors
    INVALID_DATE_DIGITS = "INVALID_DATE_DIGITS"
    INVALID_CALENDAR_DATE = "INVALID_CALENDAR_DATE"


class MRZFormat(str, Enum):
    """MRZ layouts with their line geometry."""

    TD1 = "TD1"  # 3 lines, 30 chars each (ID cards)
    TD2 = "TD2"  # 2 lines, 36 chars each (ID cards)
    TD3 = "TD3"  # 2 lines, 44 chars each (passports)
    MRV_A = "MRV-A"  # 2 lines, 44 chars each (full-page visas)
    MRV_B = "MRV-B"  # 2 lines, 36 chars each (small-format visas)

    @property
    def line_count(self) -> int:
        """Number of lines in this layout."""
        return 3 if self is MRZFormat.TD1 else 2

    @property
    def line_length(self) -> int:
        """Number of characters per line in this layout."""
        return {
            MRZFormat.TD1: 30,
            MRZFormat.TD2: 36,
            MRZFormat.TD3: 44,
            MRZFormat.MRV_A: 44,
            MRZFormat.MRV_B: 36,
        }[self]

    @property
    def total_length(self) -> int:
        """Total number of characters in this layout."""
        return self.line_count * self.line_length

    @property
    def is_visa(self) -> bool:
        return self in (MRZFormat.MRV_A, MRZFormat.MRV_B)


class MRZPosition(BaseModel):
    """Position information for MRZ fields and errors."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(..., description="Line number (0-based)")
    column: int = Field(..., description="Column number (0-based)")
    length: int = Field(default=1, description="Length of the field/error")

    def __str__(self) -> str:
        return f"Line {self.line + 1}, Column {self.column + 1}"


class MRZValidationError(BaseModel):
    """Serializable description of a structural parse failure."""

    model_config = ConfigDict(frozen=True)

    code: MRZErrorCode = Field(..., description="Standardized error code")
    message: str = Field(..., description="Human-readable error message")
    position: MRZPosition | None = Field(default=None, description="Position of the error")
    actual_value: str | None = Field(default=None, description="Offending value found")
    suggestion: str | None = Field(default=None, description="Suggested fix")


class CheckStatus(str, Enum):
    """Outcome of a single check digit validation."""

    PASS = "pass"
    FAIL = "fail"
    NOT_APPLICABLE = "not_applicable"


class CheckResult(BaseModel):
    """Check digit validation result for one field or the composite."""

    model_config = ConfigDict(frozen=True)

    field_name: str = Field(..., description="Name of the checked field")
    status: CheckStatus = Field(..., description="Validation outcome")
    expected: str = Field(..., description="Character found in the check digit column")
    computed: int = Field(..., ge=0, le=9, description="Check digit computed from the data")
    position: MRZPosition | None = Field(
        default=None, description="Position of the check digit"
    )

    @property
    def passed(self) -> bool:
        """Whether the check digit matched."""
        return self.status is CheckStatus.PASS

    @property
    def failed(self) -> bool:
        """Whether the check digit was present and did not match."""
        return self.status is CheckStatus.FAIL

    def __str__(self) -> str:
        if self.status is CheckStatus.FAIL:
            return f"{self.field_name}: expected {self.expected}, computed {self.computed}"
        return f"{self.field_name}: {self.status.value}"
