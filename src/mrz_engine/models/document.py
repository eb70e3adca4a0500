"""
Document record models produced by the MRZ engine.

These models follow ICAO Doc 9303 naming for Machine Readable Travel Documents.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from mrz_engine.models.mrz_validation import CheckResult, MRZFormat, MRZPosition

if TYPE_CHECKING:
    from mrz_engine.exceptions import MRZParseError

NAME_SEPARATOR = "<<"
FILLER = "<"


def camel_case(snake_str: str) -> str:
    """Convert snake_case to camelCase."""
    components = snake_str.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def snake_to_camel_dict(d: dict) -> dict:
    """Convert all keys in a dictionary from snake_case to camelCase."""
    return {camel_case(k): v for k, v in d.items()}


class Gender(str, Enum):
    """Holder sex according to ICAO standards."""

    MALE = "M"
    FEMALE = "F"
    UNSPECIFIED = "X"


class DocumentType(str, Enum):
    """Document category derived from the first character of the MRZ."""

    PASSPORT = "Passport"
    ID_CARD = "IDCard"
    VISA = "Visa"
    UNKNOWN = "Unknown"


class NameParts(BaseModel):
    """Holder name split into its primary and secondary identifiers."""

    model_config = ConfigDict(frozen=True)

    surname: str = Field(default="", description="Primary identifier")
    given_names: str = Field(default="", description="Secondary identifier, space separated")

    @property
    def full_name(self) -> str:
        """Surname and given names joined by the MRZ double-filler separator."""
        return f"{self.surname}{NAME_SEPARATOR}{self.given_names}"

    @classmethod
    def from_full_name(cls, full_name: str) -> NameParts:
        """Rebuild the parts from a value produced by ``full_name``."""
        surname, _, given_names = full_name.partition(NAME_SEPARATOR)
        return cls(surname=surname, given_names=given_names)

    def to_mrz(self, width: int) -> str:
        """
        Encode the name back into a filler-padded MRZ name field.

        Args:
            width: Width of the name field for the target layout

        Returns:
            Name field of exactly ``width`` characters (truncated if needed)
        """
        surname = re.sub(r"\s+", FILLER, self.surname.strip())
        given_names = re.sub(r"\s+", FILLER, self.given_names.strip())
        encoded = f"{surname}{NAME_SEPARATOR}{given_names}" if given_names else surname
        return encoded[:width].ljust(width, FILLER)


class ExtractedField(BaseModel):
    """Raw value sliced from the MRZ together with its check digit outcome."""

    model_config = ConfigDict(frozen=True)

    name: str
    raw_value: str
    position: MRZPosition
    check: CheckResult | None = None

    @property
    def validated(self) -> bool:
        return self.check is not None and self.check.passed

    @property
    def value(self) -> str:
        """Raw value with trailing filler removed."""
        return self.raw_value.rstrip(FILLER)


class DocumentRecord(BaseModel):
    """Validated content of a Machine Readable Zone."""

    model_config = ConfigDict(frozen=True)

    mrz_format: MRZFormat = Field(..., description="Detected MRZ layout")
    document_type: DocumentType = Field(..., description="Document category")
    document_code: str = Field(..., description="Document code, e.g. P, I, ID, V")
    issuing_state: str = Field(..., description="3-letter issuing state or organization")
    document_number: str = Field(..., description="Document number without filler")
    surname: str
    given_names: str
    full_name: str = Field(..., description="SURNAME<<GIVEN NAMES")
    nationality: str = Field(..., description="3-letter nationality code")
    birth_date: date
    sex: Gender
    expiry_date: date
    optional_data: str = Field(default="", description="Optional data, empty when filler only")
    optional_data_2: str = Field(default="", description="Second optional data field (TD1)")
    checks: tuple[CheckResult, ...] = Field(
        default=(), description="Every check digit result, composite last"
    )

    @property
    def composite_check(self) -> CheckResult | None:
        """Composite check result for layouts that define one."""
        return self.get_check("composite")

    @property
    def failed_checks(self) -> list[CheckResult]:
        return [check for check in self.checks if check.failed]

    @property
    def all_checks_passed(self) -> bool:
        """True when no check digit failed (not-applicable checks are accepted)."""
        return not self.failed_checks

    @property
    def name(self) -> NameParts:
        return NameParts(surname=self.surname, given_names=self.given_names)

    def get_check(self, field_name: str) -> CheckResult | None:
        """Get the check result for a specific field."""
        for check in self.checks:
            if check.field_name == field_name:
                return check
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dictionary with camelCase keys."""
        data = self.model_dump(mode="json")
        data["checks"] = [snake_to_camel_dict(check) for check in data["checks"]]
        return snake_to_camel_dict(data)


@dataclass(frozen=True)
class ParseResult:
    """Outcome of a parse call: either a record or a structural error."""

    record: DocumentRecord | None = None
    error: MRZParseError | None = None

    def __post_init__(self) -> None:
        if (self.record is None) == (self.error is None):
            msg = "ParseResult requires exactly one of record or error"
            raise ValueError(msg)

    @property
    def is_ok(self) -> bool:
        return self.record is not None

    def unwrap(self) -> DocumentRecord:
        """
        Return the record or raise the structural error.

        Raises:
            MRZParseError: If parsing failed
        """
        if self.error is not None:
            raise self.error
        assert self.record is not None
        return self.record
