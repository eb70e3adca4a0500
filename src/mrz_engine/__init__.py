"""
MRZ engine - parser and validator for ICAO Doc 9303 Machine Readable Zones.

Supports TD1, TD2 and TD3 documents and MRV-A / MRV-B visas.
"""

__version__ = "0.1.0"

from .config import DEFAULT_SETTINGS, MRZEngineSettings
from .detection import classify_document_type, detect_format
from .exceptions import (
    ConfigurationError,
    FieldOutOfBounds,
    InconsistentLineLength,
    InvalidCalendarDate,
    InvalidCharacter,
    InvalidDateDigits,
    InvalidLineCount,
    MRZParseError,
    UnrecognizedFormat,
)
from .extraction import FieldExtractor, extract_fields
from .layouts import LAYOUTS, CompositeSpec, FieldSpec, MRZLayout, get_layout
from .models import (
    CheckResult,
    CheckStatus,
    DocumentRecord,
    DocumentType,
    ExtractedField,
    Gender,
    MRZErrorCode,
    MRZFormat,
    MRZPosition,
    MRZValidationError,
    NameParts,
    ParseResult,
)
from .parser import RecordAssembler, parse, split_mrz_text
from .utils import DateKind, compute_check_digit, normalize_date, split_name, validate_charset

__all__ = [
    "DEFAULT_SETTINGS",
    "LAYOUTS",
    "CheckResult",
    "CheckStatus",
    "CompositeSpec",
    "ConfigurationError",
    "DateKind",
    "DocumentRecord",
    "DocumentType",
    "ExtractedField",
    "FieldExtractor",
    "FieldOutOfBounds",
    "FieldSpec",
    "Gender",
    "InconsistentLineLength",
    "InvalidCalendarDate",
    "InvalidCharacter",
    "InvalidDateDigits",
    "InvalidLineCount",
    "MRZEngineSettings",
    "MRZErrorCode",
    "MRZFormat",
    "MRZLayout",
    "MRZParseError",
    "MRZPosition",
    "MRZValidationError",
    "NameParts",
    "ParseResult",
    "RecordAssembler",
    "UnrecognizedFormat",
    "classify_document_type",
    "compute_check_digit",
    "detect_format",
    "extract_fields",
    "get_layout",
    "normalize_date",
    "parse",
    "split_mrz_text",
    "split_name",
    "validate_charset",
]
