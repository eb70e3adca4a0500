from .document import (
    DocumentRecord,
    DocumentType,
    ExtractedField,
    Gender,
    NameParts,
    ParseResult,
)
from .mrz_validation import (
    CheckResult,
    CheckStatus,
    MRZErrorCode,
    MRZFormat,
    MRZPosition,
    MRZValidationError,
)

__all__ = [
    "CheckResult",
    "CheckStatus",
    "DocumentRecord",
    "DocumentType",
    "ExtractedField",
    "Gender",
    "MRZErrorCode",
    "MRZFormat",
    "MRZPosition",
    "MRZValidationError",
    "NameParts",
    "ParseResult",
]
