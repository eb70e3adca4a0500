from .charset import MRZCharacterValidator, find_invalid_characters, validate_charset
from .checksum import MRZChecksumValidator, compute_check_digit, validate
from .dates import DateKind, MRZDateNormalizer, normalize_date
from .names import MRZNameSplitter, split_name

__all__ = [
    "DateKind",
    "MRZCharacterValidator",
    "MRZChecksumValidator",
    "MRZDateNormalizer",
    "MRZNameSplitter",
    "compute_check_digit",
    "find_invalid_characters",
    "normalize_date",
    "split_name",
    "validate",
    "validate_charset",
]
