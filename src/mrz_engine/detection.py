"""MRZ format detection from line geometry and the document code."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from mrz_engine.exceptions import InconsistentLineLength, InvalidLineCount, UnrecognizedFormat
from mrz_engine.models.document import DocumentType
from mrz_engine.models.mrz_validation import MRZFormat

logger = logging.getLogger(__name__)

VALID_LINE_COUNTS = (2, 3)

# (line count, line length) -> (format, visa format for a leading 'V')
_GEOMETRY: dict[tuple[int, int], tuple[MRZFormat, MRZFormat | None]] = {
    (3, 30): (MRZFormat.TD1, None),
    (2, 36): (MRZFormat.TD2, MRZFormat.MRV_B),
    (2, 44): (MRZFormat.TD3, MRZFormat.MRV_A),
}

_DOCUMENT_TYPES: dict[str, DocumentType] = {
    "P": DocumentType.PASSPORT,
    "I": DocumentType.ID_CARD,
    "A": DocumentType.ID_CARD,
    "C": DocumentType.ID_CARD,
    "V": DocumentType.VISA,
}


def detect_format(lines: Sequence[str]) -> MRZFormat:
    """
    Classify an MRZ block into one of the supported layouts.

    Args:
        lines: Raw MRZ lines

    Returns:
        The detected MRZFormat

    Raises:
        InvalidLineCount: If there are not 2 or 3 lines
        InconsistentLineLength: If the lines differ in length
        UnrecognizedFormat: If no layout matches the geometry
    """
    line_count = len(lines)
    if line_count not in VALID_LINE_COUNTS:
        raise InvalidLineCount(line_count)

    expected_length = len(lines[0])
    for index, line in enumerate(lines[1:], start=1):
        if len(line) != expected_length:
            raise InconsistentLineLength(index, expected_length, len(line))

    candidates = _GEOMETRY.get((line_count, expected_length))
    if candidates is None:
        raise UnrecognizedFormat(line_count, expected_length)

    mrz_format, visa_format = candidates
    if visa_format is not None and lines[0].startswith("V"):
        mrz_format = visa_format

    logger.debug("Detected MRZ format %s (%dx%d)", mrz_format.value, line_count, expected_length)
    return mrz_format


def classify_document_type(document_code: str) -> DocumentType:
    """
    Map the first character of the document code to a document category.

    Unlisted codes are accepted as UNKNOWN rather than rejected.
    """
    document_type = _DOCUMENT_TYPES.get(document_code[:1], DocumentType.UNKNOWN)
    if document_type is DocumentType.UNKNOWN:
        logger.info("Unrecognized document code %r, using %s", document_code, document_type.value)
    return document_type
