"""
MRZ record assembly per ICAO Doc 9303.

This module ties the pipeline together:
- Character validation and format detection
- Field extraction with per-field check digits
- Composite check for layouts that define one
- Name splitting, date normalization and document type mapping

Structural problems abort with an MRZParseError. Check digit mismatches
never abort; they are reported on the returned record.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from mrz_engine.config import DEFAULT_SETTINGS, MRZEngineSettings
from mrz_engine.detection import VALID_LINE_COUNTS, classify_document_type, detect_format
from mrz_engine.exceptions import InvalidLineCount, MRZParseError
from mrz_engine.extraction import FieldExtractor
from mrz_engine.layouts import get_layout
from mrz_engine.models.document import DocumentRecord, ExtractedField, Gender, ParseResult
from mrz_engine.utils.charset import validate_charset
from mrz_engine.utils.dates import DateKind, MRZDateNormalizer
from mrz_engine.utils.names import MRZNameSplitter

logger = logging.getLogger(__name__)

_GENDERS = {
    "M": Gender.MALE,
    "F": Gender.FEMALE,
    "X": Gender.UNSPECIFIED,
    "<": Gender.UNSPECIFIED,
}


def split_mrz_text(text: str) -> list[str]:
    """
    Split a pasted MRZ block into lines.

    Surrounding whitespace is removed from every line and blank lines are dropped.
    """
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return [line.strip() for line in normalized.split("\n") if line.strip()]


class RecordAssembler:
    """Builds a DocumentRecord from raw MRZ lines."""

    def __init__(self, settings: MRZEngineSettings | None = None) -> None:
        self.settings = settings or DEFAULT_SETTINGS

    def assemble(self, lines: Sequence[str], today: date) -> DocumentRecord:
        """
        Run the full pipeline on one MRZ block.

        Args:
            lines: Raw MRZ lines (2 or 3)
            today: Reference date for century resolution

        Returns:
            DocumentRecord with every check result attached

        Raises:
            MRZParseError: On any structural problem
        """
        lines = list(lines)
        if len(lines) not in VALID_LINE_COUNTS:
            raise InvalidLineCount(len(lines))

        validate_charset(lines)
        mrz_format = detect_format(lines)

        extractor = FieldExtractor(get_layout(mrz_format))
        fields = extractor.extract(lines)
        composite = extractor.composite_check(lines)

        name = MRZNameSplitter.split(fields["name"].raw_value)
        birth_date = self._normalize_date(fields["birth_date"], today, DateKind.BIRTH)
        expiry_date = self._normalize_date(fields["expiry_date"], today, DateKind.EXPIRY)

        checks = [field.check for field in fields.values() if field.check is not None]
        if composite is not None:
            checks.append(composite)

        document_code = fields["document_code"].value
        optional_data_2 = fields.get("optional_data_2")

        record = DocumentRecord(
            mrz_format=mrz_format,
            document_type=classify_document_type(document_code),
            document_code=document_code,
            issuing_state=fields["issuing_state"].value,
            document_number=fields["document_number"].value,
            surname=name.surname,
            given_names=name.given_names,
            full_name=name.full_name,
            nationality=fields["nationality"].value,
            birth_date=birth_date,
            sex=self._gender(fields["sex"].raw_value),
            expiry_date=expiry_date,
            optional_data=fields["optional_data"].value,
            optional_data_2=optional_data_2.value if optional_data_2 is not None else "",
            checks=tuple(checks),
        )

        if record.failed_checks:
            failed = [check.field_name for check in record.failed_checks]
            logger.warning(
                "Parsed %s MRZ with failed checks: %s",
                mrz_format.value,
                ", ".join(failed),
                extra={"mrz_format": mrz_format.value, "failed_checks": failed},
            )
        else:
            logger.debug(
                "Parsed %s MRZ, all checks passed", mrz_format.value, extra={"mrz_format": mrz_format.value}
            )
        return record

    def _normalize_date(self, field: ExtractedField, today: date, kind: DateKind) -> date:
        return MRZDateNormalizer.normalize_date(
            field.raw_value,
            today,
            kind,
            expiry_window_years=self.settings.expiry_window_years,
            position=field.position,
        )

    @staticmethod
    def _gender(code: str) -> Gender:
        gender = _GENDERS.get(code)
        if gender is None:
            logger.info("Unrecognized sex code %r, using %s", code, Gender.UNSPECIFIED.value)
            return Gender.UNSPECIFIED
        return gender


def parse(
    lines: Sequence[str] | str,
    today: date | None = None,
    settings: MRZEngineSettings | None = None,
) -> ParseResult:
    """
    Parse an MRZ block into a validated document record.

    Args:
        lines: Ordered MRZ lines; a single string is split on line breaks
        today: Reference date for century resolution, ``date.today()`` if None
        settings: Engine settings, defaults apply if None

    Returns:
        ParseResult holding either the record or the structural error
    """
    if isinstance(lines, str):
        lines = lines.splitlines()
    reference = today if today is not None else date.today()

    try:
        record = RecordAssembler(settings).assemble(lines, reference)
    except MRZParseError as e:
        logger.info(
            "MRZ rejected: %s (%s)", e.error_code.value, e.message, extra={"error_code": e.error_code.value}
        )
        return ParseResult(error=e)
    return ParseResult(record=record)
