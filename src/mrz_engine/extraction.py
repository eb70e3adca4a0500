"""Fixed-column field extraction driven by an MRZLayout."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from mrz_engine.exceptions import FieldOutOfBounds
from mrz_engine.layouts import CompositeSpec, FieldSpec, MRZLayout
from mrz_engine.models.document import ExtractedField
from mrz_engine.models.mrz_validation import CheckResult, MRZPosition
from mrz_engine.utils.checksum import MRZChecksumValidator

logger = logging.getLogger(__name__)


class FieldExtractor:
    """Slices MRZ lines into named fields and validates their check digits."""

    def __init__(self, layout: MRZLayout) -> None:
        self.layout = layout

    def extract(self, lines: Sequence[str]) -> dict[str, ExtractedField]:
        """
        Extract every field of the layout.

        Check digit failures are recorded on the field and never abort.

        Args:
            lines: MRZ lines already matched to this layout

        Returns:
            Fields keyed by name, in layout order

        Raises:
            FieldOutOfBounds: If the layout does not fit the lines
        """
        return {spec.name: self.extract_field(lines, spec) for spec in self.layout.fields}

    def extract_field(self, lines: Sequence[str], spec: FieldSpec) -> ExtractedField:
        line = self._line(lines, spec.name, spec.position)
        if spec.end > len(line):
            raise FieldOutOfBounds(spec.name, spec.position, len(line))
        raw_value = line[spec.start : spec.end]

        check = None
        if spec.check_column is not None:
            check_position = spec.check_position
            if spec.check_column >= len(line):
                raise FieldOutOfBounds(spec.name, check_position, len(line))
            check = MRZChecksumValidator.validate(
                raw_value, line[spec.check_column], spec.name, check_position
            )
            if check.failed:
                logger.info("Check digit mismatch for %s at %s", spec.name, check_position)

        return ExtractedField(name=spec.name, raw_value=raw_value, position=spec.position, check=check)

    def composite_check(self, lines: Sequence[str]) -> CheckResult | None:
        """
        Validate the composite check digit, if the layout defines one.

        Raises:
            FieldOutOfBounds: If a composite segment does not fit the lines
        """
        composite = self.layout.composite
        if composite is None:
            return None

        data = "".join(self._segment_data(lines, composite))
        check_line = self._line(lines, "composite", composite.check_position)
        if composite.check_column >= len(check_line):
            raise FieldOutOfBounds("composite", composite.check_position, len(check_line))

        check = MRZChecksumValidator.validate(
            data, check_line[composite.check_column], "composite", composite.check_position
        )
        if check.failed:
            logger.info("Composite check digit mismatch at %s", composite.check_position)
        return check

    def _segment_data(self, lines: Sequence[str], composite: CompositeSpec) -> list[str]:
        parts = []
        for segment in composite.segments:
            position = MRZPosition(line=segment.line, column=segment.start, length=segment.end - segment.start)
            line = self._line(lines, "composite", position)
            if segment.end > len(line):
                raise FieldOutOfBounds("composite", position, len(line))
            parts.append(line[segment.start : segment.end])
        return parts

    @staticmethod
    def _line(lines: Sequence[str], field_name: str, position: MRZPosition) -> str:
        if position.line >= len(lines):
            raise FieldOutOfBounds(field_name, position, 0)
        return lines[position.line]


def extract_fields(lines: Sequence[str], layout: MRZLayout) -> dict[str, ExtractedField]:
    return FieldExtractor(layout).extract(lines)
