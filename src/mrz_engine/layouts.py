"""
Fixed-column layouts of the MRZ formats (ICAO Doc 9303 Parts 4-7).

Each format maps to one immutable MRZLayout. Adding a layout is a pure data
addition; the extractor never branches on the format.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from mrz_engine.models.mrz_validation import MRZFormat, MRZPosition


@dataclass(frozen=True)
class FieldSpec:
    """Column range of one field, with the column of its check digit if any."""

    name: str
    line: int
    start: int
    length: int
    check_column: int | None = None

    @property
    def end(self) -> int:
        return self.start + self.length

    @property
    def checked(self) -> bool:
        return self.check_column is not None

    @property
    def position(self) -> MRZPosition:
        return MRZPosition(line=self.line, column=self.start, length=self.length)

    @property
    def check_position(self) -> MRZPosition | None:
        if self.check_column is None:
            return None
        return MRZPosition(line=self.line, column=self.check_column)


@dataclass(frozen=True)
class Segment:
    """Half-open column range [start, end) of one line."""

    line: int
    start: int
    end: int


@dataclass(frozen=True)
class CompositeSpec:
    """Input segments of the composite check and the column of its digit."""

    segments: tuple[Segment, ...]
    check_line: int
    check_column: int

    @property
    def check_position(self) -> MRZPosition:
        return MRZPosition(line=self.check_line, column=self.check_column)


@dataclass(frozen=True)
class MRZLayout:
    """Field layout of one MRZ format."""

    mrz_format: MRZFormat
    fields: tuple[FieldSpec, ...]
    composite: CompositeSpec | None = None

    def field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)


def _two_line_header(name_length: int) -> tuple[FieldSpec, ...]:
    return (
        FieldSpec("document_code", 0, 0, 2),
        FieldSpec("issuing_state", 0, 2, 3),
        FieldSpec("name", 0, 5, name_length),
    )


def _two_line_body(optional_length: int, optional_check: int | None = None) -> tuple[FieldSpec, ...]:
    return (
        FieldSpec("document_number", 1, 0, 9, check_column=9),
        FieldSpec("nationality", 1, 10, 3),
        FieldSpec("birth_date", 1, 13, 6, check_column=19),
        FieldSpec("sex", 1, 20, 1),
        FieldSpec("expiry_date", 1, 21, 6, check_column=27),
        FieldSpec("optional_data", 1, 28, optional_length, check_column=optional_check),
    )


def _two_line_composite(end: int) -> CompositeSpec:
    # document number + check, birth date + check, expiry date through the optional data
    return CompositeSpec(
        segments=(Segment(1, 0, 10), Segment(1, 13, 20), Segment(1, 21, end)),
        check_line=1,
        check_column=end,
    )


TD1_LAYOUT = MRZLayout(
    mrz_format=MRZFormat.TD1,
    fields=(
        FieldSpec("document_code", 0, 0, 2),
        FieldSpec("issuing_state", 0, 2, 3),
        FieldSpec("document_number", 0, 5, 9, check_column=14),
        FieldSpec("optional_data", 0, 15, 15),
        FieldSpec("birth_date", 1, 0, 6, check_column=6),
        FieldSpec("sex", 1, 7, 1),
        FieldSpec("expiry_date", 1, 8, 6, check_column=14),
        FieldSpec("nationality", 1, 15, 3),
        FieldSpec("optional_data_2", 1, 18, 11),
        FieldSpec("name", 2, 0, 30),
    ),
)

TD2_LAYOUT = MRZLayout(
    mrz_format=MRZFormat.TD2,
    fields=_two_line_header(31) + _two_line_body(7),
)

TD3_LAYOUT = MRZLayout(
    mrz_format=MRZFormat.TD3,
    fields=_two_line_header(39) + _two_line_body(14, optional_check=42),
    composite=_two_line_composite(43),
)

MRV_A_LAYOUT = MRZLayout(
    mrz_format=MRZFormat.MRV_A,
    fields=_two_line_header(39) + _two_line_body(15),
    composite=_two_line_composite(43),
)

MRV_B_LAYOUT = MRZLayout(
    mrz_format=MRZFormat.MRV_B,
    fields=_two_line_header(31) + _two_line_body(7),
    composite=_two_line_composite(35),
)

LAYOUTS: MappingProxyType[MRZFormat, MRZLayout] = MappingProxyType(
    {
        MRZFormat.TD1: TD1_LAYOUT,
        MRZFormat.TD2: TD2_LAYOUT,
        MRZFormat.TD3: TD3_LAYOUT,
        MRZFormat.MRV_A: MRV_A_LAYOUT,
        MRZFormat.MRV_B: MRV_B_LAYOUT,
    }
)


def get_layout(mrz_format: MRZFormat) -> MRZLayout:
    return LAYOUTS[mrz_format]
