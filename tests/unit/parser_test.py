import logging
from datetime import date

import pytest

from mrz_engine import (
    InconsistentLineLength,
    InvalidCalendarDate,
    InvalidCharacter,
    InvalidDateDigits,
    InvalidLineCount,
    MRZEngineSettings,
    RecordAssembler,
    UnrecognizedFormat,
    parse,
    split_mrz_text,
)
from mrz_engine.models import CheckStatus, DocumentType, Gender, MRZErrorCode, MRZFormat


def _replace(line: str, column: int, char: str) -> str:
    return line[:column] + char + line[column + 1 :]


class TestTD1:
    """Three-line identity cards."""

    def test_parse_td1_mrz(self, td1_mrz, reference_date):
        result = parse(td1_mrz, today=reference_date)

        assert result.is_ok
        record = result.unwrap()
        assert record.mrz_format == MRZFormat.TD1
        assert record.document_type == DocumentType.ID_CARD
        assert record.document_code == "I"
        assert record.issuing_state == "UTO"
        assert record.document_number == "D23145890"
        assert record.surname == "ERIKSSON"
        assert record.given_names == "ANNA MARIA"
        assert record.full_name == "ERIKSSON<<ANNA MARIA"
        assert record.nationality == "UTO"
        assert record.birth_date == date(1974, 8, 12)
        assert record.sex == Gender.FEMALE
        assert record.expiry_date == date(2012, 4, 15)
        assert record.optional_data == ""
        assert record.optional_data_2 == ""

    def test_td1_checks_in_layout_order(self, td1_mrz, reference_date):
        record = parse(td1_mrz, today=reference_date).unwrap()

        assert [check.field_name for check in record.checks] == [
            "document_number",
            "birth_date",
            "expiry_date",
        ]
        assert all(check.status == CheckStatus.PASS for check in record.checks)
        assert record.composite_check is None
        assert record.all_checks_passed

    def test_td1_optional_data_and_compound_surname(self, reference_date):
        lines = [
            "I<NLDXI85935F86999999990<<<<<<",
            "7208148F1108268NLD<<<<<<<<<<<4",
            "VAN<DER<STEEN<<MARIANNE<LOUISE",
        ]

        record = parse(lines, today=reference_date).unwrap()

        assert record.issuing_state == "NLD"
        assert record.document_number == "XI85935F8"
        assert record.optional_data == "999999990"
        assert record.birth_date == date(1972, 8, 14)
        assert record.expiry_date == date(2011, 8, 26)
        assert record.surname == "VAN DER STEEN"
        assert record.given_names == "MARIANNE LOUISE"
        assert record.all_checks_passed


class TestTD2:
    def test_parse_td2_mrz(self, td2_mrz, reference_date):
        record = parse(td2_mrz, today=reference_date).unwrap()

        assert record.mrz_format == MRZFormat.TD2
        assert record.document_type == DocumentType.ID_CARD
        assert record.document_number == "D23145890"
        assert record.surname == "ERIKSSON"
        assert record.given_names == "ANNA MARIA"
        assert record.birth_date == date(1974, 8, 12)
        assert record.expiry_date == date(2012, 4, 15)
        assert record.optional_data == ""
        assert len(record.checks) == 3
        assert record.composite_check is None
        assert record.all_checks_passed


class TestTD3:
    """Passport booklets."""

    def test_parse_td3_mrz(self, td3_mrz, reference_date):
        record = parse(td3_mrz, today=reference_date).unwrap()

        assert record.mrz_format == MRZFormat.TD3
        assert record.document_type == DocumentType.PASSPORT
        assert record.document_code == "P"
        assert record.document_number == "L898902C3"
        assert record.surname == "ERIKSSON"
        assert record.given_names == "ANNA MARIA"
        assert record.birth_date == date(1974, 8, 12)
        assert record.expiry_date == date(2012, 4, 15)
        assert record.optional_data == "ZE184226B"
        assert record.sex == Gender.FEMALE

    def test_td3_checks_include_optional_data_and_composite(self, td3_mrz, reference_date):
        record = parse(td3_mrz, today=reference_date).unwrap()

        assert [check.field_name for check in record.checks] == [
            "document_number",
            "birth_date",
            "expiry_date",
            "optional_data",
            "composite",
        ]
        assert record.composite_check.status == CheckStatus.PASS
        assert record.all_checks_passed

    def test_corrupted_document_number_check_is_reported(self, td3_mrz, reference_date, caplog):
        td3_mrz[1] = _replace(td3_mrz[1], 9, "5")

        with caplog.at_level(logging.WARNING, logger="mrz_engine"):
            result = parse(td3_mrz, today=reference_date)

        assert result.is_ok
        record = result.record
        check = record.get_check("document_number")
        assert check.status == CheckStatus.FAIL
        assert check.expected == "5"
        assert check.computed == 6
        # the check digit itself is part of the composite input
        assert record.composite_check.status == CheckStatus.FAIL
        assert not record.all_checks_passed
        assert [c.field_name for c in record.failed_checks] == ["document_number", "composite"]
        assert "failed checks: document_number, composite" in caplog.text

    def test_corrupted_composite_only_fails_composite(self, td3_mrz, reference_date):
        td3_mrz[1] = _replace(td3_mrz[1], 43, "1")

        record = parse(td3_mrz, today=reference_date).unwrap()

        assert [c.field_name for c in record.failed_checks] == ["composite"]
        assert record.composite_check.computed == 0

    def test_sex_filler_is_unspecified(self, td3_mrz, reference_date):
        td3_mrz[1] = _replace(td3_mrz[1], 20, "<")

        record = parse(td3_mrz, today=reference_date).unwrap()

        assert record.sex == Gender.UNSPECIFIED

    def test_unknown_sex_code_is_unspecified(self, td3_mrz, reference_date):
        td3_mrz[1] = _replace(td3_mrz[1], 20, "Q")

        assert parse(td3_mrz, today=reference_date).unwrap().sex == Gender.UNSPECIFIED

    def test_male(self, td3_mrz, reference_date):
        td3_mrz[1] = _replace(td3_mrz[1], 20, "M")

        assert parse(td3_mrz, today=reference_date).unwrap().sex == Gender.MALE

    def test_unknown_document_code_is_accepted(self, td3_mrz, reference_date):
        td3_mrz[0] = _replace(td3_mrz[0], 0, "X")

        record = parse(td3_mrz, today=reference_date).unwrap()

        assert record.mrz_format == MRZFormat.TD3
        assert record.document_type == DocumentType.UNKNOWN
        assert record.document_code == "X"


class TestVisas:
    def test_parse_mrv_a(self, mrv_a_mrz, reference_date):
        record = parse(mrv_a_mrz, today=reference_date).unwrap()

        assert record.mrz_format == MRZFormat.MRV_A
        assert record.document_type == DocumentType.VISA
        assert record.document_number == "L8988901C"
        assert record.nationality == "XXX"
        assert record.birth_date == date(1940, 9, 7)
        assert record.expiry_date == date(1996, 12, 10)
        assert record.optional_data == "6ZE184226B"
        assert record.composite_check.status == CheckStatus.NOT_APPLICABLE
        assert record.all_checks_passed

    def test_parse_mrv_b(self, mrv_b_mrz, reference_date):
        record = parse(mrv_b_mrz, today=reference_date).unwrap()

        assert record.mrz_format == MRZFormat.MRV_B
        assert record.document_type == DocumentType.VISA
        assert record.document_number == "L8988901C"
        assert record.surname == "ERIKSSON"
        assert record.given_names == "ANNA MARIA"
        assert record.optional_data == ""
        assert record.composite_check.status == CheckStatus.NOT_APPLICABLE

    def test_mrv_b_composite_digit_is_validated(self, mrv_b_mrz, reference_date):
        mrv_b_mrz[1] = _replace(mrv_b_mrz[1], 35, "6")

        record = parse(mrv_b_mrz, today=reference_date).unwrap()

        assert record.composite_check.status == CheckStatus.PASS
        assert record.composite_check.computed == 6


class TestStructuralErrors:
    @pytest.mark.parametrize("count", [0, 1, 4])
    def test_invalid_line_count(self, td1_mrz, reference_date, count):
        result = parse((td1_mrz * 2)[:count], today=reference_date)

        assert not result.is_ok
        assert result.record is None
        assert isinstance(result.error, InvalidLineCount)

    def test_short_line(self, td1_mrz, reference_date):
        td1_mrz[1] = td1_mrz[1][:29]

        result = parse(td1_mrz, today=reference_date)

        assert isinstance(result.error, InconsistentLineLength)
        assert result.error.line == 1
        with pytest.raises(InconsistentLineLength):
            result.unwrap()

    def test_unrecognized_format(self, reference_date):
        result = parse(["P" * 40, "P" * 40], today=reference_date)

        assert isinstance(result.error, UnrecognizedFormat)

    def test_invalid_character_checked_before_geometry(self, td1_mrz, reference_date):
        td1_mrz[0] = td1_mrz[0].lower()
        td1_mrz[1] = td1_mrz[1][:29]

        result = parse(td1_mrz, today=reference_date)

        assert isinstance(result.error, InvalidCharacter)
        assert result.error.line == 0

    def test_non_digit_birth_date(self, td3_mrz, reference_date):
        td3_mrz[1] = _replace(td3_mrz[1], 15, "O")

        result = parse(td3_mrz, today=reference_date)

        assert isinstance(result.error, InvalidDateDigits)
        assert result.error.field_name == "birth_date"
        assert result.error.position.column == 13

    def test_impossible_expiry_date(self, td1_mrz, reference_date):
        td1_mrz[1] = _replace(td1_mrz[1], 10, "1")
        td1_mrz[1] = _replace(td1_mrz[1], 11, "3")

        result = parse(td1_mrz, today=reference_date)

        assert isinstance(result.error, InvalidCalendarDate)
        assert result.error.field_name == "expiry_date"

    def test_error_converts_to_validation_error(self, reference_date):
        error = parse(["P" * 44], today=reference_date).error.to_validation_error()

        assert error.code == MRZErrorCode.INVALID_LINE_COUNT
        assert error.actual_value == "1"


class TestParseEntryPoint:
    def test_parse_is_deterministic(self, td3_mrz, reference_date):
        first = parse(td3_mrz, today=reference_date).unwrap()
        second = parse(td3_mrz, today=reference_date).unwrap()

        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_parse_accepts_text_block(self, td3_mrz, reference_date):
        record = parse("\n".join(td3_mrz), today=reference_date).unwrap()

        assert record.document_number == "L898902C3"

    def test_parse_defaults_reference_date_to_today(self, td3_mrz):
        record = parse(td3_mrz).unwrap()

        assert record.birth_date == date(1974, 8, 12)

    def test_expiry_window_from_settings(self, td3_mrz):
        settings = MRZEngineSettings(expiry_window_years=10)

        # 2012 is more than ten years before 2024
        record = parse(td3_mrz, today=date(2024, 6, 1), settings=settings).unwrap()

        assert record.expiry_date == date(2112, 4, 15)

    def test_assembler_raises_structural_errors(self, reference_date):
        with pytest.raises(InvalidLineCount):
            RecordAssembler().assemble([], reference_date)

    def test_split_mrz_text(self):
        text = "  P<UTO\r\n\r\nL898\n  "

        assert split_mrz_text(text) == ["P<UTO", "L898"]
