"""
Check digit calculation following ICAO Doc 9303 Part 3, Section 4.9.

Character mapping:
- 0-9 → 0-9
- A-Z → 10-35
- < → 0
"""

from __future__ import annotations

from typing import ClassVar

from mrz_engine.models.mrz_validation import CheckResult, CheckStatus, MRZPosition

FILLER = "<"


class MRZChecksumValidator:
    """Check digit computation and validation for MRZ fields."""

    # ICAO weight pattern: 7, 3, 1, 7, 3, 1, ...
    WEIGHT_PATTERN: ClassVar[tuple[int, ...]] = (7, 3, 1)

    @classmethod
    def char_value(cls, char: str) -> int:
        """
        Numeric value of a single MRZ character.

        Raises:
            ValueError: If the character is outside the MRZ alphabet
        """
        if char == FILLER:
            return 0
        if "0" <= char <= "9":
            return ord(char) - ord("0")
        if "A" <= char <= "Z":
            return ord(char) - ord("A") + 10
        msg = f"Character {char!r} is not part of the MRZ alphabet"
        raise ValueError(msg)

    @classmethod
    def compute_check_digit(cls, data: str) -> int:
        """
        Calculate the check digit of a data string.

        Args:
            data: MRZ characters covered by the check digit

        Returns:
            Check digit (0-9)
        """
        total = 0
        for i, char in enumerate(data):
            total += cls.char_value(char) * cls.WEIGHT_PATTERN[i % 3]
        return total % 10

    @classmethod
    def validate(
        cls,
        data: str,
        expected: str,
        field_name: str = "",
        position: MRZPosition | None = None,
    ) -> CheckResult:
        """
        Validate a check digit character against its data.

        A filler in the check digit column means no check is required and
        yields NOT_APPLICABLE.

        Args:
            data: Data covered by the check digit
            expected: Character found in the check digit column
            field_name: Name reported on the result
            position: Position of the check digit

        Returns:
            CheckResult with the outcome and the computed digit
        """
        computed = cls.compute_check_digit(data)
        if expected == FILLER:
            status = CheckStatus.NOT_APPLICABLE
        elif len(expected) == 1 and "0" <= expected <= "9" and int(expected) == computed:
            status = CheckStatus.PASS
        else:
            status = CheckStatus.FAIL
        return CheckResult(
            field_name=field_name,
            status=status,
            expected=expected,
            computed=computed,
            position=position,
        )


def compute_check_digit(data: str) -> int:
    return MRZChecksumValidator.compute_check_digit(data)


def validate(
    data: str, expected: str, field_name: str = "", position: MRZPosition | None = None
) -> CheckResult:
    return MRZChecksumValidator.validate(data, expected, field_name, position)
