"""Character-level validation for MRZ lines."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import ClassVar

from mrz_engine.exceptions import InvalidCharacter

logger = logging.getLogger(__name__)


class MRZCharacterValidator:
    """Checks that every character belongs to the MRZ alphabet."""

    VALID_CHARACTERS: ClassVar[frozenset[str]] = frozenset(
        "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789<"
    )

    # Common OCR confusions, used only to enrich the error suggestion
    OCR_HINTS: ClassVar[dict[str, str]] = {
        " ": "<",
        "«": "<",
        "‹": "<",
        "o": "O",
        "l": "I",
    }

    @classmethod
    def find_invalid_characters(cls, lines: Sequence[str]) -> list[InvalidCharacter]:
        """
        Collect every invalid character.

        Args:
            lines: Raw MRZ lines

        Returns:
            Errors ordered by line, then column
        """
        errors = []
        for line_index, line in enumerate(lines):
            for column, char in enumerate(line):
                if char not in cls.VALID_CHARACTERS:
                    error = InvalidCharacter(line_index, column, char)
                    hint = cls.OCR_HINTS.get(char)
                    if hint is not None:
                        error.suggestion = f"Consider {hint!r} (common OCR error)"
                    errors.append(error)
        return errors

    @classmethod
    def validate(cls, lines: Sequence[str]) -> None:
        """
        Raise on the first invalid character.

        Raises:
            InvalidCharacter: If any character is outside A-Z, 0-9 and '<'
        """
        errors = cls.find_invalid_characters(lines)
        if errors:
            logger.debug("Rejected MRZ with %d invalid character(s)", len(errors))
            raise errors[0]


def find_invalid_characters(lines: Sequence[str]) -> list[InvalidCharacter]:
    return MRZCharacterValidator.find_invalid_characters(lines)


def validate_charset(lines: Sequence[str]) -> None:
    MRZCharacterValidator.validate(lines)
