"""Name field decoding: PRIMARY<<SECONDARY<ADDITIONAL<<<..."""

from __future__ import annotations

from mrz_engine.models.document import FILLER, NAME_SEPARATOR, NameParts


class MRZNameSplitter:
    """Splits the composite MRZ name field into surname and given names."""

    @staticmethod
    def normalize_segment(segment: str) -> str:
        """Replace filler runs with single spaces and trim."""
        return " ".join(segment.replace(FILLER, " ").split())

    @classmethod
    def split(cls, raw_name: str) -> NameParts:
        """
        Decode a filler-padded name field.

        Everything before the first ``<<`` is the surname, everything after it
        the given names. Without a separator the whole field is the surname.

        Args:
            raw_name: Name field exactly as sliced from the MRZ

        Returns:
            NameParts with normalized surname and given names
        """
        surname, separator, given_names = raw_name.partition(NAME_SEPARATOR)
        if not separator:
            given_names = ""
        return NameParts(
            surname=cls.normalize_segment(surname),
            given_names=cls.normalize_segment(given_names),
        )


def split_name(raw_name: str) -> NameParts:
    return MRZNameSplitter.split(raw_name)
