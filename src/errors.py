"""Anomalies reported by the layout engine and errors raised by the repository."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Anomaly:
    """A recoverable data problem noticed during a layout pass."""

    message: str
    member_ids: tuple[str, ...] = ()

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


@dataclass(frozen=True)
class MissingPositionAnomaly(Anomaly):
    """A junction's parent or first child has no computed position."""


@dataclass(frozen=True)
class MalformedDateAnomaly(Anomaly):
    """A date string has no extractable 4-digit year."""


@dataclass(frozen=True)
class DataIntegrityAnomaly(Anomaly):
    """A dangling relation id or an asymmetric spouse/parent link."""


class ImportFormatError(ValueError):
    """Imported content is not a JSON array of member objects."""


class MemberNotFoundError(KeyError):
    """No member with the given id exists in the repository."""

    def __init__(self, member_id: str):
        super().__init__(member_id)
        self.member_id = member_id

    def __str__(self) -> str:
        return f"No member with id {self.member_id!r}"
