"""JSON export and import of the member list."""

import json
from pathlib import Path
from typing import Sequence

from errors import ImportFormatError
from models import GENDERS, Member

DEFAULT_EXPORT_NAME = "familyTree.json"

_OPTIONAL_STRINGS = ("birthDate", "deathDate")
_RELATION_IDS = ("fatherId", "motherId", "spouseId")


def members_to_json(members: Sequence[Member]) -> str:
    return json.dumps([m.to_dict() for m in members], indent=2, ensure_ascii=False)


def _check_member(index: int, item) -> None:
    where = f"member #{index}"
    if not isinstance(item, dict):
        raise ImportFormatError(f"{where} is not an object")

    for key in ("id", "name"):
        if not isinstance(item.get(key), str) or not item[key]:
            raise ImportFormatError(f"{where} needs a non-empty string {key!r}")

    gender = item.get("gender", "other")
    if gender not in GENDERS:
        raise ImportFormatError(f"{where} has unknown gender {gender!r}")

    for key in _OPTIONAL_STRINGS:
        if item.get(key) is not None and not isinstance(item[key], str):
            raise ImportFormatError(f"{where} field {key!r} must be a string")

    relations = item.get("relations", {})
    if not isinstance(relations, dict):
        raise ImportFormatError(f"{where} relations must be an object")
    for key in _RELATION_IDS:
        if relations.get(key) is not None and not isinstance(relations[key], str):
            raise ImportFormatError(f"{where} relation {key!r} must be a string id")
    children = relations.get("childrenIds", [])
    if not isinstance(children, list) or not all(isinstance(c, str) for c in children):
        raise ImportFormatError(f"{where} childrenIds must be a list of string ids")
    if item["id"] in children:
        raise ImportFormatError(f"{where} lists itself as its own child")


def members_from_json(text: str) -> list[Member]:
    """
    Parse and validate a JSON array of member objects.

    Raises:
        ImportFormatError: if the text is not JSON, not an array, or any
            element is not member-shaped. Nothing is returned in that case.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ImportFormatError(f"Invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise ImportFormatError("Expected a JSON array of members")

    seen: set[str] = set()
    for index, item in enumerate(data):
        _check_member(index, item)
        if item["id"] in seen:
            raise ImportFormatError(f"Duplicate member id {item['id']!r}")
        seen.add(item["id"])

    return [Member.from_dict(item) for item in data]


def export_members(members: Sequence[Member], path: Path) -> Path:
    """Write the member list to a JSON file."""
    path.write_text(members_to_json(members) + "\n", encoding="utf-8")
    return path


def load_members(path: Path) -> list[Member]:
    """Read and validate a member list exported by export_members."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ImportFormatError(f"Failed to read {path}: {e}") from e
    return members_from_json(text)
