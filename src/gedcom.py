"""Import members from a GEDCOM file."""

import logging
from pathlib import Path

from ged4py.parser import GedcomReader, ParserError

from errors import ImportFormatError
from models import Member, Relations
from parsing import parse_date_string

logger = logging.getLogger(__name__)

SEX_TO_GENDER = {"M": "male", "F": "female"}


def member_id_from_xref(xref_id: str) -> str:
    """Turn a GEDCOM xref like '@I123@' into a member id 'I123'."""
    member_id = xref_id.strip().strip("@")
    if not member_id:
        raise ValueError(f"Empty GEDCOM xref: {xref_id!r}")
    return member_id


def extract_name(indi) -> str:
    """Full display name from an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return "Unknown"

    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(name_rec.value, tuple):
        parts = [p for p in name_rec.value if p]
        return " ".join(parts) if parts else "Unknown"

    # Fallback: string format "Given /Surname/"
    return " ".join(str(name_rec.value).replace("/", " ").split()) or "Unknown"


def extract_event_date(indi, tag: str) -> str | None:
    """Event date (BIRT, DEAT) as ISO string, or the raw text if it does not parse."""
    event = indi.sub_tag(tag)
    if event is None:
        return None

    date_rec = event.sub_tag("DATE")
    if date_rec is None or not date_rec.value:
        return None

    # ged4py may return DateValue objects
    raw = str(date_rec.value)
    return parse_date_string(raw) or raw


def extract_gender(indi) -> str:
    sex_rec = indi.sub_tag("SEX")
    return SEX_TO_GENDER.get(sex_rec.value if sex_rec else None, "other")


def _xref_member(by_id: dict[str, Member], rec) -> Member | None:
    if rec is None or not rec.xref_id:
        return None
    return by_id.get(member_id_from_xref(rec.xref_id))


def _members_from_reader(reader: GedcomReader) -> list[Member]:
    members: list[Member] = []
    by_id: dict[str, Member] = {}

    # First pass: extract all individuals
    for rec in reader.records0("INDI"):
        if rec.xref_id is None:
            continue

        member = Member(
            id=member_id_from_xref(rec.xref_id),
            name=extract_name(rec),
            gender=extract_gender(rec),
            birth_date=extract_event_date(rec, "BIRT"),
            death_date=extract_event_date(rec, "DEAT"),
            relations=Relations(),
        )
        members.append(member)
        by_id[member.id] = member

    # Second pass: link families
    for rec in reader.records0("FAM"):
        husband = _xref_member(by_id, rec.sub_tag("HUSB"))
        wife = _xref_member(by_id, rec.sub_tag("WIFE"))

        if husband and wife:
            if husband.relations.spouse_id is None and wife.relations.spouse_id is None:
                husband.relations.spouse_id = wife.id
                wife.relations.spouse_id = husband.id
            else:
                logger.info("Skipping additional marriage %s + %s", husband.id, wife.id)

        for child_rec in rec.sub_tags("CHIL"):
            child = _xref_member(by_id, child_rec)
            if child is None:
                continue
            if husband and child.relations.father_id is None:
                child.relations.father_id = husband.id
                if child.id not in husband.relations.children_ids:
                    husband.relations.children_ids.append(child.id)
            if wife and child.relations.mother_id is None:
                child.relations.mother_id = wife.id
                if child.id not in wife.relations.children_ids:
                    wife.relations.children_ids.append(child.id)

    return members


def read_gedcom(filepath: Path) -> list[Member]:
    """
    Read individuals and families from a GEDCOM file into members.

    HUSB becomes the father and WIFE the mother of every CHIL in a family.
    Members hold a single spouse, so only the first family that pairs a
    person is kept as their marriage.

    Raises:
        ImportFormatError: if the file cannot be opened or parsed.
    """
    try:
        with GedcomReader(str(filepath)) as reader:
            members = _members_from_reader(reader)
    except (OSError, UnicodeDecodeError, ParserError) as e:
        raise ImportFormatError(f"Cannot read GEDCOM file {filepath}: {e}") from e

    logger.debug("Read %d members from %s", len(members), filepath)
    return members
