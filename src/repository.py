"""SQLite-backed member repository that keeps relations symmetric."""

from dataclasses import replace
import json
import logging
from pathlib import Path
import sqlite3
from typing import Iterable

from errors import MemberNotFoundError
from models import GENDERS, Member, Relations

logger = logging.getLogger(__name__)

MEMBERS_KEY = "familyTree"
VERSION_KEY = "layoutVersion"

PARENT_ROLES = ("father", "mother")

# Members of gender "other" may take either role
_EXCLUDED_GENDER = {"father": "female", "mother": "male"}


def create_database(db_path: Path | str) -> sqlite3.Connection:
    """Create the key/value table used to persist the member list."""
    conn = sqlite3.connect(str(db_path))
    cursor = conn.cursor()

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS kv (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        )
    """)

    conn.commit()
    return conn


def _copy(member: Member) -> Member:
    relations = replace(member.relations, children_ids=list(member.relations.children_ids))
    return replace(member, relations=relations)


class MemberRepository:
    """
    CRUD over the persisted member list.

    Every mutation loads the list, applies the change to both sides of any
    symmetric relation, and writes the whole list back in one transaction.
    Callers only ever receive copies, so a snapshot handed to the layout
    engine cannot be changed underneath it.
    """

    def __init__(self, db_path: Path | str = ":memory:"):
        self.db_path = db_path
        self.conn = create_database(db_path)

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "MemberRepository":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    def _read(self, key: str) -> str | None:
        cursor = self.conn.cursor()
        cursor.execute("SELECT value FROM kv WHERE key = ?", (key,))
        row = cursor.fetchone()
        return row[0] if row else None

    def _load(self) -> list[Member]:
        raw = self._read(MEMBERS_KEY)
        if raw is None:
            return []
        return [Member.from_dict(item) for item in json.loads(raw)]

    def _save(self, members: list[Member], version: int | None = None) -> None:
        if version is None:
            version = self.layout_version + 1
        with self.conn:
            self.conn.executemany(
                "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)",
                [
                    (MEMBERS_KEY, json.dumps([m.to_dict() for m in members])),
                    (VERSION_KEY, str(version)),
                ],
            )

    @property
    def layout_version(self) -> int:
        """Counter bumped on every mutation; lets the UI force a fresh layout."""
        raw = self._read(VERSION_KEY)
        return int(raw) if raw else 0

    def touch(self) -> int:
        """Bump the layout version without changing any member."""
        self._save(self._load())
        return self.layout_version

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all(self) -> list[Member]:
        return [_copy(m) for m in self._load()]

    def get(self, member_id: str) -> Member:
        for member in self._load():
            if member.id == member_id:
                return member
        raise MemberNotFoundError(member_id)

    def __len__(self) -> int:
        return len(self._load())

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, member: Member) -> Member:
        """
        Add a new member and link it into its parents and spouse.

        The new member's own childrenIds are linked as well, so adding a
        parent after its children keeps both sides consistent.
        """
        members = self._load()
        by_id = {m.id: m for m in members}
        if member.id in by_id:
            raise ValueError(f"Member id {member.id!r} already exists")
        if member.gender not in GENDERS:
            raise ValueError(f"Unknown gender {member.gender!r}")
        if not member.name.strip():
            raise ValueError("Name is required")

        relations = member.relations
        new = replace(member, relations=Relations(children_ids=[]))
        members.append(new)
        by_id[new.id] = new

        if relations.father_id:
            _link_parent(by_id, new.id, relations.father_id, "father")
        if relations.mother_id:
            _link_parent(by_id, new.id, relations.mother_id, "mother")
        if relations.spouse_id:
            _link_spouse(by_id, new.id, relations.spouse_id)
        role = "mother" if new.gender == "female" else "father"
        for child_id in relations.children_ids:
            child = by_id.get(child_id)
            if child is None:
                logger.warning("Ignoring unknown child %s of new member %s", child_id, new.id)
            elif getattr(child.relations, f"{role}_id"):
                logger.warning("Child %s already has a %s, not linking %s", child_id, role, new.id)
            else:
                _link_parent(by_id, child_id, new.id, role)

        self._save(members)
        logger.debug("Added member %s", new.id)
        return _copy(new)

    def update(self, member_id: str, **changes) -> Member:
        """
        Update fields of a member.

        Accepts name, gender, birth_date, death_date, and the relation fields
        father_id, mother_id and spouse_id; relation changes go through the
        symmetric link operations.
        """
        relation_fields = {k: changes.pop(k) for k in ("father_id", "mother_id", "spouse_id") if k in changes}
        unknown = set(changes) - {"name", "gender", "birth_date", "death_date"}
        if unknown:
            raise ValueError(f"Cannot update field(s): {', '.join(sorted(unknown))}")
        if "gender" in changes and changes["gender"] not in GENDERS:
            raise ValueError(f"Unknown gender {changes['gender']!r}")
        if "name" in changes and not (changes["name"] or "").strip():
            raise ValueError("Name is required")

        members = self._load()
        by_id = {m.id: m for m in members}
        if member_id not in by_id:
            raise MemberNotFoundError(member_id)

        member = by_id[member_id]
        if "name" in changes:
            member.name = changes.pop("name").strip()
        for key, value in changes.items():
            # Empty dates clear the field
            setattr(member, key, value or None)

        if "father_id" in relation_fields:
            _link_parent(by_id, member_id, relation_fields["father_id"], "father")
        if "mother_id" in relation_fields:
            _link_parent(by_id, member_id, relation_fields["mother_id"], "mother")
        if "spouse_id" in relation_fields:
            _link_spouse(by_id, member_id, relation_fields["spouse_id"])

        self._save(members)
        return _copy(member)

    def set_spouse(self, member_id: str, spouse_id: str | None) -> None:
        """Marry two members (or divorce with None), unlinking previous partners."""
        members = self._load()
        _link_spouse({m.id: m for m in members}, member_id, spouse_id)
        self._save(members)

    def set_parent(self, child_id: str, parent_id: str | None, role: str) -> None:
        """Set (or clear with None) a child's father or mother on both sides."""
        members = self._load()
        _link_parent({m.id: m for m in members}, child_id, parent_id, role)
        self._save(members)

    def delete(self, member_id: str) -> None:
        """Remove a member and every reference to it."""
        members = self._load()
        if not any(m.id == member_id for m in members):
            raise MemberNotFoundError(member_id)

        remaining = [m for m in members if m.id != member_id]
        for m in remaining:
            relations = m.relations
            if relations.father_id == member_id:
                relations.father_id = None
            if relations.mother_id == member_id:
                relations.mother_id = None
            if relations.spouse_id == member_id:
                relations.spouse_id = None
            relations.children_ids = [c for c in relations.children_ids if c != member_id]

        self._save(remaining)
        logger.debug("Deleted member %s", member_id)

    def replace_all(self, members: Iterable[Member]) -> None:
        """Replace the whole list, e.g. after an import. Input is stored as given."""
        self._save([_copy(m) for m in members])

    def clear(self) -> None:
        self._save([])


def _require(by_id: dict[str, Member], member_id: str) -> Member:
    if member_id not in by_id:
        raise MemberNotFoundError(member_id)
    return by_id[member_id]


def _link_spouse(by_id: dict[str, Member], member_id: str, spouse_id: str | None) -> None:
    member = _require(by_id, member_id)
    if spouse_id == member_id:
        raise ValueError("A member cannot be their own spouse")
    spouse = _require(by_id, spouse_id) if spouse_id else None

    # Detach both sides from any previous partner
    for person in (member, spouse):
        if person is None:
            continue
        old = by_id.get(person.relations.spouse_id or "")
        if old is not None and old.relations.spouse_id == person.id:
            old.relations.spouse_id = None
        person.relations.spouse_id = None

    if spouse is not None:
        member.relations.spouse_id = spouse.id
        spouse.relations.spouse_id = member.id


def _link_parent(by_id: dict[str, Member], child_id: str, parent_id: str | None, role: str) -> None:
    if role not in PARENT_ROLES:
        raise ValueError(f"Parent role must be one of {PARENT_ROLES}, got {role!r}")
    child = _require(by_id, child_id)
    if parent_id == child_id:
        raise ValueError("A member cannot be their own parent")
    parent = _require(by_id, parent_id) if parent_id else None
    if parent is not None and parent.gender == _EXCLUDED_GENDER[role]:
        raise ValueError(f"A {parent.gender} member cannot be a {role}")
    if parent is not None and parent.id in child.relations.children_ids:
        raise ValueError(f"{parent.id} is already a child of {child_id}")

    field_name = f"{role}_id"
    old_parent = by_id.get(getattr(child.relations, field_name) or "")
    if old_parent is not None:
        other_field = "mother_id" if role == "father" else "father_id"
        # Keep the link if the old parent is also the other parent
        if getattr(child.relations, other_field) != old_parent.id:
            old_parent.relations.children_ids = [
                c for c in old_parent.relations.children_ids if c != child_id
            ]

    setattr(child.relations, field_name, parent.id if parent else None)
    if parent is not None and child_id not in parent.relations.children_ids:
        parent.relations.children_ids.append(child_id)
