"""Data classes for family tree members and diagram output."""

from dataclasses import dataclass, field
import uuid

GENDERS = ("male", "female", "other")

# Edge roles used by the renderer for styling
PARENT_LINK = "parent"
SPOUSE_LINK = "spouse"

# Node kinds
MEMBER_NODE = "member"
JUNCTION_NODE = "junction"


def generate_id() -> str:
    """Generate a random id for a new member."""
    return uuid.uuid4().hex[:12]


@dataclass
class Relations:
    father_id: str | None = None
    mother_id: str | None = None
    spouse_id: str | None = None
    children_ids: list[str] = field(default_factory=list)


@dataclass
class Member:
    id: str
    name: str
    gender: str = "other"  # male, female, other
    birth_date: str | None = None  # may hold only a year, e.g. "1930"
    death_date: str | None = None
    relations: Relations = field(default_factory=Relations)

    def parent_ids(self) -> list[str]:
        """Return the father and mother ids that are set, father first."""
        return [p for p in (self.relations.father_id, self.relations.mother_id) if p]

    def to_dict(self) -> dict:
        """Serialize to the camelCase interchange shape, omitting unset fields."""
        relations: dict = {}
        if self.relations.father_id:
            relations["fatherId"] = self.relations.father_id
        if self.relations.mother_id:
            relations["motherId"] = self.relations.mother_id
        if self.relations.spouse_id:
            relations["spouseId"] = self.relations.spouse_id
        relations["childrenIds"] = list(self.relations.children_ids)

        data: dict = {"id": self.id, "name": self.name, "gender": self.gender}
        if self.birth_date:
            data["birthDate"] = self.birth_date
        if self.death_date:
            data["deathDate"] = self.death_date
        data["relations"] = relations
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Member":
        """Build a Member from the interchange shape (no validation)."""
        relations = data.get("relations") or {}
        return cls(
            id=data["id"],
            name=data["name"],
            gender=data.get("gender", "other"),
            birth_date=data.get("birthDate") or None,
            death_date=data.get("deathDate") or None,
            relations=Relations(
                father_id=relations.get("fatherId") or None,
                mother_id=relations.get("motherId") or None,
                spouse_id=relations.get("spouseId") or None,
                children_ids=list(dict.fromkeys(relations.get("childrenIds") or [])),
            ),
        )


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass
class DiagramNode:
    id: str
    kind: str  # MEMBER_NODE or JUNCTION_NODE
    position: Position
    member: Member | None = None  # empty payload for junctions


@dataclass
class DiagramEdge:
    id: str
    source: str
    target: str
    role: str  # PARENT_LINK or SPOUSE_LINK
    label: str | None = None
    dashed: bool = False


@dataclass
class Diagram:
    nodes: list[DiagramNode]
    edges: list[DiagramEdge]
    generations: dict[str, int]
    anomalies: list = field(default_factory=list)
    layout_version: int = 0

    def node(self, node_id: str) -> DiagramNode | None:
        for n in self.nodes:
            if n.id == node_id:
                return n
        return None

    def junctions(self) -> list[DiagramNode]:
        return [n for n in self.nodes if n.kind == JUNCTION_NODE]
