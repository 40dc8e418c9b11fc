"""Junction nodes and connector edges for parent/child and spouse relations."""

from dataclasses import dataclass, field
import logging
from typing import Mapping, Sequence

from config import DEFAULT_CONFIG, LayoutConfig
from errors import Anomaly, MissingPositionAnomaly
from models import PARENT_LINK, SPOUSE_LINK, DiagramEdge, Member, Position

logger = logging.getLogger(__name__)


@dataclass
class Junction:
    id: str
    parent_ids: tuple[str, str]
    child_ids: list[str]
    position: Position


@dataclass
class Connectors:
    junctions: list[Junction] = field(default_factory=list)
    edges: list[DiagramEdge] = field(default_factory=list)
    anomalies: list[Anomaly] = field(default_factory=list)


def parent_pair_key(parent_ids: Sequence[str]) -> str:
    """Stable key for a set of parents: sorted ids joined with '-'."""
    return "-".join(sorted(parent_ids))


def junction_id(parent_ids: Sequence[str]) -> str:
    return f"junction-{parent_pair_key(parent_ids)}"


def group_children_by_parents(members: Sequence[Member]) -> dict[tuple[str, ...], list[str]]:
    """Map each sorted tuple of parent ids to its children, in member order."""
    families: dict[tuple[str, ...], list[str]] = {}
    for member in members:
        parent_ids = member.parent_ids()
        if not parent_ids:
            continue
        families.setdefault(tuple(sorted(parent_ids)), []).append(member.id)
    return families


def spouse_pairs(members: Sequence[Member]) -> list[tuple[str, str]]:
    """Unordered spouse pairs between existing members, smaller id first."""
    known = {m.id for m in members}
    pairs: list[tuple[str, str]] = []
    seen: set[tuple[str, str]] = set()
    for member in members:
        spouse_id = member.relations.spouse_id
        if not spouse_id or spouse_id == member.id or spouse_id not in known:
            continue
        pair = (min(member.id, spouse_id), max(member.id, spouse_id))
        if pair not in seen:
            seen.add(pair)
            pairs.append(pair)
    return pairs


class _EdgeList:
    """Edges in insertion order, ignoring repeated ids."""

    def __init__(self):
        self.edges: list[DiagramEdge] = []
        self._ids: set[str] = set()

    def add(self, edge: DiagramEdge) -> None:
        if edge.id not in self._ids:
            self._ids.add(edge.id)
            self.edges.append(edge)


def _missing(connectors: Connectors, message: str, member_ids: tuple[str, ...]) -> None:
    anomaly = MissingPositionAnomaly(message, member_ids)
    logger.warning("%s", anomaly)
    connectors.anomalies.append(anomaly)


def synthesize_connectors(
    members: Sequence[Member],
    generation_map: Mapping[str, int],
    positions: Mapping[str, Position],
    config: LayoutConfig = DEFAULT_CONFIG,
) -> Connectors:
    """
    Build the connector set for a laid-out tree.

    Children of a couple hang from a junction node placed between the
    parents' row and the children's row; children of a single known parent
    get direct edges. Each spouse pair gets one dashed "married" edge.
    Every id is derived from participant ids, so identical input produces
    identical ids.

    Args:
        members: Snapshot of the member list
        generation_map: Output of build_generation_map, used to flag couples split across rows
        positions: Output of calculate_hierarchical_layout
        config: Node height and junction offset

    Returns:
        Junctions, edges, and any anomalies met along the way
    """
    by_id = {m.id: m for m in members}
    connectors = Connectors()
    edges = _EdgeList()

    for parent_ids, child_ids in group_children_by_parents(members).items():
        # Dangling parent ids are treated as absent
        known_parents = [p for p in parent_ids if p in by_id]
        if not known_parents:
            continue

        if len(known_parents) == 1:
            parent_id = known_parents[0]
            for child_id in child_ids:
                edges.add(
                    DiagramEdge(f"parent-{parent_id}-{child_id}", parent_id, child_id, PARENT_LINK)
                )
            continue

        first_id, second_id = known_parents
        jid = junction_id(known_parents)
        first_pos = positions.get(first_id)
        second_pos = positions.get(second_id)
        if first_pos is None or second_pos is None:
            _missing(connectors, f"missing parent position for {jid}", (first_id, second_id))
            continue

        child_pos = positions.get(child_ids[0])
        if child_pos is None:
            _missing(connectors, f"missing child position for {jid}", (child_ids[0],))
            continue

        parent_bottom = first_pos.y + config.node_height
        position = Position(
            max(first_pos.x, second_pos.x) - config.junction_offset,
            (parent_bottom + child_pos.y) / 2,
        )
        connectors.junctions.append(Junction(jid, (first_id, second_id), list(child_ids), position))

        if generation_map.get(first_id) != generation_map.get(second_id):
            logger.debug("Parents of %s sit in different generations", jid)

        for parent_id in (first_id, second_id):
            edges.add(DiagramEdge(f"parent-{parent_id}-{jid}", parent_id, jid, PARENT_LINK))
        for child_id in child_ids:
            edges.add(DiagramEdge(f"junction-{jid}-{child_id}", jid, child_id, PARENT_LINK))

    for a, b in spouse_pairs(members):
        edges.add(DiagramEdge(f"spouse-{a}-{b}", a, b, SPOUSE_LINK, label="married", dashed=True))

    connectors.edges = edges.edges
    return connectors
