"""Generation assignment: label every member with a generation depth."""

from collections import deque
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Sequence

from config import DEFAULT_CONFIG, LayoutConfig
from models import Member
from parsing import parse_date_string

logger = logging.getLogger(__name__)


class VisitReason(Enum):
    ROOT = "root"
    SPOUSE = "spouse"
    CHILD = "child"
    PARENT = "parent"


@dataclass(frozen=True)
class Visit:
    """A frontier entry: which member to visit, at what generation, and why."""

    member_id: str
    generation: int
    reason: VisitReason


def find_roots(members: Sequence[Member]) -> list[Member]:
    """
    Members without a father or mother, in list order.

    If there are none (fully cyclic or fully parented data), fall back to the
    single member with the earliest parseable birth date, or the first member
    when no date parses.
    """
    roots = [m for m in members if not m.relations.father_id and not m.relations.mother_id]
    if roots or not members:
        return roots

    oldest: Member | None = None
    oldest_date: str | None = None
    for member in members:
        birth = parse_date_string(member.birth_date)
        if birth is not None and (oldest_date is None or birth < oldest_date):
            oldest, oldest_date = member, birth
    return [oldest if oldest is not None else members[0]]


def index_children(members: Sequence[Member]) -> dict[str, list[str]]:
    """Map each parent id to the ids of members naming it as father or mother."""
    index: dict[str, list[str]] = {}
    for member in members:
        for parent_id in member.parent_ids():
            if parent_id != member.id:
                index.setdefault(parent_id, []).append(member.id)
    return index


def children_of(
    member: Member, by_id: dict[str, Member], named_children: dict[str, list[str]]
) -> list[str]:
    """
    Existing children of a member: its childrenIds, then anyone naming it as a
    parent that childrenIds missed.

    Walking childrenIds alone would leave a child with a one-sided link
    unreached at generation 0. Including the reverse links is deliberate, so
    such a child still lands one row below its parent.
    """
    children = [c for c in member.relations.children_ids if c in by_id and c != member.id]
    for child_id in named_children.get(member.id, []):
        if child_id not in children:
            children.append(child_id)
    return children


def build_generation_map(
    members: Sequence[Member], config: LayoutConfig = DEFAULT_CONFIG
) -> dict[str, int]:
    """
    Assign every member a non-negative generation (0 = oldest row).

    Each root seeds a breadth-first traversal at root_index * root_stride so
    disconnected trees get separate generation bands. A member seen again
    keeps the lower of its two generations but is not expanded a second
    time, so descendants reached earlier through a higher path keep their
    generation. Members never reached get generation 0, then everything is
    shifted so the minimum is 0.

    Args:
        members: Snapshot of the member list (not modified)
        config: Layout constants (root_stride)

    Returns:
        Mapping of member id to generation, in member list order
    """
    if not members:
        return {}

    by_id = {m.id: m for m in members}
    named_children = index_children(members)
    generations: dict[str, int] = {}
    visited: set[str] = set()

    for root_index, root in enumerate(find_roots(members)):
        queue: deque[Visit] = deque(
            [Visit(root.id, root_index * config.root_stride, VisitReason.ROOT)]
        )

        while queue:
            visit = queue.popleft()

            if visit.member_id in visited:
                # Only ever lower a generation
                if visit.generation < generations[visit.member_id]:
                    generations[visit.member_id] = visit.generation
                continue

            visited.add(visit.member_id)
            generations[visit.member_id] = visit.generation

            member = by_id.get(visit.member_id)
            if member is None:
                continue
            relations = member.relations

            if relations.spouse_id and relations.spouse_id in by_id and relations.spouse_id not in visited:
                queue.append(Visit(relations.spouse_id, visit.generation, VisitReason.SPOUSE))

            for child_id in children_of(member, by_id, named_children):
                queue.append(Visit(child_id, visit.generation + 1, VisitReason.CHILD))

            # Walk upward too, for cyclic data or parents that were not picked as roots
            for parent_id in (relations.father_id, relations.mother_id):
                if parent_id and parent_id in by_id and parent_id not in visited:
                    queue.append(Visit(parent_id, visit.generation - 1, VisitReason.PARENT))

    # Members that no traversal reached
    for member in members:
        generations.setdefault(member.id, 0)

    floor = min(generations.values())
    result = {m.id: generations[m.id] - floor for m in members}
    logger.debug("Assigned %d members to %d generations", len(result), len(set(result.values())))
    return result
