"""Sibling and couple grouping used by the hierarchical layout."""

from dataclasses import dataclass
from typing import Mapping, Sequence

from config import DEFAULT_CONFIG, LayoutConfig
from generations import index_children
from models import Member, Position
from parsing import birth_year_or_sentinel


@dataclass
class ParentGroup:
    """One parent or a couple, anchored above the mean x of their placed children."""

    parents: list[Member]
    children_center_x: float


def same_parents(a: Member, b: Member) -> bool:
    """True when both members have an identical, non-empty (father, mother) pair."""
    if not a.parent_ids():
        return False
    return (
        a.relations.father_id == b.relations.father_id
        and a.relations.mother_id == b.relations.mother_id
    )


def sibling_sort_key(member: Member, config: LayoutConfig = DEFAULT_CONFIG) -> tuple:
    """Oldest first by birth year, then full date string, then name."""
    year = birth_year_or_sentinel(member.birth_date, config.sentinel_year, member.id)
    return (year, member.birth_date or "", member.name)


def group_siblings(
    members: Sequence[Member], config: LayoutConfig = DEFAULT_CONFIG
) -> list[list[Member]]:
    """
    Partition members into sibling groups sharing the same father and mother.

    Groups come out in order of their first member in the input; members
    without parents each form their own group.
    """
    groups: list[list[Member]] = []
    processed: set[str] = set()

    for member in members:
        if member.id in processed:
            continue

        siblings = [
            other for other in members if other.id not in processed and same_parents(member, other)
        ]
        if not siblings:
            siblings = [member]

        siblings.sort(key=lambda m: sibling_sort_key(m, config))
        groups.append(siblings)
        processed.update(s.id for s in siblings)

    return groups


def group_parents_by_children(
    parents: Sequence[Member],
    all_members: Sequence[Member],
    positions: Mapping[str, Position],
) -> list[ParentGroup]:
    """
    Group a generation's members with their spouses above their placed children.

    Parents without any positioned child are left out; the layout places them
    in its orphan pass.

    Args:
        parents: Members of one generation, in list order
        all_members: Full member list, used to find children
        positions: Positions computed so far (younger generations)

    Returns:
        Parent groups in order of their first parent
    """
    named_children = index_children(all_members)
    in_generation = {p.id: p for p in parents}
    groups: list[ParentGroup] = []
    processed: set[str] = set()

    for parent in parents:
        if parent.id in processed:
            continue

        child_xs = [positions[c].x for c in named_children.get(parent.id, []) if c in positions]
        if not child_xs:
            continue

        spouse = in_generation.get(parent.relations.spouse_id or "")
        if spouse is not None and spouse.id not in processed and spouse.id != parent.id:
            group_parents = [parent, spouse]
        else:
            group_parents = [parent]

        groups.append(ParentGroup(group_parents, sum(child_xs) / len(child_xs)))
        processed.update(p.id for p in group_parents)

    return groups


def group_spouses_and_singles(
    members: Sequence[Member], all_members: Sequence[Member]
) -> list[list[Member]]:
    """
    Pair members with their spouses when both are in `members`; others stay single.

    Couples list the male partner first, then order by name. Groups are
    ordered by the name of their first member.
    """
    by_id = {m.id: m for m in all_members}
    candidates = {m.id for m in members}
    processed: set[str] = set()
    groups: list[list[Member]] = []

    for member in members:
        if member.id in processed:
            continue

        group = [member]
        processed.add(member.id)

        spouse = by_id.get(member.relations.spouse_id or "")
        if spouse is not None and spouse.id in candidates and spouse.id not in processed:
            group.append(spouse)
            processed.add(spouse.id)

        group.sort(key=lambda m: (m.gender != "male", m.name))
        groups.append(group)

    groups.sort(key=lambda g: g[0].name)
    return groups
