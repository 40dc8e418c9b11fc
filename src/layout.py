"""Hierarchical layout: bottom-up placement of members in generation rows."""

import logging
from typing import Mapping, Sequence

from config import DEFAULT_CONFIG, LayoutConfig
from grouping import group_parents_by_children, group_siblings, group_spouses_and_singles
from models import Member, Position

logger = logging.getLogger(__name__)


def bucket_by_generation(
    members: Sequence[Member], generation_map: Mapping[str, int]
) -> dict[int, list[Member]]:
    """Group members by generation, keeping list order inside each bucket."""
    buckets: dict[int, list[Member]] = {}
    for member in members:
        buckets.setdefault(generation_map.get(member.id, 0), []).append(member)
    return buckets


def bottom_row_partners(members: Sequence[Member]) -> dict[str, Member]:
    """
    Map a member id to the spouse placed directly to its right on the youngest row.

    Only mutual couples qualify, and the spouse placed beside its partner must
    have no parents, so no sibling group is split. When both partners are
    parentless the one earlier in the list anchors the couple.
    """
    in_row = {m.id: m for m in members}
    partners: dict[str, Member] = {}
    attached: set[str] = set()

    for member in members:
        if member.id in partners or member.id in attached:
            continue
        spouse = in_row.get(member.relations.spouse_id or "")
        if spouse is None or spouse.id == member.id or spouse.relations.spouse_id != member.id:
            continue
        if spouse.id in partners or spouse.id in attached:
            continue

        if not spouse.parent_ids():
            partners[member.id] = spouse
            attached.add(spouse.id)
        elif not member.parent_ids():
            partners[spouse.id] = member
            attached.add(member.id)

    return partners


def _place_bottom_generation(
    members: Sequence[Member],
    y: float,
    positions: dict[str, Position],
    config: LayoutConfig,
) -> None:
    partners = bottom_row_partners(members)
    attached = {p.id for p in partners.values()}
    current_x = config.base_x

    for index, siblings in enumerate(
        group_siblings([m for m in members if m.id not in attached], config)
    ):
        if index > 0:
            current_x += config.sibling_group_spacing

        x = current_x
        for sibling in siblings:
            positions[sibling.id] = Position(x, y)
            partner = partners.get(sibling.id)
            if partner is not None:
                x += config.couple_spacing
                positions[partner.id] = Position(x, y)
            x += config.node_spacing

        # Leave room for a couple with the "married" label above small groups
        current_x += max(x - current_x, config.min_space_for_parents)


def _place_orphans(
    orphans: Sequence[Member],
    all_members: Sequence[Member],
    y: float,
    positions: dict[str, Position],
    config: LayoutConfig,
) -> None:
    if positions:
        orphan_x = max(p.x for p in positions.values()) + config.node_spacing * 2
    else:
        orphan_x = config.base_x

    for group in group_spouses_and_singles(orphans, all_members):
        positions[group[0].id] = Position(orphan_x, y)
        if len(group) == 2:
            orphan_x += config.couple_spacing
            positions[group[1].id] = Position(orphan_x, y)
        orphan_x += config.node_spacing


def calculate_hierarchical_layout(
    members: Sequence[Member],
    generation_map: Mapping[str, int],
    config: LayoutConfig = DEFAULT_CONFIG,
) -> dict[str, Position]:
    """
    Compute a position for every member, youngest generation first.

    The youngest row is laid out as sibling groups from left to right, with a
    parentless spouse placed couple_spacing to the right of its partner. Each
    older row is then placed over the children already positioned: a single
    parent sits at the mean x of its children, a couple straddles that point
    at couple_spacing. Parents with no placed children are appended to the
    right of everything placed so far.

    Args:
        members: Snapshot of the member list (not modified)
        generation_map: Output of build_generation_map
        config: Spacing constants

    Returns:
        Mapping of member id to Position
    """
    positions: dict[str, Position] = {}
    buckets = bucket_by_generation(members, generation_map)
    if not buckets:
        return positions

    # Highest generation number is the youngest row
    ordered = sorted(buckets, reverse=True)

    bottom = ordered[0]
    _place_bottom_generation(buckets[bottom], config.row_y(bottom), positions, config)

    for generation in ordered[1:]:
        row = buckets[generation]
        y = config.row_y(generation)

        placed: set[str] = set()
        for group in group_parents_by_children(row, members, positions):
            if len(group.parents) == 1:
                positions[group.parents[0].id] = Position(group.children_center_x, y)
            else:
                first, second = group.parents
                half = config.couple_spacing / 2
                positions[first.id] = Position(group.children_center_x - half, y)
                positions[second.id] = Position(group.children_center_x + half, y)
            placed.update(p.id for p in group.parents)

        orphans = [m for m in row if m.id not in placed]
        if orphans:
            _place_orphans(orphans, members, y, positions, config)

    logger.debug("Positioned %d members across %d generations", len(positions), len(ordered))
    return positions
