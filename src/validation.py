"""Consistency checks for a member list."""

from typing import Sequence

import networkx as nx

from errors import DataIntegrityAnomaly
from graph import build_relation_graph, parent_subgraph
from models import Member
from parsing import parse_date_string


def find_integrity_anomalies(members: Sequence[Member]) -> list[DataIntegrityAnomaly]:
    """
    Find dangling ids and one-sided relations.

    The layout engine treats all of these as absent links; this reports them
    so they can be repaired in the repository.
    """
    by_id = {m.id: m for m in members}
    anomalies: list[DataIntegrityAnomaly] = []

    for m in members:
        r = m.relations
        for label, ref in (("father", r.father_id), ("mother", r.mother_id), ("spouse", r.spouse_id)):
            if ref and ref not in by_id:
                anomalies.append(DataIntegrityAnomaly(f"{m.name} has unknown {label} id {ref!r}", (m.id,)))

        if m.id in r.children_ids or m.id in (r.father_id, r.mother_id):
            anomalies.append(DataIntegrityAnomaly(f"{m.name} is listed as their own parent", (m.id,)))

        if len(set(r.children_ids)) != len(r.children_ids):
            anomalies.append(DataIntegrityAnomaly(f"{m.name} lists a child more than once", (m.id,)))

        spouse = by_id.get(r.spouse_id or "")
        if spouse is not None and spouse.relations.spouse_id != m.id:
            anomalies.append(
                DataIntegrityAnomaly(
                    f"{m.name} lists {spouse.name} as spouse but not the other way round",
                    (m.id, spouse.id),
                )
            )

        for child_id in r.children_ids:
            child = by_id.get(child_id)
            if child is None:
                anomalies.append(DataIntegrityAnomaly(f"{m.name} has unknown child id {child_id!r}", (m.id,)))
            elif m.id not in child.parent_ids():
                anomalies.append(
                    DataIntegrityAnomaly(
                        f"{m.name} lists {child.name} as child but {child.name} does not name them as parent",
                        (m.id, child.id),
                    )
                )

        for parent_id in m.parent_ids():
            parent = by_id.get(parent_id)
            if parent is not None and m.id not in parent.relations.children_ids:
                anomalies.append(
                    DataIntegrityAnomaly(
                        f"{m.name} names {parent.name} as parent but is missing from their children",
                        (m.id, parent.id),
                    )
                )

    return anomalies


def validate_members(members: Sequence[Member]) -> list[str]:
    """
    Validate the family tree for:
    - Dangling ids and one-sided spouse/parent links
    - Cycles in parent-child relationships
    - Impossible ages (child born before parent)
    - Date ordering issues

    Returns a list of warning messages.
    """
    warnings: list[str] = [str(a) for a in find_integrity_anomalies(members)]

    G = build_relation_graph(members)

    # Check for cycles
    try:
        cycle = nx.find_cycle(parent_subgraph(G), orientation="original")
        cycle_nodes = [edge[0] for edge in cycle]
        warnings.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    # Check for impossible ages (child born before parent)
    # Normalized dates are ISO strings and can be compared directly
    for parent, child, data in G.edges(data=True):
        if data.get("relationship_type") != "PARENT_OF":
            continue

        parent_data = G.nodes[parent]
        child_data = G.nodes[child]

        parent_birth = parse_date_string(parent_data.get("birth_date"))
        child_birth = parse_date_string(child_data.get("birth_date"))

        if parent_birth and child_birth:
            if child_birth < parent_birth:
                warnings.append(
                    f"Impossible: {child_data.get('member_name')} born before parent "
                    f"{parent_data.get('member_name')}"
                )
            elif int(child_birth[:4]) - int(parent_birth[:4]) < 12:
                warnings.append(
                    f"Suspicious: {parent_data.get('member_name')} was less than 12 years "
                    f"old when {child_data.get('member_name')} was born"
                )

    # Check death before birth
    for _, data in G.nodes(data=True):
        birth = parse_date_string(data.get("birth_date"))
        death = parse_date_string(data.get("death_date"))

        if birth and death and death < birth:
            warnings.append(f"Impossible: {data.get('member_name')} died before being born")

    return warnings
