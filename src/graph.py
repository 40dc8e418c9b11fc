"""NetworkX views of the member list and of a laid-out diagram."""

from typing import Sequence

import networkx as nx

from models import JUNCTION_NODE, SPOUSE_LINK, Diagram, Member


def build_relation_graph(members: Sequence[Member]) -> nx.DiGraph:
    """
    Build a directed graph of members with PARENT_OF and SPOUSE_OF edges.

    Parent edges are taken from both sides of the relation (a child's
    fatherId/motherId and a parent's childrenIds). Ids that do not belong to
    any member are skipped.
    """
    G = nx.DiGraph()

    # Add nodes (members)
    # Note: use 'member_name' instead of 'name' to avoid conflict with pydot
    for m in members:
        G.add_node(
            m.id,
            member_name=m.name,
            gender=m.gender,
            birth_date=m.birth_date,
            death_date=m.death_date,
        )

    # Add edges (relations)
    for m in members:
        for parent_id in m.parent_ids():
            if parent_id in G:
                G.add_edge(parent_id, m.id, relationship_type="PARENT_OF")
        for child_id in m.relations.children_ids:
            if child_id in G:
                G.add_edge(m.id, child_id, relationship_type="PARENT_OF")
        spouse_id = m.relations.spouse_id
        if spouse_id and spouse_id in G and not G.has_edge(spouse_id, m.id):
            G.add_edge(m.id, spouse_id, relationship_type="SPOUSE_OF")

    return G


def parent_subgraph(G: nx.DiGraph) -> nx.DiGraph:
    """Directed graph holding only the PARENT_OF edges of G."""
    parent_edges = [
        (u, v) for u, v, d in G.edges(data=True) if d.get("relationship_type") == "PARENT_OF"
    ]
    P = nx.DiGraph(parent_edges)
    P.add_nodes_from(G.nodes)
    return P


def family_components(members: Sequence[Member]) -> list[set[str]]:
    """Groups of member ids connected by any relation, largest first."""
    G = build_relation_graph(members)
    return sorted(nx.weakly_connected_components(G), key=len, reverse=True)


def build_diagram_graph(diagram: Diagram) -> nx.DiGraph:
    """
    Convert a laid-out diagram into a graph for rendering.

    Nodes carry node_type ("person" or "family"), pos and, for people, the
    member attributes; edges carry edge_type ("spouse" or "parent"), label
    and dashed.
    """
    H = nx.DiGraph()

    for node in diagram.nodes:
        pos = (node.position.x, node.position.y)
        if node.kind == JUNCTION_NODE or node.member is None:
            H.add_node(node.id, node_type="family", pos=pos)
        else:
            H.add_node(
                node.id,
                node_type="person",
                pos=pos,
                member_name=node.member.name,
                gender=node.member.gender,
                birth_date=node.member.birth_date,
                death_date=node.member.death_date,
            )

    for edge in diagram.edges:
        H.add_edge(
            edge.source,
            edge.target,
            edge_id=edge.id,
            edge_type="spouse" if edge.role == SPOUSE_LINK else "parent",
            label=edge.label,
            dashed=edge.dashed,
        )

    return H
