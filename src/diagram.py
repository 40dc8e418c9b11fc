"""Run the full layout pipeline and produce renderer-ready nodes and edges."""

import logging
from typing import Sequence

from config import DEFAULT_CONFIG, LayoutConfig
from generations import build_generation_map
from junctions import synthesize_connectors
from layout import calculate_hierarchical_layout
from models import JUNCTION_NODE, MEMBER_NODE, Diagram, DiagramNode, Member, Position

logger = logging.getLogger(__name__)

ORIGIN = Position(0.0, 0.0)


def build_diagram(
    members: Sequence[Member],
    config: LayoutConfig = DEFAULT_CONFIG,
    layout_version: int = 0,
) -> Diagram:
    """
    Lay out a member list: generations, positions, junctions and edges.

    The member list is only read. layout_version is passed through untouched
    so a caller can tell one pass from the next.
    """
    if not members:
        return Diagram(nodes=[], edges=[], generations={}, layout_version=layout_version)

    generation_map = build_generation_map(members, config)
    positions = calculate_hierarchical_layout(members, generation_map, config)
    connectors = synthesize_connectors(members, generation_map, positions, config)

    nodes: list[DiagramNode] = []
    for member in members:
        position = positions.get(member.id)
        if position is None:
            logger.warning("No position computed for %s, placing at origin", member.id)
            position = ORIGIN
        nodes.append(DiagramNode(member.id, MEMBER_NODE, position, member))

    for junction in connectors.junctions:
        nodes.append(DiagramNode(junction.id, JUNCTION_NODE, junction.position))

    return Diagram(
        nodes=nodes,
        edges=connectors.edges,
        generations=generation_map,
        anomalies=connectors.anomalies,
        layout_version=layout_version,
    )


def diagram_to_dict(diagram: Diagram) -> dict:
    """Plain-JSON view of a diagram for the CLI and other consumers."""
    return {
        "layoutVersion": diagram.layout_version,
        "nodes": [
            {
                "id": n.id,
                "type": n.kind,
                "position": {"x": n.position.x, "y": n.position.y},
                "data": n.member.to_dict() if n.member is not None else {},
            }
            for n in diagram.nodes
        ],
        "edges": [
            {
                "id": e.id,
                "source": e.source,
                "target": e.target,
                "role": e.role,
                **({"label": e.label} if e.label else {}),
                "dashed": e.dashed,
            }
            for e in diagram.edges
        ],
        "generations": dict(diagram.generations),
        "anomalies": [str(a) for a in diagram.anomalies],
    }
