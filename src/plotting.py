"""Render a laid-out diagram with Graphviz, keeping the computed positions."""

from pathlib import Path

import pydot

from graph import build_diagram_graph
from models import Diagram
from parsing import extract_year

GENDER_COLORS = {"male": "lightblue", "female": "lightpink"}
EDGE_COLOR = "#3b82f6"
SPOUSE_COLOR = "#ec4899"

# neato -n2 takes pos attributes as points and does no layout of its own
RENDER_PROG = ["neato", "-n2"]


def _year(date: str | None) -> str:
    year = extract_year(date)
    return str(year) if year is not None else ""


def diagram_to_dot(diagram: Diagram, scale: float = 1.0) -> pydot.Dot:
    """
    Build a pydot graph that pins every node to its layout position.

    Layout y grows downward while Graphviz y grows upward, so y is negated.

    Args:
        diagram: Output of build_diagram
        scale: Multiplier from layout units to points

    Returns:
        A pydot.Dot ready to write with RENDER_PROG
    """
    H = build_diagram_graph(diagram)

    P = pydot.Dot(graph_type="digraph")
    P.set("splines", "line")
    P.set("outputorder", "edgesfirst")

    # Add nodes
    for node, data in H.nodes(data=True):
        x, y = data["pos"]
        pos = f"{x * scale:.1f},{-y * scale:.1f}!"

        if data.get("node_type") == "family":
            # Junctions are small points
            P.add_node(
                pydot.Node(
                    str(node),
                    shape="point",
                    width="0.12",
                    height="0.12",
                    color=EDGE_COLOR,
                    label="",
                    pos=pos,
                )
            )
            continue

        birth_year = _year(data.get("birth_date"))
        death_year = _year(data.get("death_date"))
        label = data.get("member_name", "")
        if birth_year or death_year:
            label = f"{label}\n{birth_year}-{death_year}"

        P.add_node(
            pydot.Node(
                str(node),
                label=label,
                shape="box",
                style="rounded,filled",
                fillcolor=GENDER_COLORS.get(data.get("gender"), "lightgray"),
                fontsize="10",
                pos=pos,
            )
        )

    # Add edges
    for u, v, data in H.edges(data=True):
        if data.get("edge_type") == "spouse":
            P.add_edge(
                pydot.Edge(
                    str(u),
                    str(v),
                    dir="none",
                    style="dashed",
                    color=SPOUSE_COLOR,
                    label=data.get("label") or "",
                    fontsize="9",
                )
            )
        else:
            P.add_edge(pydot.Edge(str(u), str(v), dir="none", color=EDGE_COLOR))

    return P


def plot_diagram(diagram: Diagram, output_path: Path | None = None, scale: float = 0.5):
    """
    Render a diagram to a file, or show it in a matplotlib window.

    Args:
        diagram: Output of build_diagram
        output_path: png, svg or pdf path. If None, displays interactively.
        scale: Multiplier from layout units to points
    """
    P = diagram_to_dot(diagram, scale)

    if output_path:
        # Determine format from extension
        ext = output_path.suffix.lower().lstrip(".")
        if ext not in ("png", "svg", "pdf", "dot"):
            ext = "png"

        if ext == "dot":
            output_path.write_text(P.to_string(), encoding="utf-8")
        else:
            P.write(str(output_path), format=ext, prog=RENDER_PROG)
        print(f"Diagram saved to {output_path}")
    else:
        # Save to temporary file and display
        import tempfile

        import matplotlib.image as mpimg
        import matplotlib.pyplot as plt

        with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as f:
            P.write(f.name, format="png", prog=RENDER_PROG)
            img = mpimg.imread(f.name)
            plt.figure(figsize=(20, 16))
            plt.imshow(img)
            plt.axis("off")
            plt.tight_layout()
            plt.show()
