import json

from diagram import build_diagram, diagram_to_dict
from factories import couple_with_child, person, single_parent_with_child
from models import JUNCTION_NODE, MEMBER_NODE, SPOUSE_LINK, Position


def test_empty_member_list():
    diagram = build_diagram([])
    assert diagram.nodes == [] and diagram.edges == [] and diagram.generations == {}


def test_single_member_has_a_position():
    diagram = build_diagram([person("A")])

    assert diagram.generations == {"A": 0}
    assert diagram.node("A").position == Position(100, 100)


def test_couple_with_child_scenario():
    diagram = build_diagram(couple_with_child())

    assert diagram.generations == {"A": 0, "B": 0, "C": 1}
    assert [n.id for n in diagram.junctions()] == ["junction-A-B"]

    parent_to_junction = [e for e in diagram.edges if e.target == "junction-A-B"]
    junction_to_child = [e for e in diagram.edges if e.source == "junction-A-B"]
    spouse_edges = [e for e in diagram.edges if e.role == SPOUSE_LINK]
    assert len(parent_to_junction) == 2
    assert len(junction_to_child) == 1
    assert [(e.source, e.target) for e in spouse_edges] == [("A", "B")]


def test_single_parent_scenario():
    diagram = build_diagram(single_parent_with_child())

    assert diagram.junctions() == []
    assert [(e.source, e.target) for e in diagram.edges] == [("A", "C")]


def test_nodes_cover_members_and_junctions(family):
    diagram = build_diagram(family, layout_version=7)

    member_nodes = [n for n in diagram.nodes if n.kind == MEMBER_NODE]
    assert [n.id for n in member_nodes] == [m.id for m in family]
    assert all(n.member is not None for n in member_nodes)
    assert all(n.member is None for n in diagram.nodes if n.kind == JUNCTION_NODE)
    assert diagram.layout_version == 7


def test_repeated_builds_are_identical(family):
    first = diagram_to_dict(build_diagram(family))
    second = diagram_to_dict(build_diagram(family))

    assert json.dumps(first, sort_keys=True) == json.dumps(second, sort_keys=True)


def test_diagram_to_dict_shape():
    data = diagram_to_dict(build_diagram(couple_with_child(), layout_version=3))

    assert data["layoutVersion"] == 3
    junction = next(n for n in data["nodes"] if n["type"] == JUNCTION_NODE)
    assert junction["data"] == {}
    assert junction["position"] == {"x": 175, "y": 240}

    spouse = next(e for e in data["edges"] if e["role"] == SPOUSE_LINK)
    assert spouse == {
        "id": "spouse-A-B",
        "source": "A",
        "target": "B",
        "role": SPOUSE_LINK,
        "label": "married",
        "dashed": True,
    }
    json.dumps(data)
