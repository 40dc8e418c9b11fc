from errors import MissingPositionAnomaly
from factories import couple_with_child, person, single_parent_with_child
from generations import build_generation_map
from junctions import group_children_by_parents, junction_id, spouse_pairs, synthesize_connectors
from layout import calculate_hierarchical_layout
from models import PARENT_LINK, SPOUSE_LINK, Position


def connect(members):
    generations = build_generation_map(members)
    positions = calculate_hierarchical_layout(members, generations)
    return synthesize_connectors(members, generations, positions)


def test_couple_gets_one_junction():
    connectors = connect(couple_with_child())

    assert len(connectors.junctions) == 1
    junction = connectors.junctions[0]
    assert junction.id == "junction-A-B"
    assert junction.child_ids == ["C"]
    # x: right parent minus offset; y: between parent bottom (100 + 80) and child top (300)
    assert junction.position == Position(175, 240)

    assert [(e.id, e.source, e.target, e.role) for e in connectors.edges] == [
        ("parent-A-junction-A-B", "A", "junction-A-B", PARENT_LINK),
        ("parent-B-junction-A-B", "B", "junction-A-B", PARENT_LINK),
        ("junction-junction-A-B-C", "junction-A-B", "C", PARENT_LINK),
        ("spouse-A-B", "A", "B", SPOUSE_LINK),
    ]
    assert connectors.anomalies == []


def test_spouse_edge_is_dashed_and_labelled():
    spouse_edge = connect(couple_with_child()).edges[-1]

    assert spouse_edge.dashed
    assert spouse_edge.label == "married"


def test_single_parent_gets_direct_edge():
    connectors = connect(single_parent_with_child())

    assert connectors.junctions == []
    assert [(e.id, e.source, e.target) for e in connectors.edges] == [("parent-A-C", "A", "C")]


def test_dual_parent_key_edge_count(family):
    connectors = connect(family)

    assert sorted(j.id for j in connectors.junctions) == ["junction-f1-m1", "junction-gm1-gp1"]
    by_id = {j.id: j for j in connectors.junctions}
    assert by_id["junction-f1-m1"].position == Position(535, 440)
    assert by_id["junction-gm1-gp1"].position == Position(1125, 240)

    into_junction = [e for e in connectors.edges if e.target == "junction-f1-m1"]
    out_of_junction = [e for e in connectors.edges if e.source == "junction-f1-m1"]
    assert len(into_junction) == 2
    assert len(out_of_junction) == 5
    assert len(connectors.edges) == 16


def test_ids_are_stable_across_passes(family):
    first = connect(family)
    second = connect(family)

    assert [e.id for e in first.edges] == [e.id for e in second.edges]
    assert [j.id for j in first.junctions] == [j.id for j in second.junctions]


def test_missing_parent_position_skips_junction():
    members = couple_with_child()
    generations = build_generation_map(members)
    positions = {"A": Position(0, 100), "C": Position(0, 300)}

    connectors = synthesize_connectors(members, generations, positions)

    assert connectors.junctions == []
    assert [e.role for e in connectors.edges] == [SPOUSE_LINK]
    assert len(connectors.anomalies) == 1
    assert isinstance(connectors.anomalies[0], MissingPositionAnomaly)


def test_missing_child_position_skips_junction():
    members = couple_with_child()
    positions = {"A": Position(0, 100), "B": Position(280, 100)}

    connectors = synthesize_connectors(members, {}, positions)

    assert connectors.junctions == []
    assert connectors.anomalies[0].member_ids == ("C",)


def test_dangling_second_parent_falls_back_to_direct_edge():
    members = [person("A", children=("C",)), person("C", father="A", mother="ghost")]

    connectors = connect(members)

    assert connectors.junctions == []
    assert [e.id for e in connectors.edges] == ["parent-A-C"]


def test_children_grouped_by_sorted_parent_pair():
    members = [
        person("x", father="m", mother="f"),
        person("y", father="m", mother="f"),
        person("z", mother="f"),
    ]

    assert group_children_by_parents(members) == {("f", "m"): ["x", "y"], ("f",): ["z"]}
    assert junction_id(["m", "f"]) == "junction-f-m"


def test_one_sided_spouse_link_emitted_once():
    members = [person("b", spouse="a"), person("a")]

    assert spouse_pairs(members) == [("a", "b")]
    assert spouse_pairs(couple_with_child()) == [("A", "B")]
