from config import DEFAULT_CONFIG, LayoutConfig
from factories import couple_with_child, person
from generations import build_generation_map
from layout import calculate_hierarchical_layout
from models import Position


def layout(members, config=DEFAULT_CONFIG):
    return calculate_hierarchical_layout(members, build_generation_map(members, config), config)


def test_single_member_positioned():
    assert layout([person("A")]) == {"A": Position(100, 100)}


def test_couple_centered_over_child():
    positions = layout(couple_with_child())

    assert positions["C"] == Position(100, 300)
    assert positions["A"] == Position(-40, 100)
    assert positions["B"] == Position(240, 100)


def test_sample_family_positions(family):
    positions = layout(family)

    # Youngest row: siblings oldest first, then the cousins' group
    assert [positions[c].x for c in ("c4", "c1", "c3", "c2", "c5")] == [100, 280, 460, 640, 820]
    assert [positions[c].x for c in ("cousin2", "cousin1")] == [1100, 1280]
    assert {positions[c].y for c in ("c1", "cousin1")} == {500}

    assert positions["f1"] == Position(320, 300)
    assert positions["m1"] == Position(600, 300)
    assert positions["u1"] == Position(1190, 300)
    # Susan has no children and goes right of everything placed
    assert positions["a1"] == Position(1640, 300)

    assert positions["gp1"] == Position(910, 100)
    assert positions["gm1"] == Position(1190, 100)


def test_every_member_positioned_once(family):
    positions = layout(family)
    assert set(positions) == {m.id for m in family}


def test_couples_at_couple_spacing(family):
    positions = layout(family)
    by_id = {m.id: m for m in family}

    for member in family:
        spouse_id = member.relations.spouse_id
        if spouse_id and by_id[spouse_id].relations.spouse_id == member.id:
            a, b = positions[member.id], positions[spouse_id]
            assert a.y == b.y
            assert abs(a.x - b.x) == DEFAULT_CONFIG.couple_spacing


def test_childless_root_couple_on_youngest_row():
    positions = layout([person("A", spouse="B"), person("B", spouse="A")])

    assert positions["A"] == Position(100, 100)
    assert positions["B"] == Position(380, 100)


def test_married_in_spouse_sits_beside_partner():
    members = [
        person("G", children=("P", "Q")),
        person("P", father="G", spouse="S"),
        person("Q", father="G"),
        person("S", spouse="P"),
    ]
    positions = layout(members)

    assert positions["P"] == Position(100, 300)
    assert positions["S"] == Position(380, 300)
    assert positions["Q"] == Position(560, 300)
    assert positions["G"] == Position(330, 100)


def test_married_in_spouse_listed_first():
    members = [
        person("S", spouse="P"),
        person("G", children=("P",)),
        person("P", father="G", spouse="S"),
    ]
    positions = layout(members)

    assert positions["S"].x - positions["P"].x == DEFAULT_CONFIG.couple_spacing
    assert positions["S"].y == positions["P"].y


def test_one_sided_spouse_not_paired():
    positions = layout([person("A", spouse="B"), person("B")])

    assert positions["B"].x - positions["A"].x != DEFAULT_CONFIG.couple_spacing


def test_orphan_couple_keeps_couple_spacing():
    members = [
        person("gp", children=("p", "h")),
        person("p", father="gp", children=("c",)),
        person("c", father="p"),
        person("h", name="Hal", gender="male", father="gp", spouse="w"),
        person("w", name="Wren", gender="female", spouse="h"),
    ]
    positions = layout(members)

    assert positions["h"] == Position(460, 300)
    assert positions["w"] == Position(740, 300)
    assert positions["p"].y == positions["h"].y


def test_orphans_appended_to_the_right():
    members = [
        person("gp", children=("p", "q", "r")),
        person("p", father="gp", children=("c",)),
        person("c", father="p"),
        person("q", father="gp"),
        person("r", father="gp"),
    ]
    positions = layout(members)

    assert positions["c"] == Position(100, 500)
    assert positions["p"] == Position(100, 300)
    assert positions["q"] == Position(460, 300)
    assert positions["r"] == Position(640, 300)
    assert positions["gp"] == Position(400, 100)


def test_disconnected_trees_do_not_overlap():
    members = [
        person("A", children=("B",)),
        person("B", father="A"),
        person("C", children=("D",)),
        person("D", father="C"),
    ]
    positions = layout(members)

    first = [positions[m].x for m in ("A", "B")]
    second = [positions[m].x for m in ("C", "D")]
    assert max(first) < min(second) or max(second) < min(first)


def test_custom_spacing():
    config = LayoutConfig(generation_spacing=50, couple_spacing=100, base_offset=0)
    positions = layout(couple_with_child(), config)

    assert positions["C"].y == 50
    assert positions["B"].x - positions["A"].x == 100
