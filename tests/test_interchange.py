import json

import pytest

from errors import ImportFormatError
from factories import person
from interchange import export_members, load_members, members_from_json, members_to_json


def test_export_then_import_reproduces_members(tmp_path, family):
    path = export_members(family, tmp_path / "familyTree.json")

    assert load_members(path) == family


def test_export_uses_camel_case_and_omits_unset_fields():
    data = json.loads(members_to_json([person("c", name="Cy", birth="1990", father="f")]))

    assert data == [
        {
            "id": "c",
            "name": "Cy",
            "gender": "other",
            "birthDate": "1990",
            "relations": {"fatherId": "f", "childrenIds": []},
        }
    ]


def test_import_accepts_minimal_member():
    members = members_from_json('[{"id": "a", "name": "Ann"}]')

    assert members[0].gender == "other"
    assert members[0].relations.children_ids == []


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        '{"id": "a", "name": "Ann"}',
        '[{"name": "Ann"}]',
        '[{"id": "a", "name": "Ann", "gender": "robot"}]',
        '[{"id": "a", "name": "Ann", "relations": {"childrenIds": "b"}}]',
        '[{"id": "a", "name": "Ann", "relations": {"childrenIds": ["a"]}}]',
        '[{"id": "a", "name": "Ann", "relations": {"spouseId": 5}}]',
        '[{"id": "a", "name": "Ann"}, {"id": "a", "name": "Again"}]',
        "[42]",
    ],
)
def test_malformed_import_rejected(text):
    with pytest.raises(ImportFormatError):
        members_from_json(text)


def test_unreadable_file_is_import_error(tmp_path):
    with pytest.raises(ImportFormatError):
        load_members(tmp_path / "missing.json")
