import json

import pytest

from main import main


@pytest.fixture
def cli(tmp_path):
    db = str(tmp_path / "t.db")

    def invoke(*argv):
        return main(["--db", db, *argv])

    return invoke


def test_sample_then_layout(cli, capsys):
    assert cli("sample") == 0
    capsys.readouterr()

    assert cli("layout") == 0
    data = json.loads(capsys.readouterr().out)

    assert len(data["nodes"]) == 15
    assert data["layoutVersion"] == 1
    assert data["anomalies"] == []


def test_sample_twice_is_rejected(cli, capsys):
    cli("sample")

    assert cli("sample") == 1
    assert "already in use" in capsys.readouterr().err


def test_add_and_link_members(cli, capsys):
    assert cli("add", "Ann", "--id", "ann", "--gender", "female") == 0
    assert cli("add", "Bob", "--id", "bob", "--gender", "male", "--spouse", "ann") == 0
    assert cli("add", "Cy", "--id", "cy") == 0
    assert cli("parent", "cy", "mother", "ann") == 0
    capsys.readouterr()

    cli("list")
    out = capsys.readouterr().out

    assert "mother=ann" in out
    assert "spouse=bob" in out
    assert "3 family members" in out


def test_unknown_member_is_an_error(cli, capsys):
    assert cli("delete", "nope") == 1
    assert "nope" in capsys.readouterr().err


def test_export_clear_import(cli, tmp_path, capsys):
    path = tmp_path / "familyTree.json"
    cli("sample")

    assert cli("export", str(path)) == 0
    assert cli("clear") == 0
    assert cli("import", str(path)) == 0
    capsys.readouterr()

    cli("list")
    assert "13 family members" in capsys.readouterr().out


def test_bad_import_is_an_error(cli, tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text("{}", encoding="utf-8")

    assert cli("import", str(path)) == 1
    assert "Error" in capsys.readouterr().err


def test_validate_sample(cli, capsys):
    cli("sample")
    capsys.readouterr()

    assert cli("validate") == 0
    assert "No validation issues found" in capsys.readouterr().out


def test_missing_gedcom_is_an_error(cli, tmp_path, capsys):
    assert cli("import-gedcom", str(tmp_path / "missing.ged")) == 1
    assert "Cannot read GEDCOM file" in capsys.readouterr().err
