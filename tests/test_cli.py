import json

import pytest

import cli
import core

CATALOG = """\
test_cases:
  - id: 1
    name: Piston moves up
    custom_fields:
      testCustomField: net.cars.engine.PistonTest.moveUp
  - id: 2
    name: Delco rotation
    custom_fields:
      testCustomField: net.cars.engine.DelcoTest.rotation
  - id: 3
    name: Piston suite
    custom_fields:
      testCustomField: net.cars.engine.PistonTest
"""


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    for key in ('TESTLINK_INCLUDE_PATTERN', 'TESTLINK_KEY_CUSTOM_FIELD', 'TESTLINK_SEEKER',
                'TESTLINK_RESULTS_CONFIG'):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "catalog.yml"
    path.write_text(CATALOG, encoding="utf-8")
    return path


def test_seek_results(resources, catalog_file):
    data = core.seek_results(str(resources), str(catalog_file), include_pattern="TEST-net.*.xml")

    assert data["total"] == 2
    assert data["counts"]["BLOCKED"] == 1
    assert data["counts"]["PASSED"] == 1
    assert [r["id"] for r in data["results"]] == [1, 2]
    assert data["source"]["seeker"] == "testcases"
    assert "content" not in data["results"][0]["attachments"][0]


def test_seek_results_suites(resources, catalog_file):
    data = core.seek_results(str(resources), str(catalog_file),
                             include_pattern="TEST-net.*.xml", seeker="suites")

    assert [(r["id"], r["status"]) for r in data["results"]] == [(3, "BLOCKED")]


def test_make_seeker_rejects_unknown_kind():
    with pytest.raises(ValueError):
        core.make_seeker("methods", "TEST-*.xml", [], "key")


def test_cli_seek_json(resources, catalog_file, capsys):
    rc = cli.main(["seek", str(resources), "--catalog", str(catalog_file),
                   "--include", "TEST-net.cars.engine.DelcoTest.xml", "--format", "json",
                   "--include-content"])

    assert rc == 0
    data = json.loads(capsys.readouterr().out)
    assert data["results"][0]["status"] == "PASSED"
    assert data["results"][0]["attachments"][0]["content"]


def test_cli_seek_text_reports_failures(resources, catalog_file, capsys):
    rc = cli.main(["seek", str(resources), "-c", str(catalog_file), "-i", "TEST-net.*.xml"])

    assert rc == 1
    out = capsys.readouterr().out
    assert "Blocked: 1" in out
    assert "Piston moves up" in out


def test_cli_seek_missing_directory(tmp_path, catalog_file, capsys):
    rc = cli.main(["seek", str(tmp_path / "missing"), "-c", str(catalog_file)])

    assert rc == 2
    assert "Error:" in capsys.readouterr().err


def test_cli_parse(resources, capsys):
    rc = cli.main(["parse", str(resources / "TEST-net.cars.engine.PistonTest.xml")])

    assert rc == 0
    out = capsys.readouterr().out
    assert "Suite: net.cars.engine.PistonTest (tests=5, failures=3, errors=1)" in out
    assert "net.cars.engine.PistonTest.moveUp (failures=0, errors=1)" in out


def test_cli_parse_malformed(resources, capsys):
    rc = cli.main(["parse", str(resources / "TEST-malformed.xml"), "--format", "json"])

    assert rc == 2
    assert "Failed to parse report" in capsys.readouterr().err


def test_cli_without_command():
    assert cli.main([]) == 1
