import json

import pytest

from cityradius.cli import main
from cityradius.config.settings import get_settings

from conftest import CENTER, EAST_HALF, EAST_ONE


@pytest.fixture(autouse=True)
def _lookups_dir(monkeypatch, tmp_path):
    monkeypatch.setenv("CITYRADIUS_LOOKUPS_DIR", str(tmp_path / "lookups"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_cli_distance(catalog_path, capsys):
    assert main(["--catalog", str(catalog_path), "distance", CENTER, EAST_ONE]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["distance"] == 111.19


def test_cli_by_tag_legacy_duplicates(catalog_path, capsys):
    assert main(["--catalog", str(catalog_path), "by-tag", "--tag", "port,market", "--legacy-duplicates"]) == 0
    guids = [c["guid"] for c in json.loads(capsys.readouterr().out)["cities"]]
    assert guids.count(EAST_ONE) == 2


def test_cli_area_then_area_result(catalog_path, capsys):
    assert main(["--catalog", str(catalog_path), "area", CENTER, "60", "--job-id-only"]) == 0
    job_id = capsys.readouterr().out.strip()

    assert main(["area-result", job_id]) == 0
    job = json.loads(capsys.readouterr().out)
    assert job["status"] == "complete"
    assert [c["guid"] for c in job["cities"]] == [EAST_HALF]


def test_cli_reports_domain_errors(catalog_path, capsys):
    assert main(["--catalog", str(catalog_path), "area", CENTER, "abc"]) == 1
    assert "Invalid radius" in capsys.readouterr().err
