from pathlib import Path

import pytest

from cityradius.core import env


@pytest.fixture(autouse=True)
def _fresh_root():
    env.get_project_root.cache_clear()
    yield
    env.get_project_root.cache_clear()


def test_project_root_override(monkeypatch, tmp_path):
    monkeypatch.setenv("CITYRADIUS_PROJECT_ROOT", str(tmp_path))
    assert env.get_project_root() == tmp_path.resolve()
    assert env.resolve_project_path("data/addresses/addresses.json") == (
        tmp_path / "data/addresses/addresses.json"
    ).resolve()


def test_project_root_found_from_nested_cwd(monkeypatch, tmp_path):
    monkeypatch.delenv("CITYRADIUS_PROJECT_ROOT", raising=False)
    (tmp_path / "pyproject.toml").write_text("", encoding="utf-8")
    (tmp_path / "data").mkdir()
    nested = tmp_path / "src" / "pkg"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)
    assert env.get_project_root() == tmp_path.resolve()


def test_absolute_paths_pass_through(tmp_path):
    target = tmp_path / "addresses.json"
    assert env.resolve_project_path(target) == target
    assert env.resolve_project_path(str(target)) == Path(target)
