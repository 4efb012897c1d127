"""
Tests for the command line interface.
"""

import json
import pytest
from pathlib import Path

from typer.testing import CliRunner

from contentgraph.cli import app

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path: Path, content_root: Path) -> Path:
    p = tmp_path / "config.toml"
    p.write_text(f'[content]\nroot = "{content_root}"\n', encoding="utf-8")
    return p


def _json(args: list[str]):
    result = runner.invoke(app, args)
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestQueries:
    """Each query command prints JSON."""

    def test_post(self, config_file: Path):
        data = _json(["post", "hello-world", "--config", str(config_file)])

        assert data["title"] == "Hello"
        assert data["date"] == "2024-03-01"
        assert data["kind"] == "post"
        assert [t["slug"] for t in data["tags"]] == ["python", "web-dev"]

    def test_page_in_section(self, config_file: Path):
        data = _json(["page", "tools", "--section", "projects", "--config", str(config_file)])
        assert data["path"] == "projects/tools"

    def test_root_index_page(self, config_file: Path):
        data = _json(["page", "--config", str(config_file)])
        assert data["title"] == "Home"

    def test_section(self, config_file: Path):
        data = _json(["section", "projects", "--config", str(config_file)])
        assert data["sub_sections"][0]["slug"] == "projects/web"

    def test_tagged(self, config_file: Path):
        data = _json(["tagged", "deno", "--config", str(config_file)])
        assert [p["slug"] for p in data] == ["nested"]

    def test_pages(self, config_file: Path):
        data = _json(["pages", "--config", str(config_file)])
        assert data[0]["title"] == "About"
        assert len(data) == 10

    def test_tags(self, config_file: Path):
        data = _json(["tags", "--config", str(config_file)])
        assert [t["title"] for t in data] == ["Deno", "Python", "Web Dev"]

    def test_stats(self, config_file: Path):
        data = _json(["stats", "--config", str(config_file)])

        assert data["posts"] == 3
        assert data["tags"] == 3
        assert set(data["blog_by_year"]) == {"2024", "2023"}

    def test_links(self, config_file: Path):
        data = _json(["links", "--config", str(config_file)])
        assert data["external"][0]["domain"] == "example.com"


class TestFailures:
    """Absent results and content errors exit with status 1."""

    def test_missing_post(self, config_file: Path):
        result = runner.invoke(app, ["post", "ghost", "--config", str(config_file)])

        assert result.exit_code == 1
        assert "No post with slug 'ghost'" in result.output

    def test_missing_section(self, config_file: Path):
        result = runner.invoke(app, ["section", "nope", "--config", str(config_file)])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_missing_config(self, tmp_path: Path):
        result = runner.invoke(app, ["stats", "--config", str(tmp_path / "absent.toml")])
        assert result.exit_code != 0


class TestInit:
    def test_writes_loadable_config(self, tmp_path: Path):
        out = tmp_path / "config.toml"
        result = runner.invoke(app, ["init", "--root", str(tmp_path / "content"), "--out", str(out)])

        assert result.exit_code == 0
        from contentgraph.config import load_config
        cfg = load_config(out)
        assert cfg.content_root == (tmp_path / "content").resolve()
        assert cfg.blog_section == "blog"
