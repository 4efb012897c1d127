"""
Tests for configuration parsing and validation.
"""

import pytest
from pathlib import Path

from contentgraph.config import SiteConfig, load_config


def _write(tmp_path: Path, text: str) -> Path:
    p = tmp_path / "config.toml"
    p.write_text(text, encoding="utf-8")
    return p


class TestSiteConfig:
    """Defaults and path handling."""

    def test_defaults(self, tmp_path: Path):
        cfg = SiteConfig(content_root=tmp_path)

        assert cfg.blog_section == "blog"
        assert cfg.words_per_minute == 200
        assert cfg.number_locale == "en_IN"
        assert cfg.workers == 4
        assert cfg.tags_path == "tags"

    def test_string_root_becomes_path(self, tmp_path: Path):
        cfg = SiteConfig(content_root=str(tmp_path))
        assert cfg.content_root == tmp_path

    def test_string_root_expands_env(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("CONTENT_HOME", str(tmp_path))
        cfg = SiteConfig(content_root="$CONTENT_HOME/content")
        assert cfg.content_root == tmp_path / "content"


class TestFromToml:
    """TOML loading."""

    def test_full_config(self, tmp_path: Path):
        p = _write(tmp_path, f"""
[content]
root = "{tmp_path / 'content'}"
blog_section = "journal"

[render]
words_per_minute = 250
number_locale = "en_US"

[walker]
workers = 2

[taxonomy]
tags_path = "/topics/"
""")
        cfg = SiteConfig.from_toml(p)

        assert cfg.content_root == (tmp_path / "content").resolve()
        assert cfg.blog_section == "journal"
        assert cfg.words_per_minute == 250
        assert cfg.number_locale == "en_US"
        assert cfg.workers == 2
        assert cfg.tags_path == "topics"

    def test_minimal_config_uses_defaults(self, tmp_path: Path):
        cfg = SiteConfig.from_toml(_write(tmp_path, '[content]\nroot = "content"\n'))

        assert cfg.blog_section == "blog"
        assert cfg.workers == 4

    def test_missing_root(self, tmp_path: Path):
        with pytest.raises(ValueError, match="root"):
            SiteConfig.from_toml(_write(tmp_path, "[render]\nwords_per_minute = 100\n"))

    @pytest.mark.parametrize("section,key,value", [
        ("walker", "workers", 0),
        ("walker", "workers", 500),
        ("render", "words_per_minute", 0),
    ])
    def test_out_of_range_values(self, tmp_path: Path, section: str, key: str, value: int):
        p = _write(tmp_path, f'[content]\nroot = "c"\n\n[{section}]\n{key} = {value}\n')
        with pytest.raises(ValueError, match=key):
            SiteConfig.from_toml(p)

    def test_empty_blog_section(self, tmp_path: Path):
        p = _write(tmp_path, '[content]\nroot = "c"\nblog_section = "/"\n')
        with pytest.raises(ValueError, match="blog_section"):
            SiteConfig.from_toml(p)

    def test_load_config_missing_file(self, tmp_path: Path):
        with pytest.raises(ValueError, match="not found"):
            load_config(tmp_path / "absent.toml")
