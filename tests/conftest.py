"""Shared fixtures: content trees on disk and in memory."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from contentgraph.config import SiteConfig
from contentgraph.errors import NotFoundError
from contentgraph.indexer.entries import Entry
from contentgraph.retrieval.site import Site


def md(title: str | None = None, body: str = "", **front) -> str:
    """Markdown text with a YAML front-matter block."""
    meta = {}
    if title is not None:
        meta["title"] = title
    meta.update(front)
    return f"---\n{yaml.safe_dump(meta, sort_keys=False)}---\n{body}"


def words(n: int) -> str:
    return " ".join(["word"] * n)


def write_tree(root: Path, files: dict[str, str]) -> Path:
    for rel, text in files.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
    return root


class FakeSource:
    """In-memory ContentSource keyed by relative POSIX path."""

    def __init__(self, files: dict[str, str]) -> None:
        self.files = files
        self.reads: list[str] = []

    def list_entries(self, rel_dir: str) -> list[Entry]:
        prefix = f"{rel_dir}/" if rel_dir else ""
        found: dict[str, bool] = {}
        for path in self.files:
            if not path.startswith(prefix):
                continue
            head, sep, _ = path[len(prefix):].partition("/")
            found[head] = found.get(head, False) or bool(sep)
        if not found:
            raise NotFoundError(f"Directory not found: {rel_dir}", rel_dir)
        return [Entry(name, is_dir) for name, is_dir in sorted(found.items())]

    def read_text(self, rel_path: str) -> str:
        self.reads.append(rel_path)
        if rel_path not in self.files:
            raise NotFoundError(f"File not found: {rel_path}", rel_path)
        return self.files[rel_path]


SAMPLE_FILES = {
    "_index.md": md("Home", "Welcome. Read [about me](/about)."),
    "about.md": md(
        "About",
        "Hi there. See [the blog](/blog) and [a site](https://www.example.com/a).",
        description="Who I am",
    ),
    "notes.txt": "not markdown",
    "blog/_index.md": md("Blog", "All posts."),
    "blog/_index.no.md": md("Blogg", "Alle innlegg."),
    "blog/.DS_Store": "",
    "blog/2024-03-01-hello-world.md": md(
        "Hello",
        "First post with [about](/about) and [mail](mailto:me@example.com).",
        taxonomies={"tags": ["Python", "Web Dev"]},
    ),
    "blog/2023-05-10-older.md": md(
        "Older",
        "An older post. [Jump](#top)",
        taxonomies={"tags": ["Python"]},
        updated="2023-06-01",
    ),
    "blog/2024-07-15-nested/index.md": md(
        "Nested Post",
        "Lives in a folder. [b](https://blog.example.com/b) [about](/about)",
        taxonomies={"tags": ["Deno"]},
        language="en",
    ),
    "blog/2024-07-15-nested/photo.png": "png",
    "projects/_index.md": md("Projects", "Things I built."),
    "projects/tools.md": md("Tools", "Handy [tools](https://tools.example.org/)."),
    "projects/web/_index.md": md("Web", "Web projects."),
    "projects/web/site.md": md("Site", "This site."),
}


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    return write_tree(tmp_path / "content", SAMPLE_FILES)


@pytest.fixture
def cfg(content_root: Path) -> SiteConfig:
    return SiteConfig(content_root=content_root)


@pytest.fixture
def site(cfg: SiteConfig) -> Site:
    return Site(cfg)
