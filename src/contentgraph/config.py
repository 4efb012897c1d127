from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import tomllib

def _expand(p: str) -> str:
    return os.path.expandvars(os.path.expanduser(p))

@dataclass(frozen=True)
class SiteConfig:
    """Configuration for one content tree.

    Only `content_root` is required; everything else has a default that
    matches the conventional `content/` layout with a `blog` section.
    """

    content_root: Path

    def __post_init__(self):
        """Convert a string root to a Path and expand ~ and environment variables."""
        if isinstance(self.content_root, str):
            object.__setattr__(self, 'content_root', Path(_expand(self.content_root)))

    blog_section: str = "blog"

    # Rendering
    words_per_minute: int = 200
    number_locale: str = "en_IN"  # used for the formatted word total

    # Walker
    workers: int = 4  # threads parsing sibling files

    # Taxonomy
    tags_path: str = "tags"

    @staticmethod
    def from_toml(path: str | Path) -> "SiteConfig":
        data = tomllib.loads(Path(path).read_text(encoding="utf-8"))
        content = data.get("content", {})
        render = data.get("render", {})
        walker = data.get("walker", {})
        taxonomy = data.get("taxonomy", {})

        if "root" not in content:
            raise ValueError("Invalid config: [content] section must set root")
        content_root = Path(_expand(content["root"])).resolve()

        blog_section = str(content.get("blog_section", "blog")).strip("/")
        if not blog_section:
            raise ValueError("Invalid blog_section: must not be empty.")

        words_per_minute = int(render.get("words_per_minute", 200))
        if words_per_minute <= 0 or words_per_minute > 2000:
            raise ValueError(f"Invalid words_per_minute: {words_per_minute}. Must be between 1 and 2000.")

        workers = int(walker.get("workers", 4))
        if workers <= 0 or workers > 64:
            raise ValueError(f"Invalid workers: {workers}. Must be between 1 and 64.")

        return SiteConfig(
            content_root=content_root,
            blog_section=blog_section,
            words_per_minute=words_per_minute,
            number_locale=render.get("number_locale", "en_IN"),
            workers=workers,
            tags_path=str(taxonomy.get("tags_path", "tags")).strip("/"),
        )

def load_config(path: str | Path) -> SiteConfig:
    """Load configuration from a TOML file."""
    p = Path(path)
    if not p.is_file():
        raise ValueError(f"Config file not found: {p}")
    return SiteConfig.from_toml(p)
