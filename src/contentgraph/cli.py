from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

import typer

from .config import SiteConfig, load_config
from .errors import ContentError
from .mcp.server import run_stdio_server
from .retrieval.site import Site
from .serialize import dumps

app = typer.Typer(add_completion=False, no_args_is_help=True)

def _setup_logging(log_file: str | None, log_level: str, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, log_level.upper(), logging.WARNING)

    fmt = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    handlers: list[logging.Handler] = []

    # stderr keeps stdout clean for JSON output
    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(fmt, datefmt))
    handlers.append(console)

    if log_file:
        from logging.handlers import RotatingFileHandler
        file_handler = RotatingFileHandler(
            log_file, maxBytes=10 * 1024 * 1024, backupCount=5
        )
        file_handler.setFormatter(logging.Formatter(fmt, datefmt))
        handlers.append(file_handler)

    logger = logging.getLogger("contentgraph")
    logger.setLevel(level)
    logger.handlers.clear()
    for h in handlers:
        logger.addHandler(h)

def _cfg(config: str) -> SiteConfig:
    try:
        return load_config(config)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--config") from e

def _emit(fn: Callable[[], Any], missing: str | None = None) -> None:
    """Run a query and print its result as JSON; content errors exit with status 1."""
    try:
        result = fn()
    except ContentError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    if result is None and missing:
        typer.echo(missing, err=True)
        raise typer.Exit(code=1)
    typer.echo(dumps(result))

@app.callback()
def main(log_level: str = typer.Option("WARNING", "--log-level", help="Log level: DEBUG, INFO, WARNING, ERROR"),
         verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose (DEBUG) logging"),
         log_file: str = typer.Option(None, "--log-file", "-l", help="Also write logs to this file")):
    """Query a markdown content tree."""
    _setup_logging(log_file, log_level, verbose)

@app.command()
def init(root: str = typer.Option("content", help="Content root directory"),
         blog: str = typer.Option("blog", help="Blog section slug"),
         out: str = typer.Option("config.toml", help="Write example config to this path")):
    """Write a starter config.toml."""
    outp = Path(out)
    outp.write_text(f"""[content]
root = "{root}"
blog_section = "{blog}"

[render]
words_per_minute = 200
# Locale used to format the total word count
number_locale = "en_IN"

[walker]
# Threads used to parse sibling files
workers = 4

[taxonomy]
tags_path = "tags"
""", encoding="utf-8")
    typer.echo(f"Wrote {outp}")

@app.command()
def page(slug: str = typer.Argument("", help="Page slug; empty for the index page"),
         section: str = typer.Option(None, help="Section slug"),
         config: str = typer.Option("config.toml")):
    """Print one page."""
    site = Site(_cfg(config))
    _emit(lambda: site.get_page(slug, section))

@app.command()
def section(name: str, config: str = typer.Option("config.toml")):
    """Print a section with its pages and subsections."""
    site = Site(_cfg(config))
    _emit(lambda: site.get_section(name))

@app.command()
def post(slug: str, blog: str = typer.Option(None, help="Blog section (default: from config)"),
         config: str = typer.Option("config.toml")):
    """Print a blog post."""
    site = Site(_cfg(config))
    _emit(lambda: site.get_post(slug, blog), missing=f"No post with slug '{slug}'")

@app.command()
def tagged(tag: str, blog: str = typer.Option(None, help="Blog section (default: from config)"),
           config: str = typer.Option("config.toml")):
    """Print the posts carrying a tag slug."""
    site = Site(_cfg(config))
    _emit(lambda: site.get_posts_by_tag(tag, blog), missing=f"No posts tagged '{tag}'")

@app.command()
def pages(config: str = typer.Option("config.toml")):
    """Print every page, post and section index sorted by title."""
    site = Site(_cfg(config))
    _emit(site.get_all_pages)

@app.command()
def tags(blog: str = typer.Option(None, help="Blog section (default: from config)"),
         config: str = typer.Option("config.toml")):
    """Print the unique tags used by blog posts."""
    site = Site(_cfg(config))
    _emit(lambda: site.get_all_tags(blog))

@app.command()
def stats(blog: str = typer.Option(None, help="Blog section (default: from config)"),
          config: str = typer.Option("config.toml")):
    """Print site-wide statistics."""
    site = Site(_cfg(config))
    _emit(lambda: site.get_global_stats(blog))

@app.command()
def links(config: str = typer.Option("config.toml")):
    """Print the internal and external link graph."""
    site = Site(_cfg(config))
    _emit(site.get_all_links, missing="No links found")

@app.command()
def serve(config: str = typer.Option("config.toml")):
    """Run the query tool server over stdio."""
    run_stdio_server(_cfg(config))

if __name__ == "__main__":
    app()
