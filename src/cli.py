"""CLI interface for blogserve."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from blogserve.config import load_config, merge_cli_overrides
from blogserve.content.enhancer import enhance
from blogserve.content.models import Post
from blogserve.content.service import BlogService, create_service

app = typer.Typer(
    name="blogserve",
    help="Inspect the merged, enhanced and translated blog catalog.",
)

console = Console()

_state: dict[str, object] = {}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from blogserve import __version__

        console.print(f"blogserve {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .blogserve.toml file."),
    ] = None,
    supabase_url: Annotated[
        Optional[str],
        typer.Option("--supabase-url", help="Override the Supabase project URL."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """blogserve - static + CMS blog posts, enhanced and localized."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    _state["config_path"] = config
    _state["supabase_url"] = supabase_url


def _service() -> BlogService:
    cfg = load_config(_state.get("config_path"))  # type: ignore[arg-type]
    cfg = merge_cli_overrides(cfg, supabase_url=_state.get("supabase_url"))
    return create_service(cfg)


def _posts_table(posts: list[Post], title: str) -> Table:
    table = Table(title=title)
    table.add_column("Date")
    table.add_column("Slug")
    table.add_column("Title")
    table.add_column("Tags")
    for post in posts:
        table.add_row(post.date, post.slug, post.title, ", ".join(post.tags))
    return table


@app.command("posts")
def posts_cmd(
    locale: Annotated[Optional[str], typer.Option("--locale", "-l", help="Locale code.")] = None,
    limit: Annotated[
        Optional[int], typer.Option("--limit", "-n", help="Only show the newest N posts.")
    ] = None,
) -> None:
    """List posts visible in a locale, newest first."""
    service = _service()
    locale = locale or service.source_locale
    if limit is None:
        posts = service.get_all_posts(locale)
    else:
        posts = service.get_recent_posts(limit, locale)
    if not posts:
        console.print(f"[yellow]No posts for locale '{locale}'[/yellow]")
        return
    console.print(_posts_table(posts, f"Posts ({locale})"))


@app.command("show")
def show_cmd(
    slug: Annotated[str, typer.Argument(help="Post slug.")],
    locale: Annotated[Optional[str], typer.Option("--locale", "-l", help="Locale code.")] = None,
    html: Annotated[bool, typer.Option("--html", help="Print the enhanced HTML body.")] = False,
) -> None:
    """Show a single post."""
    service = _service()
    post = service.get_post_by_slug(slug, locale)
    if post is None:
        console.print(f"[red]Post not found:[/red] {slug}")
        raise typer.Exit(1)

    console.print(f"[bold]{post.title}[/bold]")
    console.print(f"{post.date} · {post.author} · {post.read_time}")
    if post.description:
        console.print(post.description)
    if post.tags:
        console.print(f"Tags: {', '.join(post.tags)}")
    if post.cover_image:
        console.print(f"Cover: {post.cover_image}")
    if html:
        console.print(post.content, markup=False, highlight=False, soft_wrap=True)


@app.command("categories")
def categories_cmd(
    locale: Annotated[Optional[str], typer.Option("--locale", "-l", help="Locale code.")] = None,
) -> None:
    """List the unique tags of the posts visible in a locale."""
    for tag in _service().get_categories(locale):
        console.print(tag)


@app.command("related")
def related_cmd(
    slug: Annotated[str, typer.Argument(help="Post slug.")],
    limit: Annotated[int, typer.Option("--limit", "-n", help="Number of posts.")] = 3,
    locale: Annotated[Optional[str], typer.Option("--locale", "-l", help="Locale code.")] = None,
) -> None:
    """List posts sharing the most tags with a post."""
    posts = _service().get_related_posts(slug, limit, locale)
    if not posts:
        console.print(f"[yellow]No related posts for {slug}[/yellow]")
        return
    console.print(_posts_table(posts, f"Related to {slug}"))


@app.command("locales")
def locales_cmd(
    slug: Annotated[str, typer.Argument(help="Post slug.")],
) -> None:
    """List the locales a post is available in."""
    console.print(" ".join(_service().get_translated_locales(slug)))


@app.command("enhance")
def enhance_cmd(
    path: Annotated[Path, typer.Argument(help="Markdown or HTML file.", exists=True, dir_okay=False)],
) -> None:
    """Print the enhanced HTML for a file."""
    console.print(enhance(path.read_text(encoding="utf-8")), markup=False, highlight=False, soft_wrap=True)


if __name__ == "__main__":
    app()
