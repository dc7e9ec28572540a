"""qrdeck: keep a deck of URLs and show the active one as a QR code.

Commands
--------
  add       Save a new URL
  list      List saved URLs in a rich table
  update    Change the title or URL of a saved entry
  delete    Remove a saved URL
  activate  Make a saved URL the active one
  show      Show the active URL and its QR code
  next      Move to the next URL in the carousel
  prev      Move to the previous URL in the carousel
  goto      Jump to a carousel position
  carousel  Step through saved URLs interactively
  copy      Copy the active URL to the clipboard
  share     Share the active URL (falls back to the clipboard)
  download  Save the active QR code as a PNG
  open      Open the active URL in a browser
  info      Show storage location and counts
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from . import __version__
from .carousel import Carousel
from .config import get_log_level, get_qr_width, get_storage_path
from .errors import RenderError, ShareError, ValidationError
from .models import UrlFormData, UrlRecord
from .qr import QrOptions, render_text
from .share import copy_to_clipboard, download, open_in_browser, share
from .storage import LocalStorage
from .urls import UrlStore

# ---------------------------------------------------------------------------
# App & consoles
# ---------------------------------------------------------------------------

_THEME = Theme(
    {
        "success": "bold green",
        "warning": "bold yellow",
        "danger": "bold red",
        "muted": "dim",
        "label": "cyan",
        "highlight": "bold white",
    }
)

console = Console(theme=_THEME)
err = Console(stderr=True, theme=_THEME)

app = typer.Typer(
    name="qrdeck",
    help="[bold cyan]qrdeck[/bold cyan]: saved URLs as scannable QR codes.",
    no_args_is_help=True,
    pretty_exceptions_show_locals=False,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def _setup(
    storage: Annotated[
        Optional[Path],
        typer.Option("--storage", help="Custom storage file path.", show_default=False),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-V", help="Log debug output.")] = False,
) -> None:
    if storage:
        os.environ["QRDECK_STORAGE"] = str(storage)
    logging.basicConfig(
        level=logging.DEBUG if verbose else get_log_level(),
        format="%(message)s",
        handlers=[RichHandler(console=err, show_path=False)],
        force=True,
    )


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _storage() -> LocalStorage:
    return LocalStorage(get_storage_path())


def _open_store() -> UrlStore:
    return UrlStore.open(_storage())


def _qr_options() -> QrOptions:
    return QrOptions(width=get_qr_width())


def _require_active(store: UrlStore) -> UrlRecord:
    active = store.get_active()
    if active is None:
        err.print(
            "[warning]No active URL.[/warning] Add one with [bold]qrdeck add[/bold] first.",
        )
        raise typer.Exit(1)
    return active


def _find_one(store: UrlStore, ref: str) -> UrlRecord:
    """Return the unique record matching *ref* (exact title, id prefix, then partial title)."""
    records = store.urls
    ref_l = ref.lower()
    exact = [r for r in records if r.title.lower() == ref_l]
    if len(exact) == 1:
        return exact[0]
    if len(exact) > 1:
        err.print(f"[warning]Multiple URLs titled '{ref}'; use the id instead.[/warning]")
        for r in exact:
            err.print(f"  • {r.title} ({r.id[:8]})")
        raise typer.Exit(1)

    by_id = [r for r in records if r.id.startswith(ref_l)]
    if len(by_id) == 1:
        return by_id[0]
    if len(by_id) > 1:
        err.print(f"[warning]Id prefix '{ref}' matches several URLs; give more characters.[/warning]")
        for r in by_id:
            err.print(f"  • {r.title} ({r.id[:8]})")
        raise typer.Exit(1)

    partial = [r for r in records if ref_l in r.title.lower()]
    if len(partial) == 1:
        return partial[0]
    if len(partial) > 1:
        err.print(f"[warning]Multiple partial matches for '{ref}':[/warning]")
        for r in partial:
            err.print(f"  • {r.title}")
        raise typer.Exit(1)

    err.print(f"[danger]No saved URL matching '[bold]{ref}[/bold]'.[/danger]")
    raise typer.Exit(1)


def _render_active(store: UrlStore) -> None:
    active = store.get_active()
    if active is None:
        console.print(
            Panel(
                "[muted]Add a URL with [bold]qrdeck add[/bold] to generate a QR code.[/muted]",
                title="[bold]No Active URL[/bold]",
                border_style="yellow",
                expand=False,
            )
        )
        return

    body = Text()
    body.append(active.url, style="blue underline")
    position = store.active_index() + 1
    if len(store) > 1:
        body.append(f"\n{position} of {len(store)}", style="muted")
    console.print(
        Panel(body, title=f"[bold cyan]{active.title}[/bold cyan]", expand=False, border_style="cyan")
    )

    try:
        console.print(render_text(active.url), highlight=False, markup=False)
    except RenderError as exc:
        err.print(f"[warning]{exc}[/warning]")


def _render_table(records: tuple[UrlRecord, ...]) -> None:
    table = Table(
        title=f"Saved URLs ({len(records)} total)",
        box=box.ROUNDED,
        header_style="bold cyan",
        show_lines=False,
        highlight=True,
        title_style="bold",
    )
    table.add_column("#", style="muted", justify="right", no_wrap=True)
    table.add_column("", no_wrap=True)
    table.add_column("Title", style="bold white", min_width=16)
    table.add_column("URL", style="blue", max_width=40)
    table.add_column("Added", style="muted", no_wrap=True)
    table.add_column("ID", style="muted", no_wrap=True)

    for i, r in enumerate(records, 1):
        table.add_row(
            str(i),
            "[green]●[/green]" if r.is_active else "○",
            r.title,
            r.url,
            r.created_at.strftime("%Y-%m-%d"),
            r.id[:8],
        )
    console.print(table)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def add(
    title: Annotated[Optional[str], typer.Argument(help="Display title.", show_default=False)] = None,
    url: Annotated[Optional[str], typer.Argument(help="URL (https:// is added if missing).", show_default=False)] = None,
) -> None:
    """Save a new URL. The first URL saved becomes active."""
    store = _open_store()

    if title is None:
        title = Prompt.ask("  Title", default="", console=console)
    if url is None:
        url = Prompt.ask("  URL   [muted](example.com or https://example.com)[/muted]", default="", console=console)

    try:
        record = store.add(UrlFormData(url=url, title=title))
    except ValidationError as exc:
        err.print(f"[danger]{exc}[/danger]")
        raise typer.Exit(1) from exc

    suffix = " [muted](active)[/muted]" if record.is_active else ""
    console.print(f"[success]Added '[bold]{record.title}[/bold]' →[/success] {record.url}{suffix}")


@app.command("list")
def list_urls() -> None:
    """List saved URLs in display order."""
    store = _open_store()
    if not len(store):
        console.print("[muted]No URLs saved yet. Add your first URL![/muted]")
        return
    _render_table(store.urls)


@app.command()
def update(
    ref: Annotated[str, typer.Argument(help="Id prefix or title (exact or partial).")],
    title: Annotated[Optional[str], typer.Option("--title", "-t", help="New title.")] = None,
    url: Annotated[Optional[str], typer.Option("--url", "-u", help="New URL.")] = None,
) -> None:
    """Change the title and/or URL of a saved entry."""
    store = _open_store()
    record = _find_one(store, ref)

    if title is None and url is None:
        console.print("[muted]No changes made.[/muted]")
        return

    data = UrlFormData(
        url=url if url is not None else record.url,
        title=title if title is not None else record.title,
    )
    try:
        updated = store.update(record.id, data)
    except ValidationError as exc:
        err.print(f"[danger]{exc}[/danger]")
        raise typer.Exit(1) from exc

    console.print(f"[success]Updated '[bold]{updated.title}[/bold]' →[/success] {updated.url}")


@app.command()
def delete(
    ref: Annotated[str, typer.Argument(help="Id prefix or title (exact or partial).")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation prompt.")] = False,
) -> None:
    """Permanently delete a saved URL."""
    store = _open_store()
    record = _find_one(store, ref)

    if not yes:
        confirmed = Confirm.ask(
            f"  Delete '[bold]{record.title}[/bold]'? [muted]This cannot be undone.[/muted]",
            default=False,
            console=console,
        )
        if not confirmed:
            raise typer.Exit(0)

    store.delete(record.id)
    console.print(f"[danger]Deleted '[bold]{record.title}[/bold]'.[/danger]")
    active = store.get_active()
    if record.is_active and active is not None:
        console.print(f"[muted]Now active:[/muted] [bold]{active.title}[/bold]")


@app.command()
def activate(
    ref: Annotated[str, typer.Argument(help="Id prefix or title (exact or partial).")],
) -> None:
    """Make a saved URL the active one."""
    store = _open_store()
    record = _find_one(store, ref)
    store.set_active(record.id)
    console.print(f"[success]Active:[/success] [bold]{record.title}[/bold]")


@app.command()
def show() -> None:
    """Show the active URL and its QR code."""
    _render_active(_open_store())


@app.command("next")
def next_url() -> None:
    """Move to the next saved URL (wraps around)."""
    store = _open_store()
    Carousel(store).next()
    _render_active(store)


@app.command("prev")
def prev_url() -> None:
    """Move to the previous saved URL (wraps around)."""
    store = _open_store()
    Carousel(store).previous()
    _render_active(store)


@app.command()
def goto(
    position: Annotated[int, typer.Argument(help="1-based carousel position.")],
) -> None:
    """Jump to a carousel position; positions out of range are ignored."""
    store = _open_store()
    if Carousel(store).go_to(position - 1) is None:
        console.print(f"[muted]Nothing at position {position}.[/muted]")
    _render_active(store)


@app.command()
def carousel() -> None:
    """Step through saved URLs: n(ext), p(rev), a position number, or q(uit)."""
    store = _open_store()
    nav = Carousel(store)

    while True:
        _render_active(store)
        if not nav.has_multiple():
            return
        choice = Prompt.ask("  [label]n[/label]ext / [label]p[/label]rev / # / [label]q[/label]uit", default="q", console=console)
        choice = choice.strip().lower()
        if choice in ("q", "quit"):
            return
        if choice in ("n", "next"):
            nav.next()
        elif choice in ("p", "prev", "previous"):
            nav.previous()
        elif choice.isdigit():
            nav.go_to(int(choice) - 1)
        else:
            console.print(f"[muted]Unknown choice '{choice}'.[/muted]")


@app.command()
def copy() -> None:
    """Copy the active URL to the clipboard."""
    active = _require_active(_open_store())
    try:
        copy_to_clipboard(active.url)
    except ShareError as exc:
        err.print(f"[danger]{exc}[/danger]")
        raise typer.Exit(1) from exc
    console.print("[success]Copied![/success] URL copied to clipboard.")


@app.command("share")
def share_cmd() -> None:
    """Share the active URL; copies it to the clipboard when sharing is unavailable."""
    active = _require_active(_open_store())
    try:
        outcome = share(active)
    except ShareError as exc:
        err.print(f"[danger]{exc}[/danger]")
        raise typer.Exit(1) from exc
    if outcome == "copied":
        console.print("[success]Copied![/success] URL copied to clipboard.")
    else:
        console.print(f"[success]Shared[/success] [bold]{active.title}[/bold].")


@app.command("download")
def download_cmd(
    output_dir: Annotated[Path, typer.Option("--output-dir", "-o", help="Directory to write the PNG into.")] = Path("."),
) -> None:
    """Save the active URL's QR code as a PNG."""
    active = _require_active(_open_store())
    try:
        path = download(active, output_dir, _qr_options())
    except (RenderError, ShareError) as exc:
        err.print(f"[danger]{exc}[/danger]")
        raise typer.Exit(1) from exc
    console.print(f"[success]Saved →[/success] [bold]{path}[/bold]")


@app.command("open")
def open_cmd() -> None:
    """Open the active URL in the default browser."""
    active = _require_active(_open_store())
    if not open_in_browser(active):
        err.print("[warning]Could not open a browser.[/warning]")
        raise typer.Exit(1)


@app.command()
def info() -> None:
    """Show storage metadata and location."""
    storage = _storage()
    path = storage.path

    table = Table(box=box.SIMPLE, show_header=False, padding=(0, 2))
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Version", __version__)
    table.add_row("Storage path", str(path))
    table.add_row("Storage exists", "[green]yes[/green]" if storage.exists() else "[red]no[/red]")

    store = UrlStore.open(storage)
    table.add_row("Saved URLs", str(len(store)))
    active = store.get_active()
    table.add_row("Active", active.title if active else "[muted]none[/muted]")

    console.print(Panel(table, title="[bold cyan]qrdeck info[/bold cyan]", border_style="cyan", expand=False))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main() -> None:
    app()


if __name__ == "__main__":
    main()
