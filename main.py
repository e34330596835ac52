import dataclasses
import logging
import sys
from dataclasses import dataclass
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt

from config import SUPPORTED_BACKENDS, Settings, settings as default_settings
from database import StorageError, open_gateway
from library import Library, OperationResult
from utils.ui_helpers import print_list_result, print_result_message, set_output_mode
from utils.validators import IdValidator

logger = logging.getLogger(__name__)

MENU_ITEMS = [
    ("1", "View all books"),
    ("2", "Add a new book"),
    ("3", "Update a book"),
    ("4", "Delete a book"),
    ("5", "Exit"),
]
EXIT_CHOICE = "5"


@dataclass
class CatalogContext:
    """Explicitly passed handle: resolved settings plus the live catalog."""

    settings: Settings
    library: Library


def build_context(cfg: Settings) -> CatalogContext:
    # Bağlantı hatası gateway tarafından ERROR seviyesinde loglanır
    gateway = open_gateway(cfg.database())
    return CatalogContext(settings=cfg, library=Library(gateway))


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


# ------------------------- Command loop ------------------------- #
def display_books(library: Library) -> OperationResult:
    result = library.list_books()
    if result.ok:
        print_list_result(result.value)
    else:
        print_result_message(result)
    return result


def prompt_book_id(console: Console, prompt: str) -> OperationResult:
    raw = Prompt.ask(prompt, console=console)
    return IdValidator.parse_book_id(raw)


def add_book(library: Library, console: Console) -> OperationResult:
    title = Prompt.ask("Enter title", console=console)
    author = Prompt.ask("Enter author", console=console)
    category = Prompt.ask("Enter category", console=console)
    result = library.add_book(title, author, category)
    print_result_message(result)
    return result


def update_book(library: Library, console: Console) -> OperationResult:
    parsed = prompt_book_id(console, "Enter the ID of the book to update")
    if not parsed.ok:
        print_result_message(parsed)
        return parsed
    title = Prompt.ask("Enter new title", console=console)
    author = Prompt.ask("Enter new author", console=console)
    category = Prompt.ask("Enter new category", console=console)
    result = library.update_book(parsed.value, title, author, category)
    print_result_message(result)
    return result


def delete_book(library: Library, console: Console) -> OperationResult:
    parsed = prompt_book_id(console, "Enter the ID of the book to delete")
    if not parsed.ok:
        print_result_message(parsed)
        return parsed
    result = library.delete_book(parsed.value)
    print_result_message(result)
    return result


def render_menu(console: Console, app_name: str) -> None:
    lines = [f"[bold cyan]{key}.[/] {label}" for key, label in MENU_ITEMS]
    console.print()
    console.print(Panel("\n".join(lines), title=f"{app_name} Menu", border_style="cyan", box=box.ROUNDED, expand=False))


def run_menu(library: Library, app_name: str = "E-Library") -> None:
    """Read-dispatch-print loop; returns when the operator chooses Exit or input ends."""
    console = Console(highlight=False)
    actions = {
        "1": lambda: display_books(library),
        "2": lambda: add_book(library, console),
        "3": lambda: update_book(library, console),
        "4": lambda: delete_book(library, console),
    }

    console.print(f"Welcome to the {app_name} CLI!")
    while True:
        render_menu(console, app_name)
        try:
            choice = console.input("Please enter your choice: ").strip()
            logger.debug("Menu choice: %r", choice)
            if choice == EXIT_CHOICE:
                break
            action = actions.get(choice)
            if action is None:
                console.print("[yellow]Invalid option. Please choose a valid number from the menu.[/]")
                continue
            action()
        except EOFError:
            # Girdi bitti; çıkış gibi davran
            break
    console.print(f"[green]Exiting the {app_name}. Goodbye![/]")


# --- Typer CLI Uygulaması ---
app = typer.Typer(help="E-Library CLI: manage the book catalog.")


def _catalog(ctx: typer.Context) -> CatalogContext:
    if ctx.obj is None:
        cfg: Settings = ctx.meta["settings"]
        ctx.obj = build_context(cfg)
        ctx.call_on_close(ctx.obj.library.close)
    return ctx.obj


def _finish(result: OperationResult) -> None:
    print_result_message(result)
    if not result.ok:
        raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def _global_options(
    ctx: typer.Context,
    db_file: Optional[str] = typer.Option(None, "--db-file", help="SQLite database file (overrides LIBRARY_DB_FILE)"),
    backend: Optional[str] = typer.Option(None, "--backend", help="Database backend: sqlite | mysql"),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
):
    """Global options; without a sub-command the interactive menu starts."""
    cfg = default_settings
    overrides = {}
    if db_file:
        overrides["db_file"] = db_file
    if backend:
        if backend.lower() not in SUPPORTED_BACKENDS:
            raise typer.BadParameter(f"expected one of {', '.join(SUPPORTED_BACKENDS)}", param_hint="--backend")
        overrides["db_backend"] = backend.lower()
    if overrides:
        cfg = dataclasses.replace(cfg, **overrides)
    configure_logging(cfg.log_level)
    set_output_mode(output or cfg.output_mode)
    ctx.meta["settings"] = cfg

    if ctx.invoked_subcommand is None:
        catalog = _catalog(ctx)
        run_menu(catalog.library, cfg.app_name)


@app.command("menu")
def cli_menu(ctx: typer.Context):
    """Start the interactive menu."""
    catalog = _catalog(ctx)
    run_menu(catalog.library, catalog.settings.app_name)


@app.command("list")
def cli_list(ctx: typer.Context):
    """List all books."""
    result = display_books(_catalog(ctx).library)
    if not result.ok:
        raise typer.Exit(code=1)


@app.command("add")
def cli_add(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Book title"),
    author: str = typer.Argument(..., help="Book author"),
    category: str = typer.Argument(..., help="Book category"),
):
    """Add a new book."""
    _finish(_catalog(ctx).library.add_book(title, author, category))


@app.command("update")
def cli_update(
    ctx: typer.Context,
    book_id: str = typer.Argument(..., metavar="ID", help="ID of the book to update"),
    title: str = typer.Argument(..., help="New title"),
    author: str = typer.Argument(..., help="New author"),
    category: str = typer.Argument(..., help="New category"),
):
    """Replace title, author and category of a book."""
    parsed = IdValidator.parse_book_id(book_id)
    if not parsed.ok:
        _finish(parsed)
    _finish(_catalog(ctx).library.update_book(parsed.value, title, author, category))


@app.command("delete")
def cli_delete(ctx: typer.Context, book_id: str = typer.Argument(..., metavar="ID", help="ID of the book to delete")):
    """Delete a book by ID."""
    parsed = IdValidator.parse_book_id(book_id)
    if not parsed.ok:
        _finish(parsed)
    _finish(_catalog(ctx).library.delete_book(parsed.value))


@app.command("init-db")
def cli_init_db(ctx: typer.Context):
    """Create the books table if it does not exist."""
    gateway = _catalog(ctx).library.gateway
    try:
        gateway.create_tables()
    except StorageError as e:
        print(f"Database is not available: {e}")
        raise typer.Exit(code=1)
    print("Database ready.")


if __name__ == "__main__":
    app()
