import os
import json
from typing import List, Any
from rich.console import Console
from rich.markup import escape
from rich.table import Table

# Environment variable to control CLI output mode
# İzin verilen değerler: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"
OUTPUT_MODES = {"plain", "json", "rich"}


def _console() -> Console:
    # Çıktı akışı testlerde değiştirildiği için her çağrıda yeni konsol
    return Console(highlight=False)


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in OUTPUT_MODES:
        os.environ[OUTPUT_MODE_ENV] = mode


def get_output_mode() -> str:
    mode = os.environ.get(OUTPUT_MODE_ENV, "plain").lower()
    return mode if mode in OUTPUT_MODES else "plain"


def print_list_result(books: List[Any]) -> None:
    """Kitap listesini mevcut çıktı moduna göre yazdır.
    - plain: 'ID: .., Title: .., Author: .., Category: ..' satırları, veya 'No books available.'
    - json: JSON dizisi olarak id, title, author, category
    - rich: Rich tablosu
    """
    mode = get_output_mode()

    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
        return

    if not books:
        print("No books available.")
        return

    if mode == "rich":
        table = Table(title="📚 Books", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True, justify="right")
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Category", style="green")
        for b in books:
            table.add_row(str(b.id), b.title, b.author, b.category)
        _console().print(table)
    else:
        print("Books available in the library:")
        for b in books:
            print(str(b))


def print_result_message(result: Any) -> None:
    """Print a catalog operation's message; failures in json mode carry the error kind."""
    mode = get_output_mode()
    if mode == "json":
        payload = {"ok": result.ok, "message": result.message}
        if result.error is not None:
            payload["error"] = result.error.value
        print(json.dumps(payload, ensure_ascii=False))
    elif mode == "rich":
        style = "green" if result.ok else "bold red"
        _console().print(f"[{style}]{escape(result.message)}[/]")
    else:
        print(result.message)
