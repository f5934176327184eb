# cli.py
import json
import os
from datetime import datetime
from typing import Any, Dict, List, Optional

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from sdk.productstore import ProductStoreClient

console = Console()
c = ProductStoreClient(base_url=os.getenv("PRODUCT_API_URL", "http://localhost:8080/api"))

status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})

PRODUCT_FIELDS = ("name", "price", "retailer", "amountInStock")


# ---------------------------
# Display helpers
# ---------------------------
def _cell(value: Any) -> str:
    return "N/A" if value is None else str(value)


def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Products",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=22)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Retailer", width=16)
    table.add_column("In stock", justify="right", width=9)

    for p in products:
        price = p.get("price")
        table.add_row(
            _cell(p.get("id")),
            _cell(p.get("name")),
            f"{price:.2f}" if isinstance(price, (int, float)) else _cell(price),
            _cell(p.get("retailer")),
            _cell(p.get("amountInStock")),
        )
    console.print(table)


def show_product(product_id: str, product: Dict[str, Any]):
    table = Table(show_header=False, box=box.SIMPLE)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    for key, value in product.items():
        table.add_row(key, json.dumps(value) if not isinstance(value, str) else value)
    console.print(Panel(table, title=f"ℹ️ {product_id}", border_style="cyan"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Returns the result, or None after printing the error.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            console=console,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


# ---------------------------
# Input helpers
# ---------------------------
def get_product_completer():
    ids = [p.get("id", "") for p in product_cache]
    names = [p.get("name", "") for p in product_cache if isinstance(p.get("name"), str)]
    return WordCompleter([n for n in ids + names if n], ignore_case=True)


def resolve_product_id(term: str) -> str:
    """Accept either an id or the name of a cached product."""
    for p in product_cache:
        if p.get("name") == term:
            return p.get("id", term)
    return term


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def parse_value(raw: str) -> Any:
    # "9.99" -> 9.99, "10" -> 10, anything not JSON stays a string
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def ask_product_fields(require_all: bool) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for field in PRODUCT_FIELDS:
        if field == "amountInStock":
            if require_all:
                data[field] = IntPrompt.ask("📦 Amount in stock", default=1)
                continue
            raw = Prompt.ask("📦 Amount in stock (blank to keep)", default="")
        else:
            raw = Prompt.ask(f"{field}{'' if require_all else ' (blank to keep)'}", default="")
        if raw != "":
            data[field] = parse_value(raw) if field in ("price", "amountInStock") else raw
    return data


# ---------------------------
# Main menu
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)
    header.add_row(
        "🛍️ Product API",
        f"[bold blue]{c.base_url}[/bold blue]",
        f"[dim]{datetime.now().strftime('%Y-%m-%d %H:%M:%S')}[/dim]"
    )
    return Panel(header, style="bold blue")


def menu():
    global product_cache

    console.clear()
    console.print(create_header())
    product_cache = try_api(c.list_products) or []

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        for row in (
            ("1", "📦 List products"),
            ("2", "ℹ️ Get product by ID"),
            ("3", "➕ Create product"),
            ("4", "✏️ Update product"),
            ("5", "🗑️ Delete product"),
            ("q", "👋 Quit"),
        ):
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter(["1", "2", "3", "4", "5", "q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded")
            if products is not None:
                product_cache = products
                show_products(products)

        elif choice == "2":
            pid = resolve_product_id(prompt_with_autocomplete("Product ID", get_product_completer()))
            product = try_api(c.get_product, pid)
            if product is not None:
                show_product(pid, product)

        elif choice == "3":
            data = ask_product_fields(require_all=True)
            try_api(c.create_product, data, success_msg="Product created")
            product_cache = try_api(c.list_products) or []

        elif choice == "4":
            pid = resolve_product_id(prompt_with_autocomplete("Product ID", get_product_completer()))
            data = ask_product_fields(require_all=False)
            if not data:
                console.print("[yellow]Nothing to update[/yellow]")
                continue
            try_api(c.update_product, pid, data, success_msg=f"Product {pid} updated")

        elif choice == "5":
            pid = resolve_product_id(prompt_with_autocomplete("Product ID", get_product_completer()))
            if Confirm.ask(f"Delete {pid}?", default=False):
                try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                product_cache = [p for p in product_cache if p.get("id") != pid]

        elif choice.lower() in ("q", "quit", "exit"):
            console.print("👋 Bye")
            break

        else:
            console.print("[red]Unknown option[/red]")


def main():
    try:
        menu()
    except (KeyboardInterrupt, EOFError):
        console.print("\n👋 Bye")


if __name__ == "__main__":
    main()
