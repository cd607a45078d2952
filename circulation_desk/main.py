import os
import json
import logging
from typing import Callable, Dict, List, Optional, Tuple

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from .commands import UsageError, commands_for, parse_script
from .config import settings
from .desk import CirculationDesk, Result
from .models import Role
from .seed import seed_demo_data
from .ui_helpers import get_output_mode, print_batch_summary, print_result, set_output_mode

APP_NAME = settings.app_name
APP_TITLE = f"{APP_NAME} v{settings.app_version}"

console = Console()
logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


# Single desk per process; all state lives and dies with it
class DeskManager:
    _instance: Optional[CirculationDesk] = None
    seed: bool = settings.seed_demo_data

    @classmethod
    def get_instance(cls) -> CirculationDesk:
        if cls._instance is None:
            cls._instance = CirculationDesk()
            if cls.seed:
                seed_demo_data(cls._instance.library)
            logger.debug(f"Desk started (seeded={cls.seed})")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None


# --- Typer CLI Application ---
app = typer.Typer(help="Library circulation desk")


@app.callback(invoke_without_command=True)
def _global_options(
    ctx: typer.Context,
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
    seed: bool = typer.Option(False, "--seed", help="Start with the demo catalog and roster"),
):
    """Global options for the CLI (output mode, demo data)."""
    _configure_logging()
    if output and not set_output_mode(output):
        console.print(f"[yellow]Unknown output mode '{escape(output)}', using {get_output_mode()}[/]")
    if seed:
        DeskManager.seed = True
    if ctx.invoked_subcommand is None:
        run_menu()


@app.command("run")
def cli_run():
    """Open the interactive staff/member menu."""
    run_menu()


@app.command("batch")
def cli_batch(
    file_path: str = typer.Argument(..., help="Script with one desk command per line"),
    stop_on_error: bool = typer.Option(False, "--stop-on-error", "-x", help="Stop at the first failed command"),
):
    """Replay a script of desk commands against a fresh in-memory desk."""
    if not os.path.exists(file_path):
        print(f"File not found: {file_path}")
        raise typer.Exit(code=1)

    with open(file_path, "r", encoding="utf-8") as f:
        content = f.read()

    try:
        steps = parse_script(content)
    except UsageError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)

    desk = DeskManager.get_instance()
    succeeded = 0
    failed = 0
    for lineno, command, args in steps:
        result = command.run(desk, args)
        print_result(result, title=command.title, symbol=desk.currency_symbol)
        if result.ok:
            succeeded += 1
            continue
        failed += 1
        if stop_on_error:
            print_batch_summary(succeeded, failed)
            print(f"Stopped at line {lineno}.")
            raise typer.Exit(code=1)

    print_batch_summary(succeeded, failed)


@app.command("commands")
def cli_commands():
    """List the commands available to batch scripts."""
    rows = [(c, role) for role in Role for c in commands_for(role)]
    mode = get_output_mode()
    if mode == "json":
        payload = [
            {"name": c.name, "role": role.name.lower(), "args": list(c.args), "help": c.help}
            for c, role in rows
        ]
        print(json.dumps(payload, ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="🧾 Commands", show_lines=True, header_style="bold cyan")
        table.add_column("Usage", style="magenta", no_wrap=True)
        table.add_column("Menu", style="white")
        table.add_column("Description", style="white")
        for c, role in rows:
            table.add_row(c.usage(), role.name.title(), c.help)
        console.print(table)
    else:
        for c, role in rows:
            print(f"{c.usage()} [{role.name.lower()}] - {c.help}")


# --- Interactive menu ---
MenuItem = Tuple[str, str, str]


def _show(desk: CirculationDesk, result: Result, title: Optional[str] = None) -> None:
    print_result(result, title=title, mode="rich", symbol=desk.currency_symbol)


def _ask(question: str) -> str:
    return Prompt.ask(question, default="", show_default=False, console=console).strip()


def _choose(title: str, items: List[MenuItem]) -> str:
    table = Table.grid(padding=(0, 2))
    table.add_column(justify="right", style="bold cyan", width=4)
    table.add_column(justify="left", style="white")
    for key, label, icon in items:
        table.add_row(f"[reverse]{key}[/]", f"{icon} {label}")

    console.print(Panel(table, title=title, border_style="cyan", box=box.HEAVY, padding=(1, 2)))
    return Prompt.ask("Please choose an option", choices=[key for key, _, _ in items], console=console).strip()


def _loop(title: str, items: List[MenuItem], actions: Dict[str, Callable[[], None]]) -> None:
    """Show a menu until '0' is chosen."""
    while True:
        choice = _choose(title, items)
        if choice == "0":
            return
        actions[choice]()
        console.print()


# ---- staff actions
def add_book(desk: CirculationDesk) -> None:
    title = _ask("Enter book title")
    if title:
        _show(desk, desk.add_book(title))


def remove_book(desk: CirculationDesk) -> None:
    title = _ask("Enter book title to remove")
    if title:
        _show(desk, desk.remove_book(title))


def add_member(desk: CirculationDesk) -> None:
    name = _ask("Enter member name")
    if name:
        _show(desk, desk.add_member(name))


def remove_member(desk: CirculationDesk) -> None:
    name = _ask("Enter member name to remove")
    if name:
        _show(desk, desk.remove_member(name))


def view_members(desk: CirculationDesk) -> None:
    _show(desk, desk.list_members(), "👥 Registered Members")


def view_loans(desk: CirculationDesk) -> None:
    _show(desk, desk.list_loans(), "📋 Current Loans")


def assign_fine(desk: CirculationDesk) -> None:
    member = _ask("Enter member name")
    if not member:
        return
    found = desk.check_member(member)
    if not found.ok:
        _show(desk, found)
        return
    amount = _ask("Enter fine amount")
    _show(desk, desk.assign_fine(member, amount))


def book_management(desk: CirculationDesk) -> None:
    _loop(
        "📚 Book Management",
        [
            ("1", "Add New Book", "➕"),
            ("2", "Remove Book", "🗑️"),
            ("3", "View All Books", "📚"),
            ("0", "Back to Staff Menu", "↩️"),
        ],
        {
            "1": lambda: add_book(desk),
            "2": lambda: remove_book(desk),
            "3": lambda: browse_books(desk),
        },
    )


def member_management(desk: CirculationDesk) -> None:
    _loop(
        "👥 Member Management",
        [
            ("1", "Add New Member", "➕"),
            ("2", "Remove Member", "🗑️"),
            ("3", "View All Members", "👥"),
            ("0", "Back to Staff Menu", "↩️"),
        ],
        {
            "1": lambda: add_member(desk),
            "2": lambda: remove_member(desk),
            "3": lambda: view_members(desk),
        },
    )


def staff_menu(desk: CirculationDesk) -> None:
    _loop(
        "🧑‍💼 Staff Dashboard",
        [
            ("1", "Manage Books", "📚"),
            ("2", "Manage Members", "👥"),
            ("3", "View All Loans", "📋"),
            ("4", "Assign Fine", "💰"),
            ("0", "Back to Main Menu", "↩️"),
        ],
        {
            "1": lambda: book_management(desk),
            "2": lambda: member_management(desk),
            "3": lambda: view_loans(desk),
            "4": lambda: assign_fine(desk),
        },
    )


# ---- member actions
def browse_books(desk: CirculationDesk) -> None:
    _show(desk, desk.browse_books(), "📚 Available Books")


def search_books(desk: CirculationDesk) -> None:
    query = _ask("Enter book title to search")
    if query:
        _show(desk, desk.search_books(query), f"🔎 Search Results for '{escape(query)}'")


def borrow_book(desk: CirculationDesk) -> None:
    member = _ask("Enter your name")
    if not member:
        return
    found = desk.check_member(member)
    if not found.ok:
        _show(desk, found)
        return
    title = _ask("Enter book title")
    if title:
        _show(desk, desk.borrow_book(member, title))


def return_book(desk: CirculationDesk) -> None:
    title = _ask("Enter book title to return")
    if title:
        _show(desk, desk.return_book(title))


def pay_fine(desk: CirculationDesk) -> None:
    member = _ask("Enter your name")
    if not member:
        return
    fine = desk.fine_for(member)
    if fine is None:
        # no balance: answered before any payment is parsed
        _show(desk, desk.pay_fine(member, ""))
        return
    console.print(f"Your current fine is: [bold]{escape(desk.money(fine))}[/]")
    payment = _ask("Enter payment amount")
    _show(desk, desk.pay_fine(member, payment))


def view_account(desk: CirculationDesk) -> None:
    member = _ask("Enter your name")
    if member:
        _show(desk, desk.member_summary(member))


def member_menu(desk: CirculationDesk) -> None:
    _loop(
        "📖 Member Dashboard",
        [
            ("1", "Browse Books", "📚"),
            ("2", "Search Books", "🔎"),
            ("3", "Borrow Book", "📥"),
            ("4", "Return Book", "📤"),
            ("5", "Pay Fine", "💳"),
            ("6", "View My Loans/Fines", "👤"),
            ("0", "Back to Main Menu", "↩️"),
        ],
        {
            "1": lambda: browse_books(desk),
            "2": lambda: search_books(desk),
            "3": lambda: borrow_book(desk),
            "4": lambda: return_book(desk),
            "5": lambda: pay_fine(desk),
            "6": lambda: view_account(desk),
        },
    )


SESSIONS: Dict[Role, Callable[[CirculationDesk], None]] = {
    Role.STAFF: staff_menu,
    Role.MEMBER: member_menu,
}


def run_menu() -> None:
    """Main menu: pick the staff or member dashboard."""
    desk = DeskManager.get_instance()
    logins = {"1": Role.STAFF, "2": Role.MEMBER}
    while True:
        choice = _choose(
            APP_TITLE,
            [
                ("1", "Staff Login", "🧑‍💼"),
                ("2", "Member Login", "📖"),
                ("0", "Exit", "🚪"),
            ],
        )
        if choice == "0":
            console.print("[green]Goodbye![/]")
            break
        SESSIONS[logins[choice]](desk)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
