import os
import json
from decimal import Decimal
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import settings
from .desk import Failure, Result, format_money
from .models import BookRow, BookStatus, LoanRow, MemberRow, MemberSummary, PaymentResult

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"
OUTPUT_MODES = ("plain", "json", "rich")

_console = Console()


def set_output_mode(mode: str) -> bool:
    mode = (mode or "").lower().strip()
    if mode in OUTPUT_MODES:
        os.environ[OUTPUT_MODE_ENV] = mode
        return True
    return False


def get_output_mode() -> str:
    mode = os.environ.get(OUTPUT_MODE_ENV, settings.output_mode).lower()
    return mode if mode in OUTPUT_MODES else "plain"


def _money(amount: Optional[Decimal], symbol: Optional[str] = None) -> str:
    return format_money(amount, symbol) if amount is not None else "None"


def _jsonable(value: Any) -> Any:
    if isinstance(value, Decimal):
        return format_money(value, "")
    if isinstance(value, BookStatus):
        return value.value
    if isinstance(value, tuple) and hasattr(value, "_asdict"):
        return {k: _jsonable(v) for k, v in value._asdict().items()}
    if isinstance(value, PaymentResult):
        return {"outcome": value.outcome.name.lower(), "remaining": _jsonable(value.remaining)}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def result_to_dict(result: Result) -> Dict[str, Any]:
    if isinstance(result, Failure):
        return {"ok": False, "error": result.kind.value, "message": result.message}
    return {"ok": True, "message": result.message, "data": _jsonable(result.payload)}


# ------------------------- plain ------------------------- #
def _plain_rows(rows: List[Any], symbol: Optional[str] = None) -> List[str]:
    lines = []
    for row in rows:
        if isinstance(row, BookRow):
            lines.append(f"{row.title} - {row.status}")
        elif isinstance(row, MemberRow):
            lines.append(f"{row.name} - {_money(row.fine, symbol)}")
        elif isinstance(row, LoanRow):
            lines.append(f"{row.title} - borrowed by {row.borrower}")
        else:
            lines.append(str(row))
    return lines


def _plain_summary(summary: MemberSummary, symbol: Optional[str] = None) -> List[str]:
    lines = []
    if summary.fine is not None:
        lines.append(f"Outstanding Fines: {format_money(summary.fine, symbol)}")
    else:
        lines.append("You have no outstanding fines.")
    lines.append("Books Currently Borrowed:")
    if summary.loans:
        lines.extend(f"- {title}" for title in summary.loans)
    else:
        lines.append("- You have no books currently borrowed.")
    return lines


# ------------------------- rich ------------------------- #
def _rich_table(rows: List[Any], title: Optional[str], symbol: Optional[str] = None) -> Table:
    table = Table(title=title, show_lines=True, header_style="bold cyan")
    first = rows[0]
    if isinstance(first, BookRow):
        table.add_column("Title", style="white")
        table.add_column("Status", no_wrap=True)
        for row in rows:
            color = "red" if row.status is BookStatus.BORROWED else "green"
            table.add_row(escape(row.title), f"[{color}]{row.status}[/]")
    elif isinstance(first, MemberRow):
        table.add_column("Name", style="white")
        table.add_column("Fines", style="magenta", no_wrap=True)
        for row in rows:
            table.add_row(escape(row.name), escape(_money(row.fine, symbol)))
    else:
        table.add_column("Book", style="white")
        table.add_column("Borrowed by", style="white")
        for row in rows:
            table.add_row(escape(row.title), escape(row.borrower))
    return table


def _rich_summary(summary: MemberSummary, symbol: Optional[str] = None) -> Panel:
    if summary.fine is not None:
        text = f"[bold]Outstanding Fines:[/] {escape(format_money(summary.fine, symbol))}\n"
    else:
        text = "You have no outstanding fines.\n"
    text += "\n[bold]Books Currently Borrowed:[/]\n"
    if summary.loans:
        text += "\n".join(f"• {escape(title)}" for title in summary.loans)
    else:
        text += "• You have no books currently borrowed."
    return Panel.fit(text, title="👤 Your Account Summary", border_style="blue")


def print_result(
    result: Result, title: Optional[str] = None, mode: Optional[str] = None, symbol: Optional[str] = None
) -> None:
    """Print a desk result according to the output mode.
    - plain: message line, row lines, or 'Error: <message>'
    - json: one JSON object per result, amounts without a symbol
    - rich: panels and tables
    Amounts use ``symbol``, falling back to the configured currency symbol.
    """
    mode = mode or get_output_mode()

    if mode == "json":
        print(json.dumps(result_to_dict(result), ensure_ascii=False))
        return

    payload = None if isinstance(result, Failure) else result.payload
    rows = payload if isinstance(payload, list) and payload else None
    summary = payload if isinstance(payload, MemberSummary) else None

    if mode == "rich":
        if isinstance(result, Failure):
            _console.print(Panel.fit(f"[bold red]{escape(result.message)}[/]", title="❌ Error", border_style="red"))
        elif rows:
            _console.print(_rich_table(rows, title, symbol))
        elif summary is not None:
            _console.print(_rich_summary(summary, symbol))
        elif result.message:
            _console.print(Panel.fit(escape(result.message), title="ℹ️ Information", border_style="green"))
        return

    if isinstance(result, Failure):
        print(f"Error: {result.message}")
    elif rows:
        for line in _plain_rows(rows, symbol):
            print(line)
    elif summary is not None:
        for line in _plain_summary(summary, symbol):
            print(line)
    elif result.message:
        print(result.message)


def print_batch_summary(succeeded: int, failed: int, mode: Optional[str] = None) -> None:
    mode = mode or get_output_mode()
    if mode == "json":
        print(json.dumps({"succeeded": succeeded, "failed": failed}))
    elif mode == "rich":
        _console.print(Panel.fit(
            f"[green]{succeeded} succeeded[/]\n[red]{failed} failed[/]",
            title="📋 Batch Results",
            border_style="green" if failed == 0 else "yellow",
        ))
    else:
        print(f"Batch complete: {succeeded} succeeded, {failed} failed")
