"""Named desk commands for batch scripts and the `commands` listing."""
from __future__ import annotations

import shlex
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .desk import CirculationDesk, Result
from .models import Role


@dataclass(frozen=True)
class Command:
    name: str
    role: Role
    method: str
    args: Tuple[str, ...]
    help: str
    title: Optional[str] = None

    def usage(self) -> str:
        return " ".join([self.name, *(a.upper() for a in self.args)])

    def run(self, desk: CirculationDesk, args: List[str]) -> Result:
        return getattr(desk, self.method)(*args)


class UsageError(ValueError):
    pass


_COMMANDS = [
    # staff
    Command("add-book", Role.STAFF, "add_book", ("title",), "Add a new book"),
    Command("remove-book", Role.STAFF, "remove_book", ("title",), "Remove a book"),
    Command("add-member", Role.STAFF, "add_member", ("name",), "Add a new member"),
    Command("remove-member", Role.STAFF, "remove_member", ("name",), "Remove a member"),
    Command("list-members", Role.STAFF, "list_members", (), "View all members", "Registered Members"),
    Command("list-loans", Role.STAFF, "list_loans", (), "View all loans", "Current Loans"),
    Command("assign-fine", Role.STAFF, "assign_fine", ("member", "amount"), "Assign a fine"),
    # member
    Command("list-books", Role.MEMBER, "list_books", (), "Browse books", "Available Books"),
    Command("search-books", Role.MEMBER, "search_books", ("query",), "Search books", "Search Results"),
    Command("borrow-book", Role.MEMBER, "borrow_book", ("member", "title"), "Borrow a book"),
    Command("return-book", Role.MEMBER, "return_book", ("title",), "Return a book"),
    Command("pay-fine", Role.MEMBER, "pay_fine", ("member", "amount"), "Pay a fine"),
    Command("member-summary", Role.MEMBER, "member_summary", ("member",), "View loans and fines"),
]

COMMANDS: Dict[str, Command] = {c.name: c for c in _COMMANDS}

ALIASES = {
    "browse-books": "list-books",
    "view-books": "list-books",
    "my-account": "member-summary",
}


def get_command(name: str) -> Command:
    command = COMMANDS.get(ALIASES.get(name, name))
    if command is None:
        raise UsageError(f"Unknown command: {name}")
    return command


def commands_for(role: Role) -> List[Command]:
    return [c for c in _COMMANDS if c.role is role]


def parse_line(line: str) -> Optional[Tuple[Command, List[str]]]:
    """Split one script line into a command and trimmed arguments.

    Returns None for blank and comment lines.
    """
    try:
        tokens = shlex.split(line, comments=True)
    except ValueError as e:
        raise UsageError(f"Cannot parse line: {e}") from e
    if not tokens:
        return None
    command = get_command(tokens[0])
    args = [t.strip() for t in tokens[1:]]
    if len(args) != len(command.args):
        raise UsageError(f"Usage: {command.usage()}")
    return command, args


def parse_script(text: str) -> List[Tuple[int, Command, List[str]]]:
    """Parse a whole script up front. Errors carry the 1-based line number."""
    steps = []
    for lineno, line in enumerate(text.splitlines(), 1):
        try:
            parsed = parse_line(line)
        except UsageError as e:
            raise UsageError(f"line {lineno}: {e}") from e
        if parsed:
            steps.append((lineno, *parsed))
    return steps
