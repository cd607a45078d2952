import pytest

from circulation_desk import CirculationDesk, Role
from circulation_desk.commands import COMMANDS, UsageError, commands_for, get_command, parse_line, parse_script


def test_parse_line_handles_quotes_and_comments():
    command, args = parse_line('borrow-book "Mary Ann" "War and Peace"  # weekend loan')
    assert command.name == "borrow-book"
    assert args == ["Mary Ann", "War and Peace"]


@pytest.mark.parametrize("line", ["", "   ", "# just a note"])
def test_parse_line_skips_blank_and_comments(line):
    assert parse_line(line) is None


def test_aliases():
    assert get_command("browse-books") is COMMANDS["list-books"]
    assert get_command("my-account") is COMMANDS["member-summary"]


def test_unknown_command():
    with pytest.raises(UsageError, match="Unknown command: lend"):
        parse_line("lend Dune")


def test_unbalanced_quotes():
    with pytest.raises(UsageError, match="Cannot parse line"):
        parse_line('add-book "Dune')


def test_parse_script_reports_line_numbers():
    with pytest.raises(UsageError, match="line 3: Usage: add-member NAME"):
        parse_script("add-book Dune\n\nadd-member\n")


def test_commands_split_by_role():
    staff = {c.name for c in commands_for(Role.STAFF)}
    member = {c.name for c in commands_for(Role.MEMBER)}
    assert "assign-fine" in staff and "pay-fine" in member
    assert not staff & member
    assert staff | member == set(COMMANDS)


def test_every_command_maps_to_a_desk_method():
    for command in COMMANDS.values():
        assert callable(getattr(CirculationDesk, command.method))


def test_run_quoted_title_against_desk():
    desk = CirculationDesk()
    for line in ['add-book "Dune Messiah"', "search-books messiah"]:
        command, args = parse_line(line)
        result = command.run(desk, args)
    assert result.payload == [("Dune Messiah", "Available")]
