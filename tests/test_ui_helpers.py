import json
from decimal import Decimal

from circulation_desk import ErrorKind, Failure, MemberSummary, Success
from circulation_desk.models import BookRow, BookStatus, LoanRow, MemberRow
from circulation_desk.ui_helpers import (
    get_output_mode,
    print_batch_summary,
    print_result,
    result_to_dict,
    set_output_mode,
)


def test_output_mode_defaults_to_plain():
    assert get_output_mode() == "plain"


def test_set_output_mode_ignores_unknown_values():
    assert set_output_mode("JSON") is True
    assert get_output_mode() == "json"
    assert set_output_mode("xml") is False
    assert get_output_mode() == "json"


def test_plain_rows(capsys):
    print_result(Success("", [BookRow("Dune", BookStatus.BORROWED), BookRow("Emma", BookStatus.AVAILABLE)]))
    print_result(Success("", [MemberRow("Bob", Decimal("3")), MemberRow("Ann", None)]))
    print_result(Success("", [LoanRow("Dune", "Bob")]))
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Dune - Borrowed",
        "Emma - Available",
        "Bob - $3.00",
        "Ann - None",
        "Dune - borrowed by Bob",
    ]


def test_plain_failure_and_message(capsys):
    print_result(Failure(ErrorKind.CONFLICT, "Book is already borrowed!"))
    print_result(Success("No active loans.", []))
    assert capsys.readouterr().out == "Error: Book is already borrowed!\nNo active loans.\n"


def test_plain_summary(capsys):
    print_result(Success("", MemberSummary(Decimal("1.5"), [])))
    assert capsys.readouterr().out.splitlines() == [
        "Outstanding Fines: $1.50",
        "Books Currently Borrowed:",
        "- You have no books currently borrowed.",
    ]


def test_json_rendering(capsys):
    print_result(Success("", [MemberRow("Bob", Decimal("2"))]), mode="json")
    assert json.loads(capsys.readouterr().out) == {
        "ok": True,
        "message": "",
        "data": [{"name": "Bob", "fine": "2.00"}],
    }


def test_result_to_dict_summary():
    data = result_to_dict(Success("", MemberSummary(None, ["Dune"])))
    assert data["data"] == {"fine": None, "loans": ["Dune"]}


def test_rich_rendering(capsys):
    print_result(Success("", [BookRow("[Dune]", BookStatus.AVAILABLE)]), title="Books", mode="rich")
    print_result(Failure(ErrorKind.NOT_FOUND, "Book not found!"), mode="rich")
    out = capsys.readouterr().out
    assert "[Dune]" in out
    assert "Available" in out
    assert "Book not found!" in out


def test_batch_summary_modes(capsys):
    print_batch_summary(3, 1)
    print_batch_summary(3, 1, mode="json")
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Batch complete: 3 succeeded, 1 failed"
    assert json.loads(out[1]) == {"succeeded": 3, "failed": 1}


def test_exponent_fines_render_in_every_mode(desk, capsys):
    desk.add_member("Alice")
    desk.assign_fine("Alice", "1e30")
    full = "1000000000000000000000000000000.00"

    print_result(desk.list_members(), mode="plain", symbol="$")
    print_result(desk.member_summary("Alice"), mode="plain", symbol="$")
    assert capsys.readouterr().out.splitlines()[:2] == [f"Alice - ${full}", f"Outstanding Fines: ${full}"]

    print_result(desk.list_members(), mode="json")
    assert json.loads(capsys.readouterr().out)["data"] == [{"name": "Alice", "fine": full}]

    print_result(desk.list_members(), title="Members", mode="rich")
    print_result(desk.member_summary("Alice"), mode="rich")
    assert "Alice" in capsys.readouterr().out


def test_renderers_use_given_symbol(capsys):
    print_result(Success("", [MemberRow("Ana", Decimal("2"))]), symbol="€")
    print_result(Success("", MemberSummary(Decimal("1.5"), ["Dune"])), symbol="€")
    print_result(Success("", [MemberRow("Ana", Decimal("2"))]), mode="rich", symbol="€")
    print_result(Success("", MemberSummary(Decimal("1.5"), [])), mode="rich", symbol="€")
    out = capsys.readouterr().out
    assert out.splitlines()[:2] == ["Ana - €2.00", "Outstanding Fines: €1.50"]
    assert "$" not in out
