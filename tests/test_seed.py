from decimal import Decimal

from circulation_desk import seed_demo_data


def test_seed_demo_data(lib):
    seed_demo_data(lib)
    counts = lib.counts()
    assert counts["total_books"] == 5
    assert counts["total_members"] == 3
    assert lib.list_loans() == [("Dune", "Bob"), ("Hyperion", "Alice")]
    assert lib.fine_for("Carol") == Decimal("2.50")
