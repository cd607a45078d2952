from __future__ import annotations

import logging

from .library import Library

logger = logging.getLogger(__name__)


def seed_demo_data(lib: Library) -> None:
    # books
    for title in ("Dune", "Foundation", "Neuromancer", "The Left Hand of Darkness", "Hyperion"):
        lib.add_book(title)

    # members
    for name in ("Alice", "Bob", "Carol"):
        lib.add_member(name)

    # circulation
    lib.borrow_book("Bob", "Dune")
    lib.borrow_book("Alice", "Hyperion")
    lib.assign_fine("Carol", "2.50")

    logger.info(f"Demo data loaded: {lib.counts()}")
