import pytest

from circulation_desk import CirculationDesk, Library
from circulation_desk.main import DeskManager
from circulation_desk.ui_helpers import OUTPUT_MODE_ENV


@pytest.fixture(autouse=True)
def cli_state(monkeypatch):
    # Output mode lives in the environment and the desk is a process-wide singleton
    monkeypatch.delenv(OUTPUT_MODE_ENV, raising=False)
    monkeypatch.setattr(DeskManager, "seed", False)
    DeskManager.reset()
    yield
    DeskManager.reset()


@pytest.fixture
def lib():
    return Library()


@pytest.fixture
def desk(lib):
    return CirculationDesk(lib, currency_symbol="$")
