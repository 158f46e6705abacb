import pytest
from fastapi.testclient import TestClient

from testportal.core.config import DEFAULT_TAB, MAPPING_SHEET_ID, MAPPING_TAB
from testportal.core.deps import get_eligibility_client, get_sheet_reader
from testportal.main import app
from testportal.services.sheets import SheetAccessError

ITM_SHEET_ID = "sheet-itm"
NMIMS_SHEET_ID = "sheet-nmims"

MAPPING_ROWS = [
    ["CAMPUS", "Sheet ID"],
    ["ITM", f"  {ITM_SHEET_ID} "],
    ["NMIMS", NMIMS_SHEET_ID],
    ["EMPTY", ""],
]

ITM_APTI_ROWS = [
    ["Name", "Email", "Lecture Date", "Lecture Start Time", "SHLE Links", "Is_Present"],
    ["Asha", "asha@example.com", "2026-10-19", "10:00", "https://tests.example.com/asha", "TRUE"],
    ["Ravi", "Ravi@Example.com ", "2026-10-19", "10:00", "https://tests.example.com/ravi", "FALSE"],
    ["Meera", "meera@example.com", "2026-10-19", "10:00", "", "yes"],
    # trailing empty cells are dropped by the Sheets API
    ["Kiran", "kiran@example.com", "2026-10-19"],
]

ITM_CODING_ROWS = [
    ["email", "test link", "present"],
    ["asha@example.com", "https://tests.example.com/asha-coding", "x"],
]

NMIMS_APTI_ROWS = [
    ["EMAIL", "SHLE LINKS", "is_presnet"],
    ["dev@example.com", "https://tests.example.com/dev", "1"],
]


class FakeSheetReader:
    """In-memory stand-in for the Google Sheets reader, keyed by (sheet id, tab)."""

    def __init__(self, tabs: dict, errors: dict | None = None):
        self.tabs = tabs
        self.errors = errors or {}
        self.calls: list[tuple[str, str]] = []

    def get_rows(self, spreadsheet_id: str, tab: str) -> list[list[str]]:
        self.calls.append((spreadsheet_id, tab))
        if (spreadsheet_id, tab) in self.errors:
            raise self.errors[(spreadsheet_id, tab)]
        if (spreadsheet_id, tab) not in self.tabs:
            raise SheetAccessError(f"Unable to parse range: {tab}!A:Z")
        return self.tabs[(spreadsheet_id, tab)]


def default_tabs() -> dict:
    return {
        (MAPPING_SHEET_ID, MAPPING_TAB): MAPPING_ROWS,
        (ITM_SHEET_ID, DEFAULT_TAB): ITM_APTI_ROWS,
        (ITM_SHEET_ID, "Coding"): ITM_CODING_ROWS,
        (NMIMS_SHEET_ID, DEFAULT_TAB): NMIMS_APTI_ROWS,
    }


@pytest.fixture()
def reader():
    return FakeSheetReader(default_tabs())


@pytest.fixture()
def client(reader):
    """Test client that reads the in-memory sheets via dependency override."""
    app.dependency_overrides[get_sheet_reader] = lambda: reader
    app.dependency_overrides[get_eligibility_client] = lambda: None
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
