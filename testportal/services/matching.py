from typing import Any, Iterable, Sequence

PRESENT_VALUES = {"true", "yes", "1", "x", "y"}

EMAIL_HEADERS = ("email",)
LINK_HEADERS = ("shle links", "test link", "link")
LECTURE_TIME_HEADERS = ("lecture start time",)
LECTURE_DATE_HEADERS = ("lecture date",)
PRESENT_HEADERS = ("is_present", "is present", "is_presnet", "present")

CAMPUS_HEADERS = ("campus",)
SHEET_ID_HEADERS = ("sheet id", "sheet_id")


def normalize(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip().lower()


def is_present_value(value: Any) -> bool:
    """Sheet checkboxes and hand-typed marks both count (TRUE, yes, 1, x, y)."""
    return normalize(value) in PRESENT_VALUES


def header_index(header_row: Sequence[Any], names: Iterable[str]) -> int:
    wanted = set(names)
    for i, header in enumerate(header_row):
        if normalize(header) in wanted:
            return i
    return -1


def cell(row: Sequence[Any], index: int) -> str:
    # the Sheets API drops trailing empty cells, so rows can be shorter than the header
    if index < 0 or index >= len(row):
        return ""
    value = row[index]
    return "" if value is None else str(value)
