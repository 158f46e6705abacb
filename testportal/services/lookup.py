from testportal.schemas.verification import StudentRecord
from testportal.services.matching import (
    CAMPUS_HEADERS,
    EMAIL_HEADERS,
    LECTURE_DATE_HEADERS,
    LECTURE_TIME_HEADERS,
    LINK_HEADERS,
    PRESENT_HEADERS,
    SHEET_ID_HEADERS,
    cell,
    header_index,
    is_present_value,
    normalize,
)
from testportal.services.sheets import SheetReader


def get_sheet_id_for_campus(
    reader: SheetReader,
    mapping_sheet_id: str,
    campus: str,
    tab: str = "Mapping",
) -> str | None:
    rows = reader.get_rows(mapping_sheet_id, tab)
    if not rows:
        return None

    header_row, data_rows = rows[0], rows[1:]
    campus_idx = header_index(header_row, CAMPUS_HEADERS)
    sheet_id_idx = header_index(header_row, SHEET_ID_HEADERS)
    if campus_idx == -1 or sheet_id_idx == -1:
        return None

    target = normalize(campus)
    for row in data_rows:
        if normalize(cell(row, campus_idx)) == target:
            sheet_id = cell(row, sheet_id_idx).strip()
            return sheet_id or None
    return None


def find_student_by_email(
    reader: SheetReader,
    email: str,
    sheet_id: str,
    tab: str,
) -> StudentRecord | None:
    """
    Linear scan of the tab for the first row whose email matches.

    Returns None when the tab is empty, has no email or link column, or has
    no matching row. A tab without a present column marks nobody present.
    """
    rows = reader.get_rows(sheet_id, tab)
    if not rows:
        return None

    header_row, data_rows = rows[0], rows[1:]
    email_idx = header_index(header_row, EMAIL_HEADERS)
    link_idx = header_index(header_row, LINK_HEADERS)
    time_idx = header_index(header_row, LECTURE_TIME_HEADERS)
    date_idx = header_index(header_row, LECTURE_DATE_HEADERS)
    present_idx = header_index(header_row, PRESENT_HEADERS)
    if email_idx == -1 or link_idx == -1:
        return None

    target = normalize(email)
    for row in data_rows:
        if normalize(cell(row, email_idx)) != target:
            continue
        return StudentRecord(
            email=target,
            link=cell(row, link_idx).strip(),
            lecture_time=cell(row, time_idx),
            lecture_date=cell(row, date_idx),
            is_present=present_idx >= 0 and is_present_value(cell(row, present_idx)),
        )
    return None
