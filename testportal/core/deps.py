from functools import lru_cache
from typing import Iterator

import httpx
from fastapi import Depends

from testportal.core.config import (
    DEFAULT_SHEET_ID,
    DEFAULT_TAB,
    ELIGIBILITY_API_URL,
    ELIGIBILITY_TIMEOUT,
    MAPPING_SHEET_ID,
    MAPPING_TAB,
    TEST_TYPE_TABS,
)
from testportal.services.eligibility import EligibilityClient
from testportal.services.sheets import GoogleSheetReader, SheetReader
from testportal.services.verification import Verifier


# one reader per process; it authorizes on first read
@lru_cache
def _google_reader() -> GoogleSheetReader:
    return GoogleSheetReader.from_env()


def get_sheet_reader() -> SheetReader:
    return _google_reader()


# a fresh HTTP client per request, always closed
def get_eligibility_client() -> Iterator[EligibilityClient | None]:
    if not ELIGIBILITY_API_URL:
        yield None
        return

    http = httpx.Client(timeout=ELIGIBILITY_TIMEOUT)
    try:
        yield EligibilityClient(ELIGIBILITY_API_URL, http)
    finally:
        http.close()


def get_verifier(
    reader: SheetReader = Depends(get_sheet_reader),
    eligibility: EligibilityClient | None = Depends(get_eligibility_client),
) -> Verifier:
    return Verifier(
        reader,
        mapping_sheet_id=MAPPING_SHEET_ID,
        mapping_tab=MAPPING_TAB,
        default_tab=DEFAULT_TAB,
        test_type_tabs=TEST_TYPE_TABS,
        default_sheet_id=DEFAULT_SHEET_ID,
        eligibility=eligibility,
    )
