import os

from dotenv import load_dotenv

# .env first, then .env.local overrides it
load_dotenv()
load_dotenv(".env.local", override=True)


def _parse_tabs(raw: str) -> dict[str, str]:
    tabs: dict[str, str] = {}
    for pair in raw.split(","):
        if ":" not in pair:
            continue
        test_type, tab = pair.split(":", 1)
        if test_type.strip() and tab.strip():
            tabs[test_type.strip().lower()] = tab.strip()
    return tabs


# Mapping sheet (campus -> sheet ID). Not a secret.
MAPPING_SHEET_ID = os.getenv("MAPPING_SHEET_ID", "1ZM22n9C3BE_pIUwkvhEAgbz-9mvU6JM5dKAGThmZiUE")
MAPPING_TAB = os.getenv("MAPPING_TAB", "Mapping")

# Tab read from the campus sheet when no test type is given
DEFAULT_TAB = os.getenv("DEFAULT_TAB", "Apti")
TEST_TYPE_TABS = _parse_tabs(os.getenv("TEST_TYPE_TABS", "apti:Apti,aptitude:Apti"))

# Single-sheet deployments: used when the request carries no campus
DEFAULT_SHEET_ID = os.getenv("DEFAULT_SHEET_ID") or None

# Google service account
SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]
GOOGLE_CLIENT_EMAIL = os.getenv("GOOGLE_SERVICE_ACCOUNT_CLIENT_EMAIL")
GOOGLE_PRIVATE_KEY = os.getenv("GOOGLE_SERVICE_ACCOUNT_PRIVATE_KEY")

# Optional downstream eligibility API
ELIGIBILITY_API_URL = os.getenv("ELIGIBILITY_API_URL") or None
ELIGIBILITY_TIMEOUT = float(os.getenv("ELIGIBILITY_TIMEOUT", "10"))

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))
