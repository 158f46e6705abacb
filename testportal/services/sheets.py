import logging
from typing import Callable, Protocol

import google.auth
import google.auth.exceptions
import gspread
import requests
from google.oauth2.service_account import Credentials

from testportal.core.config import GOOGLE_CLIENT_EMAIL, GOOGLE_PRIVATE_KEY, SHEETS_SCOPES

logger = logging.getLogger(__name__)

READ_RANGE = "A:Z"


class SheetAccessError(Exception):
    def __init__(self, message: str, forbidden: bool = False):
        super().__init__(message)
        self.forbidden = forbidden


class SheetReader(Protocol):
    def get_rows(self, spreadsheet_id: str, tab: str) -> list[list[str]]: ...


def load_credentials(
    client_email: str | None = GOOGLE_CLIENT_EMAIL,
    private_key: str | None = GOOGLE_PRIVATE_KEY,
):
    """
    Service account credentials for read-only Sheets access.

    Uses the client email + private key pair when both are set (the key may
    carry literal "\\n" sequences from a .env file). Otherwise falls back to
    application default credentials, e.g. GOOGLE_APPLICATION_CREDENTIALS.
    """
    if client_email and private_key:
        info = {
            "type": "service_account",
            "client_email": client_email,
            "private_key": private_key.replace("\\n", "\n"),
            "token_uri": "https://oauth2.googleapis.com/token",
        }
        return Credentials.from_service_account_info(info, scopes=SHEETS_SCOPES)

    credentials, _project = google.auth.default(scopes=SHEETS_SCOPES)
    return credentials


def _status_of(exc: gspread.exceptions.APIError) -> int | None:
    code = getattr(exc, "code", None)
    if isinstance(code, int) and code > 0:
        return code
    response = getattr(exc, "response", None)
    return getattr(response, "status_code", None)


class GoogleSheetReader:
    """
    Reads sheet tabs through gspread.

    The Google client is built on first use, so bad credentials fail inside
    get_rows like any other sheet error.
    """

    def __init__(
        self,
        client: gspread.Client | None = None,
        client_factory: Callable[[], gspread.Client] | None = None,
    ):
        self.client = client
        self.client_factory = client_factory or (lambda: gspread.authorize(load_credentials()))

    @classmethod
    def from_env(cls) -> "GoogleSheetReader":
        return cls()

    def _get_client(self) -> gspread.Client:
        if self.client is None:
            try:
                self.client = self.client_factory()
            except (google.auth.exceptions.GoogleAuthError, ValueError) as exc:
                # malformed private keys surface as ValueError
                raise SheetAccessError(f"Google credentials could not be loaded: {exc}") from exc
        return self.client

    def get_rows(self, spreadsheet_id: str, tab: str) -> list[list[str]]:
        try:
            spreadsheet = self._get_client().open_by_key(spreadsheet_id)
            response = spreadsheet.values_get(f"{tab}!{READ_RANGE}")
        except PermissionError as exc:
            raise SheetAccessError(f"no access to spreadsheet {spreadsheet_id}", forbidden=True) from exc
        except gspread.exceptions.SpreadsheetNotFound as exc:
            raise SheetAccessError(f"spreadsheet {spreadsheet_id} not found") from exc
        except gspread.exceptions.APIError as exc:
            status = _status_of(exc)
            raise SheetAccessError(
                f"Sheets API error {status} reading {spreadsheet_id}/{tab}",
                forbidden=status == 403,
            ) from exc
        except google.auth.exceptions.GoogleAuthError as exc:
            raise SheetAccessError(f"Google credentials rejected: {exc}") from exc
        except requests.exceptions.RequestException as exc:
            raise SheetAccessError(f"could not reach Google Sheets: {exc}") from exc

        rows = response.get("values") or []
        logger.debug("read %d rows from %s/%s", len(rows), spreadsheet_id, tab)
        return rows
