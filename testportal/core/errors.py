from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

MISSING_EMAIL = "Please enter your email address."
MISSING_CAMPUS = "Please select or enter your campus."
UNKNOWN_TEST_TYPE = "This test type is not available. Please check the test type and try again."
CAMPUS_NOT_FOUND = "This campus was not found. Please check the campus name and try again."
EMAIL_NOT_FOUND = "Your email is not in the list. Please recheck your email and try again."
NOT_PRESENT = (
    "You are not marked present yet. "
    "Please ask your exam coordinator to mark you present, then try again."
)
LINK_MISSING = (
    "You are marked present, but the test link is not available yet. "
    "Please contact your campus manager or instructor."
)
NOT_ELIGIBLE = "You are not eligible for this test right now."
VERIFIED = "Verification successful. Redirecting..."
SHEET_UNAVAILABLE = (
    "Attendance sheet is not available right now. "
    "Please contact your administrator to update or fix the sheet and try again later."
)
ELIGIBILITY_UNAVAILABLE = (
    "The eligibility service is not available right now. Please try again in a few minutes."
)
SERVER_ERROR = (
    "Something went wrong on our end. "
    "Please try again in a few minutes or contact support if it continues."
)
BAD_REQUEST = "We could not read your request. Please check your details and try again."


class VerificationError(Exception):
    """A verification failure that is reported to the student as-is."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def verification_error_handler(request: Request, exc: VerificationError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": BAD_REQUEST},
    )
