from fastapi import APIRouter, Depends

from testportal.core.deps import get_verifier
from testportal.schemas.verification import VerificationResult, VerifyRequest
from testportal.services.verification import Verifier

router = APIRouter()

ERROR_RESPONSES = {
    400: {"description": "Missing email or campus, or unknown test type"},
    404: {"description": "Campus or email not found"},
    500: {"description": "Unexpected spreadsheet error"},
    503: {"description": "Attendance sheet or eligibility service unavailable"},
}


@router.post(
    "/verify",
    response_model=VerificationResult,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def verify(payload: VerifyRequest, verifier: Verifier = Depends(get_verifier)):
    return verifier.verify(payload.email, payload.campus, payload.test_type)


# older clients post here
@router.post(
    "/check-eligibility",
    response_model=VerificationResult,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def check_eligibility(payload: VerifyRequest, verifier: Verifier = Depends(get_verifier)):
    return verifier.verify(payload.email, payload.campus, payload.test_type)
