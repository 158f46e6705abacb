from pathlib import Path

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from testportal.core.config import TEST_TYPE_TABS
from testportal.core.deps import get_verifier
from testportal.core.errors import VerificationError
from testportal.schemas.verification import VerificationResult
from testportal.services.flow import FlowState, VerificationFlow, validate_form
from testportal.services.verification import Verifier

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["pages"])


def _render_form(
    request: Request,
    flow: VerificationFlow,
    email: str = "",
    campus: str = "",
    test_type: str = "",
    form_error: str = "",
):
    return templates.TemplateResponse(
        request,
        "form.html",
        {
            "flow": flow,
            "email": email,
            "campus": campus,
            "test_type": test_type,
            "test_types": sorted(TEST_TYPE_TABS),
            "form_error": form_error,
        },
    )


@router.get("/", response_class=HTMLResponse)
def landing(request: Request):
    return templates.TemplateResponse(request, "landing.html", {"flow": VerificationFlow()})


@router.get("/verify", response_class=HTMLResponse)
def verification_form(request: Request):
    flow = VerificationFlow()
    flow.proceed()
    return _render_form(request, flow)


@router.post("/verify", response_class=HTMLResponse)
def submit_verification(
    request: Request,
    email: str = Form(""),
    campus: str = Form(""),
    test_type: str = Form(""),
    verifier: Verifier = Depends(get_verifier),
):
    flow = VerificationFlow(FlowState.FORM)

    # single-sheet deployments read DEFAULT_SHEET_ID when the campus is left blank
    form_error = validate_form(email, campus, campus_required=not verifier.default_sheet_id)
    if form_error:
        return _render_form(request, flow, email, campus, test_type, form_error)

    flow.submit()
    status_code = status.HTTP_200_OK
    try:
        result = verifier.verify(email.strip().lower(), campus.strip(), test_type or None)
    except VerificationError as exc:
        result = VerificationResult(success=False, message=exc.message)
        status_code = exc.status_code
    flow.finish(result)

    if flow.state == FlowState.REDIRECT:
        return RedirectResponse(flow.redirect_url, status_code=status.HTTP_303_SEE_OTHER)

    return templates.TemplateResponse(
        request,
        "error.html",
        {"flow": flow, "email": email, "campus": campus, "test_type": test_type},
        status_code=status_code,
    )


# "Try Again" on the error screen keeps what the student typed
@router.post("/verify/retry", response_class=HTMLResponse)
def retry_verification(
    request: Request,
    email: str = Form(""),
    campus: str = Form(""),
    test_type: str = Form(""),
):
    flow = VerificationFlow(FlowState.ERROR)
    flow.try_again()
    return _render_form(request, flow, email, campus, test_type)
