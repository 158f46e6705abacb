import re
from enum import Enum

from testportal.schemas.verification import VerificationResult

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")


class FlowState(str, Enum):
    LANDING = "landing"
    FORM = "form"
    VERIFYING = "verifying"
    ERROR = "error"
    REDIRECT = "redirect"


class InvalidTransition(Exception):
    pass


def validate_form(email: str, campus: str, campus_required: bool = True) -> str | None:
    """Return the first form error to show, or None when the form can be sent."""
    if not email.strip():
        return "Email address is required."
    if not EMAIL_PATTERN.search(email):
        return "Please enter a valid email address."
    if campus_required and not campus.strip():
        return "Campus (abbreviation) is required."
    return None


class VerificationFlow:
    """
    Screen state for one visit: landing -> form -> verifying -> redirect | error.

    The error screen goes back to the form on "Try Again". Every other move
    raises InvalidTransition.
    """

    def __init__(self, state: FlowState = FlowState.LANDING):
        self.state = state
        self.error_message = ""
        self.redirect_url: str | None = None

    def _move(self, expected: FlowState, target: FlowState) -> None:
        if self.state != expected:
            raise InvalidTransition(f"cannot go from {self.state.value} to {target.value}")
        self.state = target

    def proceed(self) -> None:
        self._move(FlowState.LANDING, FlowState.FORM)

    def submit(self) -> None:
        self._move(FlowState.FORM, FlowState.VERIFYING)

    def finish(self, result: VerificationResult) -> None:
        if result.success and result.url:
            self._move(FlowState.VERIFYING, FlowState.REDIRECT)
            self.redirect_url = result.url
        else:
            self._move(FlowState.VERIFYING, FlowState.ERROR)
            self.error_message = result.message

    def try_again(self) -> None:
        self._move(FlowState.ERROR, FlowState.FORM)
        self.error_message = ""

    @property
    def is_verifying(self) -> bool:
        return self.state == FlowState.VERIFYING
