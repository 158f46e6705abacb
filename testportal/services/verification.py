import logging

from fastapi import status

from testportal.core.errors import (
    CAMPUS_NOT_FOUND,
    ELIGIBILITY_UNAVAILABLE,
    EMAIL_NOT_FOUND,
    LINK_MISSING,
    MISSING_CAMPUS,
    MISSING_EMAIL,
    NOT_ELIGIBLE,
    NOT_PRESENT,
    SERVER_ERROR,
    SHEET_UNAVAILABLE,
    UNKNOWN_TEST_TYPE,
    VERIFIED,
    VerificationError,
)
from testportal.schemas.verification import VerificationResult
from testportal.services.eligibility import EligibilityClient, EligibilityUnavailable
from testportal.services.lookup import find_student_by_email, get_sheet_id_for_campus
from testportal.services.matching import normalize
from testportal.services.sheets import SheetAccessError, SheetReader

logger = logging.getLogger(__name__)


class Verifier:
    def __init__(
        self,
        reader: SheetReader,
        mapping_sheet_id: str,
        mapping_tab: str = "Mapping",
        default_tab: str = "Apti",
        test_type_tabs: dict[str, str] | None = None,
        default_sheet_id: str | None = None,
        eligibility: EligibilityClient | None = None,
    ):
        self.reader = reader
        self.mapping_sheet_id = mapping_sheet_id
        self.mapping_tab = mapping_tab
        self.default_tab = default_tab
        self.test_type_tabs = test_type_tabs or {}
        self.default_sheet_id = default_sheet_id
        self.eligibility = eligibility

    def resolve_tab(self, test_type: str | None) -> str:
        key = normalize(test_type)
        if not key:
            return self.default_tab
        tab = self.test_type_tabs.get(key)
        if tab is None:
            raise VerificationError(status.HTTP_400_BAD_REQUEST, UNKNOWN_TEST_TYPE)
        return tab

    def verify(
        self,
        email: str | None,
        campus: str | None = None,
        test_type: str | None = None,
    ) -> VerificationResult:
        """
        Look the student up and decide whether they may start the test.

        Failures the student can fix (missing input, unknown campus or email)
        and sheet outages raise VerificationError. Found-but-not-allowed
        students get an unsuccessful result instead.
        """
        if not normalize(email):
            raise VerificationError(status.HTTP_400_BAD_REQUEST, MISSING_EMAIL)
        if not normalize(campus) and not self.default_sheet_id:
            raise VerificationError(status.HTTP_400_BAD_REQUEST, MISSING_CAMPUS)

        tab = self.resolve_tab(test_type)

        try:
            if normalize(campus):
                sheet_id = get_sheet_id_for_campus(
                    self.reader, self.mapping_sheet_id, campus, self.mapping_tab
                )
                if not sheet_id:
                    raise VerificationError(status.HTTP_404_NOT_FOUND, CAMPUS_NOT_FOUND)
            else:
                sheet_id = self.default_sheet_id

            student = find_student_by_email(self.reader, email, sheet_id, tab)
        except SheetAccessError as exc:
            logger.exception("Verify failed (campus %r, tab %s)", (campus or "").strip(), tab)
            if exc.forbidden:
                raise VerificationError(status.HTTP_503_SERVICE_UNAVAILABLE, SHEET_UNAVAILABLE) from exc
            raise VerificationError(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR) from exc

        if student is None:
            raise VerificationError(status.HTTP_404_NOT_FOUND, EMAIL_NOT_FOUND)

        if not student.is_present:
            return VerificationResult(success=False, message=NOT_PRESENT)

        url = student.link
        if self.eligibility is not None:
            try:
                decision = self.eligibility.check(
                    student, (campus or "").strip(), (test_type or "").strip()
                )
            except EligibilityUnavailable as exc:
                raise VerificationError(
                    status.HTTP_503_SERVICE_UNAVAILABLE, ELIGIBILITY_UNAVAILABLE
                ) from exc
            if not decision.eligible:
                return VerificationResult(success=False, message=decision.message or NOT_ELIGIBLE)
            url = decision.url or url

        if not url:
            return VerificationResult(success=False, message=LINK_MISSING)

        logger.info("verified student (campus %r, tab %s)", (campus or "").strip(), tab)
        return VerificationResult(success=True, url=url, message=VERIFIED)
