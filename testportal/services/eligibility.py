import logging

import httpx
from pydantic import BaseModel

from testportal.schemas.verification import StudentRecord

logger = logging.getLogger(__name__)


class EligibilityUnavailable(Exception):
    pass


class EligibilityDecision(BaseModel):
    eligible: bool
    url: str | None = None
    message: str | None = None


class EligibilityClient:
    """Asks the downstream eligibility API whether a present student may start."""

    def __init__(self, url: str, http: httpx.Client):
        self.url = url
        self.http = http

    def check(self, student: StudentRecord, campus: str, test_type: str) -> EligibilityDecision:
        payload = {
            "email": student.email,
            "campus": campus,
            "testType": test_type,
            "link": student.link,
            "lectureDate": student.lecture_date,
            "lectureTime": student.lecture_time,
        }
        try:
            response = self.http.post(self.url, json=payload)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning(
                "eligibility check failed (campus %r, test type %r): %s", campus, test_type, exc
            )
            raise EligibilityUnavailable(str(exc)) from exc

        if not isinstance(data, dict):
            raise EligibilityUnavailable("eligibility API returned a non-object body")

        eligible = bool(data.get("success", data.get("eligible", False)))
        return EligibilityDecision(
            eligible=eligible,
            url=data.get("url") or None,
            message=data.get("message") or None,
        )
