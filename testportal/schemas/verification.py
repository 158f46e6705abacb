from pydantic import BaseModel, Field


class VerifyRequest(BaseModel):
    # plain strings: blank/missing values get a friendly 400, not a 422
    email: str | None = None
    campus: str | None = None
    test_type: str | None = Field(default=None, alias="testType")

    class Config:
        populate_by_name = True


class VerificationResult(BaseModel):
    success: bool
    url: str | None = None
    message: str


class StudentRecord(BaseModel):
    email: str
    link: str = ""
    lecture_date: str = ""
    lecture_time: str = ""
    is_present: bool = False
