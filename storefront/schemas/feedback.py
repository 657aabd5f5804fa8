from pydantic import BaseModel, ConfigDict


class SuggestionIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = None
    contact: str | None = None
    message: str | None = None


class SuggestionCreatedOut(BaseModel):
    success: bool = True
    message: str
    suggestionId: str


class InquiryIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = None
    email: str | None = None
    subject: str | None = None
    message: str | None = None


class InquiryCreatedOut(BaseModel):
    success: bool = True
    message: str
    inquiryId: str
