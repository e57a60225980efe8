from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List, Optional, Union


class ContactSubmission(BaseModel):
    email: str
    subject: str
    message: str

    @field_validator("email", "subject", "message")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("field must not be empty")
        return value


class EmailEnvelope(BaseModel):
    """Payload handed to the email provider for a single message."""

    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(alias="from")
    to: List[str]
    subject: str
    html: str
    text: Optional[str] = None
    reply_to: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ProviderErrorDetail(BaseModel):
    name: str = "application_error"
    message: str
    status_code: Optional[int] = None


class EmailSendResult(BaseModel):
    data: Optional[Dict[str, Any]] = None
    error: Optional[ProviderErrorDetail] = None


class HtmlContent(BaseModel):
    html: str


class TemplateContent(BaseModel):
    template: str
    context: Dict[str, Any] = {}


ContentSource = Union[HtmlContent, TemplateContent]


class ApiSuccess(BaseModel):
    success: bool = True
    data: Optional[Dict[str, Any]] = None


class ApiError(BaseModel):
    error: str
    details: Optional[str] = None
