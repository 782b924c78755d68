from datetime import datetime
from pydantic import EmailStr, Field, field_validator
from typing import Optional
import bleach

from portfolio_api.schemas.common import CamelModel

# Markup an admin reply may keep; everything else is stripped.
REPLY_ALLOWED_TAGS = ["p", "br", "strong", "em", "u", "a", "ul", "ol", "li"]
REPLY_ALLOWED_ATTRIBUTES = {"a": ["href", "target"]}


def _strip_markup(value: str) -> str:
    return bleach.clean(value, tags=[], attributes={}, strip=True).strip()


class MessageCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    subject: str = Field("", max_length=300)
    message: str = Field(..., min_length=1, max_length=5000)
    # Honeypot: hidden in the contact form, only bots fill it in
    website: Optional[str] = None

    @field_validator("subject")
    @classmethod
    def sanitize_subject(cls, value: str) -> str:
        return _strip_markup(value)

    @field_validator("name", "message")
    @classmethod
    def sanitize_required_text(cls, value: str) -> str:
        cleaned = _strip_markup(value)
        if not cleaned:
            raise ValueError("must contain text, not only markup")
        return cleaned


class MessageReply(CamelModel):
    subject: str = Field(..., min_length=1, max_length=300)
    body: str = Field(..., min_length=1, max_length=20000)

    @field_validator("subject")
    @classmethod
    def sanitize_subject(cls, value: str) -> str:
        cleaned = _strip_markup(value)
        if not cleaned:
            raise ValueError("must contain text, not only markup")
        return cleaned

    @field_validator("body")
    @classmethod
    def sanitize_body(cls, value: str) -> str:
        cleaned = bleach.clean(
            value,
            tags=REPLY_ALLOWED_TAGS,
            attributes=REPLY_ALLOWED_ATTRIBUTES,
            strip=True,
        ).strip()
        if not _strip_markup(cleaned):
            raise ValueError("must contain text, not only markup")
        return cleaned

    @property
    def text_body(self) -> str:
        return _strip_markup(self.body)


class MessageResponse(CamelModel):
    id: int
    name: str
    email: str
    subject: str
    message: str
    created_at: Optional[datetime] = None
