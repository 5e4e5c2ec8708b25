"""
Reusable request validation.

Request bodies derive from RequestModel: strings are trimmed and blank
strings become None before field validation, so every failing field is
reported together in one 400 response.
"""

import re
from datetime import UTC, datetime
from typing import Annotated, Optional

from fastapi import Query
from fastapi.exceptions import RequestValidationError
from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from src.app.use_cases.pagination import DEFAULT_LIMIT, MAX_LIMIT, PageRequest

# Local 11-digit mobile number: 0, then 7/8/9, then 0/1, then 8 digits
PHONE_PATTERN = re.compile(r"^0[789][01]\d{8}$")

MAX_ATTACHMENT_BYTES = 5 * 1024 * 1024

ALLOWED_ATTACHMENT_TYPES = frozenset(
    {
        "image/jpeg",
        "image/png",
        "image/gif",
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    }
)


def normalize_phone(value: str) -> str:
    digits = re.sub(r"\D", "", value)
    if not PHONE_PATTERN.match(digits):
        raise ValueError("Invalid phone number format. Use local format (e.g., 08012345678)")
    return digits


def check_password(value: str) -> str:
    if (
        len(value) < 8
        or not re.search(r"[a-z]", value)
        or not re.search(r"[A-Z]", value)
        or not re.search(r"\d", value)
    ):
        raise ValueError(
            "Password must be at least 8 characters long and contain at least one "
            "uppercase letter, one lowercase letter and one number"
        )
    return value


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value


PhoneNumber = Annotated[str, AfterValidator(normalize_phone)]
Email = Annotated[EmailStr, AfterValidator(str.lower)]
Password = Annotated[str, AfterValidator(check_password)]
UtcDateTime = Annotated[datetime, AfterValidator(to_naive_utc)]


class RequestModel(BaseModel):
    """Base for request bodies"""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _blank_to_none(cls, data):
        if isinstance(data, dict):
            return {
                key: None if isinstance(value, str) and not value.strip() else value
                for key, value in data.items()
            }
        return data


def page_params(
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT, description="Items per page"),
) -> PageRequest:
    return PageRequest(page=page, limit=limit)


class DateRange(BaseModel):
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


def date_range_params(
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
) -> DateRange:
    start = to_naive_utc(start_date) if start_date else None
    end = to_naive_utc(end_date) if end_date else None
    if start is not None and end is not None and start > end:
        raise RequestValidationError(
            [
                {
                    "loc": ("query", "end_date"),
                    "msg": "End date must be after start date",
                    "input": end_date.isoformat(),
                }
            ]
        )
    return DateRange(start_date=start, end_date=end)


class AttachmentRequest(RequestModel):
    """Metadata of a file already stored externally"""

    filename: str = Field(..., min_length=1, max_length=255)
    content_type: str
    size: int = Field(..., gt=0, le=MAX_ATTACHMENT_BYTES)
    url: str = Field(..., min_length=1, max_length=2000)

    @field_validator("content_type")
    @classmethod
    def _allowed_type(cls, value: str) -> str:
        if value not in ALLOWED_ATTACHMENT_TYPES:
            raise ValueError(f"File type {value} is not allowed")
        return value
