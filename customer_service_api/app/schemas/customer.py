"""
Pydantic models for customer data.

``CustomerDto`` is the external representation exchanged with API
clients.  ``Customer`` is the stored representation returned by the
record store; it adds the surrogate ``customer_id`` and the audit
columns the store maintains.  Attribute names are snake_case while the
JSON wire format is camelCase; both spellings are accepted on input.

``ResponseDto`` and ``ErrorResponseDto`` are the envelopes used for
status messages and failures.
"""

import math
import re
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

# Empty, or exactly ten digits.
MOBILE_NUMBER_PATTERN = r"^(|[0-9]{10})$"
_MOBILE_NUMBER_RE = re.compile(MOBILE_NUMBER_PATTERN)


class CustomerDto(BaseModel):
    """Customer fields visible to API clients."""

    name: str = Field(..., min_length=1, examples=["Alice Wanjiru"])
    email: EmailStr = Field(..., examples=["alice@example.com"])
    mobile_number: str = Field(..., alias="mobileNumber", examples=["0712345678"])
    branch_address: str = Field(
        ..., min_length=1, alias="branchAddress", examples=["Nairobi"]
    )

    model_config = {
        "populate_by_name": True,
    }

    @field_validator("mobile_number")
    @classmethod
    def validate_mobile_number(cls, v: str) -> str:
        if not _MOBILE_NUMBER_RE.fullmatch(v):
            raise ValueError("MobileNumber must be 10 digits")
        return v


class Customer(BaseModel):
    """Stored customer record.

    Every field is optional so that a blank instance can be filled in
    by ``CustomerMapper`` before the store assigns ``customer_id`` and
    the audit columns.
    """

    customer_id: Optional[int] = Field(None, alias="customerId")
    name: Optional[str] = None
    email: Optional[str] = None
    mobile_number: Optional[str] = Field(None, alias="mobileNumber")
    branch_address: Optional[str] = Field(None, alias="branchAddress")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    created_by: Optional[str] = Field(None, alias="createdBy")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    updated_by: Optional[str] = Field(None, alias="updatedBy")

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }


class CustomerPage(BaseModel):
    """One page of customers plus the metadata needed to page through all of them."""

    content: List[CustomerDto]
    number: int
    size: int
    total_elements: int = Field(..., alias="totalElements")
    total_pages: int = Field(..., alias="totalPages")
    number_of_elements: int = Field(..., alias="numberOfElements")
    first: bool
    last: bool
    empty: bool

    model_config = {
        "populate_by_name": True,
    }

    @classmethod
    def build(cls, content: List[CustomerDto], page: int, size: int, total: int) -> "CustomerPage":
        total_pages = math.ceil(total / size) if size > 0 else 0
        return cls(
            content=content,
            number=page,
            size=size,
            total_elements=total,
            total_pages=total_pages,
            number_of_elements=len(content),
            first=page == 0,
            last=page + 1 >= total_pages,
            empty=not content,
        )


class ResponseDto(BaseModel):
    """Status envelope returned by create, update and delete."""

    status_code: str = Field(..., alias="statusCode")
    status_message: str = Field(..., alias="statusMessage")

    model_config = {
        "populate_by_name": True,
    }


class ErrorResponseDto(BaseModel):
    """Body returned when a request fails."""

    api_path: str = Field(..., alias="apiPath")
    error_code: str = Field(..., alias="errorCode")
    error_message: str = Field(..., alias="errorMessage")
    error_time: datetime = Field(..., alias="errorTime")

    model_config = {
        "populate_by_name": True,
    }
