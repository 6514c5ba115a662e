"""
Customer endpoints for API v1.

CRUD routes keyed by mobile number, plus paginated listing and free
text search.  Field syntax is validated here: ``mobileNumber`` must be
empty or exactly ten digits, both in bodies and in query strings.

Business failures raised by ``CustomerService`` are turned into
responses by the exception handlers registered in ``app.main``.
Update and delete translate a not-found ``MutationResult`` into a 404
``ResponseDto`` themselves.
"""

from typing import List

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from customer_service_api.app.core import constants
from customer_service_api.app.core.config import settings
from customer_service_api.app.core.exceptions import ResourceNotFoundError
from customer_service_api.app.schemas.customer import (
    MOBILE_NUMBER_PATTERN,
    Customer,
    CustomerDto,
    CustomerPage,
    ErrorResponseDto,
    ResponseDto,
)
from customer_service_api.app.services.customer_service import CustomerService

router = APIRouter()

_ERROR_RESPONSES = {
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponseDto, "description": "Internal Server Error"},
}


def _not_found_response(exc: ResourceNotFoundError) -> JSONResponse:
    body = ResponseDto(status_code=constants.STATUS_404, status_message=str(exc))
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=body.model_dump(by_alias=True),
    )


@router.post(
    "/create",
    response_model=ResponseDto,
    status_code=status.HTTP_201_CREATED,
    summary="Create Customer",
    responses={status.HTTP_409_CONFLICT: {"model": ErrorResponseDto}, **_ERROR_RESPONSES},
)
async def create_customer(customer_dto: CustomerDto) -> ResponseDto:
    """Register a new customer.

    Responds 409 if the mobile number is already registered.
    """
    await CustomerService.create_customer(customer_dto)
    return ResponseDto(status_code=constants.STATUS_201, status_message=constants.MESSAGE_201)


@router.get(
    "/fetch",
    response_model=CustomerDto,
    summary="Fetch Customer Details",
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponseDto}, **_ERROR_RESPONSES},
)
async def fetch_customer(
    mobile_number: str = Query(..., alias="mobileNumber", pattern=MOBILE_NUMBER_PATTERN),
) -> CustomerDto:
    """Return the customer registered under ``mobileNumber``."""
    return await CustomerService.fetch_customer(mobile_number)


@router.put(
    "/update",
    response_model=ResponseDto,
    summary="Update Customer Details",
    responses={status.HTTP_404_NOT_FOUND: {"model": ResponseDto}, **_ERROR_RESPONSES},
)
async def update_customer(customer_dto: CustomerDto):
    """Update a customer located by the ``mobileNumber`` in the body."""
    result = await CustomerService.update_customer(customer_dto.mobile_number, customer_dto)
    try:
        result.raise_for_status()
    except ResourceNotFoundError as e:
        return _not_found_response(e)
    return ResponseDto(status_code=constants.STATUS_200, status_message=constants.MESSAGE_200)


@router.delete(
    "/delete",
    response_model=ResponseDto,
    summary="Delete Customer",
    responses={status.HTTP_404_NOT_FOUND: {"model": ResponseDto}, **_ERROR_RESPONSES},
)
async def delete_customer(
    mobile_number: str = Query(..., alias="mobileNumber", pattern=MOBILE_NUMBER_PATTERN),
):
    """Delete the customer registered under ``mobileNumber``."""
    result = await CustomerService.delete_customer(mobile_number)
    try:
        result.raise_for_status()
    except ResourceNotFoundError as e:
        return _not_found_response(e)
    return ResponseDto(status_code=constants.STATUS_200, status_message=constants.MESSAGE_200_DELETE)


@router.get(
    "/customers",
    response_model=CustomerPage,
    summary="Fetch All Customers with Pagination and Sorting",
    responses=_ERROR_RESPONSES,
)
async def find_all_customers(
    page: int = Query(0, ge=0),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    sort_by: str = Query("customerId", alias="sortBy"),
    sort_dir: str = Query("asc", alias="sortDir"),
) -> CustomerPage:
    """Return a page of customers.

    - **page**: zero-based page index.
    - **size**: page size.
    - **sortBy**: `customerId`, `name`, `email`, `mobileNumber`, `branchAddress`, `createdAt` or `updatedAt`.
    - **sortDir**: `asc` sorts ascending, anything else descending.
    """
    return await CustomerService.find_all_customers(
        page=page, size=size, sort_by=sort_by, sort_dir=sort_dir
    )


@router.get(
    "/search",
    response_model=List[Customer],
    summary="Search Customers",
    responses=_ERROR_RESPONSES,
)
async def search_customers(search_term: str = Query(..., alias="searchTerm")) -> List[Customer]:
    """Return stored customers whose name or mobile number contains ``searchTerm``."""
    return await CustomerService.search_customers(search_term)
