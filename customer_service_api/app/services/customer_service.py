"""
Business logic for customers.

``CustomerService`` implements the six customer operations on top of
``CustomerRepository`` and ``CustomerMapper``.  It keeps no state of
its own: every call looks records up afresh.

Failures are raised as exceptions from ``core.exceptions`` and are
never handled here.  Update and delete report a missing record through
``MutationResult`` instead of raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..core.exceptions import CustomerAlreadyExistsError, ResourceNotFoundError
from ..mappers.customer_mapper import CustomerMapper
from ..repositories.customer_repository import CustomerRepository
from ..schemas.customer import Customer, CustomerDto, CustomerPage

logger = logging.getLogger(__name__)

RESOURCE_NAME = "Customer"
LOOKUP_FIELD = "mobileNumber"


@dataclass(frozen=True)
class MutationResult:
    """Outcome of an update or delete: success, or not found by ``field``/``value``."""

    found: bool
    field: Optional[str] = None
    value: Optional[str] = None

    @classmethod
    def success(cls) -> "MutationResult":
        return cls(found=True)

    @classmethod
    def not_found(cls, field: str, value: str) -> "MutationResult":
        return cls(found=False, field=field, value=value)

    def raise_for_status(self) -> None:
        """Raise ``ResourceNotFoundError`` if the record was not found."""
        if not self.found:
            raise ResourceNotFoundError(RESOURCE_NAME, self.field, self.value)


class CustomerService:
    """Сервис для работы с клиентами.

    Все данные хранятся в ``CustomerRepository``; сервис только
    проверяет инварианты (уникальность номера телефона, наличие
    записи перед изменением) и переводит записи в DTO.
    """

    @classmethod
    async def create_customer(cls, customer_dto: CustomerDto) -> None:
        """Register a new customer.

        Raises ``CustomerAlreadyExistsError`` if the mobile number is
        taken.  The lookup is only a fast path; the unique index in the
        store rejects a duplicate that slips in between check and write.
        """
        customer = CustomerMapper.to_customer(customer_dto, Customer())
        if CustomerRepository.find_by_mobile_number(customer_dto.mobile_number) is not None:
            logger.warning("Rejected duplicate customer %s", customer_dto.mobile_number)
            raise CustomerAlreadyExistsError(customer_dto.mobile_number)
        saved = CustomerRepository.save(customer)
        logger.info("Created customer %s", saved.customer_id)

    @classmethod
    async def fetch_customer(cls, mobile_number: str) -> CustomerDto:
        """Return the customer registered under ``mobile_number``.

        Raises ``ResourceNotFoundError`` if there is none.
        """
        customer = CustomerRepository.find_by_mobile_number(mobile_number)
        if customer is None:
            raise ResourceNotFoundError(RESOURCE_NAME, LOOKUP_FIELD, mobile_number)
        return CustomerMapper.to_customer_dto(customer, CustomerMapper.new_customer_dto())

    @classmethod
    async def update_customer(cls, mobile_number: str, customer_dto: CustomerDto) -> MutationResult:
        """Overwrite name, email, mobile number and branch address.

        The record keeps its ``customer_id`` and creation audit fields.
        """
        customer = CustomerRepository.find_by_mobile_number(mobile_number)
        if customer is None:
            return MutationResult.not_found(LOOKUP_FIELD, mobile_number)
        CustomerMapper.to_customer(customer_dto, customer)
        CustomerRepository.save(customer)
        logger.info("Updated customer %s", customer.customer_id)
        return MutationResult.success()

    @classmethod
    async def delete_customer(cls, mobile_number: str) -> MutationResult:
        """Delete the customer registered under ``mobile_number``.

        The mobile number is resolved to ``customer_id`` first and the
        row is removed by its surrogate key.
        """
        customer = CustomerRepository.find_by_mobile_number(mobile_number)
        if customer is None:
            return MutationResult.not_found(LOOKUP_FIELD, mobile_number)
        CustomerRepository.delete_by_customer_id(customer.customer_id)
        logger.info("Deleted customer %s", customer.customer_id)
        return MutationResult.success()

    @classmethod
    async def find_all_customers(
        cls,
        page: int = 0,
        size: int = 10,
        sort_by: str = "customerId",
        sort_dir: str = "asc",
    ) -> CustomerPage:
        """Return one page of customers sorted by ``sort_by``.

        ``sort_dir`` equal to ``asc`` (any case) sorts ascending;
        any other value sorts descending.  Raises ``ValueError`` for a
        negative ``page`` or a ``size`` below 1.
        """
        if page < 0:
            raise ValueError(f"page must not be negative, got {page}")
        if size < 1:
            raise ValueError(f"size must be at least 1, got {size}")
        customers, total = CustomerRepository.find_all(
            page=page,
            size=size,
            sort_by=sort_by,
            ascending=sort_dir.lower() == "asc",
        )
        content = [
            CustomerMapper.to_customer_dto(customer, CustomerMapper.new_customer_dto())
            for customer in customers
        ]
        return CustomerPage.build(content, page=page, size=size, total=total)

    @classmethod
    async def search_customers(cls, search_term: str) -> List[Customer]:
        """Return stored records whose name or mobile number contains ``search_term``.

        Unlike the other reads this returns ``Customer`` records,
        including ``customer_id`` and the audit fields.
        """
        return CustomerRepository.find_by_name_or_phone(search_term)
