"""Field-by-field translation between ``CustomerDto`` and ``Customer``."""

from ..schemas.customer import Customer, CustomerDto


class CustomerMapper:
    """Copies the four business fields between the two representations.

    Both directions write into a target supplied by the caller and
    return it.  ``customer_id`` and the audit columns are never read
    or written, so mapping a DTO onto a stored entity keeps its
    identity intact.
    """

    @staticmethod
    def to_customer_dto(customer: Customer, customer_dto: CustomerDto) -> CustomerDto:
        customer_dto.name = customer.name
        customer_dto.email = customer.email
        customer_dto.mobile_number = customer.mobile_number
        customer_dto.branch_address = customer.branch_address
        return customer_dto

    @staticmethod
    def to_customer(customer_dto: CustomerDto, customer: Customer) -> Customer:
        customer.name = customer_dto.name
        customer.email = customer_dto.email
        customer.mobile_number = customer_dto.mobile_number
        customer.branch_address = customer_dto.branch_address
        return customer

    @staticmethod
    def new_customer_dto() -> CustomerDto:
        """Return a blank DTO for ``to_customer_dto`` to fill.

        Stored values were validated on the way in, so construction
        skips validation.
        """
        return CustomerDto.model_construct()
