"""
Exceptions raised by the customer service and its record store.

The service layer raises these and never recovers from them locally;
handlers registered in ``app.main`` translate each kind into an HTTP
response.
"""


class CustomerServiceError(Exception):
    """Base class for all customer service failures."""


class CustomerAlreadyExistsError(CustomerServiceError):
    """A customer is already registered under the given mobile number."""

    def __init__(self, mobile_number: str) -> None:
        self.mobile_number = mobile_number
        super().__init__(f"Customer already registered with given mobileNumber {mobile_number}")


class ResourceNotFoundError(CustomerServiceError):
    """No record matches the supplied lookup value."""

    def __init__(self, resource_name: str, field_name: str, field_value: str) -> None:
        self.resource_name = resource_name
        self.field_name = field_name
        self.field_value = field_value
        super().__init__(
            f"{resource_name} not found with the given input data {field_name} : '{field_value}'"
        )


class StoreFailureError(CustomerServiceError):
    """The record store failed unexpectedly.

    The original database error is chained as ``__cause__``; it is
    logged but never returned to clients.
    """
