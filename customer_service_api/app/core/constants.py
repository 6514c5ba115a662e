"""Status codes and messages carried in ``ResponseDto`` bodies."""

STATUS_201 = "201"
MESSAGE_201 = "Customer created successfully"
STATUS_200 = "200"
MESSAGE_200 = "Customer updated successfully"
MESSAGE_200_DELETE = "Customer deleted successfully."
STATUS_404 = "Error 404"
STATUS_500 = "INTERNAL_SERVER_ERROR"
MESSAGE_500 = "An error occurred. Please try again or contact Dev team"
