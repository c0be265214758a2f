"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class CustomerNotFoundError(DomainException):
    """No customer exists with the requested id"""

    def __init__(self, customer_id: int):
        self.customer_id = customer_id
        super().__init__(f"Customer not found with id: {customer_id}")


class InvalidInputError(DomainException):
    """Query parameters are malformed or inconsistent"""

    pass


class ComputationError(DomainException):
    """Unexpected fault while computing rewards (e.g. malformed transaction record)"""

    pass
