"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class NotFoundError(DomainException):
    """Requested entity does not exist"""

    entity = "Entity"

    def __init__(self, entity_id: str):
        self.entity_id = entity_id
        super().__init__(f"{self.entity} with ID {entity_id} not found")


class LoanNotFoundError(NotFoundError):
    """No loan with the given ID"""

    entity = "Loan"


class PaymentNotFoundError(NotFoundError):
    """No payment with the given ID"""

    entity = "Payment"
