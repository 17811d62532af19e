"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class BillNotFoundError(DomainException):
    """No bill exists with the requested id"""

    def __init__(self, bill_id: int):
        super().__init__(f"Bill {bill_id} not found")
        self.bill_id = bill_id


class InvalidBillDataError(DomainException):
    """Bill input (form or CSV upload) is malformed"""

    pass


class ChequeExtractionError(DomainException):
    """Cheque scanning service failed or returned unusable data"""

    pass


class UnknownInterestPolicyError(DomainException):
    """Requested interest policy name is not registered"""

    pass
