"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Caller supplied data that violates a domain invariant"""

    pass


class InvalidMetricsError(InvalidInputError):
    """Period metrics are negative, non-finite, or otherwise malformed"""

    pass


class InvalidBudgetError(InvalidInputError):
    """Budget snapshot has a non-positive limit or an impossible period position"""

    def __init__(self, message: str, budget_id: str | None = None):
        super().__init__(message)
        self.budget_id = budget_id


class PolicyError(DomainException):
    """Policy constants are inconsistent (e.g. weights not summing to 1)"""

    pass


class ReportingAPIError(DomainException):
    """Reporting service returned an error or is unavailable"""

    pass
