"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidArgumentError(DomainException):
    """Caller passed a value outside the engine's contract (e.g. payday not in 1-31)"""

    pass
