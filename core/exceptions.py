# core/exceptions.py

class DomainError(Exception):
    """Base class for scheduling domain errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when task, milestone or segment data is invalid (e.g. end before start)."""


class NotFoundError(DomainError):
    """Raised when a task, dependency, milestone or baseline id does not resolve."""


class BusinessRuleError(DomainError):
    """Raised when a graph rule is violated (cycles, duplicate or self dependencies)."""
