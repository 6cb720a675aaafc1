"""Domain-specific exceptions"""

from typing import List


class DomainException(Exception):
    """Base exception for domain layer"""

    kind = "domain"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainException):
    """Required form fields are unset or monthly expenses are not positive"""

    kind = "validation"

    def __init__(self, message: str, fields: List[str]):
        super().__init__(message)
        self.fields = fields


class UnauthenticatedError(DomainException):
    """Credential store holds no token at persist time"""

    kind = "unauthenticated"


class PersistRejected(DomainException):
    """Score-record API answered with a non-success status"""

    kind = "rejected"

    def __init__(self, message: str, status_code: int, body: object = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class TransportError(DomainException):
    """Network failure or unparseable response from the score-record API"""

    kind = "transport"
