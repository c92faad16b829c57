"""Club membership and deposit bookkeeping."""

from cashdesk.data_access import DataAccess
from cashdesk.errors import (
    AlreadyInitializedError,
    AlreadyMemberError,
    DomainError,
    DomainValidationError,
    DuplicateNameError,
    NoActiveMembershipError,
    NotInitializedError,
    UnknownMemberError,
)

__all__ = [
    "DataAccess",
    "DomainError",
    "DomainValidationError",
    "DuplicateNameError",
    "UnknownMemberError",
    "AlreadyMemberError",
    "NoActiveMembershipError",
    "NotInitializedError",
    "AlreadyInitializedError",
]
