"""Custom domain exceptions for the cash desk."""

# Stable, machine-readable error codes for callers.
NOT_FOUND = "NOT_FOUND"
DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
VALIDATION_ERROR = "VALIDATION_ERROR"
ALREADY_MEMBER = "ALREADY_MEMBER"
NO_ACTIVE_MEMBERSHIP = "NO_ACTIVE_MEMBERSHIP"
NOT_INITIALIZED = "NOT_INITIALIZED"
ALREADY_INITIALIZED = "ALREADY_INITIALIZED"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    code: str = "DOMAIN_ERROR"


class SessionStateError(DomainError):
    """Raised when the storage session is used outside its lifecycle."""

    pass


class NotInitializedError(SessionStateError):
    """Raised when an operation is attempted before the session was initialized."""

    code = NOT_INITIALIZED

    def __init__(self, message: str = "Data access has not been initialized"):
        super().__init__(message)


class AlreadyInitializedError(SessionStateError):
    """Raised when initializing a session that is already open."""

    code = ALREADY_INITIALIZED

    def __init__(self, message: str = "Data access is already initialized"):
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist."""

    code = NOT_FOUND


class UnknownMemberError(NotFoundError):
    """Raised when the referenced member does not exist."""

    def __init__(self, member_id: int):
        super().__init__(f"Member with id {member_id} not found")
        self.member_id = member_id


class DuplicateResourceError(DomainError):
    """Raised when attempting to create a resource that would violate a uniqueness constraint."""

    code = DUPLICATE_RESOURCE


class DuplicateNameError(DuplicateResourceError):
    """Raised when a member with the same last name already exists."""

    def __init__(self, last_name: str):
        super().__init__(f"A member with last name {last_name!r} already exists")
        self.last_name = last_name


class DomainValidationError(DomainError):
    """Raised when business rules or input validation fail (e.g. empty names, negative amounts)."""

    code = VALIDATION_ERROR

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class MembershipStateError(DomainError):
    """Raised when an operation conflicts with the member's current membership state."""

    pass


class AlreadyMemberError(MembershipStateError):
    """Raised when joining a member who already has an open membership."""

    code = ALREADY_MEMBER

    def __init__(self, member_id: int):
        super().__init__(f"Member {member_id} already has an open membership")
        self.member_id = member_id


class NoActiveMembershipError(MembershipStateError):
    """Raised when the member has no open or current membership."""

    code = NO_ACTIVE_MEMBERSHIP

    def __init__(self, member_id: int):
        super().__init__(f"Member {member_id} has no active membership")
        self.member_id = member_id
