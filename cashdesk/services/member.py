import logging
from datetime import date

from sqlalchemy.orm import Session

import cashdesk.repositories.member as member_repo
from cashdesk.db.models.member import Member as MemberModel
from cashdesk.errors import DomainValidationError, DuplicateNameError, UnknownMemberError

logger = logging.getLogger(__name__)


def _require_name(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise DomainValidationError(f"{field} must not be empty", field=field)
    return value


def add_member(
    db: Session,
    first_name: str | None,
    last_name: str | None,
    birthday: date | None,
) -> int:
    """
    Register a new member with business logic validation.

    - Validates first_name and last_name are present and non-empty
    - Validates birthday is present
    - Validates no other member (current or former) has the same last name

    Returns:
        The assigned member ID
    """
    first_name = _require_name(first_name, "first_name")
    last_name = _require_name(last_name, "last_name")
    if birthday is None:
        raise DomainValidationError("birthday is required", field="birthday")

    # Check for duplicate last name across every member ever registered
    if member_repo.get_member_by_last_name(db, last_name):
        logger.warning("Rejected member %r: last name already in use", last_name)
        raise DuplicateNameError(last_name)

    member = member_repo.create_member(
        db,
        first_name=first_name,
        last_name=last_name,
        birthday=birthday,
    )
    logger.info("Added member %s (%s %s)", member.id, first_name, last_name)
    return member.id


def get_member(db: Session, member_id: int) -> MemberModel:
    """Get a member by ID, failing fast if it does not exist."""
    member = member_repo.get_member_by_id(db, member_id)
    if not member:
        raise UnknownMemberError(member_id)
    return member


def list_members(db: Session) -> list[MemberModel]:
    return member_repo.get_all_members(db)


def delete_member(db: Session, member_id: int) -> None:
    """Delete a member. Memberships and their deposits are removed with it."""
    member_repo.delete_member(db, member_id)
    logger.info("Deleted member %s with all memberships and deposits", member_id)
