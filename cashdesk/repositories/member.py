from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cashdesk.db.base import is_unique_violation
from cashdesk.db.models.member import Member as MemberModel
from cashdesk.errors import DuplicateNameError, UnknownMemberError


def get_member_by_id(db: Session, member_id: int) -> MemberModel | None:
    """Get a member by ID."""
    return db.get(MemberModel, member_id)


def get_member_by_last_name(db: Session, last_name: str) -> MemberModel | None:
    """Get a member by last name. Used to check for duplicates."""
    return db.query(MemberModel).filter(MemberModel.last_name == last_name).first()


def get_all_members(db: Session) -> list[MemberModel]:
    """Get all members, sorted by last name."""
    return db.query(MemberModel).order_by(MemberModel.last_name).all()


def create_member(
    db: Session,
    first_name: str,
    last_name: str,
    birthday: date,
) -> MemberModel:
    """Create a new member in the database. Pure data access - no business logic."""
    db_member = MemberModel(
        first_name=first_name,
        last_name=last_name,
        birthday=birthday,
    )
    db.add(db_member)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        # uq_members_last_name caught a duplicate the pre-check missed
        if is_unique_violation(e):
            raise DuplicateNameError(last_name) from e
        raise
    db.refresh(db_member)
    return db_member


def delete_member(db: Session, member_id: int) -> None:
    """Delete a member together with its memberships and their deposits."""
    member = get_member_by_id(db, member_id)
    if not member:
        raise UnknownMemberError(member_id)

    db.delete(member)
    db.commit()
