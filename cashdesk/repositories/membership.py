from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cashdesk.db.base import is_foreign_key_violation, is_unique_violation
from cashdesk.db.models.membership import Membership as MembershipModel
from cashdesk.domain.membership_activity import MembershipActivityPolicy
from cashdesk.errors import AlreadyMemberError, NotFoundError, UnknownMemberError


def get_membership_by_id(db: Session, membership_id: int) -> MembershipModel | None:
    """Get a membership by ID."""
    return db.get(MembershipModel, membership_id)


def get_memberships_by_member_id(db: Session, member_id: int) -> list[MembershipModel]:
    """Get all memberships of a member, oldest first."""
    return (
        db.query(MembershipModel)
        .filter(MembershipModel.member_id == member_id)
        .order_by(MembershipModel.begin, MembershipModel.id)
        .all()
    )


def get_open_membership(db: Session, member_id: int) -> MembershipModel | None:
    """Get the member's open membership (end not set), if any."""
    return (
        db.query(MembershipModel)
        .filter(
            MembershipModel.member_id == member_id,
            MembershipModel.end.is_(None),
        )
        .first()
    )


def get_active_membership(
    db: Session, member_id: int, as_of: datetime
) -> MembershipModel | None:
    """
    Get the membership that is active for the member as of the given instant.

    The "active" definition is a domain rule centralized in
    MembershipActivityPolicy. If several match, the most recently begun wins.
    """
    policy = MembershipActivityPolicy(as_of=as_of)
    return (
        db.query(MembershipModel)
        .filter(
            MembershipModel.member_id == member_id,
            policy.sqlalchemy_active_predicate(end_col=MembershipModel.end),
        )
        .order_by(MembershipModel.begin.desc(), MembershipModel.id.desc())
        .first()
    )


def get_cancellable_membership(
    db: Session, member_id: int, as_of: datetime
) -> MembershipModel | None:
    """
    Get the membership that can still be closed as of the given instant.

    Unlike the active rule, a membership whose end equals as_of is already
    closed and is not returned.
    """
    policy = MembershipActivityPolicy(as_of=as_of)
    return (
        db.query(MembershipModel)
        .filter(
            MembershipModel.member_id == member_id,
            policy.sqlalchemy_cancellable_predicate(end_col=MembershipModel.end),
        )
        .order_by(MembershipModel.begin.desc(), MembershipModel.id.desc())
        .first()
    )


def create_membership(db: Session, member_id: int, begin: datetime) -> MembershipModel:
    """Create an open membership. Pure data access - no business logic."""
    db_membership = MembershipModel(
        member_id=member_id,
        begin=begin,
        end=None,
    )
    db.add(db_membership)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        # The member was deleted after the existence check
        if is_foreign_key_violation(e):
            raise UnknownMemberError(member_id) from e
        # uq_memberships_open_member rejected a second open membership
        if is_unique_violation(e):
            raise AlreadyMemberError(member_id) from e
        raise
    db.refresh(db_membership)
    return db_membership


def close_membership(db: Session, membership_id: int, end: datetime) -> MembershipModel:
    """Set the end of a membership."""
    membership = get_membership_by_id(db, membership_id)
    if not membership:
        raise NotFoundError(f"Membership with id {membership_id} not found")

    membership.end = end
    db.commit()
    db.refresh(membership)
    return membership
