import logging
from datetime import datetime

from sqlalchemy.orm import Session

import cashdesk.repositories.member as member_repo
import cashdesk.repositories.membership as membership_repo
from cashdesk.db.models.membership import Membership as MembershipModel
from cashdesk.domain.membership_activity import utcnow
from cashdesk.errors import AlreadyMemberError, NoActiveMembershipError, UnknownMemberError

logger = logging.getLogger(__name__)


def _require_member(db: Session, member_id: int) -> None:
    if not member_repo.get_member_by_id(db, member_id):
        raise UnknownMemberError(member_id)


def join_member(
    db: Session,
    member_id: int,
    now: datetime | None = None,
) -> MembershipModel:
    """
    Open a new membership for a member.

    - Validates the member exists
    - Validates the member has no open membership

    The new membership begins at `now` and stays open until cancelled.
    """
    now = now or utcnow()
    _require_member(db, member_id)

    if membership_repo.get_open_membership(db, member_id):
        logger.warning("Rejected join for member %s: membership already open", member_id)
        raise AlreadyMemberError(member_id)

    membership = membership_repo.create_membership(db, member_id=member_id, begin=now)
    logger.info("Opened membership %s for member %s", membership.id, member_id)
    return membership


def cancel_membership(
    db: Session,
    member_id: int,
    now: datetime | None = None,
) -> MembershipModel:
    """
    Close the member's current membership.

    The membership closed is the one whose end is unset or still after `now`
    (see MembershipActivityPolicy). Its end is set to `now`; the member may
    join again afterwards. Closed memberships are never modified again.
    """
    now = now or utcnow()
    _require_member(db, member_id)

    membership = membership_repo.get_cancellable_membership(db, member_id, as_of=now)
    if not membership:
        logger.warning("Rejected cancel for member %s: no active membership", member_id)
        raise NoActiveMembershipError(member_id)

    membership = membership_repo.close_membership(db, membership.id, end=now)
    logger.info("Closed membership %s for member %s", membership.id, member_id)
    return membership


def get_active_membership(
    db: Session,
    member_id: int,
    now: datetime | None = None,
) -> MembershipModel | None:
    _require_member(db, member_id)
    return membership_repo.get_active_membership(db, member_id, as_of=now or utcnow())


def list_memberships(db: Session, member_id: int) -> list[MembershipModel]:
    _require_member(db, member_id)
    return membership_repo.get_memberships_by_member_id(db, member_id)
