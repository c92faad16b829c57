from decimal import Decimal

from sqlalchemy import extract, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cashdesk.db.base import is_foreign_key_violation
from cashdesk.db.models.deposit import Deposit as DepositModel
from cashdesk.db.models.member import Member as MemberModel
from cashdesk.db.models.membership import Membership as MembershipModel
from cashdesk.errors import NotFoundError


def create_deposit(db: Session, membership_id: int, amount: Decimal) -> DepositModel:
    """Create a new deposit in the database. Pure data access - no business logic."""
    db_deposit = DepositModel(
        membership_id=membership_id,
        amount=amount,
    )
    db.add(db_deposit)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if is_foreign_key_violation(e):
            raise NotFoundError(f"Membership with id {membership_id} not found") from e
        raise
    db.refresh(db_deposit)
    return db_deposit


def get_deposits_by_member_id(db: Session, member_id: int) -> list[DepositModel]:
    """Get all deposits made under any of the member's memberships."""
    return (
        db.query(DepositModel)
        .join(MembershipModel, DepositModel.membership_id == MembershipModel.id)
        .filter(MembershipModel.member_id == member_id)
        .order_by(DepositModel.id)
        .all()
    )


def get_deposit_totals(
    db: Session,
    year: int | None = None,
    member_id: int | None = None,
) -> list[tuple[MemberModel, int, Decimal]]:
    """
    Sum deposit amounts grouped by member and the year the owning membership began.

    Args:
        year: Optional filter on the membership begin year
        member_id: Optional filter by member ID

    Returns:
        List of (member, year, total amount) rows, ordered by year then member ID
    """
    begin_year = extract("year", MembershipModel.begin)
    query = (
        db.query(
            MemberModel,
            begin_year.label("year"),
            func.sum(DepositModel.amount).label("total_amount"),
        )
        .select_from(DepositModel)
        .join(MembershipModel, DepositModel.membership_id == MembershipModel.id)
        .join(MemberModel, MembershipModel.member_id == MemberModel.id)
    )

    if year is not None:
        query = query.filter(begin_year == year)
    if member_id is not None:
        query = query.filter(MemberModel.id == member_id)

    rows = (
        query.group_by(MemberModel.id, begin_year)
        .order_by(begin_year, MemberModel.id)
        .all()
    )
    return [(member, int(row_year), total) for member, row_year, total in rows]
