import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation

from sqlalchemy.orm import Session

import cashdesk.repositories.deposit as deposit_repo
import cashdesk.repositories.member as member_repo
import cashdesk.repositories.membership as membership_repo
from cashdesk.db.models.deposit import Deposit as DepositModel
from cashdesk.domain.membership_activity import utcnow
from cashdesk.errors import DomainValidationError, NoActiveMembershipError, UnknownMemberError

logger = logging.getLogger(__name__)

# Matches the Numeric(12, 2) amount column
CENT = Decimal("0.01")
MAX_AMOUNT = Decimal("9999999999.99")


def _require_member(db: Session, member_id: int) -> None:
    if not member_repo.get_member_by_id(db, member_id):
        raise UnknownMemberError(member_id)


def _to_amount(amount) -> Decimal:
    """Coerce an amount to a whole number of cents.

    Rejects missing, non-numeric, negative, sub-cent and out-of-range values so
    the recorded amount, the stored amount and the summed totals always agree.
    """
    if amount is None or isinstance(amount, bool):
        raise DomainValidationError("amount is required", field="amount")
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except InvalidOperation as e:
        raise DomainValidationError(f"amount {amount!r} is not a number", field="amount") from e
    if not value.is_finite():
        raise DomainValidationError(f"amount {amount!r} is not a number", field="amount")
    if value < 0:
        raise DomainValidationError(f"amount ({value}) must not be negative", field="amount")
    if value > MAX_AMOUNT:
        raise DomainValidationError(
            f"amount ({value}) exceeds the maximum of {MAX_AMOUNT}", field="amount"
        )
    if value != value.quantize(CENT):
        raise DomainValidationError(
            f"amount ({value}) must not have more than 2 decimal places", field="amount"
        )
    return value.quantize(CENT)


def deposit(
    db: Session,
    member_id: int,
    amount: Decimal | int | float | str,
    now: datetime | None = None,
) -> DepositModel:
    """
    Record a deposit against the member's active membership.

    - Validates amount is a non-negative number (before any lookup)
    - Validates the member exists
    - Validates the member has an active membership
    """
    value = _to_amount(amount)
    now = now or utcnow()
    _require_member(db, member_id)

    membership = membership_repo.get_active_membership(db, member_id, as_of=now)
    if not membership:
        logger.warning("Rejected deposit for member %s: no active membership", member_id)
        raise NoActiveMembershipError(member_id)

    db_deposit = deposit_repo.create_deposit(db, membership_id=membership.id, amount=value)
    logger.info(
        "Recorded deposit %s of %s for member %s (membership %s)",
        db_deposit.id,
        value,
        member_id,
        membership.id,
    )
    return db_deposit


def list_deposits(db: Session, member_id: int) -> list[DepositModel]:
    _require_member(db, member_id)
    return deposit_repo.get_deposits_by_member_id(db, member_id)
