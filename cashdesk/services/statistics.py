from sqlalchemy.orm import Session

import cashdesk.repositories.deposit as deposit_repo
from cashdesk.schemas.member import Member
from cashdesk.schemas.statistics import DepositStatistic


def get_deposit_statistics(
    db: Session,
    year: int | None = None,
    member_id: int | None = None,
) -> list[DepositStatistic]:
    """
    Total deposits per member per year.

    Deposits are attributed to the calendar year in which their owning
    membership began, not the moment they were recorded. Begin timestamps are
    stored as UTC, so the year is the UTC calendar year: a membership begun
    shortly before or after local midnight on New Year's Eve may fall in the
    neighbouring year compared with the local calendar. Read-only: repeated
    calls without intervening writes return equal results.
    """
    return [
        DepositStatistic(
            member=Member.model_validate(member),
            year=row_year,
            total_amount=total,
        )
        for member, row_year, total in deposit_repo.get_deposit_totals(
            db, year=year, member_id=member_id
        )
    ]
