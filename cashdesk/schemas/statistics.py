"""Read-only aggregate views over recorded deposits."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from cashdesk.schemas.member import Member


class DepositStatistic(BaseModel):
    """Total deposited by one member under memberships begun in one calendar year."""

    model_config = ConfigDict(frozen=True)

    member: Member
    year: int = Field(..., description="Calendar year the owning memberships began")
    total_amount: Decimal = Field(..., ge=0)
