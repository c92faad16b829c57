from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class Deposit(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    membership_id: int
    amount: Decimal = Field(..., ge=0)
