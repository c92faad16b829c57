from datetime import datetime

from pydantic import BaseModel, ConfigDict


class Membership(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    member_id: int
    begin: datetime
    end: datetime | None = None

    @property
    def is_open(self) -> bool:
        return self.end is None
