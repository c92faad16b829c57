from datetime import date

from pydantic import BaseModel, ConfigDict


class Member(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    first_name: str
    last_name: str
    birthday: date
