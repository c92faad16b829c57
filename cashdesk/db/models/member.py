from sqlalchemy import CheckConstraint, Column, Date, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from cashdesk.db.base import Base


class Member(Base):
    __tablename__ = "members"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    birthday = Column(Date, nullable=False)

    # Member owns its memberships; deleting a member removes them and their deposits
    memberships = relationship(
        "Membership",
        back_populates="member",
        order_by="Membership.begin",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        UniqueConstraint("last_name", name="uq_members_last_name"),
        CheckConstraint("length(first_name) > 0", name="ck_members_first_name_not_empty"),
        CheckConstraint("length(last_name) > 0", name="ck_members_last_name_not_empty"),
    )
