from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer
from sqlalchemy.orm import relationship

from cashdesk.db.base import Base


class Membership(Base):
    __tablename__ = "memberships"

    id = Column(Integer, primary_key=True, index=True)
    member_id = Column(
        Integer, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True
    )
    begin = Column(DateTime, nullable=False)
    # NULL means the membership is still open
    end = Column(DateTime, nullable=True)

    # Relationships
    member = relationship("Member", back_populates="memberships")
    deposits = relationship(
        "Deposit",
        back_populates="membership",
        order_by="Deposit.id",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        # At most one open membership per member
        Index(
            "uq_memberships_open_member",
            "member_id",
            unique=True,
            sqlite_where=end.is_(None),
            postgresql_where=end.is_(None),
        ),
    )

    @property
    def is_open(self) -> bool:
        return self.end is None
