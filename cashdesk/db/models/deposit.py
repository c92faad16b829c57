from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric
from sqlalchemy.orm import relationship

from cashdesk.db.base import Base


class Deposit(Base):
    __tablename__ = "deposits"

    id = Column(Integer, primary_key=True, index=True)
    membership_id = Column(
        Integer, ForeignKey("memberships.id", ondelete="CASCADE"), nullable=False, index=True
    )
    amount = Column(Numeric(12, 2), nullable=False)

    # Relationships
    membership = relationship("Membership", back_populates="deposits")

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_deposits_amount_non_negative"),
    )
