from cashdesk.db.models.member import Member
from cashdesk.db.models.membership import Membership
from cashdesk.db.models.deposit import Deposit

__all__ = ["Member", "Membership", "Deposit"]
