from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current time as naive UTC, the form timestamps are stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True, slots=True)
class MembershipActivityPolicy:
    """Defines what it means for a membership to be active "as of" a given instant.

    Semantics (intentionally centralized):
    - A membership is active if end is None (still open)
    - OR end >= as_of (it has been closed, but not before as_of)
    - A membership is cancellable if end is None OR end > as_of

    Note: end is inclusive for activity but exclusive for cancellation. A
    membership closed exactly at as_of still accepts deposits at that instant,
    but it is already Closed and cannot be closed again.

    The begin timestamp plays no part: a membership is current from the moment
    it is recorded.
    """

    as_of: datetime

    def is_active(self, *, end: datetime | None) -> bool:
        return end is None or end >= self.as_of

    def is_cancellable(self, *, end: datetime | None) -> bool:
        return end is None or end > self.as_of

    def sqlalchemy_active_predicate(self, *, end_col):
        """Build a SQLAlchemy predicate implementing the active rule."""
        from sqlalchemy import or_

        return or_(
            end_col.is_(None),
            end_col >= self.as_of,
        )

    def sqlalchemy_cancellable_predicate(self, *, end_col):
        """Build a SQLAlchemy predicate implementing the cancellable rule."""
        from sqlalchemy import or_

        return or_(
            end_col.is_(None),
            end_col > self.as_of,
        )
