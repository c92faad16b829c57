"""Session-scoped entry point to the cash desk operations.

A DataAccess owns one storage session. It must be initialized before use and
disposed afterwards (or used as a context manager). Every operation runs as a
single unit of work: on failure the session is rolled back and the domain
error is re-raised to the caller unchanged.
"""

import logging
from collections.abc import Callable
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

import cashdesk.db.models  # noqa: F401  (register tables on Base.metadata)
import cashdesk.services.deposit as deposit_service
import cashdesk.services.member as member_service
import cashdesk.services.membership as membership_service
from cashdesk.core.config import Settings, settings as default_settings
from cashdesk.db.base import Base, build_engine, build_session_factory
from cashdesk.domain.membership_activity import utcnow
from cashdesk.errors import AlreadyInitializedError, NotInitializedError
from cashdesk.schemas.deposit import Deposit
from cashdesk.schemas.member import Member
from cashdesk.schemas.membership import Membership
from cashdesk.schemas.statistics import DepositStatistic
from cashdesk.services.statistics import get_deposit_statistics

logger = logging.getLogger(__name__)


class DataAccess:
    def __init__(
        self,
        database_url: str | None = None,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._settings = settings or default_settings
        self._database_url = database_url or self._settings.database_url
        self._clock = clock
        self._engine: Engine | None = None
        self._session: Session | None = None

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        return self._session is not None

    def initialize(self) -> None:
        """Open the storage session. Fails if it is already open."""
        if self._session is not None:
            raise AlreadyInitializedError()

        logging.getLogger("cashdesk").setLevel(self._settings.log_level)
        engine = build_engine(self._database_url, echo=self._settings.database_echo)
        if self._settings.create_schema:
            try:
                Base.metadata.create_all(engine)
            except Exception:
                engine.dispose()
                raise

        self._engine = engine
        self._session = build_session_factory(engine)()
        logger.info("Opened storage session on %s", engine.url.render_as_string(hide_password=True))

    def dispose(self) -> None:
        """Release the storage session. Safe to call more than once."""
        if self._session is not None:
            self._session.close()
            self._session = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            logger.info("Closed storage session")

    def __enter__(self) -> "DataAccess":
        self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    def _db(self) -> Session:
        if self._session is None:
            raise NotInitializedError()
        return self._session

    def _run(self, operation, *args, **kwargs):
        db = self._db()
        try:
            return operation(db, *args, **kwargs)
        except Exception:
            db.rollback()
            raise

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------

    def add_member(self, first_name: str, last_name: str, birthday: date) -> int:
        return self._run(member_service.add_member, first_name, last_name, birthday)

    def delete_member(self, member_id: int) -> None:
        self._run(member_service.delete_member, member_id)

    def get_member(self, member_id: int) -> Member:
        return Member.model_validate(self._run(member_service.get_member, member_id))

    def list_members(self) -> list[Member]:
        return [Member.model_validate(m) for m in self._run(member_service.list_members)]

    # ------------------------------------------------------------------
    # Memberships
    # ------------------------------------------------------------------

    def join_member(self, member_id: int) -> Membership:
        membership = self._run(membership_service.join_member, member_id, now=self._clock())
        return Membership.model_validate(membership)

    def cancel_membership(self, member_id: int) -> Membership:
        membership = self._run(
            membership_service.cancel_membership, member_id, now=self._clock()
        )
        return Membership.model_validate(membership)

    def get_active_membership(self, member_id: int) -> Membership | None:
        membership = self._run(
            membership_service.get_active_membership, member_id, now=self._clock()
        )
        return Membership.model_validate(membership) if membership else None

    def list_memberships(self, member_id: int) -> list[Membership]:
        return [
            Membership.model_validate(m)
            for m in self._run(membership_service.list_memberships, member_id)
        ]

    # ------------------------------------------------------------------
    # Deposits and statistics
    # ------------------------------------------------------------------

    def deposit(self, member_id: int, amount: Decimal | int | float | str) -> Deposit:
        db_deposit = self._run(deposit_service.deposit, member_id, amount, now=self._clock())
        return Deposit.model_validate(db_deposit)

    def list_deposits(self, member_id: int) -> list[Deposit]:
        return [
            Deposit.model_validate(d)
            for d in self._run(deposit_service.list_deposits, member_id)
        ]

    def get_deposit_statistics(
        self, year: int | None = None, member_id: int | None = None
    ) -> list[DepositStatistic]:
        return self._run(get_deposit_statistics, year=year, member_id=member_id)
