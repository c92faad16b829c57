import logging
from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import cashdesk.repositories.member as member_repo
from cashdesk.db.models.deposit import Deposit as DepositModel
from cashdesk.db.models.member import Member as MemberModel
from cashdesk.db.models.membership import Membership as MembershipModel
from cashdesk.errors import (
    DomainValidationError,
    DuplicateNameError,
    DuplicateResourceError,
    NotFoundError,
    UnknownMemberError,
)
from cashdesk.services import deposit as deposit_service
from cashdesk.services import member as member_service
from cashdesk.services import membership as membership_service


# ============================================================================
# ADD MEMBER TESTS
# ============================================================================


def test_add_member_success(db: Session):
    """Test a member is persisted and its assigned id returned."""
    member_id = member_service.add_member(db, "Ann", "Lee", date(1990, 1, 1))

    member = db.get(MemberModel, member_id)
    assert member is not None
    assert member.first_name == "Ann"
    assert member.last_name == "Lee"
    assert member.birthday == date(1990, 1, 1)
    assert member.memberships == []


def test_add_member_ids_are_unique(db: Session):
    """Test every new member gets its own id."""
    first = member_service.add_member(db, "Ann", "Lee", date(1990, 1, 1))
    second = member_service.add_member(db, "Bob", "Kim", date(1985, 6, 30))
    assert first != second


@pytest.mark.parametrize(
    "first_name, last_name, field",
    [
        ("", "Lee", "first_name"),
        (None, "Lee", "first_name"),
        ("   ", "Lee", "first_name"),
        ("Ann", "", "last_name"),
        ("Ann", None, "last_name"),
    ],
)
def test_add_member_empty_name_fails(db: Session, first_name, last_name, field):
    """Test empty or missing names are rejected with the offending field."""
    with pytest.raises(DomainValidationError) as exc_info:
        member_service.add_member(db, first_name, last_name, date(1990, 1, 1))
    assert exc_info.value.field == field
    assert db.query(MemberModel).count() == 0


def test_add_member_missing_birthday_fails(db: Session):
    """Test birthday is required."""
    with pytest.raises(DomainValidationError) as exc_info:
        member_service.add_member(db, "Ann", "Lee", None)
    assert exc_info.value.field == "birthday"


def test_add_member_duplicate_last_name_fails(db: Session):
    """Test a second member with the same last name is rejected."""
    member_service.add_member(db, "Ann", "Lee", date(1990, 1, 1))

    with pytest.raises(DuplicateNameError) as exc_info:
        member_service.add_member(db, "Bruce", "Lee", date(1940, 11, 27))
    assert exc_info.value.last_name == "Lee"
    assert isinstance(exc_info.value, DuplicateResourceError)
    assert db.query(MemberModel).count() == 1


def test_add_member_duplicate_last_name_fails_after_cancel(db: Session):
    """Test the duplicate check covers members whose membership was cancelled."""
    member_id = member_service.add_member(db, "Ann", "Lee", date(1990, 1, 1))
    membership_service.join_member(db, member_id)
    membership_service.cancel_membership(db, member_id)

    with pytest.raises(DuplicateNameError):
        member_service.add_member(db, "Ann", "Lee", date(1990, 1, 1))


def test_create_member_unique_constraint_translated(db: Session):
    """Test the storage unique constraint surfaces as DuplicateNameError."""
    member_repo.create_member(db, "Ann", "Lee", date(1990, 1, 1))

    # Bypass the service pre-check
    with pytest.raises(DuplicateNameError):
        member_repo.create_member(db, "Bruce", "Lee", date(1940, 11, 27))

    # Session is still usable after the rollback
    member_repo.create_member(db, "Bob", "Kim", date(1985, 6, 30))
    assert db.query(MemberModel).count() == 2


def test_add_member_logs(db: Session, caplog):
    """Test adding a member is logged."""
    caplog.set_level(logging.INFO, logger="cashdesk")
    member_service.add_member(db, "Ann", "Lee", date(1990, 1, 1))
    assert any("Added member" in record.message for record in caplog.records)


def test_create_member_other_integrity_errors_propagate(db: Session):
    """Test only unique violations are reported as duplicate names."""
    with pytest.raises(IntegrityError):
        member_repo.create_member(db, "", "Lee", date(1990, 1, 1))

    # Session is still usable after the rollback
    member_repo.create_member(db, "Ann", "Lee", date(1990, 1, 1))
    assert db.query(MemberModel).count() == 1


# ============================================================================
# GET / LIST MEMBER TESTS
# ============================================================================


def test_get_member_unknown_fails(db: Session):
    """Test looking up a missing member fails fast."""
    with pytest.raises(UnknownMemberError) as exc_info:
        member_service.get_member(db, 999)
    assert exc_info.value.member_id == 999
    assert isinstance(exc_info.value, NotFoundError)


def test_list_members_sorted_by_last_name(db: Session):
    member_service.add_member(db, "Zoe", "Young", date(2000, 2, 2))
    member_service.add_member(db, "Ann", "Lee", date(1990, 1, 1))
    member_service.add_member(db, "Bob", "Adams", date(1980, 3, 3))

    names = [m.last_name for m in member_service.list_members(db)]
    assert names == ["Adams", "Lee", "Young"]


# ============================================================================
# DELETE MEMBER TESTS
# ============================================================================


def test_delete_member_success(db: Session):
    member_id = member_service.add_member(db, "Ann", "Lee", date(1990, 1, 1))
    member_service.delete_member(db, member_id)
    assert db.get(MemberModel, member_id) is None


def test_delete_member_unknown_fails(db: Session):
    with pytest.raises(UnknownMemberError):
        member_service.delete_member(db, 42)


def test_delete_member_cascades_to_memberships_and_deposits(db: Session):
    """Test deleting a member removes its memberships and their deposits."""
    member_id = member_service.add_member(db, "Ann", "Lee", date(1990, 1, 1))
    other_id = member_service.add_member(db, "Bob", "Kim", date(1985, 6, 30))

    membership_service.join_member(db, member_id)
    deposit_service.deposit(db, member_id, 50)
    membership_service.cancel_membership(db, member_id)
    membership_service.join_member(db, member_id)
    deposit_service.deposit(db, member_id, 75)

    membership_service.join_member(db, other_id)
    deposit_service.deposit(db, other_id, 10)

    member_service.delete_member(db, member_id)

    assert db.query(MembershipModel).filter(MembershipModel.member_id == member_id).count() == 0
    remaining = db.query(DepositModel).all()
    assert len(remaining) == 1
    assert remaining[0].membership.member_id == other_id


def test_delete_member_frees_last_name(db: Session):
    """Test a deleted member's last name can be registered again."""
    member_id = member_service.add_member(db, "Ann", "Lee", date(1990, 1, 1))
    member_service.delete_member(db, member_id)

    new_id = member_service.add_member(db, "Bruce", "Lee", date(1940, 11, 27))
    assert db.get(MemberModel, new_id).first_name == "Bruce"
