"""Tests for the Relationship Ledger"""

import pytest
from sqlalchemy import insert

from brewshare.exceptions import NotFound, ValidationError
from brewshare.models import Friendship
from brewshare.services.relationships import RelationshipLedger


@pytest.fixture
def users(make_user):
    return make_user("alice"), make_user("bob"), make_user("carol")


def test_add_friend_then_list(db_session, users):
    """Test adding a friend shows up in the friend list"""

    alice, bob, _ = users
    ledger = RelationshipLedger(db_session)

    assert ledger.add_friend(alice.id, bob.id) is True

    friends = ledger.list_friends(alice.id)
    assert [f.id for f in friends] == [bob.id]
    assert friends[0].username == "bob"


def test_add_self_is_rejected(db_session, users):
    alice, _, _ = users
    ledger = RelationshipLedger(db_session)

    with pytest.raises(ValidationError):
        ledger.add_friend(alice.id, alice.id)

    assert ledger.list_friends(alice.id) == []


def test_add_unknown_friend(db_session, users):
    alice, _, _ = users

    with pytest.raises(NotFound):
        RelationshipLedger(db_session).add_friend(alice.id, 9999)


def test_add_friend_is_duplicate_safe(db_session, users):
    """Repeated adds are no-ops, not errors"""

    alice, bob, _ = users
    ledger = RelationshipLedger(db_session)

    assert ledger.add_friend(alice.id, bob.id) is True
    assert ledger.add_friend(alice.id, bob.id) is False

    assert db_session.query(Friendship).filter(Friendship.user_id == alice.id).count() == 1


def test_add_friend_touches_only_callers_set(db_session, users):
    alice, bob, _ = users
    ledger = RelationshipLedger(db_session)

    ledger.add_friend(alice.id, bob.id)

    assert ledger.is_friend(alice.id, bob.id) is True
    assert ledger.is_friend(bob.id, alice.id) is False
    assert ledger.list_friends(bob.id) == []


def test_remove_friend_is_idempotent(db_session, users):
    alice, bob, carol = users
    ledger = RelationshipLedger(db_session)
    ledger.add_friend(alice.id, bob.id)
    ledger.add_friend(alice.id, carol.id)

    assert ledger.remove_friend(alice.id, bob.id) is True
    once = [f.id for f in ledger.list_friends(alice.id)]

    assert ledger.remove_friend(alice.id, bob.id) is False
    twice = [f.id for f in ledger.list_friends(alice.id)]

    assert once == twice == [carol.id]


def test_remove_absent_friend_succeeds(db_session, users):
    alice, bob, _ = users

    assert RelationshipLedger(db_session).remove_friend(alice.id, bob.id) is False


def test_list_friends_sorted_by_username(db_session, users):
    alice, bob, carol = users
    ledger = RelationshipLedger(db_session)
    ledger.add_friend(bob.id, carol.id)
    ledger.add_friend(bob.id, alice.id)

    assert [f.username for f in ledger.list_friends(bob.id)] == ["alice", "carol"]


def test_list_friends_of_unknown_user(db_session):
    with pytest.raises(NotFound):
        RelationshipLedger(db_session).list_friends(9999)


def test_friend_ids_on_user(db_session, users):
    alice, bob, carol = users
    ledger = RelationshipLedger(db_session)
    ledger.add_friend(alice.id, carol.id)
    ledger.add_friend(alice.id, bob.id)

    db_session.refresh(alice)
    assert alice.friend_ids == sorted([bob.id, carol.id])


def test_scrub_user_removes_both_directions(db_session, users):
    alice, bob, carol = users
    ledger = RelationshipLedger(db_session)
    ledger.add_friend(alice.id, bob.id)
    ledger.add_friend(carol.id, bob.id)
    ledger.add_friend(bob.id, alice.id)
    ledger.add_friend(alice.id, carol.id)

    scrubbed = ledger.scrub_user(bob.id)
    db_session.commit()

    assert scrubbed == 2
    assert [f.id for f in ledger.list_friends(alice.id)] == [carol.id]
    assert ledger.list_friends(carol.id) == []
    assert ledger.list_friends(bob.id) == []


def test_concurrent_add_is_a_noop(db_session, users, monkeypatch):
    """A rival add that commits the same link first leaves a single link"""

    alice, bob, _ = users
    ledger = RelationshipLedger(db_session)

    def rival_commits_first(self, user_id, friend_id):
        self.db.execute(insert(Friendship).values(user_id=user_id, friend_id=friend_id))
        self.db.commit()
        return False

    monkeypatch.setattr(RelationshipLedger, "is_friend", rival_commits_first)

    assert ledger.add_friend(alice.id, bob.id) is False

    monkeypatch.undo()
    assert db_session.query(Friendship).filter(Friendship.user_id == alice.id).count() == 1
    assert [f.id for f in ledger.list_friends(alice.id)] == [bob.id]
