"""Tests for the Engagement Ledger (cheers)"""

import pytest
from sqlalchemy import insert, update

from brewshare.exceptions import NotFound
from brewshare.models import Cheer, Review
from brewshare.services.engagement import EngagementLedger


@pytest.fixture
def review(db_session, make_user):
    owner = make_user("alice")
    review = Review(user_id=owner.id, name="Pale Ale Delight", style="Pale Ale", rating=4.5)
    db_session.add(review)
    db_session.commit()
    db_session.refresh(review)
    return review


def cheerer_count(db_session, review_id):
    return db_session.query(Cheer).filter(Cheer.review_id == review_id).count()


def test_toggle_adds_then_removes(db_session, review, make_user):
    bob = make_user("bob")
    ledger = EngagementLedger(db_session)

    updated, cheered = ledger.toggle_cheer(review.id, bob.id)
    assert cheered is True
    assert updated.cheers == 1
    assert ledger.has_cheered(review.id, bob.id) is True

    updated, cheered = ledger.toggle_cheer(review.id, bob.id)
    assert cheered is False
    assert updated.cheers == 0
    assert ledger.has_cheered(review.id, bob.id) is False


def test_count_matches_cheerer_set(db_session, review, make_user):
    """Cheer count always equals the number of users currently cheering"""

    users = [make_user(f"user{i}") for i in range(5)]
    ledger = EngagementLedger(db_session)

    # user0 toggles three times (cheered), user1 twice (not cheered), the rest once
    toggles = [0, 0, 0, 1, 1, 2, 3, 4]
    for index in toggles:
        ledger.toggle_cheer(review.id, users[index].id)

    cheering = {u.id for u in users if ledger.has_cheered(review.id, u.id)}
    db_session.refresh(review)

    assert cheering == {users[0].id, users[2].id, users[3].id, users[4].id}
    assert review.cheers == len(cheering) == cheerer_count(db_session, review.id)


def test_toggle_unknown_review(db_session, make_user):
    bob = make_user("bob")

    with pytest.raises(NotFound):
        EngagementLedger(db_session).toggle_cheer(9999, bob.id)


def test_has_cheered_has_no_side_effects(db_session, review, make_user):
    bob = make_user("bob")
    ledger = EngagementLedger(db_session)

    assert ledger.has_cheered(review.id, bob.id) is False
    assert ledger.has_cheered(review.id, bob.id) is False

    db_session.refresh(review)
    assert review.cheers == 0
    assert cheerer_count(db_session, review.id) == 0


def test_list_cheerers(db_session, review, make_user):
    bob = make_user("bob")
    carol = make_user("carol")
    ledger = EngagementLedger(db_session)

    assert ledger.list_cheerers(review.id) == []

    ledger.toggle_cheer(review.id, bob.id)
    ledger.toggle_cheer(review.id, carol.id)

    names = sorted(c["username"] for c in ledger.list_cheerers(review.id))
    assert names == ["bob", "carol"]


def test_scrub_user_withdraws_cheers(db_session, review, make_user):
    bob = make_user("bob")
    carol = make_user("carol")
    ledger = EngagementLedger(db_session)
    ledger.toggle_cheer(review.id, bob.id)
    ledger.toggle_cheer(review.id, carol.id)

    ledger.scrub_user(bob.id)
    db_session.commit()
    db_session.refresh(review)

    assert review.cheers == 1
    assert cheerer_count(db_session, review.id) == 1
    assert ledger.has_cheered(review.id, carol.id) is True


def test_concurrent_cheer_keeps_one_row(db_session, review, make_user, monkeypatch):
    """A rival toggle that commits the same cheer first leaves a single cheer"""

    bob = make_user("bob")
    ledger = EngagementLedger(db_session)
    withdraw = EngagementLedger._withdraw

    def rival_commits_first(self, review_id, user_id):
        removed = withdraw(self, review_id, user_id)
        self.db.execute(insert(Cheer).values(review_id=review_id, user_id=user_id))
        self.db.execute(
            update(Review).where(Review.id == review_id).values(cheers=Review.cheers + 1)
        )
        self.db.commit()
        return removed

    monkeypatch.setattr(EngagementLedger, "_withdraw", rival_commits_first)

    updated, cheered = ledger.toggle_cheer(review.id, bob.id)

    assert cheered is True
    assert updated.cheers == 1
    assert cheerer_count(db_session, review.id) == 1

    monkeypatch.undo()
    assert ledger.has_cheered(review.id, bob.id) is True
