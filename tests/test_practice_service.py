from __future__ import annotations

import pytest

from wordwise.core.randomness import RandomShuffler
from wordwise.models.vocabulary.vocabulary_item_model import DifficultyLevel, ReviewStatus
from wordwise.services.exceptions import InvalidPracticeInput
from wordwise.services.practice_service import PracticeService, compute_priority_score
from tests.utils import IdentityShuffler, create_user, create_vocabulary_item


@pytest.fixture()
def user(db_session):
    return create_user(db_session, username="learner", email="learner@example.com")


def test_fresh_item_outranks_practiced_item():
    fresh = compute_priority_score(0, 0, 0)
    practiced = compute_priority_score(50, 50, 0)
    assert fresh == pytest.approx(2.0)
    assert fresh > practiced > 0


def test_dampening_factors_compose():
    # 11 reviews, all correct: 1/12 * 1 * 0.3
    assert compute_priority_score(11, 11, 0) == pytest.approx(0.3 / 12)
    # 30 reviews, all correct: 1/31 * 0.3 * 0.1
    assert compute_priority_score(30, 30, 0) == pytest.approx(0.03 / 31)
    # 30 reviews, poor accuracy: only the practiced-enough dampener applies
    assert compute_priority_score(30, 15, 15) == pytest.approx(1.5 / 31 * 0.1)


def test_selection_is_ordered_by_priority_before_shuffle(db_session, user):
    mastered = create_vocabulary_item(
        db_session, user.id, word="mastered", review_status=ReviewStatus.MASTERED,
        review_count=50, correct_count=50,
    )
    struggling = create_vocabulary_item(
        db_session, user.id, word="struggling", review_status=ReviewStatus.LEARNING,
        review_count=4, correct_count=1, incorrect_count=3,
    )
    fresh = create_vocabulary_item(db_session, user.id, word="fresh")

    service = PracticeService(db_session, user.id, shuffler=IdentityShuffler())
    selection = service.select_for_practice(limit=3)

    assert [item.id for item in selection] == [fresh.id, struggling.id, mastered.id]


def test_selection_never_exceeds_limit(db_session, user):
    for index in range(8):
        create_vocabulary_item(db_session, user.id, word=f"word-{index}", review_count=index, correct_count=index)

    service = PracticeService(db_session, user.id, shuffler=RandomShuffler(seed=7))
    selection = service.select_for_practice(limit=5)

    assert len(selection) == 5
    # Only the top five by score may be drawn; shuffling does not widen the pool.
    assert {item.review_count for item in selection} == {0, 1, 2, 3, 4}


def test_small_candidate_set_returns_everything(db_session, user):
    create_vocabulary_item(db_session, user.id, word="one")
    create_vocabulary_item(db_session, user.id, word="two")

    service = PracticeService(db_session, user.id, shuffler=RandomShuffler(seed=1))
    assert len(service.select_for_practice(limit=10)) == 2


def test_filters_narrow_candidates(db_session, user):
    a1 = create_vocabulary_item(db_session, user.id, word="cat", difficulty_level=DifficultyLevel.A1)
    create_vocabulary_item(db_session, user.id, word="ubiquitous", difficulty_level=DifficultyLevel.C1)
    learning = create_vocabulary_item(
        db_session, user.id, word="dog", difficulty_level=DifficultyLevel.A1,
        review_status=ReviewStatus.LEARNING, review_count=1, correct_count=1,
    )
    themed = create_vocabulary_item(
        db_session, user.id, word="apple", difficulty_level=DifficultyLevel.B1, tag_themes=["food"],
    )

    service = PracticeService(db_session, user.id, shuffler=IdentityShuffler())

    assert {item.id for item in service.select_for_practice(10, difficulty="A1")} == {a1.id, learning.id}
    assert [item.id for item in service.select_for_practice(10, difficulty="A1", review_status="learning")] == [learning.id]
    assert [item.id for item in service.select_for_practice(10, theme="food")] == [themed.id]


def test_selection_is_scoped_to_owner(db_session, user):
    other = create_user(db_session, username="other", email="other@example.com")
    create_vocabulary_item(db_session, other.id, word="foreign")
    mine = create_vocabulary_item(db_session, user.id, word="mine")

    service = PracticeService(db_session, user.id, shuffler=IdentityShuffler())
    assert [item.id for item in service.select_for_practice(10)] == [mine.id]


@pytest.mark.parametrize(
    "kwargs, code",
    [
        ({"limit": 0}, "invalid_limit"),
        ({"limit": -3}, "invalid_limit"),
        ({"limit": 5, "difficulty": "D1"}, "invalid_difficulty"),
        ({"limit": 5, "review_status": "forgotten"}, "invalid_review_status"),
    ],
)
def test_invalid_input_is_rejected_before_store_access(db_session, user, monkeypatch, kwargs, code):
    from wordwise.crud import vocabulary_crud

    def fail(*args, **kw):
        raise AssertionError("store must not be queried")

    monkeypatch.setattr(vocabulary_crud, "list_by_owner", fail)
    service = PracticeService(db_session, user.id)

    with pytest.raises(InvalidPracticeInput) as exc:
        service.select_for_practice(**kwargs)
    assert exc.value.code == code
    assert exc.value.status_code == 400


def test_seeded_shuffle_is_reproducible(db_session, user):
    for index in range(6):
        create_vocabulary_item(db_session, user.id, word=f"word-{index}")

    first = PracticeService(db_session, user.id, shuffler=RandomShuffler(seed=42)).select_for_practice(6)
    second = PracticeService(db_session, user.id, shuffler=RandomShuffler(seed=42)).select_for_practice(6)

    assert [item.id for item in first] == [item.id for item in second]


def test_related_words_share_level_and_tags(db_session, user):
    anchor = create_vocabulary_item(
        db_session, user.id, word="bake", difficulty_level=DifficultyLevel.B1,
        tag_themes=["kitchen"], tag_actions=["cooking"],
    )
    by_theme = create_vocabulary_item(
        db_session, user.id, word="oven", difficulty_level=DifficultyLevel.B1, tag_themes=["kitchen"],
    )
    by_action = create_vocabulary_item(
        db_session, user.id, word="stir", difficulty_level=DifficultyLevel.B1, tag_actions=["cooking"],
    )
    create_vocabulary_item(
        db_session, user.id, word="sauté", difficulty_level=DifficultyLevel.C1, tag_themes=["kitchen"],
    )
    create_vocabulary_item(
        db_session, user.id, word="train", difficulty_level=DifficultyLevel.B1, tag_themes=["travel"],
    )

    service = PracticeService(db_session, user.id)
    related = service.find_related_words(anchor.id)

    assert [item.id for item in related] == [by_theme.id, by_action.id]
    assert service.find_related_words(anchor.id, limit=1) == [by_theme]
    assert service.find_related_words(12345) == []
