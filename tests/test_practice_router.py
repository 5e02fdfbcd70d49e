from __future__ import annotations

from datetime import timedelta

import pytest
from fastapi import HTTPException

from wordwise.api.v2.endpoints.practice_router import get_practice_words, record_practice_result
from wordwise.api.v2.endpoints.vocabulary_router import (
    get_progress_history,
    get_related_words,
    get_vocabulary_statistics,
)
from wordwise.core.clock import as_utc
from wordwise.models.vocabulary.vocabulary_item_model import ReviewStatus
from wordwise.schemas.vocabulary_schema import (
    PracticeResultIn,
    ProgressHistoryOut,
    VocabularyItemOut,
    VocabularyStatisticsOut,
)
from tests.utils import NOW, FixedClock, IdentityShuffler, create_user, create_vocabulary_item


@pytest.fixture()
def user(db_session):
    return create_user(db_session, username="api", email="api@example.com")


def _practice_words(db_session, user, **overrides):
    params = {"limit": 10, "difficulty": None, "review_status": None, "theme": None}
    params.update(overrides)
    return get_practice_words(
        **params, db=db_session, current_user=user, shuffler=IdentityShuffler()
    )


def test_practice_words_serialize(db_session, user):
    create_vocabulary_item(db_session, user.id, word="ephemeral", tag_themes=["time"])

    words = _practice_words(db_session, user)
    payload = [VocabularyItemOut.model_validate(word) for word in words]

    assert payload[0].word == "ephemeral"
    assert payload[0].review_status == ReviewStatus.NEW
    assert payload[0].tag_themes == ["time"]


@pytest.mark.parametrize(
    "overrides, detail",
    [
        ({"limit": 0}, "invalid_limit"),
        ({"difficulty": "Z9"}, "invalid_difficulty"),
        ({"review_status": "unknown"}, "invalid_review_status"),
    ],
)
def test_practice_words_reject_invalid_input(db_session, user, overrides, detail):
    with pytest.raises(HTTPException) as exc:
        _practice_words(db_session, user, **overrides)
    assert exc.value.status_code == 400
    assert exc.value.detail == detail


def test_record_result_updates_item(db_session, user):
    item = create_vocabulary_item(db_session, user.id)

    updated = record_practice_result(
        PracticeResultIn(item_id=item.id, is_correct=True),
        db=db_session,
        current_user=user,
        clock=FixedClock(),
    )

    assert updated.review_count == 1
    assert as_utc(updated.next_review_at) == NOW + timedelta(days=1)


def test_record_result_for_foreign_item_is_404(db_session, user):
    other = create_user(db_session, username="other", email="other@example.com")
    item = create_vocabulary_item(db_session, other.id)

    with pytest.raises(HTTPException) as exc:
        record_practice_result(
            PracticeResultIn(item_id=item.id, is_correct=True),
            db=db_session,
            current_user=user,
            clock=FixedClock(),
        )
    assert exc.value.status_code == 404
    assert exc.value.detail == "vocabulary_not_found"


def test_statistics_and_history_match_response_models(db_session, user):
    create_vocabulary_item(db_session, user.id, tag_themes=["work"], created_at=NOW - timedelta(days=2))

    stats = get_vocabulary_statistics(db=db_session, current_user=user, clock=FixedClock())
    assert VocabularyStatisticsOut.model_validate(stats).words_by_tag[0].tag == "work"

    history = get_progress_history(days=3, db=db_session, current_user=user, clock=FixedClock())
    parsed = ProgressHistoryOut.model_validate(history)
    assert len(parsed.data_points) == 4
    assert parsed.data_points[-1].total_words == 1


def test_history_rejects_invalid_days(db_session, user):
    with pytest.raises(HTTPException) as exc:
        get_progress_history(days=0, db=db_session, current_user=user, clock=FixedClock())
    assert exc.value.status_code == 400
    assert exc.value.detail == "invalid_days"


def test_related_words_endpoint(db_session, user):
    anchor = create_vocabulary_item(db_session, user.id, word="rain", tag_themes=["weather"])
    related = create_vocabulary_item(db_session, user.id, word="cloud", tag_themes=["weather"])

    result = get_related_words(anchor.id, limit=5, db=db_session, current_user=user)
    assert [item.id for item in result] == [related.id]
