"""Tests for hashtag normalisation and counting."""

from sqlalchemy.orm import Session

from study_sns.models import Hashtag, PostHashtag
from study_sns.services.hashtags import (
    attach_hashtags,
    detach_hashtags,
    hashtags_for_posts,
    normalize_hashtags,
)


def test_normalize_hashtags():
    assert normalize_hashtags(["#python", " python ", "", "#", " #SQL", "sql"]) == [
        "python",
        "SQL",
        "sql",
    ]


def test_attach_creates_and_counts(db_session: Session, test_user, post_factory):
    first = post_factory(test_user)
    second = post_factory(test_user, title="Second")

    attach_hashtags(db_session, first.id, ["#python", "fastapi"])
    attach_hashtags(db_session, second.id, ["python"])

    python = db_session.query(Hashtag).filter_by(name="python").one()
    assert python.count == 2
    assert hashtags_for_posts(db_session, [first.id, second.id]) == {
        first.id: ["fastapi", "python"],
        second.id: ["python"],
    }


def test_detach_decrements_with_floor(db_session: Session, test_user, post_factory):
    post = post_factory(test_user)
    attach_hashtags(db_session, post.id, ["python"])
    tag = db_session.query(Hashtag).filter_by(name="python").one()
    tag.count = 0
    db_session.flush()

    detach_hashtags(db_session, post.id)

    assert db_session.query(PostHashtag).filter_by(post_id=post.id).count() == 0
    assert db_session.query(Hashtag).filter_by(name="python").one().count == 0
