# tests/test_post_repository.py
"""Behavior shared by every post repository implementation."""

import datetime

import pytest

from linkhub.core.errors import SUCCESS, ListNotInitializedError, NotFoundError, UnauthorizedError
from linkhub.models import Comment, Post, PostCategory, PostType, User
from linkhub.repositories import PostMemoryRepository, PostMongoRepository, PostRepository
from tests.mongo_fake import FakeCollection

ALICE = User(username="alice", id="a" * 24)
BOB = User(username="bob", id="b" * 24)
MISSING_ID = "f" * 24
T0 = datetime.datetime(2024, 5, 1, 12, 0, tzinfo=datetime.UTC)


@pytest.fixture(params=["memory", "mongo"])
def repo(request: pytest.FixtureRequest) -> PostRepository:
    if request.param == "memory":
        return PostMemoryRepository()
    return PostMongoRepository(FakeCollection())


def make_post(
    author: User = ALICE,
    *,
    category: PostCategory = PostCategory.MUSIC,
    minutes: int = 0,
    score: int | None = None,
) -> Post:
    post = Post.new(author, type=PostType.TEXT, category=category, title="t", text="x")
    post.created = T0 + datetime.timedelta(minutes=minutes)
    if score is not None:
        post.score = score
    return post


def test_get_all_orders_by_score_then_age(repo: PostRepository) -> None:
    newer_five = make_post(minutes=2, score=5)
    three = make_post(minutes=0, score=3)
    older_five = make_post(minutes=1, score=5)
    for post in (newer_five, three, older_five):
        repo.add_post(post)

    assert [p.id for p in repo.get_all()] == [older_five.id, newer_five.id, three.id]


def test_get_by_category_filters_and_ranks(repo: PostRepository) -> None:
    low = make_post(category=PostCategory.NEWS, score=1)
    high = make_post(category=PostCategory.NEWS, minutes=5, score=9)
    other = make_post(category=PostCategory.FUNNY, score=20)
    for post in (low, high, other):
        repo.add_post(post)

    assert [p.id for p in repo.get_by_category("news")] == [high.id, low.id]
    assert repo.get_by_category("fashion") == []


def test_get_by_user_orders_newest_first_ignoring_score(repo: PostRepository) -> None:
    old_popular = make_post(minutes=0, score=10)
    new_plain = make_post(minutes=10, score=1)
    bobs = make_post(BOB, minutes=5)
    for post in (old_popular, new_plain, bobs):
        repo.add_post(post)

    assert [p.id for p in repo.get_by_user("alice")] == [new_plain.id, old_popular.id]
    assert repo.get_by_user("nobody") == []


def test_get_by_id_counts_views(repo: PostRepository) -> None:
    post = make_post()
    repo.add_post(post)

    assert repo.get_by_id(post.id).views == 1
    assert repo.get_by_id(post.id).views == 2
    assert [p.views for p in repo.get_all()] == [2]


def test_get_by_id_unknown_post(repo: PostRepository) -> None:
    with pytest.raises(NotFoundError) as exc_info:
        repo.get_by_id(MISSING_ID)

    assert exc_info.value.to_body() == {"message": "post not found"}


def test_delete_post_by_author_returns_success(repo: PostRepository) -> None:
    post = make_post()
    repo.add_post(post)

    assert repo.delete_post(post.id, ALICE.id) is SUCCESS
    assert SUCCESS.to_body() == {"message": "success"}
    assert SUCCESS.status_code == 200
    assert repo.get_all() == []


def test_delete_post_rules(repo: PostRepository) -> None:
    post = make_post()
    repo.add_post(post)

    with pytest.raises(UnauthorizedError):
        repo.delete_post(post.id, BOB.id)
    with pytest.raises(NotFoundError):
        repo.delete_post(MISSING_ID, ALICE.id)
    assert len(repo.get_all()) == 1


def test_comments_add_and_delete(repo: PostRepository) -> None:
    post = make_post()
    repo.add_post(post)
    comment = Comment(author=BOB, body="nice")

    updated = repo.add_comment(post.id, comment)
    assert [c.body for c in updated.comments] == ["nice"]
    assert [c.id for c in repo.get_by_id(post.id).comments] == [comment.id]

    with pytest.raises(UnauthorizedError):
        repo.delete_comment(post.id, comment.id, ALICE.id)
    with pytest.raises(NotFoundError):
        repo.delete_comment(post.id, MISSING_ID, BOB.id)

    updated = repo.delete_comment(post.id, comment.id, BOB.id)
    assert len(updated.comments) == 0
    assert len(repo.get_by_id(post.id).comments) == 0


def test_comment_on_unknown_post(repo: PostRepository) -> None:
    with pytest.raises(NotFoundError):
        repo.add_comment(MISSING_ID, Comment(author=BOB, body="x"))
    with pytest.raises(NotFoundError):
        repo.delete_comment(MISSING_ID, MISSING_ID, BOB.id)


def test_vote_scenario_is_persisted(repo: PostRepository) -> None:
    post = make_post()
    repo.add_post(post)

    upvoted = repo.upvote_post(post.id, BOB.id)
    assert (upvoted.score, upvoted.likes_percent, len(upvoted.votes)) == (2, 100, 2)

    downvoted = repo.downvote_post(post.id, ALICE.id)
    assert (downvoted.score, downvoted.likes_percent) == (0, 50)
    assert downvoted.votes.likes_count == 1

    stored = repo.get_by_id(post.id)
    assert (stored.score, stored.likes_percent, stored.votes.likes_count) == (0, 50, 1)


def test_unvote_twice(repo: PostRepository) -> None:
    post = make_post()
    repo.add_post(post)

    first = repo.unvote_post(post.id, ALICE.id)
    second = repo.unvote_post(post.id, ALICE.id)

    assert (first.score, first.likes_percent, len(first.votes)) == (0, 0, 0)
    assert (second.score, second.likes_percent, len(second.votes)) == (0, 0, 0)


@pytest.mark.parametrize("method", ["upvote_post", "downvote_post", "unvote_post"])
def test_vote_on_unknown_post(repo: PostRepository, method: str) -> None:
    with pytest.raises(NotFoundError):
        getattr(repo, method)(MISSING_ID, BOB.id)


def test_returned_posts_are_detached(repo: PostRepository) -> None:
    post = make_post()
    repo.add_post(post)

    fetched = repo.get_by_id(post.id)
    fetched.title = "changed"
    fetched.upvote(BOB.id)

    stored = repo.get_by_id(post.id)
    assert stored.title == "t"
    assert len(stored.votes) == 1


def test_ranking_follows_votes(repo: PostRepository) -> None:
    first = make_post(minutes=0)
    second = make_post(BOB, minutes=1)
    repo.add_post(first)
    repo.add_post(second)

    repo.upvote_post(second.id, ALICE.id)

    assert [p.id for p in repo.get_all()] == [second.id, first.id]


def test_uninitialized_ledger_is_reported(repo: PostRepository) -> None:
    post = make_post()
    post.votes = type(post.votes)(None)
    repo.add_post(post)

    with pytest.raises(ListNotInitializedError):
        repo.upvote_post(post.id, BOB.id)
