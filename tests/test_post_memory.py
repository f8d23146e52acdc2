# tests/test_post_memory.py
"""Tests specific to the in-memory post repository."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

from linkhub.models import Post, PostCategory, PostType, User
from linkhub.repositories import PostMemoryRepository
from linkhub.repositories.post_memory import ReadWriteLock

ALICE = User(username="alice", id="a" * 24)


def test_concurrent_votes_are_not_lost() -> None:
    repo = PostMemoryRepository()
    post = Post.new(ALICE, type=PostType.TEXT, category=PostCategory.FUNNY, title="t")
    repo.add_post(post)
    voters = [f"{idx:024d}" for idx in range(50)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda user_id: repo.upvote_post(post.id, user_id), voters))
        list(pool.map(lambda _: repo.get_by_id(post.id), range(20)))

    stored = repo.get_by_id(post.id)
    assert len(stored.votes) == 51
    assert stored.votes.likes_count == 51
    assert stored.score == 51
    assert stored.views == 21


def test_readers_share_the_lock() -> None:
    lock = ReadWriteLock()
    both_inside = threading.Barrier(2, timeout=5)

    def reader() -> None:
        with lock.read():
            both_inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)

    assert not both_inside.broken


def test_writer_waits_for_reader() -> None:
    lock = ReadWriteLock()
    events: list[str] = []
    reading = threading.Event()

    def writer() -> None:
        reading.wait(timeout=5)
        with lock.write():
            events.append("write")

    thread = threading.Thread(target=writer)
    thread.start()
    with lock.read():
        reading.set()
        thread.join(timeout=0.2)
        events.append("read done")
    thread.join(timeout=5)

    assert events == ["read done", "write"]


def _wait_until(predicate, timeout: float = 5.0) -> None:
    deadline = time.monotonic() + timeout
    while not predicate():
        assert time.monotonic() < deadline, "condition not reached"
        time.sleep(0.001)


def test_waiting_writer_blocks_new_readers() -> None:
    lock = ReadWriteLock()
    events: list[str] = []
    release_first_reader = threading.Event()

    def first_reader() -> None:
        with lock.read():
            release_first_reader.wait(timeout=5)

    def writer() -> None:
        with lock.write():
            events.append("write")

    def late_reader() -> None:
        with lock.read():
            events.append("read")

    holder = threading.Thread(target=first_reader)
    holder.start()
    _wait_until(lambda: lock._readers == 1)
    writer_thread = threading.Thread(target=writer)
    writer_thread.start()
    _wait_until(lambda: lock._writers_waiting == 1)
    reader_thread = threading.Thread(target=late_reader)
    reader_thread.start()
    reader_thread.join(timeout=0.2)

    assert events == []

    release_first_reader.set()
    for thread in (holder, writer_thread, reader_thread):
        thread.join(timeout=5)

    assert events == ["write", "read"]


def test_overlapping_readers_do_not_starve_writer() -> None:
    lock = ReadWriteLock()
    stop = threading.Event()
    acquired = threading.Event()

    def reader() -> None:
        while not stop.is_set():
            with lock.read():
                time.sleep(0.01)

    def writer() -> None:
        with lock.write():
            acquired.set()

    readers = [threading.Thread(target=reader) for _ in range(4)]
    for thread in readers:
        thread.start()
    try:
        time.sleep(0.05)
        writer_thread = threading.Thread(target=writer)
        writer_thread.start()
        assert acquired.wait(timeout=2)
    finally:
        stop.set()
        for thread in readers:
            thread.join(timeout=5)
    writer_thread.join(timeout=5)
