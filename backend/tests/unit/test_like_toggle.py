"""Unit tests for the like toggle synchronizer and its in-flight guard."""

import asyncio

import pytest

from sportsnews.application.services import InFlightGuard, LikeToggleSynchronizer
from sportsnews.domain.entities import LikeKey, LikeState, ToggleStatus, User
from sportsnews.domain.exceptions import (
    RemoteOperationFailedError,
    ToggleInFlightError,
    UnauthenticatedError,
)
from sportsnews.infrastructure.repositories import GatewayLikeRepository


def _seed_likes(gateway, article_id: str, *user_ids: str) -> None:
    for user_id in user_ids:
        gateway.seed("likes", article_id=article_id, user_id=user_id)


def _synchronizer(gateway, policy: str = "reject", optimistic: bool = False) -> LikeToggleSynchronizer:
    return LikeToggleSynchronizer(
        GatewayLikeRepository(gateway), InFlightGuard(policy), optimistic=optimistic
    )


# ── Loading ──


@pytest.mark.asyncio
async def test_load_reads_count_and_flag_from_one_response(gateway, user):
    _seed_likes(gateway, "a1", "u2", "u1", "u3")
    likes = _synchronizer(gateway)

    state = await likes.load("a1", user)

    assert state.liked is True
    assert state.count == 3
    assert gateway.calls == [("select", "likes")]


@pytest.mark.asyncio
async def test_load_without_user_is_never_liked(gateway):
    _seed_likes(gateway, "a1", "u1")
    state = await _synchronizer(gateway).load("a1", None)
    assert state.liked is False
    assert state.count == 1


@pytest.mark.asyncio
async def test_load_failure_raises_instead_of_reporting_not_liked(gateway, user):
    gateway.fail("select", "likes")
    with pytest.raises(RemoteOperationFailedError):
        await _synchronizer(gateway).load("a1", user)


# ── Toggling ──


@pytest.mark.asyncio
async def test_end_to_end_like_then_unlike(gateway):
    """a1 has three likes, none by u1: like adds one row, unlike removes it."""
    _seed_likes(gateway, "a1", "u2", "u3", "u4")
    u1 = User(id="u1")
    likes = _synchronizer(gateway)
    state = await likes.load("a1", u1)
    assert (state.liked, state.count) == (False, 3)

    await likes.toggle(state, u1)
    assert gateway.calls_for("insert", "likes") == 1
    assert {"article_id": "a1", "user_id": "u1"}.items() <= gateway.tables["likes"][-1].items()
    assert (state.liked, state.count, state.status) == (True, 4, ToggleStatus.SETTLED)

    await likes.toggle(state, u1)
    assert gateway.calls_for("delete", "likes") == 1
    assert (state.liked, state.count) == (False, 3)
    assert len(gateway.tables["likes"]) == 3


@pytest.mark.asyncio
@pytest.mark.parametrize("toggles", [1, 2, 5, 6])
async def test_serial_toggles_leave_liked_iff_odd(gateway, user, toggles):
    _seed_likes(gateway, "a1", "u9")
    likes = _synchronizer(gateway)
    state = await likes.load("a1", user)

    for _ in range(toggles):
        await likes.toggle(state, user)

    assert state.liked is (toggles % 2 == 1)
    assert state.count == 1 + (1 if toggles % 2 else 0)
    assert state.count == await likes.count("a1")


@pytest.mark.asyncio
async def test_unauthenticated_toggle_sends_nothing(gateway):
    likes = _synchronizer(gateway)
    state = LikeState(article_id="a1", liked=False, count=3, loaded=True)

    with pytest.raises(UnauthenticatedError):
        await likes.toggle(state, None)

    assert gateway.calls == []
    assert (state.liked, state.count, state.status) == (False, 3, ToggleStatus.IDLE)


@pytest.mark.asyncio
async def test_failed_write_restores_previous_state(gateway, user):
    gateway.fail("insert", "likes")
    likes = _synchronizer(gateway)
    state = LikeState(article_id="a1", liked=False, count=3, loaded=True)

    with pytest.raises(RemoteOperationFailedError):
        await likes.toggle(state, user)

    assert (state.liked, state.count) == (False, 3)
    assert state.status == ToggleStatus.FAILED
    assert "boom" in state.error


@pytest.mark.asyncio
async def test_toggle_from_unloaded_state_reads_the_store_first(gateway, user):
    _seed_likes(gateway, "a1", "u2", "u3", "u4", "u5", "u6")
    likes = _synchronizer(gateway)
    state = LikeState(article_id="a1")
    state.mark_failed("select on 'likes' failed")

    await likes.toggle(state, user)

    assert (state.liked, state.count, state.status) == (True, 6, ToggleStatus.SETTLED)
    assert state.loaded is True
    assert state.count == len(gateway.tables["likes"])
    assert gateway.calls == [("select", "likes"), ("insert", "likes")]


@pytest.mark.asyncio
async def test_toggle_from_unloaded_state_sends_no_write_when_the_read_fails(gateway, user):
    _seed_likes(gateway, "a1", "u2")
    gateway.fail("select", "likes")
    likes = _synchronizer(gateway)
    state = LikeState(article_id="a1")

    with pytest.raises(RemoteOperationFailedError):
        await likes.toggle(state, user)

    assert gateway.calls_for("insert") == 0
    assert state.status == ToggleStatus.FAILED
    assert state.loaded is False


@pytest.mark.asyncio
async def test_optimistic_toggle_shows_delta_while_pending_and_rolls_back(gateway, user):
    gateway.write_gate = asyncio.Event()
    gateway.fail("insert", "likes")
    likes = _synchronizer(gateway, optimistic=True)
    state = LikeState(article_id="a1", liked=False, count=3, loaded=True)

    task = asyncio.create_task(likes.toggle(state, user))
    await asyncio.sleep(0)
    assert (state.liked, state.count, state.status) == (True, 4, ToggleStatus.PENDING)

    gateway.write_gate.set()
    with pytest.raises(RemoteOperationFailedError):
        await task
    assert (state.liked, state.count, state.status) == (False, 3, ToggleStatus.FAILED)


@pytest.mark.asyncio
async def test_confirmed_toggle_does_not_move_count_before_write(gateway, user):
    gateway.write_gate = asyncio.Event()
    likes = _synchronizer(gateway)
    state = LikeState(article_id="a1", liked=False, count=3, loaded=True)

    task = asyncio.create_task(likes.toggle(state, user))
    await asyncio.sleep(0)
    assert (state.liked, state.count, state.status) == (False, 3, ToggleStatus.PENDING)

    gateway.write_gate.set()
    await task
    assert (state.liked, state.count) == (True, 4)


# ── Concurrency ──


@pytest.mark.asyncio
async def test_second_toggle_in_flight_is_rejected(gateway, user):
    gateway.write_gate = asyncio.Event()
    likes = _synchronizer(gateway, policy="reject")
    state = await likes.load("a1", user)

    first = asyncio.create_task(likes.toggle(state, user))
    await asyncio.sleep(0)
    with pytest.raises(ToggleInFlightError):
        await likes.toggle(state, user)

    gateway.write_gate.set()
    await first
    assert gateway.calls_for("insert", "likes") == 1
    assert gateway.calls_for("delete", "likes") == 0
    assert (state.liked, state.count) == (True, 1)


@pytest.mark.asyncio
async def test_second_toggle_is_queued_behind_the_first(gateway, user):
    gateway.write_gate = asyncio.Event()
    likes = _synchronizer(gateway, policy="queue")
    state = await likes.load("a1", user)

    first = asyncio.create_task(likes.toggle(state, user))
    second = asyncio.create_task(likes.toggle(state, user))
    await asyncio.sleep(0)
    assert gateway.calls_for("delete", "likes") == 0

    gateway.write_gate.set()
    await asyncio.gather(first, second)
    assert gateway.calls_for("insert", "likes") == 1
    assert gateway.calls_for("delete", "likes") == 1
    assert (state.liked, state.count) == (False, 0)
    assert gateway.tables["likes"] == []


@pytest.mark.asyncio
async def test_toggle_current_rereads_state_when_queued(gateway, user):
    gateway.write_gate = asyncio.Event()
    likes = _synchronizer(gateway, policy="queue")

    first = asyncio.create_task(likes.toggle_current("a1", user))
    second = asyncio.create_task(likes.toggle_current("a1", user))
    await asyncio.sleep(0)
    gateway.write_gate.set()
    first_state, second_state = await asyncio.gather(first, second)

    assert (first_state.liked, first_state.count) == (True, 1)
    assert (second_state.liked, second_state.count) == (False, 0)


@pytest.mark.asyncio
async def test_different_users_do_not_block_each_other(gateway, user):
    gateway.write_gate = asyncio.Event()
    likes = _synchronizer(gateway, policy="reject")
    other = User(id="u2")

    first = asyncio.create_task(likes.toggle(LikeState("a1", loaded=True), user))
    second = asyncio.create_task(likes.toggle(LikeState("a1", loaded=True), other))
    await asyncio.sleep(0)
    gateway.write_gate.set()
    await asyncio.gather(first, second)

    assert gateway.calls_for("insert", "likes") == 2


@pytest.mark.asyncio
async def test_guard_releases_key_after_failure():
    guard = InFlightGuard("reject")
    key = LikeKey("a1", "u1")

    with pytest.raises(RuntimeError):
        async with guard.hold(key):
            assert guard.is_held(key)
            raise RuntimeError("write failed")

    assert not guard.is_held(key)
    assert guard.active_keys == 0
    async with guard.hold(key):
        pass


def test_guard_rejects_unknown_policy():
    with pytest.raises(ValueError):
        InFlightGuard("drop")  # type: ignore[arg-type]
