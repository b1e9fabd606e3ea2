import pytest

from bazaar.exceptions import (
    AlreadyFriendsError,
    ConflictError,
    NotFoundError,
    RequestAlreadyExistsError,
    SelfFriendingError,
)
from bazaar.models import FriendRequest, Friendship
from bazaar.services import FriendService

from .conftest import new_id


@pytest.mark.asyncio
async def test_send_request_is_visible_to_both_users(db):
    a, b = new_id(), new_id()

    request = await FriendService.send_friend_request(a, b)

    assert request.status == "pending"
    assert [str(r.id) for r in await FriendService.get_friend_requests(a)] == [str(request.id)]
    assert [str(r.id) for r in await FriendService.get_friend_requests(b)] == [str(request.id)]


@pytest.mark.asyncio
async def test_duplicate_request_in_either_direction_conflicts(db):
    a, b = new_id(), new_id()
    await FriendService.send_friend_request(a, b)

    with pytest.raises(RequestAlreadyExistsError):
        await FriendService.send_friend_request(a, b)
    with pytest.raises(ConflictError):
        await FriendService.send_friend_request(b, a)

    assert len(await FriendService.get_friend_requests(a)) == 1


@pytest.mark.asyncio
async def test_cannot_befriend_yourself(db):
    a = new_id()
    with pytest.raises(SelfFriendingError):
        await FriendService.send_friend_request(a, a)


@pytest.mark.asyncio
async def test_accept_creates_symmetric_friendship_and_clears_request(db):
    a, b = new_id(), new_id()
    await FriendService.send_friend_request(a, b)

    await FriendService.accept_friend_request(a, b)

    assert await FriendService.get_friends(a) == [b]
    assert await FriendService.get_friends(b) == [a]
    assert await FriendService.get_friend_requests(a) == []
    assert await FriendService.get_friend_requests(b) == []
    assert await FriendService.are_friends(b, a)


@pytest.mark.asyncio
async def test_send_after_accept_reports_already_friends(db):
    a, b = new_id(), new_id()
    await FriendService.send_friend_request(a, b)
    await FriendService.accept_friend_request(a, b)

    with pytest.raises(AlreadyFriendsError):
        await FriendService.send_friend_request(b, a)


@pytest.mark.asyncio
async def test_accept_requires_request_in_that_direction(db):
    a, b = new_id(), new_id()
    await FriendService.send_friend_request(a, b)

    with pytest.raises(NotFoundError):
        await FriendService.accept_friend_request(b, a)
    with pytest.raises(NotFoundError):
        await FriendService.accept_friend_request(a, new_id())

    assert await FriendService.get_friends(a) == []


@pytest.mark.asyncio
async def test_reject_forms_no_friendship(db):
    a, b = new_id(), new_id()
    await FriendService.send_friend_request(a, b)

    await FriendService.reject_friend_request(a, b)

    assert await FriendService.get_friends(a) == []
    assert await FriendService.get_friends(b) == []
    assert await FriendService.get_friend_requests(b) == []
    assert await FriendRequest.find_all().count() == 0
    with pytest.raises(NotFoundError):
        await FriendService.reject_friend_request(a, b)


@pytest.mark.asyncio
async def test_new_request_allowed_after_rejection(db):
    a, b = new_id(), new_id()
    await FriendService.send_friend_request(a, b)
    await FriendService.reject_friend_request(a, b)

    request = await FriendService.send_friend_request(b, a)

    assert request.fromUserId == b


@pytest.mark.asyncio
async def test_only_the_sender_can_withdraw(db):
    a, b = new_id(), new_id()
    await FriendService.send_friend_request(a, b)

    with pytest.raises(NotFoundError):
        await FriendService.cancel_friend_request(b, a)

    await FriendService.cancel_friend_request(a, b)
    assert await FriendService.get_friend_requests(a) == []
    with pytest.raises(NotFoundError):
        await FriendService.cancel_friend_request(a, b)


@pytest.mark.asyncio
async def test_unfriend_removes_friendship_for_both_sides(db):
    a, b = new_id(), new_id()
    await FriendService.send_friend_request(a, b)
    await FriendService.accept_friend_request(a, b)

    await FriendService.unfriend_user(a, b)

    assert await FriendService.get_friends(a) == []
    assert await FriendService.get_friends(b) == []


@pytest.mark.asyncio
async def test_unfriend_when_not_friends_is_not_found(db):
    with pytest.raises(NotFoundError):
        await FriendService.unfriend_user(new_id(), new_id())


@pytest.mark.asyncio
async def test_accept_resumes_interrupted_acceptance(db):
    a, b = new_id(), new_id()
    # Request already marked accepted and friendship written, request not yet removed
    await FriendRequest(fromUserId=a, toUserId=b, status="accepted").insert()
    await Friendship.between(a, b).insert()

    with pytest.raises(AlreadyFriendsError):
        await FriendService.send_friend_request(b, a)

    await FriendService.accept_friend_request(a, b)

    assert await FriendService.get_friends(a) == [b]
    assert await Friendship.find_all().count() == 1
    assert await FriendRequest.find_all().count() == 0


@pytest.mark.asyncio
async def test_accept_resumes_before_friendship_was_written(db):
    a, b = new_id(), new_id()
    await FriendRequest(fromUserId=a, toUserId=b, status="accepted").insert()

    await FriendService.accept_friend_request(a, b)

    assert await FriendService.get_friends(b) == [a]
    assert await FriendRequest.find_all().count() == 0


@pytest.mark.asyncio
async def test_friends_of_several_users(db):
    a, b, c = new_id(), new_id(), new_id()
    await FriendService.send_friend_request(a, b)
    await FriendService.send_friend_request(c, a)
    await FriendService.accept_friend_request(a, b)
    await FriendService.accept_friend_request(c, a)

    assert sorted(await FriendService.get_friends(a)) == sorted([b, c])
    assert await FriendService.get_friends(c) == [a]


@pytest.mark.asyncio
async def test_check_friend_status(db):
    a, b, c = new_id(), new_id(), new_id()
    await FriendService.send_friend_request(a, b)

    assert await FriendService.check_friend_status(a, a) == "self"
    assert await FriendService.check_friend_status(a, b) == "pending_sent"
    assert await FriendService.check_friend_status(b, a) == "pending_received"
    assert await FriendService.check_friend_status(a, c) == "none"

    await FriendService.accept_friend_request(a, b)
    assert await FriendService.check_friend_status(b, a) == "friends"


@pytest.mark.asyncio
async def test_unfriend_clears_interrupted_acceptance(db):
    a, b = new_id(), new_id()
    await FriendRequest(fromUserId=a, toUserId=b, status="accepted").insert()
    await Friendship.between(a, b).insert()

    await FriendService.unfriend_user(b, a)

    assert await FriendRequest.find_all().count() == 0
    with pytest.raises(NotFoundError):
        await FriendService.accept_friend_request(a, b)
    assert await FriendService.get_friends(a) == []

    request = await FriendService.send_friend_request(b, a)
    assert request.status == "pending"


def _accept_right_after_lookup(monkeypatch):
    lookup = FriendService._get_pending_request

    async def lookup_then_accept(from_user_id, to_user_id):
        request = await lookup(from_user_id, to_user_id)
        await FriendService.accept_friend_request(from_user_id, to_user_id)
        return request

    monkeypatch.setattr(FriendService, "_get_pending_request", staticmethod(lookup_then_accept))


@pytest.mark.asyncio
async def test_reject_loses_to_concurrent_accept(db, monkeypatch):
    a, b = new_id(), new_id()
    await FriendService.send_friend_request(a, b)
    _accept_right_after_lookup(monkeypatch)

    with pytest.raises(NotFoundError):
        await FriendService.reject_friend_request(a, b)

    assert await FriendService.get_friends(a) == [b]
    assert await FriendRequest.find_all().count() == 0


@pytest.mark.asyncio
async def test_withdraw_loses_to_concurrent_accept(db, monkeypatch):
    a, b = new_id(), new_id()
    await FriendService.send_friend_request(a, b)
    _accept_right_after_lookup(monkeypatch)

    with pytest.raises(NotFoundError):
        await FriendService.cancel_friend_request(a, b)

    assert await FriendService.get_friends(b) == [a]
    assert await FriendRequest.find_all().count() == 0
