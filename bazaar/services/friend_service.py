import logging
from datetime import datetime
from typing import List
from pymongo.errors import DuplicateKeyError
from ..models import FriendRequest, Friendship, friendship_key
from ..exceptions import (
    AlreadyFriendsError,
    NotFoundError,
    RequestAlreadyExistsError,
    SelfFriendingError,
)

logger = logging.getLogger(__name__)

class FriendService:
    """
    Friend requests and the friendships they turn into.

    Requests are directional while pending. Accepting one collapses it into a
    single undirected Friendship record.
    """

    @staticmethod
    async def are_friends(user_id: str, other_id: str) -> bool:
        user1, user2 = friendship_key(user_id, other_id)
        return await Friendship.find_one({"user1": user1, "user2": user2}) is not None

    @staticmethod
    async def send_friend_request(from_user_id: str, to_user_id: str) -> FriendRequest:
        """
        Send a friend request from one user to another.
        """
        if from_user_id == to_user_id:
            raise SelfFriendingError()

        if await FriendService.are_friends(from_user_id, to_user_id):
            raise AlreadyFriendsError()

        # A request in 'accepted' is an acceptance still being applied
        existing_request = await FriendRequest.find_one(
            {
                "$or": [
                    {"fromUserId": from_user_id, "toUserId": to_user_id},
                    {"fromUserId": to_user_id, "toUserId": from_user_id}
                ],
                "status": {"$in": ["pending", "accepted"]}
            }
        )
        if existing_request and existing_request.status == "accepted":
            raise AlreadyFriendsError()
        if existing_request:
            raise RequestAlreadyExistsError()

        new_request = FriendRequest(fromUserId=from_user_id, toUserId=to_user_id)
        await new_request.insert()

        logger.info(f"Friend request {new_request.id} sent from {from_user_id} to {to_user_id}")
        return new_request

    @staticmethod
    async def _get_pending_request(from_user_id: str, to_user_id: str) -> FriendRequest:
        request = await FriendRequest.find_one({
            "fromUserId": from_user_id,
            "toUserId": to_user_id,
            "status": "pending"
        })
        if not request:
            raise NotFoundError(f"No pending friend request from {from_user_id} to {to_user_id}.")
        return request

    @staticmethod
    async def _delete_pending_request(request: FriendRequest):
        # Only delete while still pending, an acceptance may have claimed it since it was read
        result = await FriendRequest.get_motor_collection().delete_one(
            {"_id": request.id, "status": "pending"}
        )
        if result.deleted_count == 0:
            raise NotFoundError(f"No pending friend request from {request.fromUserId} to {request.toUserId}.")

    @staticmethod
    async def cancel_friend_request(from_user_id: str, to_user_id: str):
        """
        Withdraw a pending request. Only the sender's direction matches.
        """
        request = await FriendService._get_pending_request(from_user_id, to_user_id)
        await FriendService._delete_pending_request(request)

        logger.info(f"Friend request {request.id} withdrawn by {from_user_id}")
        return {"message": "Friend request withdrawn."}

    @staticmethod
    async def accept_friend_request(from_user_id: str, to_user_id: str):
        """
        Accept the request from_user_id sent to to_user_id.

        The request is first marked 'accepted', then the friendship is created
        and finally the request is removed. Calling this again after an
        interruption finishes the same steps without creating a second
        friendship.
        """
        request = await FriendRequest.find_one({
            "fromUserId": from_user_id,
            "toUserId": to_user_id,
            "status": {"$in": ["pending", "accepted"]}
        })
        if not request:
            raise NotFoundError(f"No pending friend request from {from_user_id} to {to_user_id}.")

        if request.status == "pending":
            # Only move forward if nobody withdrew or rejected it in the meantime
            result = await FriendRequest.get_motor_collection().update_one(
                {"_id": request.id, "status": "pending"},
                {"$set": {"status": "accepted", "updatedAt": datetime.utcnow()}}
            )
            if result.matched_count == 0:
                raise NotFoundError(f"No pending friend request from {from_user_id} to {to_user_id}.")

        if not await FriendService.are_friends(from_user_id, to_user_id):
            try:
                await Friendship.between(from_user_id, to_user_id).insert()
            except DuplicateKeyError:
                # created by a concurrent acceptance of the same request
                logger.info(f"Friendship {from_user_id}/{to_user_id} already exists")

        await request.delete()

        logger.info(f"Friend request {request.id} accepted by {to_user_id}")
        return {"message": "Friend request accepted."}

    @staticmethod
    async def reject_friend_request(from_user_id: str, to_user_id: str):
        """
        Reject the request from_user_id sent to to_user_id. No friendship is formed.
        """
        request = await FriendService._get_pending_request(from_user_id, to_user_id)
        await FriendService._delete_pending_request(request)

        logger.info(f"Friend request {request.id} rejected by {to_user_id}")
        return {"message": "Friend request rejected."}

    @staticmethod
    async def unfriend_user(user_id: str, friend_id: str):
        """
        Remove the friendship between two users.
        Raises NotFoundError when they are not friends.
        """
        user1, user2 = friendship_key(user_id, friend_id)
        friendship = await Friendship.find_one({"user1": user1, "user2": user2})
        if not friendship:
            raise NotFoundError(f"{user_id} and {friend_id} are not friends.")

        # Leftover acceptance markers would otherwise block new requests or restore the friendship
        await FriendRequest.get_motor_collection().delete_many(
            {
                "$or": [
                    {"fromUserId": user_id, "toUserId": friend_id},
                    {"fromUserId": friend_id, "toUserId": user_id}
                ],
                "status": "accepted"
            }
        )
        await friendship.delete()

        logger.info(f"Friendship between {user_id} and {friend_id} removed")
        return {"message": "Friend removed."}

    @staticmethod
    async def get_friends(user_id: str) -> List[str]:
        """
        IDs of every user that user_id is friends with.
        """
        friendships = await Friendship.find(
            {"$or": [{"user1": user_id}, {"user2": user_id}]}
        ).to_list()

        return [f.user2 if f.user1 == user_id else f.user1 for f in friendships]

    @staticmethod
    async def get_friend_requests(user_id: str) -> List[FriendRequest]:
        """
        Pending requests the user has sent or received, oldest first.
        """
        return await FriendRequest.find(
            {
                "$or": [{"fromUserId": user_id}, {"toUserId": user_id}],
                "status": "pending"
            }
        ).sort("_id").to_list()

    @staticmethod
    async def check_friend_status(user_id: str, target_user_id: str) -> str:
        """
        Relationship between two users as seen from user_id.
        Returns: 'self', 'friends', 'pending_sent', 'pending_received' or 'none'
        """
        if user_id == target_user_id:
            return 'self'

        if await FriendService.are_friends(user_id, target_user_id):
            return 'friends'

        # Request sent by user_id to target_user_id
        sent_request = await FriendRequest.find_one({
            "fromUserId": user_id,
            "toUserId": target_user_id,
            "status": "pending"
        })
        if sent_request:
            return 'pending_sent'

        # Request sent by target_user_id to user_id
        received_request = await FriendRequest.find_one({
            "fromUserId": target_user_id,
            "toUserId": user_id,
            "status": "pending"
        })
        if received_request:
            return 'pending_received'

        return 'none'
