import logging
from datetime import datetime
from typing import List, Optional
from bson import ObjectId
from pymongo.errors import DuplicateKeyError
from ..models import Collection
from ..exceptions import DuplicateNameError, NotFoundError

logger = logging.getLogger(__name__)

class SavingService:

    @staticmethod
    async def _get_owned_collection(owner_id: str, collection_id: str) -> Collection:
        collection = None
        if ObjectId.is_valid(collection_id):
            collection = await Collection.find_one({"_id": ObjectId(collection_id), "owner": owner_id})
        if not collection:
            raise NotFoundError(f"Collection {collection_id} not found.")
        return collection

    @staticmethod
    async def create_collection(owner_id: str, name: str) -> Collection:
        """
        Create an empty collection. Names are unique per owner only.
        """
        if await Collection.find_one({"owner": owner_id, "name": name}):
            raise DuplicateNameError(f"You already have a collection named '{name}'.")

        collection = Collection(owner=owner_id, name=name)
        try:
            await collection.insert()
        except DuplicateKeyError:
            raise DuplicateNameError(f"You already have a collection named '{name}'.")

        logger.info(f"Collection {collection.id} '{name}' created for {owner_id}")
        return collection

    @staticmethod
    async def delete_collection(owner_id: str, collection_id: str):
        collection = await SavingService._get_owned_collection(owner_id, collection_id)
        await collection.delete()

        logger.info(f"Collection {collection_id} deleted by {owner_id}")
        return {"message": f"Collection '{collection.name}' deleted."}

    @staticmethod
    async def get_collection_by_name(owner_id: str, name: str) -> Optional[str]:
        """
        ID of the owner's collection with this name, or None.
        Callers use this to decide whether to create one, so absence is not an error.
        """
        collection = await Collection.find_one({"owner": owner_id, "name": name})
        return str(collection.id) if collection else None

    @staticmethod
    async def get_collections(owner_id: str) -> List[Collection]:
        return await Collection.find({"owner": owner_id}).sort("_id").to_list()

    @staticmethod
    async def save_post_to_collection(owner_id: str, collection_id: str, post_id: str):
        """
        Append a post to a collection. Saving a post twice is a no-op.
        """
        collection = await SavingService._get_owned_collection(owner_id, collection_id)

        # $addToSet appends at the end and skips posts already present
        await collection.update({
            "$addToSet": {"postIds": post_id},
            "$set": {"updatedAt": datetime.utcnow()}
        })
        return {"message": f"Post saved to '{collection.name}'."}

    @staticmethod
    async def remove_post_from_collection(owner_id: str, collection_id: str, post_id: str):
        """
        Remove a post from a collection. Removing a post that is not there is a no-op.
        """
        collection = await SavingService._get_owned_collection(owner_id, collection_id)

        await collection.update({
            "$pull": {"postIds": post_id},
            "$set": {"updatedAt": datetime.utcnow()}
        })
        return {"message": f"Post removed from '{collection.name}'."}

    @staticmethod
    async def get_posts_in_collection(owner_id: str, collection_id: str) -> List[str]:
        collection = await SavingService._get_owned_collection(owner_id, collection_id)
        return collection.postIds

    @staticmethod
    async def get_all_collection_names(owner_id: Optional[str] = None) -> List[str]:
        """
        Collection names, across every owner unless owner_id is given.
        """
        query = {"owner": owner_id} if owner_id is not None else {}
        collections = await Collection.find(query).sort("_id").to_list()
        return [collection.name for collection in collections]
