from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Literal
from ..services import SavingService
from ..schemas import CollectionCreate
from ..security import get_current_user_id
from ..exceptions import ConflictError, NotFoundError

router = APIRouter(tags=["Collection"])

async def _collection_id_or_404(owner_id: str, collection_name: str) -> str:
    collection_id = await SavingService.get_collection_by_name(owner_id, collection_name)
    if collection_id is None:
        raise HTTPException(status_code=404, detail=f"Collection '{collection_name}' not found.")
    return collection_id

# Create a collection
@router.post("", status_code=201)
async def create_collection(data: CollectionCreate, current_user_id: str = Depends(get_current_user_id)):
    try:
        collection = await SavingService.create_collection(current_user_id, data.collectionName)
        return {
            "message": f"Collection '{collection.name}' created.",
            "collection": {"id": str(collection.id), "name": collection.name, "postIds": collection.postIds}
        }
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=e.detail)

# List collection names
@router.get("")
async def get_collections(
    scope: Literal["mine", "all"] = Query("mine"),
    current_user_id: str = Depends(get_current_user_id)
):
    """
    Names of the current user's collections, or of every user's with scope=all.
    """
    owner_id = current_user_id if scope == "mine" else None
    return {"collections": await SavingService.get_all_collection_names(owner_id)}

# Posts in a collection
@router.get("/{collection_name}")
async def get_collection(collection_name: str, current_user_id: str = Depends(get_current_user_id)):
    collection_id = await _collection_id_or_404(current_user_id, collection_name)
    try:
        posts = await SavingService.get_posts_in_collection(current_user_id, collection_id)
        return {"posts": posts}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail)

# Delete a collection
@router.delete("/{collection_name}")
async def delete_collection(collection_name: str, current_user_id: str = Depends(get_current_user_id)):
    collection_id = await _collection_id_or_404(current_user_id, collection_name)
    try:
        return await SavingService.delete_collection(current_user_id, collection_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail)

# Save a post
@router.post("/{collection_name}/posts/{post_id}")
async def save_post_to_collection(collection_name: str, post_id: str, current_user_id: str = Depends(get_current_user_id)):
    collection_id = await _collection_id_or_404(current_user_id, collection_name)
    try:
        return await SavingService.save_post_to_collection(current_user_id, collection_id, post_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail)

# Remove a saved post
@router.delete("/{collection_name}/posts/{post_id}")
async def remove_post_from_collection(collection_name: str, post_id: str, current_user_id: str = Depends(get_current_user_id)):
    collection_id = await _collection_id_or_404(current_user_id, collection_name)
    try:
        return await SavingService.remove_post_from_collection(current_user_id, collection_id, post_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail)
