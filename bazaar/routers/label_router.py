from fastapi import APIRouter, Depends, HTTPException
from ..services import LabelService
from ..security import get_current_user_id
from ..exceptions import NotFoundError

router = APIRouter(tags=["Label"])

# All label names
@router.get("")
async def get_labels(current_user_id: str = Depends(get_current_user_id)):
    return {"labels": await LabelService.get_labels()}

# Posts carrying a label
@router.get("/{label}")
async def get_posts_by_label(label: str, current_user_id: str = Depends(get_current_user_id)):
    try:
        return {"posts": await LabelService.get_posts_by_label(label)}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail)

# Tag a post
@router.post("/{label}/posts/{post_id}")
async def add_label_to_post(label: str, post_id: str, current_user_id: str = Depends(get_current_user_id)):
    return await LabelService.add_label_to_post(label, post_id)

# Untag a post
@router.delete("/{label}/posts/{post_id}")
async def remove_label_from_post(label: str, post_id: str, current_user_id: str = Depends(get_current_user_id)):
    try:
        return await LabelService.remove_label_from_post(label, post_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail)
