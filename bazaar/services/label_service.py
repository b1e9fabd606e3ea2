import logging
from datetime import datetime
from typing import List
from pymongo.errors import DuplicateKeyError
from ..models import Label
from ..exceptions import NotFoundError

logger = logging.getLogger(__name__)

class LabelService:

    @staticmethod
    async def _get_label(label: str) -> Label:
        label_doc = await Label.find_one(Label.label == label)
        if not label_doc:
            raise NotFoundError(f"Label '{label}' not found.")
        return label_doc

    @staticmethod
    async def add_label_to_post(label: str, post_id: str):
        """
        Tag a post with a label, creating the label on first use.
        Tagging the same post twice is a no-op.
        """
        label_doc = await Label.find_one(Label.label == label)
        if not label_doc:
            try:
                await Label(label=label, postIds=[post_id]).insert()
                logger.info(f"Label '{label}' created")
                return {"message": f"Post labeled with '{label}'."}
            except DuplicateKeyError:
                # Another request created the label first
                label_doc = await LabelService._get_label(label)

        await label_doc.update({
            "$addToSet": {"postIds": post_id},
            "$set": {"updatedAt": datetime.utcnow()}
        })
        return {"message": f"Post labeled with '{label}'."}

    @staticmethod
    async def remove_label_from_post(label: str, post_id: str):
        """
        Untag a post. The label document stays even if no posts are left.
        """
        label_doc = await LabelService._get_label(label)

        await label_doc.update({
            "$pull": {"postIds": post_id},
            "$set": {"updatedAt": datetime.utcnow()}
        })
        return {"message": f"Post removed from label '{label}'."}

    @staticmethod
    async def get_posts_by_label(label: str) -> List[str]:
        label_doc = await LabelService._get_label(label)
        return label_doc.postIds

    @staticmethod
    async def get_labels() -> List[str]:
        labels = await Label.find_all().sort("label").to_list()
        return [label_doc.label for label_doc in labels]
