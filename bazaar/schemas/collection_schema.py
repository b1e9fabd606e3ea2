from pydantic import BaseModel, Field

class CollectionCreate(BaseModel):
    collectionName: str = Field(..., min_length=1)
