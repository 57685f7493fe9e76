from pydantic import BaseModel
from typing import Optional, List


class CommentCreate(BaseModel):
    comment: Optional[str] = None


class CommentList(BaseModel):
    comments: List[str] = []
