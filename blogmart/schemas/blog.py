from typing import List, Optional

from pydantic import BaseModel, Field


class Post(BaseModel):
    id: str
    title: str = ""
    date: str = ""
    thumbnail: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    article: str = ""


class PostResponse(BaseModel):
    posts: List[Post] = Field(default_factory=list)
    totalCount: int = 0


class Category(BaseModel):
    name: str
    count: int = Field(1, ge=1)


class Tag(BaseModel):
    name: str
    count: int = Field(1, ge=1)
