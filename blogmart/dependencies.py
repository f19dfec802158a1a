from fastapi import Depends, Request

from blogmart.repos.items_store import ItemsStore
from blogmart.repos.posts_repo import LocalPostsRepo
from blogmart.services.posts_service import PostsService
from blogmart.settings import settings


def get_posts_repo():
    return LocalPostsRepo(settings.posts_root)


def get_posts_service(repo=Depends(get_posts_repo)):
    return PostsService(repo=repo)


def get_items_store(request: Request) -> ItemsStore:
    return request.app.state.items_store
